"""
Unit tests for dashboard components and data loading.

Streamlit rendering is not exercised here, only the pieces that build
figures, format values and fetch data.
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import httpx
import pytest

from dashboard.api_client import APIClient, APIClientError
from dashboard.components.charts import macd_chart, price_indicator_chart, rsi_chart
from dashboard.components.tables import format_currency, quote_metrics
from dashboard.data_loader import MarketDataLoader, MarketSnapshot
from tickerboard.data.models import Bar, NewsArticle, Quote
from tickerboard.indicators import IndicatorSettings, build_chart_rows, rows_to_frame


def make_bars(closes, start=datetime(2024, 1, 1)):
    return [
        Bar(date=start + timedelta(days=i), close=c)
        for i, c in enumerate(closes)
    ]


@pytest.fixture
def frame():
    closes = [100 + (i % 5) * 1.5 + i * 0.2 for i in range(60)]
    return rows_to_frame(build_chart_rows(make_bars(closes)))


# ============================================================================
# Charts
# ============================================================================

class TestCharts:

    def test_price_chart(self, frame):
        fig = price_indicator_chart(frame, currency="EUR", sma_label="SMA 20", ema_label="EMA 50")
        assert [trace.name for trace in fig.data] == ["Close", "SMA 20", "EMA 50"]
        assert fig.layout.yaxis.title.text == "Price (EUR)"

    def test_rsi_chart(self, frame):
        fig = rsi_chart(frame, label="RSI 14")
        assert len(fig.data) == 1
        assert tuple(fig.layout.yaxis.range) == (0, 100)

    def test_macd_chart(self, frame):
        fig = macd_chart(frame)
        assert len(fig.data) == 3
        assert fig.data[0].type == "bar"

    @pytest.mark.parametrize("chart", [price_indicator_chart, rsi_chart, macd_chart])
    def test_empty_frame(self, chart):
        fig = chart(rows_to_frame([]))
        assert len(fig.data) == 0
        assert fig.layout.annotations[0].text == "No data available"


# ============================================================================
# Tables
# ============================================================================

class TestFormatting:

    def test_format_currency(self):
        assert format_currency(1234.5, "EUR") == "€1,234.50"
        assert format_currency(10, "usd") == "$10.00"
        assert format_currency(3.0, "SEK") == "SEK 3.00"

    def test_format_missing(self):
        assert format_currency(None) == "N/A"
        assert format_currency(float("nan")) == "N/A"

    def test_quote_metrics_convert(self):
        metrics = quote_metrics(
            price=100.0,
            change_percent=1.234,
            fifty_two_week_high=200.0,
            fifty_two_week_low=None,
            factor=0.5,
            currency="EUR",
        )
        assert metrics[0]["value"] == "€50.00"
        assert metrics[0]["delta"] == "+1.23%"
        assert metrics[1]["value"] == "€100.00"
        assert metrics[2]["value"] == "N/A"
        assert metrics[3]["value"] == "0.5000"


# ============================================================================
# Data loader
# ============================================================================

class TestMarketDataLoader:

    @pytest.fixture
    def price_client(self):
        client = MagicMock()
        client.get_bars.return_value = make_bars([float(v) for v in range(10, 21)])
        client.get_latest_quote.return_value = Quote(symbol="AAPL", price=20.0)
        client.get_exchange_rate.return_value = 0.5
        return client

    @pytest.fixture
    def news_client(self):
        client = MagicMock()
        client.get_news.return_value = [NewsArticle(title="Headline", url="https://example.com")]
        return client

    @pytest.fixture
    def loader(self, price_client, news_client):
        return MarketDataLoader(
            use_api=False,
            price_client=price_client,
            news_client=news_client,
            base_currency="USD",
            display_currency="EUR",
        )

    def test_snapshot(self, loader, price_client):
        snapshot = loader.load_snapshot(
            "aapl", period="1mo", interval="1d", settings=IndicatorSettings(sma_period=5)
        )

        assert snapshot.symbol == "AAPL"
        assert len(snapshot.bars) == 11
        assert len(snapshot.rows) == 11
        assert snapshot.factor == 0.5
        assert snapshot.converted_price == pytest.approx(10.0)
        assert snapshot.rows[4].sma == pytest.approx(6.0)
        assert snapshot.news[0].title == "Headline"
        price_client.get_bars.assert_called_once_with("AAPL", period="1mo", interval="1d")
        price_client.get_exchange_rate.assert_called_once_with("USD", "EUR")

    def test_fx_failure_uses_factor_one(self, loader, price_client):
        price_client.get_exchange_rate.side_effect = RuntimeError("fx down")

        snapshot = loader.load_snapshot("AAPL", settings=IndicatorSettings(sma_period=5))

        assert snapshot.fx_rate is None
        assert snapshot.factor == 1.0
        assert snapshot.rows[-1].close == pytest.approx(20.0)

    def test_failed_fetches_fall_back(self, loader, price_client, news_client):
        price_client.get_bars.side_effect = RuntimeError("no history")
        price_client.get_latest_quote.side_effect = RuntimeError("no quote")
        news_client.get_news.side_effect = RuntimeError("no news")

        snapshot = loader.load_snapshot("AAPL")

        assert snapshot.bars == []
        assert snapshot.rows == []
        assert snapshot.quote is None
        assert snapshot.news == []
        assert snapshot.converted_price is None

    def test_skip_news(self, loader, news_client):
        snapshot = loader.load_snapshot("AAPL", include_news=False)
        assert snapshot.news == []
        news_client.get_news.assert_not_called()

    def test_intraday_dates(self, loader, price_client):
        price_client.get_bars.return_value = [Bar(date=datetime(2024, 1, 2, 9, 30), close=1.0)]
        snapshot = loader.load_snapshot("AAPL", period="1d", interval="5m")
        assert snapshot.rows[0].date == "2024-01-02 09:30"

    def test_empty_snapshot_defaults(self):
        snapshot = MarketSnapshot(symbol="AAPL")
        assert snapshot.factor == 1.0
        assert snapshot.rows == []


# ============================================================================
# API mode
# ============================================================================

def _api_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/api/health":
        return httpx.Response(200, json={"status": "healthy", "version": "1.0.0"})
    if path == "/api/prices/AAPL/history":
        return httpx.Response(200, json={
            "symbol": "AAPL",
            "candles": [
                {"date": f"2024-01-{d:02d}T00:00:00", "close": float(c)}
                for d, c in zip(range(1, 12), range(10, 21))
            ],
            "count": 11,
        })
    if path == "/api/prices/AAPL":
        return httpx.Response(200, json={"symbol": "AAPL", "name": "Apple Inc.", "price": 20.0})
    if path == "/api/fx/USD/EUR":
        return httpx.Response(200, json={"base": "USD", "target": "EUR", "rate": None, "factor": 1.0})
    if path == "/api/news":
        return httpx.Response(200, json={
            "q": request.url.params["q"],
            "articles": [{"title": "Headline", "url": "https://example.com",
                          "published_at": "2024-01-02T08:00:00"}],
            "count": 1,
        })
    if path == "/api/chart/AAPL":
        return httpx.Response(200, json={"symbol": "AAPL", "params": dict(request.url.params)})
    if path == "/api/chart/AAPL/export":
        return httpx.Response(404, json={"detail": "No chart data to export for symbol: AAPL"})
    return httpx.Response(404, json={"detail": "Not Found"})


@pytest.fixture
def api_client():
    client = APIClient(base_url="http://testserver", transport=httpx.MockTransport(_api_handler))
    yield client
    client.close()


class TestAPIMode:

    def test_health(self, api_client):
        assert api_client.is_healthy()

    def test_snapshot_over_api(self, api_client):
        loader = MarketDataLoader(
            use_api=True, api_client=api_client, base_currency="USD", display_currency="EUR"
        )

        snapshot = loader.load_snapshot("AAPL", settings=IndicatorSettings(sma_period=5))

        assert len(snapshot.bars) == 11
        assert snapshot.bars[0].date == datetime(2024, 1, 1)
        assert snapshot.quote.name == "Apple Inc."
        assert snapshot.fx_rate is None
        assert snapshot.factor == 1.0
        assert snapshot.rows[4].sma == pytest.approx(12.0)
        assert snapshot.news[0].published_at == datetime(2024, 1, 2, 8, 0)

    def test_error_carries_status(self, api_client):
        with pytest.raises(APIClientError) as exc_info:
            api_client.get_quote("MISSING")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Not Found"

    def test_chart_passes_params(self, api_client):
        data = api_client.get_chart("AAPL", period="6mo", sma_period=10)
        assert data["params"] == {"period": "6mo", "sma_period": "10"}

    def test_export_not_found_returns_none(self, api_client):
        assert api_client.export_csv("AAPL") is None

    def test_unreachable_backend(self):
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        client = APIClient(base_url="http://testserver", transport=httpx.MockTransport(refuse))
        assert not client.is_healthy()
        with pytest.raises(APIClientError, match="Request failed"):
            client.get_symbols()
