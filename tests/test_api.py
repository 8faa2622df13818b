"""
Unit tests for the FastAPI backend.

Provider clients are replaced with mocks through dependency_overrides.
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_news_client, get_price_client
from api.main import app
from tickerboard.data.models import Bar, NewsArticle, Quote
from tickerboard.data.price_client import PriceClient


def make_bars(closes, start=datetime(2024, 1, 1)):
    return [
        Bar(date=start + timedelta(days=i), open=c, high=c, low=c, close=c, volume=1000.0)
        for i, c in enumerate(closes)
    ]


@pytest.fixture
def price_client():
    client = MagicMock(spec=PriceClient)
    client.get_bars.return_value = make_bars([float(v) for v in range(10, 21)])
    client.get_exchange_rate.return_value = 0.5
    return client


@pytest.fixture
def news_client():
    return MagicMock()


@pytest.fixture
def client(price_client, news_client):
    app.dependency_overrides[get_price_client] = lambda: price_client
    app.dependency_overrides[get_news_client] = lambda: news_client
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "1.0.0"}

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/api/health"


class TestPrices:

    def test_symbols(self, client):
        data = client.get("/api/prices/symbols").json()
        assert data["symbols"][0] == "AAPL"
        assert data["count"] == len(data["symbols"])

    def test_history(self, client, price_client):
        price_client.get_bars.return_value = [
            Bar(date=datetime(2024, 1, 1), close=1.5, volume=10.0),
            Bar(date=datetime(2024, 1, 2), close=None),
        ]

        response = client.get("/api/prices/aapl/history", params={"period": "1mo"})

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["count"] == 2
        assert data["candles"][0]["close"] == 1.5
        assert data["candles"][1]["close"] is None
        assert data["candles"][1]["open"] is None
        price_client.get_bars.assert_called_once_with("AAPL", period="1mo", interval="1d")

    def test_history_invalid_period(self, client, price_client):
        response = client.get("/api/prices/AAPL/history", params={"period": "7y"})
        assert response.status_code == 400
        price_client.get_bars.assert_not_called()

    def test_history_invalid_interval(self, client):
        response = client.get("/api/prices/AAPL/history", params={"interval": "2h"})
        assert response.status_code == 400

    def test_history_provider_error(self, client, price_client):
        price_client.get_bars.side_effect = RuntimeError("boom")
        response = client.get("/api/prices/AAPL/history")
        assert response.status_code == 500
        assert "boom" in response.json()["detail"]

    def test_quote(self, client, price_client):
        price_client.get_latest_quote.return_value = Quote(
            symbol="AAPL", name="Apple Inc.", price=110.0, previous_close=100.0
        )

        data = client.get("/api/prices/AAPL").json()

        assert data["price"] == 110.0
        assert data["change"] == pytest.approx(10.0)
        assert data["change_percent"] == pytest.approx(10.0)

    def test_quote_without_price(self, client, price_client):
        price_client.get_latest_quote.return_value = Quote(symbol="XXXX")
        assert client.get("/api/prices/XXXX").status_code == 404

    def test_quote_provider_error(self, client, price_client):
        price_client.get_latest_quote.side_effect = RuntimeError("down")
        response = client.get("/api/prices/AAPL")
        assert response.status_code == 500
        assert response.json()["detail"].startswith("Error fetching quote")


class TestFx:

    def test_rate(self, client, price_client):
        price_client.get_exchange_rate.return_value = 0.92
        data = client.get("/api/fx/usd/eur").json()
        assert data == {"base": "USD", "target": "EUR", "rate": 0.92, "factor": 0.92}
        price_client.get_exchange_rate.assert_called_once_with("USD", "EUR")

    def test_missing_rate_factor_is_one(self, client, price_client):
        price_client.get_exchange_rate.return_value = None
        data = client.get("/api/fx/USD/EUR").json()
        assert data["rate"] is None
        assert data["factor"] == 1.0


class TestNews:

    def test_missing_query(self, client, news_client):
        response = client.get("/api/news", params={"q": "  "})
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing q query parameter"
        news_client.get_news.assert_not_called()

    def test_news(self, client, news_client):
        news_client.get_news.return_value = [
            NewsArticle(
                title="Apple beats estimates",
                url="https://example.com/a",
                source="Reuters",
                published_at=datetime(2024, 1, 2, 8, 0),
                provider="finnhub",
            ),
        ]

        response = client.get("/api/news", params={"q": "AAPL", "page_size": 5})

        assert response.status_code == 200
        data = response.json()
        assert data["q"] == "AAPL"
        assert data["count"] == 1
        assert data["articles"][0]["source"] == "Reuters"
        news_client.get_news.assert_called_once_with("AAPL", page_size=5)

    def test_page_size_bounds(self, client):
        assert client.get("/api/news", params={"q": "AAPL", "page_size": 0}).status_code == 422


class TestChart:

    PARAMS = {"sma_period": 5, "ema_period": 5, "rsi_period": 5}

    def test_rows(self, client, price_client):
        response = client.get("/api/chart/aapl", params=self.PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["currency"] == "EUR"
        assert data["fx_rate"] == 0.5
        assert data["factor"] == 0.5
        assert data["settings"]["sma_period"] == 5
        assert data["count"] == 11

        rows = data["rows"]
        assert rows[0]["date"] == "2024-01-01"
        assert rows[0]["close"] == pytest.approx(5.0)
        assert all(row["sma"] is None for row in rows[:4])
        assert rows[4]["sma"] == pytest.approx(6.0)
        assert rows[5]["rsi"] == pytest.approx(100.0)
        assert all(row["macd"] is None for row in rows)
        price_client.get_exchange_rate.assert_called_once_with("USD", "EUR")

    def test_missing_rate_leaves_prices(self, client, price_client):
        price_client.get_exchange_rate.return_value = None
        data = client.get("/api/chart/AAPL", params=self.PARAMS).json()
        assert data["factor"] == 1.0
        assert data["rows"][-1]["close"] == pytest.approx(20.0)

    def test_invalid_period(self, client):
        assert client.get("/api/chart/AAPL", params={"period": "3w"}).status_code == 400

    def test_invalid_indicator_period(self, client):
        assert client.get("/api/chart/AAPL", params={"sma_period": 0}).status_code == 422

    def test_no_bars(self, client, price_client):
        price_client.get_bars.return_value = []
        data = client.get("/api/chart/AAPL").json()
        assert data["rows"] == []
        assert data["count"] == 0

    def test_export(self, client):
        response = client.get("/api/chart/AAPL/export", params=self.PARAMS)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="AAPL_chart_data_')
        assert disposition.endswith('.csv"')

        lines = response.text.splitlines()
        assert lines[0] == "Date,Close (EUR),SMA 5 (EUR),EMA 5 (EUR),RSI 5,MACD,Signal"
        assert lines[1] == "2024-01-01,5.00,,,,,"
        assert lines[5].startswith("2024-01-05,7.00,6.00,6.00,")
        assert len(lines) == 12

    def test_export_without_data(self, client, price_client):
        price_client.get_bars.return_value = []
        response = client.get("/api/chart/AAPL/export")
        assert response.status_code == 404
        assert "No chart data" in response.json()["detail"]
