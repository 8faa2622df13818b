"""
Dashboard Data Loader.

Provides a unified data access layer for the dashboard.
Supports two data sources:
- Direct provider calls (yfinance, Finnhub, NewsAPI) - default
- API backend (for separated deployment)

The independent fetches for one symbol (history, quote, exchange rate,
news) run concurrently and are joined before indicators are computed.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from config import Config
from dashboard.api_client import APIClient
from tickerboard.data.models import Bar, NewsArticle, Quote, clean_number, clean_timestamp
from tickerboard.data.news_client import NewsClient
from tickerboard.data.price_client import PriceClient
from tickerboard.indicators import (
    ChartRow,
    IndicatorSettings,
    build_chart_rows,
    conversion_factor,
)
from tickerboard.indicators.merge import date_format_for_interval

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class MarketSnapshot:
    """Everything the overview page needs for one symbol."""
    symbol: str
    bars: List[Bar] = field(default_factory=list)
    quote: Optional[Quote] = None
    fx_rate: Optional[float] = None
    news: List[NewsArticle] = field(default_factory=list)
    rows: List[ChartRow] = field(default_factory=list)

    @property
    def factor(self) -> float:
        """Conversion factor into the display currency."""
        return conversion_factor(self.fx_rate)

    @property
    def converted_price(self) -> Optional[float]:
        """Latest quote price in the display currency."""
        if self.quote is None or self.quote.price is None:
            return None
        return self.quote.price * self.factor


class MarketDataLoader:
    """
    Data loader for the dashboard.

    Example:
        >>> loader = MarketDataLoader()
        >>> snapshot = loader.load_snapshot("AAPL")
        >>> print(f"{len(snapshot.rows)} rows")
    """

    def __init__(
        self,
        use_api: Optional[bool] = None,
        price_client: Optional[PriceClient] = None,
        news_client: Optional[NewsClient] = None,
        api_client: Optional[APIClient] = None,
        base_currency: Optional[str] = None,
        display_currency: Optional[str] = None,
    ):
        """
        Initialize the data loader.

        Args:
            use_api: Fetch through the API backend instead of the providers.
                     Defaults to the DASHBOARD_USE_API setting.
            price_client: Price client for direct mode.
            news_client: News client for direct mode.
            api_client: API client for API mode.
            base_currency: Currency of the price data.
            display_currency: Currency shown on the dashboard.
        """
        self.use_api = Config.DASHBOARD_USE_API if use_api is None else use_api
        self.base_currency = base_currency or Config.BASE_CURRENCY
        self.display_currency = display_currency or Config.DISPLAY_CURRENCY

        if self.use_api:
            self.api_client = api_client or APIClient()
            logger.info(f"Using API backend at {self.api_client.base_url}")
        else:
            self.api_client = None
            self.price_client = price_client or PriceClient()
            self.news_client = news_client or NewsClient()

    # -------------------------------------------------------------------------
    # Individual fetches
    # -------------------------------------------------------------------------

    def load_bars(
        self,
        symbol: str,
        period: str = Config.DEFAULT_PERIOD,
        interval: str = Config.DEFAULT_INTERVAL
    ) -> List[Bar]:
        """Load price bars for a symbol, oldest first."""
        if self.use_api:
            data = self.api_client.get_history(symbol, period=period, interval=interval)
            return [Bar.from_mapping(candle) for candle in data.get("candles", [])]
        return self.price_client.get_bars(symbol, period=period, interval=interval)

    def load_quote(self, symbol: str) -> Optional[Quote]:
        """Load the latest quote for a symbol."""
        if self.use_api:
            data = self.api_client.get_quote(symbol)
            return Quote(
                symbol=data.get("symbol", symbol.upper()),
                name=data.get("name"),
                currency=data.get("currency") or "USD",
                exchange=data.get("exchange"),
                price=clean_number(data.get("price")),
                previous_close=clean_number(data.get("previous_close")),
                market_cap=clean_number(data.get("market_cap")),
                fifty_two_week_high=clean_number(data.get("fifty_two_week_high")),
                fifty_two_week_low=clean_number(data.get("fifty_two_week_low")),
                date=clean_timestamp(data.get("date")),
            )
        return self.price_client.get_latest_quote(symbol)

    def load_exchange_rate(self) -> Optional[float]:
        """Load the base -> display currency exchange rate."""
        if self.use_api:
            return self.api_client.get_exchange_rate(self.base_currency, self.display_currency)
        return self.price_client.get_exchange_rate(self.base_currency, self.display_currency)

    def load_news(self, query: str, page_size: int = Config.NEWS_PAGE_SIZE) -> List[NewsArticle]:
        """Load recent news for a symbol."""
        if self.use_api:
            return [
                NewsArticle(
                    title=item.get("title", ""),
                    url=item.get("url", ""),
                    source=item.get("source"),
                    published_at=clean_timestamp(item.get("published_at")),
                    summary=item.get("summary"),
                    provider=item.get("provider"),
                )
                for item in self.api_client.get_news(query, page_size=page_size)
            ]
        return self.news_client.get_news(query, page_size=page_size)

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    @staticmethod
    def _result(future, name: str, symbol: str, default: T) -> T:
        try:
            return future.result()
        except Exception as e:
            logger.warning(f"Failed to load {name} for {symbol}: {e}")
            return default

    def load_snapshot(
        self,
        symbol: str,
        period: str = Config.DEFAULT_PERIOD,
        interval: str = Config.DEFAULT_INTERVAL,
        settings: Optional[IndicatorSettings] = None,
        include_news: bool = True
    ) -> MarketSnapshot:
        """
        Load all data for a symbol and compute chart rows.

        A failed fetch falls back to its empty value (no bars, no quote,
        exchange rate 1.0, no news) instead of failing the whole page.

        Args:
            symbol: Stock symbol.
            period: Price history period.
            interval: Price history interval.
            settings: Indicator periods.
            include_news: Whether to fetch news.

        Returns:
            MarketSnapshot with computed chart rows.
        """
        symbol = symbol.upper()
        tasks: dict[str, Callable[[], object]] = {
            "bars": lambda: self.load_bars(symbol, period=period, interval=interval),
            "quote": lambda: self.load_quote(symbol),
            "fx_rate": self.load_exchange_rate,
        }
        if include_news:
            tasks["news"] = lambda: self.load_news(symbol)

        defaults = {"bars": [], "quote": None, "fx_rate": None, "news": []}

        with ThreadPoolExecutor(max_workers=len(tasks)) as ex:
            futures = {name: ex.submit(task) for name, task in tasks.items()}
            results = {
                name: self._result(fut, name, symbol, defaults[name])
                for name, fut in futures.items()
            }

        bars = results["bars"]
        fx_rate = results["fx_rate"]
        rows = build_chart_rows(
            bars,
            fx_rate=fx_rate,
            settings=settings,
            date_format=date_format_for_interval(interval),
        )

        return MarketSnapshot(
            symbol=symbol,
            bars=bars,
            quote=results["quote"],
            fx_rate=fx_rate,
            news=results.get("news", []),
            rows=rows,
        )
