"""
Price data client using yfinance for history, quotes and exchange rates.
"""

import logging
from typing import Optional

import pandas as pd
import yfinance as yf

from tickerboard.data.models import Bar, Quote, clean_number, clean_timestamp

logger = logging.getLogger(__name__)


class PriceClient:
    """Client for fetching price data from yfinance."""

    # Valid periods for yfinance
    VALID_PERIODS = ["1d", "5d", "1mo", "3mo", "6mo", "1y", "2y", "5y", "10y", "ytd", "max"]

    # Valid intervals for yfinance
    VALID_INTERVALS = ["1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h", "1d", "5d", "1wk", "1mo", "3mo"]

    def get_historical_prices(
        self,
        symbol: str,
        period: str = "1y",
        interval: str = "1d",
        start: Optional[str] = None,
        end: Optional[str] = None
    ) -> pd.DataFrame:
        """
        Fetch historical OHLCV data for a symbol.

        Args:
            symbol: Stock symbol (e.g., "AAPL").
            period: Data period. Options: 1d, 5d, 1mo, 3mo, 6mo, 1y, 2y, 5y, 10y, ytd, max.
            interval: Data interval. Options: 1m, 2m, 5m, 15m, 30m, 60m, 90m, 1h, 1d, 5d, 1wk, 1mo, 3mo.
            start: Start date (YYYY-MM-DD). If provided, period is ignored.
            end: End date (YYYY-MM-DD). Defaults to today.

        Returns:
            DataFrame with columns: Open, High, Low, Close, Volume.
            Index is DatetimeIndex. Empty DataFrame when nothing was returned.

        Raises:
            ValueError: If period or interval is not supported.
        """
        if period not in self.VALID_PERIODS:
            raise ValueError(f"Invalid period '{period}'. Must be one of: {', '.join(self.VALID_PERIODS)}")
        if interval not in self.VALID_INTERVALS:
            raise ValueError(f"Invalid interval '{interval}'. Must be one of: {', '.join(self.VALID_INTERVALS)}")

        ticker = yf.Ticker(symbol.upper())

        if start:
            df = ticker.history(start=start, end=end, interval=interval)
        else:
            df = ticker.history(period=period, interval=interval)

        if df is None or df.empty:
            logger.info(f"No price history returned for {symbol.upper()}")
            return pd.DataFrame()

        # Ensure consistent column names
        df.columns = [col.title().replace(" ", "_") for col in df.columns]

        return df

    def get_bars(
        self,
        symbol: str,
        period: str = "1y",
        interval: str = "1d"
    ) -> list[Bar]:
        """
        Fetch price history as a list of Bars, oldest first.

        Args:
            symbol: Stock symbol.
            period: Data period.
            interval: Data interval.

        Returns:
            List of Bar records. Missing prices become None.
        """
        df = self.get_historical_prices(symbol, period=period, interval=interval)
        return self.frame_to_bars(df)

    @staticmethod
    def frame_to_bars(df: pd.DataFrame) -> list[Bar]:
        """
        Convert an OHLCV DataFrame (DatetimeIndex) into Bars.

        Args:
            df: DataFrame as returned by get_historical_prices.

        Returns:
            List of Bar records in index order.
        """
        if df.empty:
            return []

        df = df.sort_index()
        bars = []
        for idx, row in df.iterrows():
            record = row.to_dict()
            record["date"] = idx
            bars.append(Bar.from_mapping(record))
        return bars

    def get_latest_quote(self, symbol: str) -> Quote:
        """
        Get the latest quote for a symbol.

        Args:
            symbol: Stock symbol.

        Returns:
            Quote with latest price data and metadata.
        """
        symbol = symbol.upper()
        ticker = yf.Ticker(symbol)
        info = ticker.info or {}

        quote = Quote(
            symbol=symbol,
            name=info.get("shortName", info.get("longName", symbol)),
            currency=info.get("currency") or "USD",
            exchange=info.get("exchange"),
            price=clean_number(info.get("regularMarketPrice")),
            previous_close=clean_number(
                info.get("regularMarketPreviousClose", info.get("previousClose"))
            ),
            market_cap=clean_number(info.get("marketCap")),
            fifty_two_week_high=clean_number(info.get("fiftyTwoWeekHigh")),
            fifty_two_week_low=clean_number(info.get("fiftyTwoWeekLow")),
        )

        # Fall back to the most recent daily close
        hist = ticker.history(period="1d")
        if not hist.empty:
            if quote.price is None:
                quote.price = clean_number(hist["Close"].iloc[-1])
            quote.date = clean_timestamp(hist.index[-1])

        return quote

    @staticmethod
    def fx_symbol(base: str, target: str) -> str:
        """Yahoo Finance symbol for a currency pair, e.g. USDEUR=X."""
        return f"{base.upper()}{target.upper()}=X"

    def get_exchange_rate(self, base: str, target: str) -> Optional[float]:
        """
        Get the current exchange rate from base to target currency.

        Multiply an amount in `base` by the rate to get `target`.

        Args:
            base: Source currency code (e.g., "USD").
            target: Target currency code (e.g., "EUR").

        Returns:
            Exchange rate, or None if it could not be fetched.
        """
        if base.upper() == target.upper():
            return 1.0

        pair = self.fx_symbol(base, target)
        try:
            ticker = yf.Ticker(pair)
            info = ticker.info or {}
            rate = clean_number(info.get("regularMarketPrice"))
            if rate is None:
                hist = ticker.history(period="5d")
                if not hist.empty:
                    rate = clean_number(hist["Close"].iloc[-1])
        except Exception as e:
            logger.warning(f"Exchange rate lookup failed for {pair}: {e}")
            return None

        if rate is None or rate <= 0:
            logger.warning(f"No usable exchange rate for {pair}")
            return None
        return rate
