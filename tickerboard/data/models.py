"""
Typed records produced at the provider boundary.

Provider payloads (yfinance frames, Finnhub / NewsAPI JSON) are loosely
shaped. They are converted into these dataclasses as soon as they are
fetched so the rest of the code never deals with NaN sentinels or
missing keys.
"""

import math
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

import pandas as pd


def clean_number(value: Any) -> Optional[float]:
    """
    Convert a provider value into a finite float or None.

    Args:
        value: Raw value (number, numeric string, NaN, None, ...).

    Returns:
        The value as float, or None when missing or not finite.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def clean_timestamp(value: Any) -> Optional[datetime]:
    """
    Convert a provider timestamp into a datetime or None.

    Accepts datetimes, pandas Timestamps, ISO strings and unix seconds.
    """
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return None
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return None
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str) and value:
        try:
            return pd.Timestamp(value).to_pydatetime()
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class Bar:
    """
    One OHLCV price observation.

    Attributes:
        date: Bar timestamp (None when the provider omitted it)
        open: Opening price
        high: High price
        low: Low price
        close: Closing price
        volume: Traded volume
    """
    date: Optional[datetime] = None
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Bar":
        """
        Build a Bar from a loosely-shaped record.

        Keys are matched case-insensitively, so both yfinance rows
        ("Open", "Close") and JSON candles ("open", "close") work.
        """
        lowered = {str(k).lower(): v for k, v in data.items()}
        return cls(
            date=clean_timestamp(lowered.get("date")),
            open=clean_number(lowered.get("open")),
            high=clean_number(lowered.get("high")),
            low=clean_number(lowered.get("low")),
            close=clean_number(lowered.get("close")),
            volume=clean_number(lowered.get("volume")),
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        result = asdict(self)
        result["date"] = self.date.isoformat() if self.date else None
        return result


@dataclass
class Quote:
    """Latest quote and metadata for a symbol."""
    symbol: str
    name: Optional[str] = None
    currency: str = "USD"
    exchange: Optional[str] = None
    price: Optional[float] = None
    previous_close: Optional[float] = None
    market_cap: Optional[float] = None
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None
    date: Optional[datetime] = None

    @property
    def change(self) -> Optional[float]:
        """Absolute change versus the previous close."""
        if self.price is None or self.previous_close is None:
            return None
        return self.price - self.previous_close

    @property
    def change_percent(self) -> Optional[float]:
        """Percentage change versus the previous close."""
        if self.change is None or not self.previous_close:
            return None
        return self.change / self.previous_close * 100

    def to_dict(self) -> dict:
        result = asdict(self)
        result["date"] = self.date.isoformat() if self.date else None
        result["change"] = self.change
        result["change_percent"] = self.change_percent
        return result


@dataclass
class NewsArticle:
    """Single news article, normalized across providers."""
    title: str
    url: str
    source: Optional[str] = None
    published_at: Optional[datetime] = None
    summary: Optional[str] = None
    provider: Optional[str] = None

    def to_dict(self) -> dict:
        result = asdict(self)
        result["published_at"] = self.published_at.isoformat() if self.published_at else None
        return result
