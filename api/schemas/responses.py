"""
Pydantic response models for the API.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service health status")
    version: str = Field(default="1.0.0", description="API version")


class SymbolsResponse(BaseModel):
    """Default watchlist symbols."""
    symbols: List[str] = Field(..., description="List of stock symbols")
    count: int = Field(..., description="Number of symbols")


class CandleDataPoint(BaseModel):
    """Single price bar (OHLCV). Any field may be missing."""
    date: Optional[datetime] = Field(None, description="Bar timestamp")
    open: Optional[float] = Field(None, description="Opening price")
    high: Optional[float] = Field(None, description="High price")
    low: Optional[float] = Field(None, description="Low price")
    close: Optional[float] = Field(None, description="Closing price")
    volume: Optional[float] = Field(None, description="Trading volume")


class PriceHistoryResponse(BaseModel):
    """Historical price bars for a symbol."""
    symbol: str = Field(..., description="Stock symbol")
    candles: List[CandleDataPoint] = Field(..., description="Price bars, oldest first")
    count: int = Field(..., description="Number of bars")


class QuoteResponse(BaseModel):
    """Latest quote for a symbol."""
    symbol: str = Field(..., description="Stock symbol")
    name: Optional[str] = Field(None, description="Company name")
    currency: str = Field(default="USD", description="Quote currency")
    exchange: Optional[str] = Field(None, description="Stock exchange")
    price: Optional[float] = Field(None, description="Regular market price")
    previous_close: Optional[float] = Field(None, description="Previous close")
    change: Optional[float] = Field(None, description="Change versus previous close")
    change_percent: Optional[float] = Field(None, description="Percent change versus previous close")
    market_cap: Optional[float] = Field(None, description="Market capitalization")
    fifty_two_week_high: Optional[float] = Field(None, description="52-week high")
    fifty_two_week_low: Optional[float] = Field(None, description="52-week low")
    date: Optional[datetime] = Field(None, description="Price date")


class ExchangeRateResponse(BaseModel):
    """Exchange rate between two currencies."""
    base: str = Field(..., description="Source currency")
    target: str = Field(..., description="Target currency")
    rate: Optional[float] = Field(None, description="Exchange rate, null if unavailable")
    factor: float = Field(..., description="Conversion factor actually applied (1.0 if rate missing)")


class NewsArticleItem(BaseModel):
    """Single news article."""
    title: str = Field(..., description="Headline")
    url: str = Field(..., description="Article URL")
    source: Optional[str] = Field(None, description="Publisher name")
    published_at: Optional[datetime] = Field(None, description="Publication time")
    summary: Optional[str] = Field(None, description="Short description")
    provider: Optional[str] = Field(None, description="News provider that returned the article")


class NewsResponse(BaseModel):
    """News articles for a query."""
    q: str = Field(..., description="Search query")
    articles: List[NewsArticleItem] = Field(..., description="Articles")
    count: int = Field(..., description="Number of articles")


class ChartRowItem(BaseModel):
    """One merged chart row."""
    date: str = Field(..., description="Formatted bar date")
    close: Optional[float] = Field(None, description="Close in display currency")
    sma: Optional[float] = Field(None, description="SMA in display currency")
    ema: Optional[float] = Field(None, description="EMA in display currency")
    rsi: Optional[float] = Field(None, description="RSI (0-100)")
    macd: Optional[float] = Field(None, description="MACD line")
    signal: Optional[float] = Field(None, description="MACD signal line")


class IndicatorSettingsItem(BaseModel):
    """Indicator periods used for the chart."""
    sma_period: int
    ema_period: int
    rsi_period: int
    macd_fast: int
    macd_slow: int
    macd_signal: int


class ChartResponse(BaseModel):
    """Merged chart data for a symbol."""
    symbol: str = Field(..., description="Stock symbol")
    currency: str = Field(..., description="Display currency")
    fx_rate: Optional[float] = Field(None, description="Fetched exchange rate")
    factor: float = Field(..., description="Conversion factor applied to price fields")
    settings: IndicatorSettingsItem = Field(..., description="Indicator periods")
    rows: List[ChartRowItem] = Field(..., description="One row per bar")
    count: int = Field(..., description="Number of rows")
