"""
Pydantic schemas for API request/response models.
"""

from .responses import (
    HealthResponse,
    SymbolsResponse,
    CandleDataPoint,
    PriceHistoryResponse,
    QuoteResponse,
    ExchangeRateResponse,
    NewsArticleItem,
    NewsResponse,
    ChartRowItem,
    IndicatorSettingsItem,
    ChartResponse,
)

__all__ = [
    "HealthResponse",
    "SymbolsResponse",
    "CandleDataPoint",
    "PriceHistoryResponse",
    "QuoteResponse",
    "ExchangeRateResponse",
    "NewsArticleItem",
    "NewsResponse",
    "ChartRowItem",
    "IndicatorSettingsItem",
    "ChartResponse",
]
