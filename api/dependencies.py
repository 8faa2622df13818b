"""
Shared provider clients for the API routes.

Routes receive these through FastAPI's Depends so tests can swap them
with app.dependency_overrides.
"""

from typing import Optional

from tickerboard.data.news_client import NewsClient
from tickerboard.data.price_client import PriceClient

_price_client: Optional[PriceClient] = None
_news_client: Optional[NewsClient] = None


def get_price_client() -> PriceClient:
    """Get or create the price client instance."""
    global _price_client
    if _price_client is None:
        _price_client = PriceClient()
    return _price_client


def get_news_client() -> NewsClient:
    """Get or create the news client instance."""
    global _news_client
    if _news_client is None:
        _news_client = NewsClient()
    return _news_client
