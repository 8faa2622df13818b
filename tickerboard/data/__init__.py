"""
Data collection module.

Handles:
- Price history, quotes and exchange rates from yfinance
- News fetching with Finnhub / NewsAPI fallback
- Ticker watchlist management
"""

from tickerboard.data.models import Bar, Quote, NewsArticle
from tickerboard.data.news_client import NewsClient
from tickerboard.data.price_client import PriceClient
from tickerboard.data.watchlist import Watchlist

__all__ = ["Bar", "Quote", "NewsArticle", "NewsClient", "PriceClient", "Watchlist"]
