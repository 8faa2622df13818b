"""
News client with provider fallback.

Tries Finnhub (company news, then filtered market news) and then NewsAPI
(everything, then top headlines). The first strategy that returns any
articles wins.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

import requests

from config import Config
from tickerboard.data.models import NewsArticle, clean_timestamp

logger = logging.getLogger(__name__)


class NewsClient:
    """Client for fetching news from Finnhub and NewsAPI."""

    FINNHUB_BASE_URL = Config.FINNHUB_BASE_URL
    NEWSAPI_BASE_URL = Config.NEWSAPI_BASE_URL

    def __init__(
        self,
        finnhub_api_key: Optional[str] = None,
        newsapi_key: Optional[str] = None,
        language: Optional[str] = None,
        lookback_days: Optional[int] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize the news client.

        Args:
            finnhub_api_key: Finnhub API key. If None, reads FINNHUB_API_KEY.
            newsapi_key: NewsAPI key. If None, reads NEWSAPI_KEY.
            language: NewsAPI language filter. Defaults to Config.NEWS_LANGUAGE.
            lookback_days: Days of Finnhub company news to request.
            timeout: HTTP timeout in seconds.
        """
        self.finnhub_api_key = finnhub_api_key if finnhub_api_key is not None else Config.FINNHUB_API_KEY
        self.newsapi_key = newsapi_key if newsapi_key is not None else Config.NEWSAPI_KEY
        self.language = language or Config.NEWS_LANGUAGE
        self.lookback_days = lookback_days or Config.NEWS_LOOKBACK_DAYS
        self.timeout = timeout or Config.REQUEST_TIMEOUT

    @property
    def has_provider(self) -> bool:
        """True if at least one provider key is configured."""
        return bool(self.finnhub_api_key or self.newsapi_key)

    def _get_json(self, url: str, params: dict, headers: Optional[dict] = None):
        response = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    # -------------------------------------------------------------------------
    # Finnhub
    # -------------------------------------------------------------------------

    @staticmethod
    def _from_finnhub(item: dict) -> NewsArticle:
        return NewsArticle(
            title=item.get("headline", ""),
            url=item.get("url", ""),
            source=item.get("source"),
            published_at=clean_timestamp(item.get("datetime")),
            summary=item.get("summary") or None,
            provider="finnhub",
        )

    def _finnhub_items(self, endpoint: str, params: dict) -> list:
        data = self._get_json(f"{self.FINNHUB_BASE_URL}{endpoint}", params)
        if isinstance(data, dict) and data.get("error"):
            raise RuntimeError(data["error"])
        if not isinstance(data, list):
            return []
        return data

    def finnhub_company_news(self, query: str, page_size: int) -> List[NewsArticle]:
        """
        Fetch company-specific news from Finnhub.

        Args:
            query: Stock symbol.
            page_size: Maximum number of articles.

        Returns:
            List of articles, newest first.
        """
        to_date = datetime.now()
        from_date = to_date - timedelta(days=self.lookback_days)
        params = {
            "symbol": query.upper(),
            "from": from_date.strftime("%Y-%m-%d"),
            "to": to_date.strftime("%Y-%m-%d"),
            "token": self.finnhub_api_key,
        }
        items = self._finnhub_items("/company-news", params)
        articles = [self._from_finnhub(item) for item in items if item.get("headline")]
        return articles[:page_size]

    def finnhub_market_news(self, query: str, page_size: int) -> List[NewsArticle]:
        """
        Fetch general market news from Finnhub, filtered by query.

        Args:
            query: Text that must appear in the headline or summary.
            page_size: Maximum number of articles.

        Returns:
            List of matching articles.
        """
        params = {"category": "general", "token": self.finnhub_api_key}
        items = self._finnhub_items("/news", params)

        needle = query.lower()
        articles = []
        for item in items:
            text = f"{item.get('headline', '')} {item.get('summary', '')}".lower()
            if item.get("headline") and needle in text:
                articles.append(self._from_finnhub(item))
        return articles[:page_size]

    # -------------------------------------------------------------------------
    # NewsAPI
    # -------------------------------------------------------------------------

    @staticmethod
    def _from_newsapi(item: dict) -> NewsArticle:
        return NewsArticle(
            title=item.get("title") or "",
            url=item.get("url") or "",
            source=(item.get("source") or {}).get("name"),
            published_at=clean_timestamp(item.get("publishedAt")),
            summary=item.get("description"),
            provider="newsapi",
        )

    def _newsapi_articles(self, endpoint: str, params: dict, page_size: int) -> List[NewsArticle]:
        headers = {"X-Api-Key": self.newsapi_key}
        data = self._get_json(f"{self.NEWSAPI_BASE_URL}{endpoint}", params, headers=headers) or {}
        if data.get("status") == "error":
            raise RuntimeError(data.get("message", "NewsAPI error"))
        items = data.get("articles", [])
        articles = [self._from_newsapi(item) for item in items if item.get("title")]
        return articles[:page_size]

    def newsapi_everything(self, query: str, page_size: int) -> List[NewsArticle]:
        """Search all NewsAPI articles, newest first."""
        params = {
            "q": query,
            "language": self.language,
            "sortBy": "publishedAt",
            "pageSize": page_size,
        }
        return self._newsapi_articles("/everything", params, page_size)

    def newsapi_top_headlines(self, query: str, page_size: int) -> List[NewsArticle]:
        """Search NewsAPI top headlines."""
        params = {"q": query, "pageSize": page_size}
        return self._newsapi_articles("/top-headlines", params, page_size)

    # -------------------------------------------------------------------------
    # Fallback cascade
    # -------------------------------------------------------------------------

    def strategies(self) -> List[Tuple[str, Callable[[str, int], List[NewsArticle]]]]:
        """
        Ordered list of (name, fetch function) to try.

        Strategies whose provider has no API key are left out.
        """
        ordered = []
        if self.finnhub_api_key:
            ordered.append(("finnhub_company_news", self.finnhub_company_news))
            ordered.append(("finnhub_market_news", self.finnhub_market_news))
        if self.newsapi_key:
            ordered.append(("newsapi_everything", self.newsapi_everything))
            ordered.append(("newsapi_top_headlines", self.newsapi_top_headlines))
        return ordered

    def get_news(self, query: str, page_size: Optional[int] = None) -> List[NewsArticle]:
        """
        Fetch news for a query, trying each provider strategy in order.

        Args:
            query: Ticker symbol or search text.
            page_size: Maximum number of articles. Defaults to Config.NEWS_PAGE_SIZE.

        Returns:
            Articles from the first strategy that returned any, or an
            empty list if none did.

        Raises:
            ValueError: If query is blank.
        """
        query = (query or "").strip()
        if not query:
            raise ValueError("News query must not be empty")
        page_size = page_size or Config.NEWS_PAGE_SIZE

        for name, fetch in self.strategies():
            try:
                articles = fetch(query, page_size)
            except (requests.RequestException, ValueError, RuntimeError) as e:
                logger.warning(f"News strategy {name} failed for '{query}': {e}")
                continue
            if articles:
                logger.info(f"News strategy {name} returned {len(articles)} articles for '{query}'")
                return articles

        logger.info(f"No news found for '{query}'")
        return []
