"""
News API routes.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_news_client
from api.schemas import NewsArticleItem, NewsResponse
from config import Config
from tickerboard.data.news_client import NewsClient

router = APIRouter()


@router.get("", response_model=NewsResponse)
def get_news(
    q: str = Query(default="", description="Ticker symbol or search text"),
    page_size: int = Query(default=Config.NEWS_PAGE_SIZE, ge=1, le=100, description="Maximum articles"),
    news_client: NewsClient = Depends(get_news_client)
):
    """
    Get recent news for a query.

    Providers are tried in order (Finnhub, then NewsAPI) and the first
    non-empty result is returned.
    """
    q = q.strip()
    if not q:
        raise HTTPException(status_code=400, detail="Missing q query parameter")

    articles = news_client.get_news(q, page_size=page_size)
    items = [NewsArticleItem(**article.to_dict()) for article in articles]
    return NewsResponse(q=q, articles=items, count=len(items))
