"""
Configuration management for the Tickerboard market dashboard.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Main configuration class."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.resolve()

    # News providers
    FINNHUB_API_KEY = os.getenv("FINNHUB_API_KEY", "")
    FINNHUB_BASE_URL = "https://finnhub.io/api/v1"
    NEWSAPI_KEY = os.getenv("NEWSAPI_KEY", "")
    NEWSAPI_BASE_URL = "https://newsapi.org/v2"
    NEWS_LANGUAGE = os.getenv("NEWS_LANGUAGE", "de")
    NEWS_PAGE_SIZE = int(os.getenv("NEWS_PAGE_SIZE", "10"))
    NEWS_LOOKBACK_DAYS = 7

    # Network
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))

    # Currency conversion
    BASE_CURRENCY = os.getenv("BASE_CURRENCY", "USD")
    DISPLAY_CURRENCY = os.getenv("DISPLAY_CURRENCY", "EUR")

    # Price history defaults
    DEFAULT_PERIOD = "1y"
    DEFAULT_INTERVAL = "1d"

    # Indicator periods
    SMA_PERIOD = 20
    EMA_PERIOD = 50
    RSI_PERIOD = 14
    MACD_FAST = 12
    MACD_SLOW = 26
    MACD_SIGNAL = 9

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Dashboard -> API backend
    API_BASE_URL = os.getenv("DASHBOARD_API_URL", "http://localhost:8000")
    DASHBOARD_USE_API = os.getenv("DASHBOARD_USE_API", "false").lower() == "true"

    # Default Watchlist
    DEFAULT_WATCHLIST = [
        "AAPL",
        "MSFT",
        "NVDA",
        "AMZN",
        "META",
        "TSLA",
    ]

    @classmethod
    def validate(cls):
        """Validate critical configuration."""
        warnings = []

        if not cls.FINNHUB_API_KEY:
            warnings.append("FINNHUB_API_KEY not set - Finnhub news will be skipped")

        if not cls.NEWSAPI_KEY:
            warnings.append("NEWSAPI_KEY not set - NewsAPI news will be skipped")

        if not cls.FINNHUB_API_KEY and not cls.NEWSAPI_KEY:
            warnings.append("No news provider configured - news panel will stay empty")

        return warnings
