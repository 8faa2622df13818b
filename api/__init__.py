"""
Tickerboard API.

FastAPI backend proxying market data and news providers and serving
indicator chart data.
"""

from .main import app

__all__ = ["app"]
