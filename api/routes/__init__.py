"""
API route modules.
"""

from . import prices, fx, news, chart

__all__ = ["prices", "fx", "news", "chart"]
