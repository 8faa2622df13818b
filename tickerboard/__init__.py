"""
Tickerboard - Core Package.

This package contains the core modules for:
- data: Price, quote, FX and news collection
- indicators: Technical indicators, chart row alignment and CSV export
"""

from tickerboard import data, indicators

__all__ = ["data", "indicators"]
