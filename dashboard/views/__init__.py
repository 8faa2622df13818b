"""
Dashboard views.

Contains:
- Overview view (price, indicators, news, CSV export)
"""

from . import overview

__all__ = [
    'overview',
]
