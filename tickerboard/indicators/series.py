"""
Close-price series extraction.
"""

import math
from typing import Iterable

from tickerboard.data.models import Bar


def extract_closes(bars: Iterable[Bar]) -> list[float]:
    """
    Extract finite close prices from bars, oldest first.

    Bars without a usable close are dropped, not filled, so the result
    can be shorter than the input.

    Args:
        bars: Price bars in chronological order.

    Returns:
        List of close prices.
    """
    closes = []
    for bar in bars:
        close = bar.close
        if isinstance(close, bool) or not isinstance(close, (int, float)):
            continue
        if math.isfinite(close):
            closes.append(float(close))
    return closes
