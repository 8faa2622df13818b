"""
Technical indicator module.

Provides:
- Close-price series extraction
- SMA, EMA, RSI and MACD calculations
- Right-aligned merge of indicator outputs onto the bar axis
- CSV export of merged chart rows
"""

from .series import extract_closes
from .engine import sma, ema, rsi, macd, MacdPoint
from .merge import (
    ChartRow,
    IndicatorSettings,
    align_right,
    build_chart_rows,
    conversion_factor,
    merge_rows,
    rows_to_frame,
)
from .export import rows_to_csv, export_filename

__all__ = [
    "extract_closes",
    "sma",
    "ema",
    "rsi",
    "macd",
    "MacdPoint",
    "ChartRow",
    "IndicatorSettings",
    "align_right",
    "build_chart_rows",
    "conversion_factor",
    "merge_rows",
    "rows_to_frame",
    "rows_to_csv",
    "export_filename",
]
