"""
Chart row alignment.

Indicator outputs have different lengths because of their warm-up
periods. Each one is right-aligned against the same bar axis, so bar i
gets output[i - (N - len(output))] and nothing before that.
"""

import math
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Optional, Sequence

import pandas as pd

from config import Config
from tickerboard.data.models import Bar
from tickerboard.indicators.engine import MacdPoint, sma, ema, rsi, macd
from tickerboard.indicators.series import extract_closes

DATE_FORMAT = "%Y-%m-%d"
INTRADAY_DATE_FORMAT = "%Y-%m-%d %H:%M"
INTRADAY_INTERVALS = {"1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h"}


@dataclass(frozen=True)
class IndicatorSettings:
    """Indicator periods used to build chart rows."""
    sma_period: int = Config.SMA_PERIOD
    ema_period: int = Config.EMA_PERIOD
    rsi_period: int = Config.RSI_PERIOD
    macd_fast: int = Config.MACD_FAST
    macd_slow: int = Config.MACD_SLOW
    macd_signal: int = Config.MACD_SIGNAL

    @property
    def sma_label(self) -> str:
        return f"SMA {self.sma_period}"

    @property
    def ema_label(self) -> str:
        return f"EMA {self.ema_period}"

    @property
    def rsi_label(self) -> str:
        return f"RSI {self.rsi_period}"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ChartRow:
    """
    One display row per bar.

    Price-level fields (close, sma, ema) are in the display currency;
    rsi, macd and signal are left unconverted. None means the bar has
    no value for that field.
    """
    date: str
    close: Optional[float] = None
    sma: Optional[float] = None
    ema: Optional[float] = None
    rsi: Optional[float] = None
    macd: Optional[float] = None
    signal: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)


def conversion_factor(rate: Optional[float]) -> float:
    """
    Currency conversion factor for a fetched exchange rate.

    Args:
        rate: Exchange rate, or None if the lookup failed.

    Returns:
        The rate if it is a finite positive number, else 1.0.
    """
    if rate is None or isinstance(rate, bool):
        return 1.0
    try:
        rate = float(rate)
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(rate) or rate <= 0:
        return 1.0
    return rate


def align_right(output: Sequence[Any], length: int) -> list[Any]:
    """
    Right-align an indicator output against an axis of `length` bars.

    Args:
        output: Indicator values, last value belongs to the last bar.
        length: Number of bars.

    Returns:
        List of `length` entries, None where the indicator has no value.

    Example:
        >>> align_right([1.0, 2.0], 4)
        [None, None, 1.0, 2.0]
    """
    offset = length - len(output)
    return [output[i - offset] if i >= offset else None for i in range(length)]


def date_format_for_interval(interval: str) -> str:
    """Date format for chart labels at the given bar interval."""
    return INTRADAY_DATE_FORMAT if interval in INTRADAY_INTERVALS else DATE_FORMAT


def format_date(value: Optional[datetime], date_format: str = DATE_FORMAT) -> str:
    """Format a bar timestamp, empty string when missing."""
    if value is None:
        return ""
    return value.strftime(date_format)


def _scale(value: Optional[float], factor: float) -> Optional[float]:
    return value * factor if value is not None else None


def merge_rows(
    bars: Sequence[Bar],
    sma_values: Sequence[float] = (),
    ema_values: Sequence[float] = (),
    rsi_values: Sequence[float] = (),
    macd_values: Sequence[MacdPoint] = (),
    fx_rate: Optional[float] = None,
    date_format: str = DATE_FORMAT
) -> list[ChartRow]:
    """
    Merge bars and indicator outputs into one row per bar.

    Args:
        bars: Original bars, oldest first.
        sma_values: Right-aligned SMA output.
        ema_values: Right-aligned EMA output.
        rsi_values: Right-aligned RSI output.
        macd_values: Right-aligned MACD output.
        fx_rate: Exchange rate applied to close/SMA/EMA (None means 1.0).
        date_format: strftime format for the row date.

    Returns:
        List of len(bars) ChartRows.
    """
    n = len(bars)
    factor = conversion_factor(fx_rate)

    sma_col = align_right(sma_values, n)
    ema_col = align_right(ema_values, n)
    rsi_col = align_right(rsi_values, n)
    macd_col = align_right(macd_values, n)

    rows = []
    for i, bar in enumerate(bars):
        point = macd_col[i]
        rows.append(ChartRow(
            date=format_date(bar.date, date_format),
            close=_scale(bar.close, factor),
            sma=_scale(sma_col[i], factor),
            ema=_scale(ema_col[i], factor),
            rsi=rsi_col[i],
            macd=point.macd if point is not None else None,
            signal=point.signal if point is not None else None,
        ))
    return rows


def build_chart_rows(
    bars: Sequence[Bar],
    fx_rate: Optional[float] = None,
    settings: Optional[IndicatorSettings] = None,
    date_format: str = DATE_FORMAT
) -> list[ChartRow]:
    """
    Compute all indicators for the bars and merge them into chart rows.

    Args:
        bars: Price bars, oldest first.
        fx_rate: Exchange rate into the display currency (None means 1.0).
        settings: Indicator periods. Defaults to IndicatorSettings().
        date_format: strftime format for the row date.

    Returns:
        List of ChartRows, one per bar. Empty if there are no bars.
    """
    settings = settings or IndicatorSettings()
    closes = extract_closes(bars)

    return merge_rows(
        bars,
        sma_values=sma(closes, settings.sma_period),
        ema_values=ema(closes, settings.ema_period),
        rsi_values=rsi(closes, settings.rsi_period),
        macd_values=macd(
            closes,
            fast_period=settings.macd_fast,
            slow_period=settings.macd_slow,
            signal_period=settings.macd_signal,
        ),
        fx_rate=fx_rate,
        date_format=date_format,
    )


def rows_to_frame(rows: Sequence[ChartRow]) -> pd.DataFrame:
    """
    Convert chart rows to a DataFrame for plotting.

    Missing values become NaN so Plotly leaves gaps.
    """
    columns = ["date", "close", "sma", "ema", "rsi", "macd", "signal"]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame([row.to_dict() for row in rows], columns=columns)
    numeric = columns[1:]
    df[numeric] = df[numeric].apply(pd.to_numeric, errors="coerce")
    return df
