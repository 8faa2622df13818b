"""
Technical indicator calculations.

Every function takes a plain sequence of prices (oldest first) and
returns a shorter, right-aligned list: the last output value belongs to
the last input value, and inputs that do not complete a warm-up window
produce no output. Short input never raises, it just yields fewer
(possibly zero) values.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class MacdPoint:
    """
    One MACD output value.

    Attributes:
        macd: Fast EMA minus slow EMA
        signal: EMA of the MACD line (None during signal warm-up)
        histogram: macd - signal (None when signal is None)
    """
    macd: float
    signal: Optional[float] = None
    histogram: Optional[float] = None


def _check_period(period: int, name: str = "period") -> None:
    if int(period) != period or period < 1:
        raise ValueError(f"{name} must be a positive integer, got {period!r}")


def _smoothed(values: np.ndarray, period: int, alpha: float) -> np.ndarray:
    """
    Exponential smoothing seeded with the mean of the first `period` values.

    Output has len(values) - period + 1 entries.
    """
    seed = values[:period].mean()
    seeded = pd.Series(np.concatenate(([seed], values[period:])))
    return seeded.ewm(alpha=alpha, adjust=False).mean().to_numpy()


def sma(values: Sequence[float], period: int) -> list[float]:
    """
    Calculate the Simple Moving Average.

    Args:
        values: Price series, oldest first.
        period: Window size.

    Returns:
        List of len(values) - period + 1 averages (empty if too short).

    Example:
        >>> sma([10, 11, 12, 13, 14, 15], 5)
        [12.0, 13.0]
    """
    _check_period(period)
    arr = np.asarray(values, dtype=float)
    if len(arr) < period:
        return []
    windows = np.lib.stride_tricks.sliding_window_view(arr, period)
    return windows.mean(axis=1).tolist()


def ema(values: Sequence[float], period: int) -> list[float]:
    """
    Calculate the Exponential Moving Average.

    Uses alpha = 2 / (period + 1) and seeds the recursion with the SMA of
    the first `period` values, so ema(...)[0] == sma(...)[0].

    Args:
        values: Price series, oldest first.
        period: EMA span.

    Returns:
        List of len(values) - period + 1 values (empty if too short).
    """
    _check_period(period)
    arr = np.asarray(values, dtype=float)
    if len(arr) < period:
        return []
    return _smoothed(arr, period, alpha=2.0 / (period + 1)).tolist()


def rsi(values: Sequence[float], period: int = 14) -> list[float]:
    """
    Calculate the Relative Strength Index.

    Gains and losses are smoothed separately with Wilder's method
    (simple average of the first `period` changes, then
    avg = (prev * (period - 1) + x) / period). RSI is 100 whenever the
    average loss is zero.

    Args:
        values: Price series, oldest first.
        period: Lookback window. Default: 14

    Returns:
        List of len(values) - period RSI values in [0, 100].

    Example:
        >>> rsi(prices, period=14)[-1] > 70  # overbought?
    """
    _check_period(period)
    arr = np.asarray(values, dtype=float)
    if len(arr) <= period:
        return []

    deltas = np.diff(arr)
    gains = np.clip(deltas, 0, None)
    losses = np.clip(-deltas, 0, None)

    avg_gain = _smoothed(gains, period, alpha=1.0 / period)
    avg_loss = _smoothed(losses, period, alpha=1.0 / period)

    with np.errstate(divide="ignore", invalid="ignore"):
        rs = avg_gain / avg_loss
        result = np.where(avg_loss == 0, 100.0, 100.0 - 100.0 / (1.0 + rs))

    return np.clip(result, 0.0, 100.0).tolist()


def macd(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9
) -> list[MacdPoint]:
    """
    Calculate MACD with its signal line and histogram.

    The MACD line is fast EMA minus slow EMA over the range where both
    exist. The signal line is an EMA of the MACD line, so it is missing
    for the first signal_period - 1 points.

    Args:
        values: Price series, oldest first.
        fast_period: Fast EMA period. Default: 12
        slow_period: Slow EMA period. Default: 26
        signal_period: Signal line EMA period. Default: 9

    Returns:
        List of MacdPoint, as long as the slower EMA.
    """
    _check_period(fast_period, "fast_period")
    _check_period(slow_period, "slow_period")
    _check_period(signal_period, "signal_period")

    fast_line = ema(values, fast_period)
    slow_line = ema(values, slow_period)
    length = min(len(fast_line), len(slow_line))
    if length == 0:
        return []

    macd_line = (
        np.asarray(fast_line[len(fast_line) - length:])
        - np.asarray(slow_line[len(slow_line) - length:])
    ).tolist()
    signal_line = ema(macd_line, signal_period)
    offset = length - len(signal_line)

    points = []
    for i, value in enumerate(macd_line):
        if i < offset:
            points.append(MacdPoint(macd=value))
        else:
            signal = signal_line[i - offset]
            points.append(MacdPoint(macd=value, signal=signal, histogram=value - signal))
    return points
