"""
CSV export of chart rows.
"""

from datetime import date
from typing import Optional, Sequence

import pandas as pd

from config import Config
from tickerboard.indicators.merge import ChartRow, IndicatorSettings

PRICE_DECIMALS = 2
RSI_DECIMALS = 2
MACD_DECIMALS = 4


def _fmt(value: Optional[float], decimals: int) -> str:
    if value is None or pd.isna(value):
        return ""
    return f"{value:.{decimals}f}"


def export_columns(
    settings: Optional[IndicatorSettings] = None,
    currency: Optional[str] = None
) -> list[str]:
    """
    Header row for the CSV export.

    Example:
        >>> export_columns(IndicatorSettings(), "EUR")
        ['Date', 'Close (EUR)', 'SMA 20 (EUR)', 'EMA 50 (EUR)', 'RSI 14', 'MACD', 'Signal']
    """
    settings = settings or IndicatorSettings()
    currency = currency or Config.DISPLAY_CURRENCY
    return [
        "Date",
        f"Close ({currency})",
        f"{settings.sma_label} ({currency})",
        f"{settings.ema_label} ({currency})",
        settings.rsi_label,
        "MACD",
        "Signal",
    ]


def rows_to_csv(
    rows: Sequence[ChartRow],
    settings: Optional[IndicatorSettings] = None,
    currency: Optional[str] = None
) -> Optional[str]:
    """
    Render chart rows as CSV text.

    Prices use 2 decimals, RSI 2 and MACD/signal 4. Missing values are
    empty cells.

    Args:
        rows: Merged chart rows.
        settings: Indicator periods used for the column labels.
        currency: Display currency code for the price column labels.

    Returns:
        CSV text, or None when there are no rows.
    """
    if not rows:
        return None

    records = [
        [
            row.date,
            _fmt(row.close, PRICE_DECIMALS),
            _fmt(row.sma, PRICE_DECIMALS),
            _fmt(row.ema, PRICE_DECIMALS),
            _fmt(row.rsi, RSI_DECIMALS),
            _fmt(row.macd, MACD_DECIMALS),
            _fmt(row.signal, MACD_DECIMALS),
        ]
        for row in rows
    ]
    df = pd.DataFrame(records, columns=export_columns(settings, currency))
    return df.to_csv(index=False, lineterminator="\n")


def export_filename(symbol: str, today: Optional[date] = None) -> str:
    """
    Download file name for a symbol's chart data.

    Example:
        >>> export_filename("aapl", date(2024, 5, 1))
        'AAPL_chart_data_2024-05-01.csv'
    """
    today = today or date.today()
    return f"{symbol.upper()}_chart_data_{today.isoformat()}.csv"
