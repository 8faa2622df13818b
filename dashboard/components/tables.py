"""
Reusable table and text components for the dashboard.

Provides KPI cards, currency formatting and the news list using Streamlit.
"""

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import streamlit as st

from tickerboard.data.models import NewsArticle


# =============================================================================
# Formatting Helpers
# =============================================================================

CURRENCY_SYMBOLS = {
    'EUR': '€',
    'USD': '$',
    'GBP': '£',
    'JPY': '¥',
    'CHF': 'CHF ',
}


def format_currency(value: Optional[float], currency: str = 'EUR', decimals: int = 2) -> str:
    """
    Format an amount with its currency symbol.

    Example:
        >>> format_currency(1234.5, 'EUR')
        '€1,234.50'
    """
    if value is None or pd.isna(value):
        return "N/A"
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    return f"{symbol}{value:,.{decimals}f}"


def _format_percent(value: Optional[float], decimals: int = 2) -> Optional[str]:
    """Format a percentage value (already in percent units)."""
    if value is None or pd.isna(value):
        return None
    return f"{value:+.{decimals}f}%"


# =============================================================================
# KPI Cards
# =============================================================================

def kpi_card(
    label: str,
    value: Any,
    delta: Optional[str] = None,
    delta_color: str = "normal"
) -> None:
    """
    Display a KPI metric card.

    Args:
        label: Metric label.
        value: Metric value.
        delta: Optional change value.
        delta_color: Color for delta ("normal", "inverse", or "off").
    """
    st.metric(
        label=label,
        value=value,
        delta=delta,
        delta_color=delta_color
    )


def kpi_row(metrics: List[Dict[str, Any]]) -> None:
    """
    Display a row of KPI cards.

    Args:
        metrics: List of dictionaries with 'label', 'value', and optionally 'delta'.
    """
    cols = st.columns(len(metrics))

    for col, metric in zip(cols, metrics):
        with col:
            kpi_card(
                label=metric['label'],
                value=metric['value'],
                delta=metric.get('delta'),
                delta_color=metric.get('delta_color', 'normal')
            )


def quote_metrics(
    price: Optional[float],
    change_percent: Optional[float],
    fifty_two_week_high: Optional[float],
    fifty_two_week_low: Optional[float],
    factor: float,
    currency: str
) -> List[Dict[str, Any]]:
    """Build KPI entries for a quote, converted into the display currency."""
    def convert(value):
        return value * factor if value is not None else None

    return [
        {
            'label': f'Price ({currency})',
            'value': format_currency(convert(price), currency),
            'delta': _format_percent(change_percent),
        },
        {
            'label': '52W High',
            'value': format_currency(convert(fifty_two_week_high), currency),
        },
        {
            'label': '52W Low',
            'value': format_currency(convert(fifty_two_week_low), currency),
        },
        {
            'label': 'FX Factor',
            'value': f"{factor:.4f}",
        },
    ]


# =============================================================================
# News List
# =============================================================================

def news_list(articles: Sequence[NewsArticle], max_items: int = 8) -> None:
    """
    Display news articles as linked headlines.

    Args:
        articles: Articles to show.
        max_items: Maximum number of articles.
    """
    if not articles:
        st.info("No news articles available")
        return

    for article in list(articles)[:max_items]:
        line = f"[{article.title}]({article.url})" if article.url else article.title
        if article.source:
            line += f" - *{article.source}*"
        if article.published_at:
            line += f" ({article.published_at.strftime('%m/%d %H:%M')})"
        st.markdown(line)
