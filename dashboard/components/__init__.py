"""
Dashboard reusable components.

Provides:
- Chart components (Plotly visualizations)
- KPI cards and news list
"""

from .charts import (
    price_indicator_chart,
    rsi_chart,
    macd_chart,
    COLORS,
)

from .tables import (
    format_currency,
    kpi_card,
    kpi_row,
    quote_metrics,
    news_list,
)

__all__ = [
    # Charts
    'price_indicator_chart',
    'rsi_chart',
    'macd_chart',
    'COLORS',
    # Tables
    'format_currency',
    'kpi_card',
    'kpi_row',
    'quote_metrics',
    'news_list',
]
