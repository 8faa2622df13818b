"""
Dashboard Overview Page.

Main dashboard view with:
- Quote KPI row in the display currency
- Price chart with SMA/EMA
- RSI and MACD charts
- Latest news
- CSV export
"""

import streamlit as st

from dashboard.components.charts import (
    price_indicator_chart,
    rsi_chart,
    macd_chart,
)
from dashboard.components.tables import kpi_row, quote_metrics, news_list
from dashboard.data_loader import MarketSnapshot
from tickerboard.indicators import (
    IndicatorSettings,
    export_filename,
    rows_to_csv,
    rows_to_frame,
)


def render(
    snapshot: MarketSnapshot,
    settings: IndicatorSettings,
    currency: str
) -> None:
    """
    Render the overview page.

    Args:
        snapshot: Loaded data for the selected symbol.
        settings: Indicator periods used for the rows.
        currency: Display currency code.
    """
    title = snapshot.symbol
    if snapshot.quote is not None and snapshot.quote.name:
        title = f"{snapshot.symbol} - {snapshot.quote.name}"
    st.header(title)

    _render_quote(snapshot, currency)
    _render_export(snapshot, settings, currency)

    st.divider()

    df = rows_to_frame(snapshot.rows)

    st.subheader("Price")
    fig = price_indicator_chart(
        df,
        currency=currency,
        sma_label=settings.sma_label,
        ema_label=settings.ema_label,
        height=400
    )
    st.plotly_chart(fig, width='stretch')

    col1, col2 = st.columns(2)

    with col1:
        st.subheader(f"RSI ({settings.rsi_period})")
        st.plotly_chart(rsi_chart(df, label=settings.rsi_label), width='stretch')

    with col2:
        st.subheader("MACD")
        st.plotly_chart(macd_chart(df), width='stretch')

    st.divider()

    st.subheader("Latest News")
    news_list(snapshot.news)


def _render_quote(snapshot: MarketSnapshot, currency: str) -> None:
    """Render quote KPI metrics."""
    quote = snapshot.quote
    if quote is None:
        st.info(f"No quote available for {snapshot.symbol}")
        return

    if snapshot.fx_rate is None:
        st.caption("Exchange rate unavailable - prices shown unconverted")

    kpi_row(quote_metrics(
        price=quote.price,
        change_percent=quote.change_percent,
        fifty_two_week_high=quote.fifty_two_week_high,
        fifty_two_week_low=quote.fifty_two_week_low,
        factor=snapshot.factor,
        currency=currency,
    ))


def _render_export(
    snapshot: MarketSnapshot,
    settings: IndicatorSettings,
    currency: str
) -> None:
    """Render the CSV download button."""
    csv_text = rows_to_csv(snapshot.rows, settings=settings, currency=currency)
    st.download_button(
        label="Export CSV",
        data=csv_text or "",
        file_name=export_filename(snapshot.symbol),
        mime="text/csv",
        disabled=csv_text is None,
    )
