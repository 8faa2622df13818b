"""
Reusable Plotly chart components for the dashboard.

Provides chart functions for:
- Close price with moving averages
- RSI oscillator
- MACD with signal line and histogram
"""

from typing import Optional

import pandas as pd
import plotly.graph_objects as go


# =============================================================================
# Color Schemes
# =============================================================================

COLORS = {
    'close': '#111827',        # Near black
    'sma': '#1D4ED8',          # Blue
    'ema': '#DC2626',          # Red
    'rsi': '#16A34A',          # Green
    'macd': '#7C3AED',         # Purple
    'signal': '#F59E0B',       # Amber
    'bullish': '#00C853',
    'bearish': '#FF1744',
    'neutral': '#9E9E9E',
}

RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30


def _empty_figure(title: str, height: int) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text="No data available",
        xref="paper", yref="paper",
        x=0.5, y=0.5, showarrow=False
    )
    fig.update_layout(title=title, height=height)
    return fig


def _has_data(df: pd.DataFrame, col: str) -> bool:
    return not df.empty and col in df.columns and df[col].notna().any()


# =============================================================================
# Price Charts
# =============================================================================

def price_indicator_chart(
    df: pd.DataFrame,
    currency: str = 'EUR',
    sma_label: str = 'SMA',
    ema_label: str = 'EMA',
    title: str = '',
    height: int = 400
) -> go.Figure:
    """
    Create close price area chart with SMA and EMA overlays.

    Args:
        df: DataFrame from rows_to_frame (date, close, sma, ema columns).
        currency: Display currency code for the axis.
        sma_label: Legend name for the SMA line.
        ema_label: Legend name for the EMA line.
        title: Chart title.
        height: Chart height in pixels.

    Returns:
        Plotly Figure object.
    """
    if not _has_data(df, 'close'):
        return _empty_figure(title, height)

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=df['date'],
        y=df['close'],
        mode='lines',
        name='Close',
        fill='tozeroy',
        fillcolor='rgba(17,24,39,0.15)',
        line=dict(color=COLORS['close'], width=2)
    ))

    fig.add_trace(go.Scatter(
        x=df['date'],
        y=df['sma'],
        mode='lines',
        name=sma_label,
        line=dict(color=COLORS['sma'], width=1.5)
    ))

    fig.add_trace(go.Scatter(
        x=df['date'],
        y=df['ema'],
        mode='lines',
        name=ema_label,
        line=dict(color=COLORS['ema'], width=1.5)
    ))

    # Zoom the price axis to the data instead of starting at zero
    low = df[['close', 'sma', 'ema']].min().min()
    high = df[['close', 'sma', 'ema']].max().max()
    pad = (high - low) * 0.05 or abs(high) * 0.05 or 1.0

    fig.update_layout(
        title=title,
        xaxis_title="Date",
        yaxis_title=f"Price ({currency})",
        yaxis=dict(range=[low - pad, high + pad]),
        height=height,
        hovermode='x unified',
        template='plotly_white'
    )

    return fig


# =============================================================================
# Oscillator Charts
# =============================================================================

def rsi_chart(
    df: pd.DataFrame,
    label: str = 'RSI',
    title: str = '',
    height: int = 250
) -> go.Figure:
    """
    Create RSI line chart with overbought/oversold guides.

    Args:
        df: DataFrame with date and rsi columns.
        label: Legend name for the RSI line.
        title: Chart title.
        height: Chart height.

    Returns:
        Plotly Figure object.
    """
    if not _has_data(df, 'rsi'):
        return _empty_figure(title, height)

    fig = go.Figure()

    fig.add_hrect(
        y0=RSI_OVERBOUGHT, y1=100,
        fillcolor=COLORS['bearish'], opacity=0.08,
        layer="below", line_width=0
    )
    fig.add_hrect(
        y0=0, y1=RSI_OVERSOLD,
        fillcolor=COLORS['bullish'], opacity=0.08,
        layer="below", line_width=0
    )

    fig.add_trace(go.Scatter(
        x=df['date'],
        y=df['rsi'],
        mode='lines',
        name=label,
        line=dict(color=COLORS['rsi'], width=1.5)
    ))

    fig.add_hline(y=RSI_OVERBOUGHT, line_dash="dash", line_color="gray", opacity=0.5)
    fig.add_hline(y=RSI_OVERSOLD, line_dash="dash", line_color="gray", opacity=0.5)

    fig.update_layout(
        title=title,
        yaxis=dict(range=[0, 100]),
        height=height,
        hovermode='x unified',
        template='plotly_white',
        showlegend=False
    )

    return fig


def macd_chart(
    df: pd.DataFrame,
    histogram: Optional[pd.Series] = None,
    title: str = '',
    height: int = 250
) -> go.Figure:
    """
    Create MACD chart with signal line and histogram bars.

    Args:
        df: DataFrame with date, macd and signal columns.
        histogram: Optional histogram values. Defaults to macd - signal.
        title: Chart title.
        height: Chart height.

    Returns:
        Plotly Figure object.
    """
    if not _has_data(df, 'macd'):
        return _empty_figure(title, height)

    if histogram is None:
        histogram = df['macd'] - df['signal']

    colors = [
        COLORS['bullish'] if pd.notna(h) and h >= 0 else COLORS['bearish']
        for h in histogram
    ]

    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=df['date'],
        y=histogram,
        marker_color=colors,
        name='Histogram',
        opacity=0.5
    ))

    fig.add_trace(go.Scatter(
        x=df['date'],
        y=df['macd'],
        mode='lines',
        name='MACD',
        line=dict(color=COLORS['macd'], width=1.5)
    ))

    fig.add_trace(go.Scatter(
        x=df['date'],
        y=df['signal'],
        mode='lines',
        name='Signal',
        line=dict(color=COLORS['signal'], width=1.5)
    ))

    fig.add_hline(y=0, line_dash="dash", line_color="gray", opacity=0.5)

    fig.update_layout(
        title=title,
        height=height,
        hovermode='x unified',
        template='plotly_white'
    )

    return fig
