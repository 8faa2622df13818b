"""
Chart Data API routes.

Provides merged price/indicator rows and their CSV export.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from api.dependencies import get_price_client
from api.schemas import ChartResponse, ChartRowItem, IndicatorSettingsItem
from config import Config
from tickerboard.data.price_client import PriceClient
from tickerboard.indicators import (
    ChartRow,
    IndicatorSettings,
    build_chart_rows,
    conversion_factor,
    export_filename,
    rows_to_csv,
)
from tickerboard.indicators.merge import date_format_for_interval

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_rows(
    price_client: PriceClient,
    symbol: str,
    period: str,
    interval: str,
    base: str,
    currency: str,
    settings: IndicatorSettings
) -> tuple[list[ChartRow], Optional[float]]:
    """Fetch bars and FX rate, then build chart rows."""
    if period not in PriceClient.VALID_PERIODS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid period. Must be one of: {', '.join(PriceClient.VALID_PERIODS)}"
        )
    if interval not in PriceClient.VALID_INTERVALS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid interval. Must be one of: {', '.join(PriceClient.VALID_INTERVALS)}"
        )

    try:
        bars = price_client.get_bars(symbol, period=period, interval=interval)
    except Exception as e:
        logger.error(f"History lookup failed for {symbol}: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Error fetching historical prices: {str(e)}"
        )

    rate = price_client.get_exchange_rate(base, currency)
    rows = build_chart_rows(
        bars,
        fx_rate=rate,
        settings=settings,
        date_format=date_format_for_interval(interval),
    )
    return rows, rate


def _settings(
    sma_period: int,
    ema_period: int,
    rsi_period: int
) -> IndicatorSettings:
    return IndicatorSettings(
        sma_period=sma_period,
        ema_period=ema_period,
        rsi_period=rsi_period,
    )


@router.get("/{symbol}", response_model=ChartResponse)
def get_chart(
    symbol: str,
    period: str = Query(default=Config.DEFAULT_PERIOD, description="Price history period"),
    interval: str = Query(default=Config.DEFAULT_INTERVAL, description="Data interval"),
    base: str = Query(default=Config.BASE_CURRENCY, description="Currency of the price data"),
    currency: str = Query(default=Config.DISPLAY_CURRENCY, description="Display currency"),
    sma_period: int = Query(default=Config.SMA_PERIOD, ge=1),
    ema_period: int = Query(default=Config.EMA_PERIOD, ge=1),
    rsi_period: int = Query(default=Config.RSI_PERIOD, ge=1),
    price_client: PriceClient = Depends(get_price_client)
):
    """
    Get close prices and indicators, one row per bar.

    Close, SMA and EMA are converted into the display currency. RSI and
    MACD are not converted. Indicators without enough history are null.
    """
    symbol = symbol.upper()
    currency = currency.upper()
    settings = _settings(sma_period, ema_period, rsi_period)

    rows, rate = _load_rows(
        price_client, symbol, period, interval, base.upper(), currency, settings
    )

    return ChartResponse(
        symbol=symbol,
        currency=currency,
        fx_rate=rate,
        factor=conversion_factor(rate),
        settings=IndicatorSettingsItem(**settings.to_dict()),
        rows=[ChartRowItem(**row.to_dict()) for row in rows],
        count=len(rows),
    )


@router.get("/{symbol}/export")
def export_chart(
    symbol: str,
    period: str = Query(default=Config.DEFAULT_PERIOD, description="Price history period"),
    interval: str = Query(default=Config.DEFAULT_INTERVAL, description="Data interval"),
    base: str = Query(default=Config.BASE_CURRENCY, description="Currency of the price data"),
    currency: str = Query(default=Config.DISPLAY_CURRENCY, description="Display currency"),
    sma_period: int = Query(default=Config.SMA_PERIOD, ge=1),
    ema_period: int = Query(default=Config.EMA_PERIOD, ge=1),
    rsi_period: int = Query(default=Config.RSI_PERIOD, ge=1),
    price_client: PriceClient = Depends(get_price_client)
):
    """
    Download the chart rows as CSV.

    Returns 404 when there is no price data to export.
    """
    symbol = symbol.upper()
    currency = currency.upper()
    settings = _settings(sma_period, ema_period, rsi_period)

    rows, _ = _load_rows(
        price_client, symbol, period, interval, base.upper(), currency, settings
    )
    csv_text = rows_to_csv(rows, settings=settings, currency=currency)
    if csv_text is None:
        raise HTTPException(
            status_code=404,
            detail=f"No chart data to export for symbol: {symbol}"
        )

    filename = export_filename(symbol)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
