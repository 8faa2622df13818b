"""
Price Data API routes.

Provides endpoints for quotes and price history.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_price_client
from api.schemas import (
    CandleDataPoint,
    PriceHistoryResponse,
    QuoteResponse,
    SymbolsResponse,
)
from config import Config
from tickerboard.data.price_client import PriceClient
from tickerboard.data.watchlist import Watchlist

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/symbols", response_model=SymbolsResponse)
def list_symbols():
    """List the default watchlist symbols."""
    symbols = Watchlist().get_symbols()
    return SymbolsResponse(symbols=symbols, count=len(symbols))


@router.get("/{symbol}", response_model=QuoteResponse)
def get_quote(symbol: str, price_client: PriceClient = Depends(get_price_client)):
    """
    Get the latest quote for a symbol.

    Returns the regular market price along with market metadata.
    """
    symbol = symbol.upper()

    try:
        quote = price_client.get_latest_quote(symbol)
    except Exception as e:
        logger.error(f"Quote lookup failed for {symbol}: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Error fetching quote: {str(e)}"
        )

    if quote.price is None:
        raise HTTPException(
            status_code=404,
            detail=f"No price data available for symbol: {symbol}"
        )

    return QuoteResponse(**quote.to_dict())


@router.get("/{symbol}/history", response_model=PriceHistoryResponse)
def get_price_history(
    symbol: str,
    period: str = Query(
        default=Config.DEFAULT_PERIOD,
        description="Price history period (1d, 5d, 1mo, 3mo, 6mo, 1y, 2y, 5y, 10y, ytd, max)"
    ),
    interval: str = Query(
        default=Config.DEFAULT_INTERVAL,
        description="Data interval (1m, 5m, 15m, 1h, 1d, 1wk, 1mo, ...)"
    ),
    price_client: PriceClient = Depends(get_price_client)
):
    """
    Get historical price bars for a symbol.

    Missing prices are returned as null rather than dropped.
    """
    symbol = symbol.upper()

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

    candles = [CandleDataPoint(**bar.to_dict()) for bar in bars]
    return PriceHistoryResponse(symbol=symbol, candles=candles, count=len(candles))
