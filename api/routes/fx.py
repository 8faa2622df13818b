"""
Exchange rate API routes.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_price_client
from api.schemas import ExchangeRateResponse
from tickerboard.data.price_client import PriceClient
from tickerboard.indicators import conversion_factor

router = APIRouter()


@router.get("/{base}/{target}", response_model=ExchangeRateResponse)
def get_exchange_rate(
    base: str,
    target: str,
    price_client: PriceClient = Depends(get_price_client)
):
    """
    Get the exchange rate from base to target currency.

    A failed lookup is not an error: rate is null and factor falls back to 1.0.
    """
    base, target = base.upper(), target.upper()
    rate = price_client.get_exchange_rate(base, target)
    return ExchangeRateResponse(
        base=base,
        target=target,
        rate=rate,
        factor=conversion_factor(rate),
    )
