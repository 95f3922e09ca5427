from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from fxdash.models.rates import RateSnapshot
from fxdash.services.rates.engine import RateEngine
from .deps import get_engine

"""Rates router.

Endpoints:
    - GET /rates                      -> current quote table
    - POST /rates/refresh             -> manual regeneration
    - GET /rates/format               -> display formatting for an amount
    - GET /rates/{from}/{to}          -> pair rate (units of `to` per 1 `from`)

Unknown codes are not rejected; they convert at a neutral 1.0.
"""

router = APIRouter(prefix="/rates", tags=["rates"])


class QuoteOut(BaseModel):
    code: str
    symbol: str
    flag: str
    base_rate: float
    rate: float
    change: float
    change_percent: float


class RatesOut(BaseModel):
    base: str = "USD"
    generation: int
    last_updated: datetime
    volatility: float
    quotes: List[QuoteOut]


class PairRateOut(BaseModel):
    from_currency: str
    to_currency: str
    rate: float
    supported: bool
    generation: int


def _rates_out(snap: RateSnapshot, volatility: float) -> RatesOut:
    return RatesOut(
        generation=snap.generation,
        last_updated=snap.last_updated,
        volatility=volatility,
        quotes=[
            QuoteOut(
                code=q.code,
                symbol=q.symbol,
                flag=q.flag,
                base_rate=q.base_rate,
                rate=q.current_rate,
                change=q.absolute_change,
                change_percent=q.percent_change,
            )
            for q in snap.quotes.values()
        ],
    )


@router.get("", response_model=RatesOut, summary="Current simulated quote table")
async def list_rates(engine: RateEngine = Depends(get_engine)):
    return _rates_out(engine.snapshot(), engine.volatility)


@router.post("/refresh", response_model=RatesOut, summary="Regenerate all quotes now")
async def refresh_rates(engine: RateEngine = Depends(get_engine)):
    return _rates_out(engine.regenerate(), engine.volatility)


@router.get("/format", summary="Format an amount for display in a currency")
async def format_amount(
    value: float = Query(...),
    currency: str = Query(..., min_length=3, max_length=3),
    engine: RateEngine = Depends(get_engine),
) -> Dict[str, str]:
    return {"currency": currency.upper(), "formatted": engine.format_amount(value, currency)}


@router.get("/{from_currency}/{to_currency}", response_model=PairRateOut, summary="Pair rate")
async def pair_rate(
    from_currency: str,
    to_currency: str,
    engine: RateEngine = Depends(get_engine),
):
    snap = engine.snapshot()
    return PairRateOut(
        from_currency=from_currency.upper(),
        to_currency=to_currency.upper(),
        rate=RateEngine.rate_between(snap, from_currency, to_currency),
        supported=engine.supported(from_currency) and engine.supported(to_currency),
        generation=snap.generation,
    )
