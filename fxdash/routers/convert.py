from typing import Optional

from fastapi import APIRouter, Depends, Query

from fxdash.core.config import Settings
from fxdash.db.dal import Database
from fxdash.models.conversion import ConversionIn, ConversionOut, ConversionRecordOut
from fxdash.services.history import record_conversion
from fxdash.services.rates.conversion import convert
from fxdash.services.rates.engine import RateEngine
from .deps import get_app_settings, get_db, get_engine

router = APIRouter(prefix="/convert", tags=["convert"])


@router.post("", response_model=ConversionOut, summary="Convert an amount between currencies")
async def convert_amount(
    payload: ConversionIn,
    engine: RateEngine = Depends(get_engine),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    rates = engine.pinned()
    conversion = convert(payload.amount, payload.from_currency, payload.to_currency, rates)
    recorded_id = None
    if payload.record and settings.enable_conversion_history:
        row = record_conversion(db, conversion, session_id=payload.session_id)
        recorded_id = row["id"] if row else None
    return ConversionOut(
        amount=conversion.amount,
        from_currency=conversion.from_currency,
        to_currency=conversion.to_currency,
        rate=conversion.rate,
        result=conversion.result,
        formatted_result=engine.format_amount(conversion.result, conversion.to_currency),
        recorded_id=recorded_id,
        as_of=rates.snapshot.last_updated,
    )


@router.get("/history", response_model=list[ConversionRecordOut], summary="Recent conversions")
async def conversion_history(
    limit: int = Query(50, ge=1, le=500),
    session_id: Optional[str] = Query(None),
    db: Database = Depends(get_db),
):
    return db.list_conversions(limit=limit, session_id=session_id)


@router.delete("/history", summary="Clear conversion history")
async def clear_history(
    session_id: Optional[str] = Query(None),
    db: Database = Depends(get_db),
):
    removed = db.clear_conversions(session_id=session_id)
    return {"status": "deleted", "removed": removed}
