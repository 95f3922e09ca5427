from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from fxdash.core.errors import AlertNotFoundError
from fxdash.db.dal import Database
from fxdash.models.alerts import AlertActivePatch, RateAlertIn, RateAlertOut, TriggeredAlert
from fxdash.services.alerts import evaluate_alerts
from fxdash.services.rates.engine import RateEngine
from .deps import get_db, get_engine

"""Rate alerts (watchlist) router.

Endpoints:
    - GET /alerts                -> list alerts (optionally active only)
    - POST /alerts               -> create {currency_pair, target_rate, alert_type}
    - PATCH /alerts/{id}         -> toggle is_active
    - DELETE /alerts/{id}        -> remove
    - GET /alerts/triggered      -> active alerts whose condition holds right now
"""

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=list[RateAlertOut], summary="List rate alerts")
async def list_alerts(
    active_only: bool = Query(False),
    db: Database = Depends(get_db),
):
    return db.list_alerts(active_only=active_only)


@router.post("", response_model=RateAlertOut, status_code=201, summary="Create a rate alert")
async def create_alert(payload: RateAlertIn, db: Database = Depends(get_db)):
    return db.create_alert(payload.currency_pair, payload.target_rate, payload.alert_type)


@router.get("/triggered", response_model=list[TriggeredAlert], summary="Alerts firing now")
async def triggered_alerts(
    db: Database = Depends(get_db),
    engine: RateEngine = Depends(get_engine),
):
    return evaluate_alerts(db.list_alerts(active_only=True), engine.pinned())


@router.patch("/{alert_id}", response_model=RateAlertOut, summary="Activate / deactivate")
async def set_alert_active(
    alert_id: int, payload: AlertActivePatch, db: Database = Depends(get_db)
):
    try:
        return db.set_alert_active(alert_id, payload.is_active)
    except AlertNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/{alert_id}", summary="Delete a rate alert")
async def delete_alert(alert_id: int, db: Database = Depends(get_db)):
    try:
        db.delete_alert(alert_id)
    except AlertNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"status": "deleted", "id": alert_id}
