from fastapi import APIRouter, Depends

from fxdash.services.rates.engine import RateEngine
from fxdash.services.rates.scheduler import RefreshScheduler
from .deps import get_engine, get_scheduler

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness plus rate engine state")
async def health(
    engine: RateEngine = Depends(get_engine),
    scheduler: RefreshScheduler = Depends(get_scheduler),
):
    snap = engine.snapshot()
    return {
        "status": "ok",
        "currencies": len(snap.quotes),
        "generation": snap.generation,
        "last_updated": snap.last_updated.isoformat(),
        "scheduler_running": scheduler.running,
        "refresh_interval_seconds": scheduler.interval_seconds,
    }
