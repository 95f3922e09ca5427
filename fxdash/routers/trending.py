from typing import Literal

from fastapi import APIRouter, Depends, Query

from fxdash.services.rates.engine import RateEngine
from fxdash.services.rates.trending import build_trending, top_movers
from .deps import get_engine

router = APIRouter(prefix="/trending", tags=["trending"])


@router.get("", summary="Quotes ranked by recent movement")
async def trending(
    sort_by: Literal["change", "alphabetical"] = Query("change"),
    engine: RateEngine = Depends(get_engine),
):
    snap = engine.snapshot()
    entries = build_trending(snap, sort_by=sort_by)
    return {
        "generation": snap.generation,
        "last_updated": snap.last_updated.isoformat(),
        "items": [e.to_dict() for e in entries],
    }


@router.get("/movers", summary="Top gainers and losers")
async def movers(
    limit: int = Query(5, ge=1, le=20),
    engine: RateEngine = Depends(get_engine),
):
    snap = engine.snapshot()
    split = top_movers(build_trending(snap), limit=limit)
    return {
        "generation": snap.generation,
        "gainers": [e.to_dict() for e in split["gainers"]],
        "losers": [e.to_dict() for e in split["losers"]],
    }
