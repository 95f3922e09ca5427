"""Trending view over the current quote table.

Ranks quotes for the "most active pairs" listing: largest absolute percent move
first, flags hot movers, and splits gainers from losers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List

from fxdash.models.constants import (
    HOT_CHANGE_PERCENT,
    PIVOT_CURRENCY,
    STRENGTH_MIDPOINT,
    STRENGTH_PER_PERCENT,
)
from fxdash.models.rates import RateSnapshot

SORT_MODES = ("change", "alphabetical")


@dataclass(frozen=True)
class TrendingEntry:
    code: str
    symbol: str
    flag: str
    pair: str
    rate: float
    change: float
    change_percent: float
    is_hot: bool
    strength: float

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def build_trending(snapshot: RateSnapshot, sort_by: str = "change") -> List[TrendingEntry]:
    if sort_by not in SORT_MODES:
        raise ValueError(f"sort_by must be one of {SORT_MODES}")
    entries = [
        TrendingEntry(
            code=q.code,
            symbol=q.symbol,
            flag=q.flag,
            pair=f"{q.code}/{PIVOT_CURRENCY}",
            rate=q.current_rate,
            change=q.absolute_change,
            change_percent=q.percent_change,
            is_hot=abs(q.percent_change) > HOT_CHANGE_PERCENT,
            strength=STRENGTH_MIDPOINT + q.percent_change * STRENGTH_PER_PERCENT,
        )
        for q in snapshot.quotes.values()
    ]
    if sort_by == "change":
        entries.sort(key=lambda e: (-abs(e.change_percent), e.code))
    else:
        entries.sort(key=lambda e: e.code)
    return entries


def top_movers(entries: List[TrendingEntry], limit: int = 5) -> Dict[str, List[TrendingEntry]]:
    """Split already-sorted entries into gainers and losers, `limit` each."""
    return {
        "gainers": [e for e in entries if e.change > 0][:limit],
        "losers": [e for e in entries if e.change < 0][:limit],
    }
