from __future__ import annotations

import logging
import math
import random
import threading
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from fxdash.core.errors import InvalidRateTableError
from fxdash.models.constants import (
    BASE_CURRENCY_TABLE,
    DEFAULT_DECIMALS,
    FALLBACK_DECIMALS,
    PIVOT_CURRENCY,
    ZERO_DECIMAL_CURRENCIES,
)
from fxdash.models.rates import CurrencyQuote, CurrencySpec, RateSnapshot
from fxdash.services.money import format_fixed

"""Synthetic exchange-rate engine.

Purpose:
    Hold a table of simulated USD-denominated quotes (units of currency per 1 USD),
    regenerate it on demand, and answer pairwise conversion queries.

Design:
    - Every regeneration draws an independent uniform move in [-V, +V] percent
      around each currency's fixed base rate. Moves never compound.
    - The whole table is rebuilt into a fresh RateSnapshot and published with a
      single reference swap, so readers see one generation or the next, never a mix.
    - Regeneration is serialized by a lock; readers never take it.
    - Unknown currency codes resolve to a neutral rate of 1.0 instead of raising.
"""

logger = logging.getLogger("fxdash.rates.engine")

NEUTRAL_RATE = 1.0
DEFAULT_VOLATILITY = 2.0


def default_currency_specs() -> List[CurrencySpec]:
    return [
        CurrencySpec(code=code, symbol=symbol, flag=flag, base_rate=rate)
        for code, symbol, flag, rate in BASE_CURRENCY_TABLE
    ]


def _validate_table(specs: Sequence[CurrencySpec]) -> None:
    if not specs:
        raise InvalidRateTableError("reference table is empty")
    seen: set[str] = set()
    for spec in specs:
        # CurrencySpec already enforces this; model_construct() bypasses validation
        if not (spec.base_rate > 0 and math.isfinite(spec.base_rate)):
            raise InvalidRateTableError(
                f"base rate for {spec.code} must be positive and finite, got {spec.base_rate!r}"
            )
        if spec.code == PIVOT_CURRENCY:
            raise InvalidRateTableError(f"{PIVOT_CURRENCY} cannot appear in the reference table")
        if spec.code in seen:
            raise InvalidRateTableError(f"duplicate currency code {spec.code}")
        seen.add(spec.code)


class RateEngine:
    """Owns the simulated quote table.

    Construction performs initialization: every quote starts at its base rate with
    zero change. The periodic refresh lives in RefreshScheduler, which the owning
    context starts and stops.
    """

    def __init__(
        self,
        specs: Optional[Iterable[CurrencySpec]] = None,
        *,
        volatility: float = DEFAULT_VOLATILITY,
        rng: Optional[random.Random] = None,
    ):
        table = list(specs) if specs is not None else default_currency_specs()
        _validate_table(table)
        if not volatility > 0:
            raise ValueError("volatility must be positive")
        self._specs: tuple[CurrencySpec, ...] = tuple(table)
        self._volatility = float(volatility)
        self._rng = rng if rng is not None else random.Random()
        self._lock = threading.Lock()
        self._snapshot = RateSnapshot(
            quotes={s.code: CurrencyQuote.at_base(s) for s in self._specs},
            generation=0,
            last_updated=datetime.now(timezone.utc),
        )
        logger.info(
            "rate engine initialized",
            extra={"currencies": len(self._specs), "volatility": self._volatility},
        )

    # Table access ----------------------------------------------
    @property
    def volatility(self) -> float:
        return self._volatility

    def snapshot(self) -> RateSnapshot:
        return self._snapshot

    def codes(self) -> List[str]:
        """Supported codes including the USD pivot, in table order."""
        return [PIVOT_CURRENCY, *(s.code for s in self._specs)]

    def supported(self, code: str) -> bool:
        code = code.upper()
        return code == PIVOT_CURRENCY or code in self._snapshot.quotes

    def quote(self, code: str) -> Optional[CurrencyQuote]:
        return self._snapshot.quotes.get(code.upper())

    # Regeneration ----------------------------------------------
    def _perturb(self, spec: CurrencySpec) -> CurrencyQuote:
        percent_change = (self._rng.random() - 0.5) * 2 * self._volatility
        absolute_change = spec.base_rate * percent_change / 100
        return CurrencyQuote(
            code=spec.code,
            symbol=spec.symbol,
            flag=spec.flag,
            base_rate=spec.base_rate,
            current_rate=spec.base_rate + absolute_change,
            absolute_change=absolute_change,
            percent_change=percent_change,
        )

    def regenerate(self) -> RateSnapshot:
        with self._lock:
            quotes: Dict[str, CurrencyQuote] = {s.code: self._perturb(s) for s in self._specs}
            snap = RateSnapshot(
                quotes=quotes,
                generation=self._snapshot.generation + 1,
                last_updated=datetime.now(timezone.utc),
            )
            self._snapshot = snap
        logger.debug("rates regenerated", extra={"generation": snap.generation})
        return snap

    # Queries ---------------------------------------------------
    @staticmethod
    def rate_between(snapshot: RateSnapshot, from_currency: str, to_currency: str) -> float:
        from_currency = from_currency.upper()
        to_currency = to_currency.upper()
        if from_currency == to_currency:
            return 1.0
        if from_currency == PIVOT_CURRENCY:
            return snapshot.rate_of(to_currency) or NEUTRAL_RATE
        if to_currency == PIVOT_CURRENCY:
            return 1 / (snapshot.rate_of(from_currency) or NEUTRAL_RATE)
        from_rate = snapshot.rate_of(from_currency) or NEUTRAL_RATE
        to_rate = snapshot.rate_of(to_currency) or NEUTRAL_RATE
        return from_rate / to_rate

    def get_rate(self, from_currency: str, to_currency: str) -> float:
        """Units of `to_currency` per 1 unit of `from_currency`."""
        return self.rate_between(self._snapshot, from_currency, to_currency)

    def format_amount(self, value: float, currency: str) -> str:
        currency = currency.upper()
        if currency not in self._snapshot.quotes:
            return format_fixed(value, FALLBACK_DECIMALS)
        places = 0 if currency in ZERO_DECIMAL_CURRENCIES else DEFAULT_DECIMALS
        return format_fixed(value, places)

    def pinned(self) -> "PinnedRates":
        """Rate lookup bound to the current generation, for multi-step reads."""
        return PinnedRates(self._snapshot)


class PinnedRates:
    def __init__(self, snapshot: RateSnapshot):
        self.snapshot = snapshot

    def get_rate(self, from_currency: str, to_currency: str) -> float:
        return RateEngine.rate_between(self.snapshot, from_currency, to_currency)
