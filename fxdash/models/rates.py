from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, Field, field_validator

from .constants import PIVOT_CURRENCY


class CurrencySpec(BaseModel):
    """One row of the reference table: units of `code` per 1 USD."""

    model_config = {"frozen": True}

    code: str
    symbol: str = ""
    flag: str = ""
    base_rate: float = Field(..., gt=0, allow_inf_nan=False)

    @field_validator("code")
    @classmethod
    def valid_code(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("currency code must be three letters")
        if v == PIVOT_CURRENCY:
            raise ValueError(f"{PIVOT_CURRENCY} is the pivot currency and cannot be quoted")
        return v


@dataclass(frozen=True)
class CurrencyQuote:
    code: str
    symbol: str
    flag: str
    base_rate: float
    current_rate: float
    absolute_change: float
    percent_change: float

    @classmethod
    def at_base(cls, spec: CurrencySpec) -> "CurrencyQuote":
        return cls(
            code=spec.code,
            symbol=spec.symbol,
            flag=spec.flag,
            base_rate=spec.base_rate,
            current_rate=spec.base_rate,
            absolute_change=0.0,
            percent_change=0.0,
        )


@dataclass(frozen=True)
class RateSnapshot:
    """One generation of the quote table. Never mutated after creation."""

    quotes: Mapping[str, CurrencyQuote]
    generation: int
    last_updated: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.quotes, MappingProxyType):
            object.__setattr__(self, "quotes", MappingProxyType(dict(self.quotes)))

    def rate_of(self, code: str) -> float | None:
        q = self.quotes.get(code)
        return q.current_rate if q else None
