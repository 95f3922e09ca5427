from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .constants import ALERT_TYPES


def split_pair(pair: str) -> tuple[str, str]:
    base, _, quote = pair.partition("/")
    return base, quote


class RateAlertIn(BaseModel):
    currency_pair: str = Field(..., description="Pair as FROM/TO, e.g. USD/EUR")
    target_rate: float = Field(..., gt=0)
    alert_type: str = Field("above", description="'above' or 'below'")

    @field_validator("currency_pair")
    @classmethod
    def valid_pair(cls, v: str) -> str:
        base, quote = split_pair(v.strip().upper())
        for code in (base, quote):
            if len(code) != 3 or not code.isalpha():
                raise ValueError("currency_pair must look like 'USD/EUR'")
        if base == quote:
            raise ValueError("currency_pair legs must differ")
        return f"{base}/{quote}"

    @field_validator("alert_type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        v = v.lower()
        if v not in ALERT_TYPES:
            raise ValueError(f"alert_type must be one of {sorted(ALERT_TYPES)}")
        return v


class RateAlertOut(BaseModel):
    id: int
    currency_pair: str
    target_rate: float
    alert_type: str
    is_active: bool
    created_at: str


class TriggeredAlert(BaseModel):
    alert: RateAlertOut
    current_rate: float
    message: str


class AlertActivePatch(BaseModel):
    is_active: bool
