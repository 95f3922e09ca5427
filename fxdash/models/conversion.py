from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ConversionRecordOut(BaseModel):
    id: int
    amount: float
    from_currency: str
    to_currency: str
    result: float
    exchange_rate: float
    session_id: Optional[str] = None
    created_at: str


class ConversionIn(BaseModel):
    amount: float = Field(..., ge=0)
    from_currency: str = Field("USD", min_length=3, max_length=3)
    to_currency: str = Field("EUR", min_length=3, max_length=3)
    session_id: Optional[str] = Field(None, max_length=64)
    record: bool = Field(True, description="Log the conversion to history")

    @field_validator("from_currency", "to_currency")
    @classmethod
    def upper(cls, v: str) -> str:
        return v.upper()


class ConversionOut(BaseModel):
    amount: float
    from_currency: str
    to_currency: str
    rate: float
    result: float
    formatted_result: str
    recorded_id: Optional[int] = None
    as_of: datetime
