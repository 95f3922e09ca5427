"""Pydantic / dataclass domain models for the FX dashboard."""

from .constants import (
    BASE_CURRENCY_TABLE,
    PIVOT_CURRENCY,
    ZERO_DECIMAL_CURRENCIES,
)  # re-export
from .rates import CurrencySpec, CurrencyQuote, RateSnapshot
from .alerts import RateAlertIn, RateAlertOut, TriggeredAlert
from .conversion import ConversionIn, ConversionOut, ConversionRecordOut

__all__ = [
    "BASE_CURRENCY_TABLE",
    "PIVOT_CURRENCY",
    "ZERO_DECIMAL_CURRENCIES",
    "CurrencySpec",
    "CurrencyQuote",
    "RateSnapshot",
    "RateAlertIn",
    "RateAlertOut",
    "TriggeredAlert",
    "ConversionIn",
    "ConversionOut",
    "ConversionRecordOut",
]
