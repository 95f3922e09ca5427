from __future__ import annotations

from dataclasses import dataclass

from .base import SupportsRateLookup

"""Currency conversion utility.

Centralizes `amount * rate` so the API and any batch callers compute conversions
identically. Rates come from an injected lookup (normally RateEngine); no rounding
is applied here, formatting happens at the display edge.
"""


@dataclass(frozen=True)
class ConversionResult:
    amount: float
    from_currency: str
    to_currency: str
    rate: float
    result: float

    def as_record(self) -> dict:
        return {
            "amount": self.amount,
            "from_currency": self.from_currency,
            "to_currency": self.to_currency,
            "result": self.result,
            "exchange_rate": self.rate,
        }


def convert(
    amount: float, from_currency: str, to_currency: str, rates: SupportsRateLookup
) -> ConversionResult:
    from_currency = from_currency.upper()
    to_currency = to_currency.upper()
    rate = rates.get_rate(from_currency, to_currency)
    return ConversionResult(
        amount=amount,
        from_currency=from_currency,
        to_currency=to_currency,
        rate=rate,
        result=amount * rate,
    )
