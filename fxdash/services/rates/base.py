from __future__ import annotations

"""Rate lookup abstractions.

Consumers (conversion, alerts, the scheduler) depend on these protocols rather than
on RateEngine directly so tests can hand them a fixed table or a counting stub.
"""
from typing import Any, Protocol


class SupportsRateLookup(Protocol):
    def get_rate(self, from_currency: str, to_currency: str) -> float: ...


class SupportsRegenerate(Protocol):
    def regenerate(self) -> Any: ...
