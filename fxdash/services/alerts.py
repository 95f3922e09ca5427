"""Rate alert evaluation.

Checks watchlist entries against the current rate table and returns the ones whose
condition holds, with a consistent shape for the API:

  alert: the stored alert row
  current_rate: units of the pair's second leg per 1 unit of its first leg
  message: human readable string

'above' fires at rate >= target, 'below' at rate <= target. Inactive alerts never fire.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List

from fxdash.models.alerts import split_pair
from fxdash.services.rates.base import SupportsRateLookup


def alert_condition_met(alert_type: str, rate: float, target: float) -> bool:
    if alert_type == "above":
        return rate >= target
    if alert_type == "below":
        return rate <= target
    raise ValueError(f"unknown alert_type '{alert_type}'")


def evaluate_alerts(
    alerts: Iterable[Dict[str, Any]], rates: SupportsRateLookup
) -> List[Dict[str, Any]]:
    triggered: List[Dict[str, Any]] = []
    for alert in alerts:
        if not alert["is_active"]:
            continue
        base, quote = split_pair(alert["currency_pair"])
        rate = rates.get_rate(base, quote)
        if alert_condition_met(alert["alert_type"], rate, alert["target_rate"]):
            verb = "rose above" if alert["alert_type"] == "above" else "fell below"
            triggered.append(
                {
                    "alert": alert,
                    "current_rate": rate,
                    "message": f"{alert['currency_pair']} {verb} {alert['target_rate']} (now {rate:.4f})",
                }
            )
    return triggered


__all__ = ["alert_condition_met", "evaluate_alerts"]
