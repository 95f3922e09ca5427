import pytest

from fxdash.models.alerts import RateAlertIn
from fxdash.models.rates import CurrencySpec
from fxdash.services.alerts import alert_condition_met, evaluate_alerts
from fxdash.services.rates.engine import RateEngine


def _alert(pair: str, target: float, kind: str, active: bool = True) -> dict:
    return {
        "id": 1,
        "currency_pair": pair,
        "target_rate": target,
        "alert_type": kind,
        "is_active": active,
        "created_at": "2025-01-01T00:00:00.000Z",
    }


@pytest.mark.parametrize(
    "kind, rate, target, expected",
    [
        ("above", 1.0, 1.0, True),
        ("above", 0.99, 1.0, False),
        ("below", 1.0, 1.0, True),
        ("below", 1.01, 1.0, False),
    ],
)
def test_alert_condition_boundaries(kind: str, rate: float, target: float, expected: bool) -> None:
    assert alert_condition_met(kind, rate, target) is expected


def test_unknown_alert_type_rejected() -> None:
    with pytest.raises(ValueError):
        alert_condition_met("sideways", 1.0, 1.0)


def test_evaluate_alerts_against_engine(two_currency_specs: list[CurrencySpec]) -> None:
    engine = RateEngine(two_currency_specs)
    alerts = [
        _alert("USD/EUR", 0.80, "above"),  # 0.85 >= 0.80
        _alert("USD/EUR", 0.80, "below"),
        _alert("EUR/USD", 1.2, "below"),  # 1.176 <= 1.2
        _alert("EUR/GBP", 1.0, "above", active=False),
    ]

    triggered = evaluate_alerts(alerts, engine)

    assert [(t["alert"]["currency_pair"], t["alert"]["alert_type"]) for t in triggered] == [
        ("USD/EUR", "above"),
        ("EUR/USD", "below"),
    ]
    assert triggered[0]["current_rate"] == 0.85
    assert "rose above" in triggered[0]["message"]
    assert "fell below" in triggered[1]["message"]


def test_alert_payload_normalisation() -> None:
    alert = RateAlertIn(currency_pair=" usd/eur ", target_rate=0.9, alert_type="BELOW")
    assert alert.currency_pair == "USD/EUR"
    assert alert.alert_type == "below"
    for bad in ("USDEUR", "USD/USD", "US/EUR"):
        with pytest.raises(ValueError):
            RateAlertIn(currency_pair=bad, target_rate=1.0)
