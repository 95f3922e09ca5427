from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fxdash.core.config import Settings
from fxdash.core.errors import InvalidRateTableError
from fxdash.main import create_app


def test_root_and_health(client: TestClient) -> None:
    assert client.get("/").json()["message"] == "FX Dashboard API"
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["currencies"] == 20
    assert body["generation"] == 0
    assert body["scheduler_running"] is False
    assert body["refresh_interval_seconds"] == 30


def test_rates_start_at_base_and_refresh(client: TestClient) -> None:
    initial = client.get("/rates").json()
    assert initial["base"] == "USD"
    assert initial["generation"] == 0
    eur = next(q for q in initial["quotes"] if q["code"] == "EUR")
    assert eur["rate"] == eur["base_rate"] == 0.85
    assert eur["change"] == 0

    refreshed = client.post("/rates/refresh").json()
    assert refreshed["generation"] == 1
    for q in refreshed["quotes"]:
        assert abs(q["change_percent"]) <= refreshed["volatility"]

    assert client.get("/rates").json()["quotes"] == refreshed["quotes"]


def test_pair_rate(client: TestClient) -> None:
    body = client.get("/rates/usd/jpy").json()
    assert body == {
        "from_currency": "USD",
        "to_currency": "JPY",
        "rate": 110.0,
        "supported": True,
        "generation": 0,
    }
    same = client.get("/rates/EUR/EUR").json()
    assert same["rate"] == 1


def test_unknown_pair_is_neutral_but_flagged(client: TestClient) -> None:
    body = client.get("/rates/USD/ZZZ").json()
    assert body["rate"] == 1
    assert body["supported"] is False


def test_format_endpoint(client: TestClient) -> None:
    assert client.get("/rates/format", params={"value": 1234.5, "currency": "JPY"}).json() == {
        "currency": "JPY",
        "formatted": "1235",
    }
    assert client.get("/rates/format", params={"value": 1, "currency": "eur"}).json()["formatted"] == "1.0000"
    resp = client.get("/rates/format", params={"value": 1, "currency": "EURO"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_convert_records_history(client: TestClient) -> None:
    resp = client.post(
        "/convert",
        json={"amount": 1000, "from_currency": "usd", "to_currency": "EUR", "session_id": "tab-1"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["rate"] == 0.85
    assert body["result"] == pytest.approx(850.0)
    assert body["formatted_result"] == "850.0000"
    assert body["recorded_id"] is not None

    history = client.get("/convert/history", params={"session_id": "tab-1"}).json()
    assert len(history) == 1
    assert history[0]["from_currency"] == "USD"
    assert history[0]["exchange_rate"] == 0.85


def test_convert_without_recording(client: TestClient) -> None:
    body = client.post("/convert", json={"amount": 5, "from_currency": "GBP", "to_currency": "USD", "record": False}).json()
    assert body["recorded_id"] is None
    assert body["formatted_result"] == "6.85"  # USD is outside the quote table: two decimals
    assert client.get("/convert/history").json() == []


def test_convert_huge_amount_formats(client: TestClient) -> None:
    resp = client.post(
        "/convert",
        json={"amount": 1e22, "from_currency": "USD", "to_currency": "KRW", "record": False},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["result"] == pytest.approx(1.32045e25)
    assert body["formatted_result"].endswith(".0000")
    assert len(body["formatted_result"].split(".")[0]) == 26


def test_convert_rejects_negative_amount(client: TestClient) -> None:
    resp = client.post("/convert", json={"amount": -1})
    assert resp.status_code == 422


def test_clear_history(client: TestClient) -> None:
    client.post("/convert", json={"amount": 1})
    client.post("/convert", json={"amount": 2})
    assert client.delete("/convert/history").json() == {"status": "deleted", "removed": 2}


def test_history_disabled_by_settings(tmp_path: Path) -> None:
    settings = Settings(
        db_path=tmp_path / "off.sqlite3", enable_scheduler=False, enable_conversion_history=False
    )
    with TestClient(create_app(settings)) as client:
        assert client.post("/convert", json={"amount": 1}).json()["recorded_id"] is None
        assert client.get("/convert/history").json() == []


def test_trending_and_movers(client: TestClient) -> None:
    client.post("/rates/refresh")
    body = client.get("/trending").json()
    moves = [abs(i["change_percent"]) for i in body["items"]]
    assert moves == sorted(moves, reverse=True)
    assert body["generation"] == 1

    alpha = client.get("/trending", params={"sort_by": "alphabetical"}).json()["items"]
    assert [i["code"] for i in alpha] == sorted(i["code"] for i in alpha)
    assert client.get("/trending", params={"sort_by": "volume"}).status_code == 422

    movers = client.get("/trending/movers", params={"limit": 3}).json()
    assert len(movers["gainers"]) <= 3
    assert all(g["change"] > 0 for g in movers["gainers"])
    assert all(item["change"] < 0 for item in movers["losers"])


def test_alert_lifecycle(client: TestClient) -> None:
    created = client.post(
        "/alerts", json={"currency_pair": "usd/eur", "target_rate": 0.8, "alert_type": "above"}
    )
    assert created.status_code == 201
    alert = created.json()
    assert alert["currency_pair"] == "USD/EUR"

    triggered = client.get("/alerts/triggered").json()
    assert len(triggered) == 1
    assert triggered[0]["current_rate"] == 0.85

    patched = client.patch(f"/alerts/{alert['id']}", json={"is_active": False}).json()
    assert patched["is_active"] is False
    assert client.get("/alerts/triggered").json() == []
    assert client.get("/alerts", params={"active_only": True}).json() == []

    assert client.delete(f"/alerts/{alert['id']}").json() == {"status": "deleted", "id": alert["id"]}
    missing = client.delete(f"/alerts/{alert['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"


def test_invalid_alert_payload(client: TestClient) -> None:
    resp = client.post("/alerts", json={"currency_pair": "USD/USD", "target_rate": 1})
    assert resp.status_code == 422
    resp = client.post("/alerts", json={"currency_pair": "USD/EUR", "target_rate": 0})
    assert resp.status_code == 422


def test_unknown_route_envelope(client: TestClient) -> None:
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "not_found", "detail": "No route for GET /nope"}


def test_request_id_header_round_trips(client: TestClient) -> None:
    resp = client.get("/health", headers={"x-request-id": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"


def test_scheduler_runs_for_app_lifetime(tmp_path: Path) -> None:
    settings = Settings(db_path=tmp_path / "sched.sqlite3", refresh_interval_seconds=3600)
    app = create_app(settings)
    with TestClient(app) as client:
        assert client.get("/health").json()["scheduler_running"] is True
    assert app.state.scheduler.running is False


def test_custom_table_from_settings(tmp_path: Path) -> None:
    settings = Settings(
        db_path=tmp_path / "custom.sqlite3",
        enable_scheduler=False,
        base_currency_table=[{"code": "EUR", "base_rate": 0.85}, {"code": "GBP", "base_rate": 0.73}],
    )
    with TestClient(create_app(settings)) as client:
        assert client.get("/health").json()["currencies"] == 2
        assert client.get("/rates/EUR/GBP").json()["rate"] == pytest.approx(0.85 / 0.73)


def test_duplicate_table_fails_app_startup(tmp_path: Path) -> None:
    settings = Settings(
        db_path=tmp_path / "dup.sqlite3",
        enable_scheduler=False,
        base_currency_table=[{"code": "EUR", "base_rate": 0.85}, {"code": "EUR", "base_rate": 0.9}],
    )
    with pytest.raises(InvalidRateTableError):
        create_app(settings)
