"""Data Access Layer for the dashboard's persistent records.

Responsibilities
----------------
- Log conversion events and list them back, newest first, optionally per session.
- CRUD for rate alerts (watchlist entries).

Rows are returned as plain dicts; `is_active` is normalised to bool.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Any, Dict, List, Optional

from fxdash.core.errors import AlertNotFoundError


def _alert_row(row: sqlite3.Row) -> Dict[str, Any]:
    data = dict(row)
    data["is_active"] = bool(data["is_active"])
    return data


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    # ------------------------------------------------------------------
    # Conversion history
    def insert_conversion(
        self,
        *,
        amount: float,
        from_currency: str,
        to_currency: str,
        result: float,
        exchange_rate: float,
        session_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO conversion_history
                    (amount, from_currency, to_currency, result, exchange_rate, session_id)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (amount, from_currency, to_currency, result, exchange_rate, session_id),
            )
            cur.execute("SELECT * FROM conversion_history WHERE id = ?", (cur.lastrowid,))
            return dict(cur.fetchone())

    def list_conversions(
        self, limit: int = 50, session_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        query = "SELECT * FROM conversion_history"
        params: List[Any] = []
        if session_id is not None:
            query += " WHERE session_id = ?"
            params.append(session_id)
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(query, params)
            return [dict(r) for r in cur.fetchall()]

    def clear_conversions(self, session_id: Optional[str] = None) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            if session_id is None:
                cur.execute("DELETE FROM conversion_history")
            else:
                cur.execute("DELETE FROM conversion_history WHERE session_id = ?", (session_id,))
            return cur.rowcount

    # ------------------------------------------------------------------
    # Rate alerts
    def create_alert(self, currency_pair: str, target_rate: float, alert_type: str) -> Dict[str, Any]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO rate_alerts (currency_pair, target_rate, alert_type, is_active)
                VALUES (?, ?, ?, 1)
                """,
                (currency_pair, target_rate, alert_type),
            )
            cur.execute("SELECT * FROM rate_alerts WHERE id = ?", (cur.lastrowid,))
            return _alert_row(cur.fetchone())

    def list_alerts(self, active_only: bool = False) -> List[Dict[str, Any]]:
        query = "SELECT * FROM rate_alerts"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY created_at DESC, id DESC"
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(query)
            return [_alert_row(r) for r in cur.fetchall()]

    def get_alert(self, alert_id: int) -> Dict[str, Any]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM rate_alerts WHERE id = ?", (alert_id,))
            row = cur.fetchone()
        if row is None:
            raise AlertNotFoundError(alert_id)
        return _alert_row(row)

    def set_alert_active(self, alert_id: int, is_active: bool) -> Dict[str, Any]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "UPDATE rate_alerts SET is_active = ? WHERE id = ?",
                (1 if is_active else 0, alert_id),
            )
            if cur.rowcount == 0:
                raise AlertNotFoundError(alert_id)
        return self.get_alert(alert_id)

    def delete_alert(self, alert_id: int) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM rate_alerts WHERE id = ?", (alert_id,))
            if cur.rowcount == 0:
                raise AlertNotFoundError(alert_id)
