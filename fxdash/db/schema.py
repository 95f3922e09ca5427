"""Database schema DDL definitions and initialization utilities.

Tables:
  - conversion_history: logged conversion events (amount, pair, rate, result)
  - rate_alerts: watchlist entries that fire when a pair crosses a target rate
  - metadata: key/value store (schema version)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

CONVERSION_HISTORY_DDL = f"""
CREATE TABLE IF NOT EXISTS conversion_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    amount REAL NOT NULL,
    from_currency TEXT NOT NULL,
    to_currency TEXT NOT NULL,
    result REAL NOT NULL,
    exchange_rate REAL NOT NULL,
    session_id TEXT,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

RATE_ALERTS_DDL = f"""
CREATE TABLE IF NOT EXISTS rate_alerts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    currency_pair TEXT NOT NULL, -- 'USD/EUR'
    target_rate REAL NOT NULL CHECK (target_rate > 0),
    alert_type TEXT NOT NULL CHECK (alert_type IN ('above','below')),
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

CONVERSION_SESSION_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_conversion_session ON conversion_history(session_id);"
)
ALERTS_ACTIVE_INDEX_DDL = "CREATE INDEX IF NOT EXISTS idx_alerts_active ON rate_alerts(is_active);"

DDL_ORDER: Sequence[str] = (
    CONVERSION_HISTORY_DDL,
    RATE_ALERTS_DDL,
    METADATA_DDL,
    CONVERSION_SESSION_INDEX_DDL,
    ALERTS_ACTIVE_INDEX_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()
