"""Best-effort conversion history logging.

A conversion is never failed because the history store is unavailable: storage
errors are logged and swallowed here, at the one place that decides it.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, Optional

from fxdash.db.dal import Database
from fxdash.services.rates.conversion import ConversionResult

logger = logging.getLogger("fxdash.history")


def record_conversion(
    db: Database, conversion: ConversionResult, session_id: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    try:
        return db.insert_conversion(session_id=session_id, **conversion.as_record())
    except sqlite3.Error:
        logger.exception(
            "failed to record conversion",
            extra={"from_currency": conversion.from_currency, "to_currency": conversion.to_currency},
        )
        return None
