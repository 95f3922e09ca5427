"""Smoke script for the rate engine and its refresh scheduler.

Demonstrates:
 1. Fresh engine sits on base rates (generation 0).
 2. Manual regeneration replaces the whole table (generation 1).
 3. A short-interval scheduler drives a few more generations, then stops cleanly.
 4. Cross rates, unknown-code fallback, and display formatting.

NOTE: This is a lightweight diagnostic and not a formal test.
"""

import asyncio
import random
from pprint import pprint

from fxdash.services.rates.engine import RateEngine
from fxdash.services.rates.scheduler import RefreshScheduler


async def _drive(engine: RateEngine) -> int:
    scheduler = RefreshScheduler(engine, interval_seconds=0.2)
    scheduler.start()
    await asyncio.sleep(1.0)
    await scheduler.stop()
    await scheduler.stop()  # second stop is a no-op
    return scheduler.ticks


def run():
    engine = RateEngine(rng=random.Random(2024))
    out = {}

    out["initial"] = {
        "generation": engine.snapshot().generation,
        "USD/EUR": engine.get_rate("USD", "EUR"),
    }

    snap = engine.regenerate()
    out["manual_refresh"] = {
        "generation": snap.generation,
        "EUR": {
            "rate": snap.quotes["EUR"].current_rate,
            "change_percent": round(snap.quotes["EUR"].percent_change, 4),
        },
    }

    ticks = asyncio.run(_drive(engine))
    out["scheduled"] = {"ticks": ticks, "generation": engine.snapshot().generation}

    out["queries"] = {
        "EUR/GBP": engine.get_rate("EUR", "GBP"),
        "USD/ZZZ (unknown)": engine.get_rate("USD", "ZZZ"),
        "1234.5 JPY": engine.format_amount(1234.5, "JPY"),
        "1 EUR": engine.format_amount(1.0, "EUR"),
        "1 USD": engine.format_amount(1.0, "USD"),
    }

    pprint(out)


if __name__ == "__main__":
    run()
