"""Domain constants for the rate engine and its consumers.

The reference table is expressed as units of each currency per 1 USD. USD itself
is the implicit pivot and never appears in the table.
"""

from typing import FrozenSet, Tuple

PIVOT_CURRENCY = "USD"

# (code, symbol, flag, base_rate)
BASE_CURRENCY_TABLE: Tuple[Tuple[str, str, str, float], ...] = (
    ("EUR", "€", "🇪🇺", 0.85),
    ("GBP", "£", "🇬🇧", 0.73),
    ("JPY", "¥", "🇯🇵", 110.0),
    ("CAD", "C$", "🇨🇦", 1.25),
    ("AUD", "A$", "🇦🇺", 1.35),
    ("CHF", "Fr", "🇨🇭", 0.92),
    ("CNY", "¥", "🇨🇳", 6.45),
    ("INR", "₹", "🇮🇳", 83.12),
    ("SEK", "kr", "🇸🇪", 10.25),
    ("NOK", "kr", "🇳🇴", 10.85),
    ("DKK", "kr", "🇩🇰", 6.33),
    ("SGD", "S$", "🇸🇬", 1.34),
    ("HKD", "HK$", "🇭🇰", 7.82),
    ("NZD", "NZ$", "🇳🇿", 1.52),
    ("KRW", "₩", "🇰🇷", 1320.45),
    ("MXN", "Mex$", "🇲🇽", 17.25),
    ("BRL", "R$", "🇧🇷", 4.95),
    ("ZAR", "R", "🇿🇦", 18.75),
    ("AED", "د.إ", "🇦🇪", 3.67),
    ("THB", "฿", "🇹🇭", 35.42),
)

# Quoted without minor units in casual display.
ZERO_DECIMAL_CURRENCIES: FrozenSet[str] = frozenset({"JPY"})

DEFAULT_DECIMALS = 4
FALLBACK_DECIMALS = 2

# Trending thresholds
HOT_CHANGE_PERCENT = 1.5
STRENGTH_MIDPOINT = 50.0
STRENGTH_PER_PERCENT = 5.0

ALERT_TYPES: FrozenSet[str] = frozenset({"above", "below"})
