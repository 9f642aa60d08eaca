from __future__ import annotations

import math

CURRENCY = "MYR"


def format_number(x: float) -> str:
    """Whole number, half rounded away from zero, thousands grouped: 1234.5 -> '1,235'."""
    v = float(x)
    rounded = int(math.copysign(math.floor(abs(v) + 0.5), v))
    return f"{rounded:,}"


def format_currency(x: float) -> str:
    return f"{CURRENCY} {format_number(x)}"


def format_percentage(x: float) -> str:
    return f"{float(x):.1f}%"
