from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Mapping, Optional

from fleet_rental_projection.preprocessing.schema import (
    DEFAULT_TAX_RATE_PERCENT,
    DEFAULT_TOTAL_MONTHS,
    ProjectionParams,
)

logger = logging.getLogger(__name__)

# field -> accepted keys, canonical name first
_ALIASES = {
    "monthly_shipment": ("monthly_shipment", "monthlyShipment"),
    "rental_price": ("rental_price", "rentalPrice"),
    "fixed_cost": ("fixed_cost", "fixedCost"),
    "unit_cost": ("unit_cost", "unitCost"),
    "total_months": ("total_months", "totalMonths", "analysisMonths"),
    "tax_rate_percent": ("tax_rate_percent", "taxRatePercent", "taxRate"),
}


def load_json(path: str | Path) -> dict:
    path = Path(path)
    with open(path, "r") as f:
        return json.load(f)


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    for key in _ALIASES[field]:
        if key in raw:
            return raw[key]
    return None


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        x = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(x):
        return None
    return x


def _non_negative_float(raw: Mapping[str, Any], field: str, default: float) -> float:
    value = _lookup(raw, field)
    x = _to_float(value)
    if x is None or x < 0:
        if value is not None:
            logger.warning(f"Invalid {field}={value!r}, using {default}")
        return default
    return x


def _non_negative_int(raw: Mapping[str, Any], field: str, default: int) -> int:
    value = _lookup(raw, field)
    x = _to_float(value)
    if x is None or x < 0:
        if value is not None:
            logger.warning(f"Invalid {field}={value!r}, using {default}")
        return default
    return int(x)  # truncates toward zero


def sanitize_params(raw: Mapping[str, Any]) -> ProjectionParams:
    """
    Turn raw user input into safe ProjectionParams.

    Fallbacks:
        - prices / costs / shipment: missing, non-numeric or negative -> 0
        - total_months: missing, non-numeric or negative -> 120
        - tax_rate_percent: missing, non-numeric or negative -> 20
    Explicit zeros are kept.
    """
    return ProjectionParams(
        monthly_shipment=_non_negative_int(raw, "monthly_shipment", 0),
        rental_price=_non_negative_float(raw, "rental_price", 0.0),
        fixed_cost=_non_negative_float(raw, "fixed_cost", 0.0),
        unit_cost=_non_negative_float(raw, "unit_cost", 0.0),
        total_months=_non_negative_int(raw, "total_months", DEFAULT_TOTAL_MONTHS),
        tax_rate_percent=_non_negative_float(raw, "tax_rate_percent", DEFAULT_TAX_RATE_PERCENT),
    )


def load_params(path: str | Path) -> ProjectionParams:
    """
    Load a projection scenario.
    Scenario JSON is an object with (snake_case or camelCase keys):
        - monthly_shipment
        - rental_price
        - fixed_cost
        - unit_cost
        - total_months      (optional, default 120)
        - tax_rate_percent  (optional, default 20)
    """
    path = Path(path)
    data = load_json(path)

    if not isinstance(data, dict):
        raise ValueError(f"Scenario file {path} must contain a JSON object")

    return sanitize_params(data)
