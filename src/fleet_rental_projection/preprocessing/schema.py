from __future__ import annotations
from dataclasses import dataclass

DEFAULT_TOTAL_MONTHS = 120
DEFAULT_TAX_RATE_PERCENT = 20.0


@dataclass(frozen=True)
class ProjectionParams:
    monthly_shipment: int
    rental_price: float
    fixed_cost: float
    unit_cost: float
    total_months: int = DEFAULT_TOTAL_MONTHS
    tax_rate_percent: float = DEFAULT_TAX_RATE_PERCENT

    @property
    def total_years(self) -> int:
        return -(-max(0, self.total_months) // 12)
