from __future__ import annotations

from dataclasses import dataclass

from .machine import RENTAL_REDUCTION_RATE
from .tracker import FleetStats


@dataclass(frozen=True)
class MonthlyCost:
    fixed: float
    new_machines: float
    replacements: float

    @property
    def total(self) -> float:
        return self.fixed + self.new_machines + self.replacements


def monthly_income(stats: FleetStats, rental_price: float) -> float:
    """
    Full rent for machines younger than the reduction age, reduced rent after:
        I = full * price + half * price * RENTAL_REDUCTION_RATE
    """
    price = float(rental_price)
    return float(
        stats.full_rental_count * price
        + stats.half_rental_count * price * RENTAL_REDUCTION_RATE
    )


def monthly_cost(
    fixed_cost: float,
    unit_cost: float,
    new_machines: int,
    replacements: int,
) -> MonthlyCost:
    """Fixed overhead plus one unit cost per shipped or replaced machine."""
    unit = float(unit_cost)
    return MonthlyCost(
        fixed=float(fixed_cost),
        new_machines=float(new_machines * unit),
        replacements=float(replacements * unit),
    )
