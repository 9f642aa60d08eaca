from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from fleet_rental_projection.preprocessing.schema import ProjectionParams


@dataclass(frozen=True)
class MonthlyRecord:
    month: int
    machine_count: int
    full_rental_machines: int
    half_rental_machines: int
    monthly_income: float
    monthly_cost: float
    fixed_cost: float
    new_machine_cost: float
    replacement_cost: float
    monthly_net_cash_flow: float
    cumulative_cash_flow: float
    replacements: int


@dataclass(frozen=True)
class AnnualRecord:
    year: int
    start_month: int   # inclusive, 1-based
    end_month: int     # inclusive, truncated at the horizon
    yearly_income: float
    yearly_cost: float
    yearly_profit_before_tax: float
    yearly_tax: float
    yearly_profit_after_tax: float
    cumulative_profit_after_tax: float


@dataclass(frozen=True)
class ProjectionResult:
    monthly: List[MonthlyRecord]
    annual: List[AnnualRecord]
    breakeven_month: Optional[int]  # None = never within the horizon
    required_capital: float
    final_net_profit: float
    cumulative_tax_paid: float
    roi: float                      # percent of required capital
    total_months: int
    params: ProjectionParams

    @property
    def breaks_even(self) -> bool:
        return self.breakeven_month is not None

    @property
    def total_replacements(self) -> int:
        return sum(m.replacements for m in self.monthly)
