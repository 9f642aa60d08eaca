from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from fleet_rental_projection.fleet.costs import monthly_cost, monthly_income
from fleet_rental_projection.fleet.tracker import FleetTracker
from fleet_rental_projection.preprocessing.schema import ProjectionParams
from fleet_rental_projection.simulation.results import (
    AnnualRecord,
    MonthlyRecord,
    ProjectionResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlySimulation:
    records: List[MonthlyRecord]
    breakeven_month: Optional[int]
    min_cumulative_cash_flow: float  # <= 0


def simulate_months(params: ProjectionParams) -> MonthlySimulation:
    """
    Phase 1: month-by-month fleet and cash-flow simulation, months 1..T.

    Each month: ship new machines, age the fleet, collect rent on full/half
    rate machines, pay fixed + new-unit + replacement cost.
    """
    tracker = FleetTracker()
    records: List[MonthlyRecord] = []

    cumulative = 0.0
    lowest = 0.0
    breakeven: Optional[int] = None

    for month in range(1, int(params.total_months) + 1):
        tracker.add_machines(params.monthly_shipment, month)
        replacements = tracker.advance(month)
        stats = tracker.fleet_stats()

        income = monthly_income(stats, params.rental_price)
        cost = monthly_cost(
            params.fixed_cost,
            params.unit_cost,
            new_machines=params.monthly_shipment,
            replacements=replacements,
        )

        net = income - cost.total
        cumulative += net

        if cumulative < lowest:
            lowest = cumulative
        if breakeven is None and cumulative > 0:
            breakeven = month

        records.append(
            MonthlyRecord(
                month=month,
                machine_count=stats.total,
                full_rental_machines=stats.full_rental_count,
                half_rental_machines=stats.half_rental_count,
                monthly_income=income,
                monthly_cost=cost.total,
                fixed_cost=cost.fixed,
                new_machine_cost=cost.new_machines,
                replacement_cost=cost.replacements,
                monthly_net_cash_flow=net,
                cumulative_cash_flow=cumulative,
                replacements=replacements,
            )
        )

    return MonthlySimulation(
        records=records,
        breakeven_month=breakeven,
        min_cumulative_cash_flow=lowest,
    )


def yearly_tax(profit_before_tax: float, tax_rate_percent: float) -> float:
    """Flat rate on positive profit; losses are neither taxed nor credited."""
    if profit_before_tax > 0:
        return profit_before_tax * tax_rate_percent / 100.0
    return 0.0


def aggregate_years(
    monthly: List[MonthlyRecord],
    tax_rate_percent: float,
) -> List[AnnualRecord]:
    """
    Phase 2: sum already-computed months into years and apply tax.

    Year y covers months [(y-1)*12 + 1, min(y*12, T)]; the last year is
    truncated, never padded.
    """
    T = len(monthly)
    income = np.array([m.monthly_income for m in monthly], dtype=float)
    cost = np.array([m.monthly_cost for m in monthly], dtype=float)

    annual: List[AnnualRecord] = []
    cumulative_profit = 0.0

    for year in range(1, -(-T // 12) + 1):
        start = (year - 1) * 12 + 1
        end = min(year * 12, T)

        y_income = float(income[start - 1:end].sum())
        y_cost = float(cost[start - 1:end].sum())
        before_tax = y_income - y_cost
        tax = yearly_tax(before_tax, tax_rate_percent)
        after_tax = before_tax - tax
        cumulative_profit += after_tax

        logger.debug(
            f"Year {year} (months {start}-{end}): profit before tax={before_tax:.2f}, tax={tax:.2f}"
        )

        annual.append(
            AnnualRecord(
                year=year,
                start_month=start,
                end_month=end,
                yearly_income=y_income,
                yearly_cost=y_cost,
                yearly_profit_before_tax=before_tax,
                yearly_tax=tax,
                yearly_profit_after_tax=after_tax,
                cumulative_profit_after_tax=cumulative_profit,
            )
        )

    return annual


def project(params: ProjectionParams) -> ProjectionResult:
    """
    Run the full projection: monthly simulation, then annual tax aggregation.

    Deterministic; every call builds its own FleetTracker.
    """
    logger.info(
        f"Projecting {params.total_months} months at {params.monthly_shipment} machines/month"
    )

    sim = simulate_months(params)
    annual = aggregate_years(sim.records, params.tax_rate_percent)

    required_capital = abs(sim.min_cumulative_cash_flow)
    final_net_profit = annual[-1].cumulative_profit_after_tax if annual else 0.0
    cumulative_tax = float(sum(a.yearly_tax for a in annual))
    roi = final_net_profit / required_capital * 100.0 if required_capital > 0 else 0.0

    logger.info(
        f"Break-even month: {sim.breakeven_month}, required capital: {required_capital:.2f}, "
        f"net profit: {final_net_profit:.2f}, ROI: {roi:.1f}%"
    )

    return ProjectionResult(
        monthly=sim.records,
        annual=annual,
        breakeven_month=sim.breakeven_month,
        required_capital=required_capital,
        final_net_profit=final_net_profit,
        cumulative_tax_paid=cumulative_tax,
        roi=roi,
        total_months=int(params.total_months),
        params=params,
    )
