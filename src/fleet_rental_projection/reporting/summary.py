from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from fleet_rental_projection.reporting.format import (
    format_currency,
    format_number,
    format_percentage,
)
from fleet_rental_projection.simulation.results import ProjectionResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Metric:
    label: str
    value: float | None
    display: str
    positive: bool


@dataclass(frozen=True)
class MonthlyRow:
    month: str
    machines: str
    income: str
    cost: str
    net_cash_flow: str
    cumulative_cash_flow: str
    net_positive: bool
    cumulative_positive: bool


@dataclass(frozen=True)
class AnnualRow:
    year: str
    income: str
    cost: str
    profit_before_tax: str
    tax: str
    profit_after_tax: str
    cumulative_profit_after_tax: str
    before_tax_positive: bool
    after_tax_positive: bool
    cumulative_positive: bool


def after_tax_cumulative_cash_flow(result: ProjectionResult) -> np.ndarray:
    """
    Display-only approximation of cumulative cash flow after tax.

    Each year's effective rate is tax / max(profit_before_tax, 1). While the
    cumulative (pre-tax) cash flow is positive, net cash flow * rate / 12
    accumulates as a tax effect that is subtracted from the cumulative figure.

    The authoritative after-tax figures are the annual records.
    """
    out = np.zeros(len(result.monthly), dtype=float)
    tax_effect = 0.0

    for i, m in enumerate(result.monthly):
        year_idx = i // 12
        if year_idx < len(result.annual):
            a = result.annual[year_idx]
            rate = a.yearly_tax / max(a.yearly_profit_before_tax, 1.0)
            if m.cumulative_cash_flow > 0:
                tax_effect += m.monthly_net_cash_flow * rate / 12.0
        out[i] = m.cumulative_cash_flow - tax_effect

    return out


def summary_metrics(result: ProjectionResult) -> List[Metric]:
    if result.breakeven_month is not None:
        breakeven = Metric(
            "Break-even time",
            float(result.breakeven_month),
            f"{result.breakeven_month} months",
            True,
        )
    else:
        breakeven = Metric("Break-even time", None, "never", False)

    return [
        breakeven,
        Metric(
            "Required capital",
            result.required_capital,
            format_currency(result.required_capital),
            True,
        ),
        Metric(
            "Net profit (after tax)",
            result.final_net_profit,
            format_currency(result.final_net_profit),
            result.final_net_profit >= 0,
        ),
        Metric(
            "Cumulative tax",
            result.cumulative_tax_paid,
            format_currency(result.cumulative_tax_paid),
            True,
        ),
        Metric("ROI", result.roi, format_percentage(result.roi), result.roi >= 0),
    ]


def monthly_table_rows(result: ProjectionResult, limit: int = 36) -> List[MonthlyRow]:
    rows: List[MonthlyRow] = []
    for m in result.monthly[: max(0, limit)]:
        label = f"Month {m.month}"
        if m.replacements > 0:
            label += f" (replaced {m.replacements})"
        rows.append(
            MonthlyRow(
                month=label,
                machines=(
                    f"{m.machine_count} (full: {m.full_rental_machines}, "
                    f"half: {m.half_rental_machines})"
                ),
                income=format_currency(m.monthly_income),
                cost=format_currency(m.monthly_cost),
                net_cash_flow=format_currency(m.monthly_net_cash_flow),
                cumulative_cash_flow=format_currency(m.cumulative_cash_flow),
                net_positive=m.monthly_net_cash_flow >= 0,
                cumulative_positive=m.cumulative_cash_flow >= 0,
            )
        )
    return rows


def annual_table_rows(result: ProjectionResult) -> List[AnnualRow]:
    return [
        AnnualRow(
            year=f"Year {a.year}",
            income=format_currency(a.yearly_income),
            cost=format_currency(a.yearly_cost),
            profit_before_tax=format_currency(a.yearly_profit_before_tax),
            tax=format_currency(a.yearly_tax),
            profit_after_tax=format_currency(a.yearly_profit_after_tax),
            cumulative_profit_after_tax=format_currency(a.cumulative_profit_after_tax),
            before_tax_positive=a.yearly_profit_before_tax >= 0,
            after_tax_positive=a.yearly_profit_after_tax >= 0,
            cumulative_positive=a.cumulative_profit_after_tax >= 0,
        )
        for a in result.annual
    ]


def render_text_report(result: ProjectionResult, months: int = 36) -> str:
    p = result.params
    lines = [
        "=== PARAMETERS ===",
        f"Monthly shipment: {format_number(p.monthly_shipment)} machines",
        f"Rental price:     {format_currency(p.rental_price)}",
        f"Fixed cost:       {format_currency(p.fixed_cost)}",
        f"Unit cost:        {format_currency(p.unit_cost)}",
        f"Horizon:          {result.total_months} months",
        f"Tax rate:         {format_percentage(p.tax_rate_percent)}",
        "",
        "=== SUMMARY ===",
    ]
    for metric in summary_metrics(result):
        lines.append(f"{metric.label:<24}{metric.display}")
    lines.append(f"{'Replacements':<24}{result.total_replacements}")

    lines += ["", "=== ANNUAL ==="]
    lines.append(
        f"{'year':<9}{'income':>16}{'cost':>16}{'before tax':>16}"
        f"{'tax':>16}{'after tax':>16}{'cumulative':>16}"
    )
    for r in annual_table_rows(result):
        lines.append(
            f"{r.year:<9}{r.income:>16}{r.cost:>16}{r.profit_before_tax:>16}"
            f"{r.tax:>16}{r.profit_after_tax:>16}{r.cumulative_profit_after_tax:>16}"
        )

    lines += ["", f"=== FIRST {min(months, len(result.monthly))} MONTHS ==="]
    for r in monthly_table_rows(result, limit=months):
        lines.append(
            f"{r.month:<26}{r.machines:<32}{r.income:>14}{r.cost:>14}"
            f"{r.net_cash_flow:>14}{r.cumulative_cash_flow:>16}"
        )

    return "\n".join(lines)
