import math

import numpy as np
import pytest

from fleet_rental_projection.preprocessing.schema import ProjectionParams
from fleet_rental_projection.simulation.projection import (
    aggregate_years,
    project,
    simulate_months,
    yearly_tax,
)


def _params(**overrides):
    base = dict(
        monthly_shipment=0,
        rental_price=0.0,
        fixed_cost=0.0,
        unit_cost=0.0,
        total_months=12,
        tax_rate_percent=20.0,
    )
    base.update(overrides)
    return ProjectionParams(**base)


def test_zero_horizon_gives_empty_result():
    result = project(_params(monthly_shipment=5, rental_price=100.0, total_months=0))

    assert result.monthly == []
    assert result.annual == []
    assert result.breakeven_month is None
    assert result.required_capital == 0.0
    assert result.final_net_profit == 0.0
    assert result.cumulative_tax_paid == 0.0
    assert result.roi == 0.0


def test_no_shipments_fixed_cost_only():
    result = project(_params(fixed_cost=1000.0, total_months=5))

    assert [m.monthly_income for m in result.monthly] == [0.0] * 5
    assert [m.machine_count for m in result.monthly] == [0] * 5
    assert [m.cumulative_cash_flow for m in result.monthly] == [
        -1000.0, -2000.0, -3000.0, -4000.0, -5000.0
    ]
    assert result.breakeven_month is None
    assert not result.breaks_even
    assert result.required_capital == 5000.0
    assert result.final_net_profit == -5000.0
    assert result.roi == pytest.approx(-100.0)


def test_single_profitable_month():
    result = project(
        _params(monthly_shipment=10, rental_price=100.0, total_months=1)
    )
    m = result.monthly[0]

    assert (m.machine_count, m.full_rental_machines, m.half_rental_machines) == (10, 10, 0)
    assert m.monthly_income == 1000.0
    assert m.monthly_cost == 0.0
    assert m.monthly_net_cash_flow == 1000.0
    assert result.breakeven_month == 1
    # nothing was ever at risk
    assert result.required_capital == 0.0
    assert result.roi == 0.0


def test_first_replacement_at_month_48():
    result = project(_params(monthly_shipment=1, total_months=48))

    assert result.monthly[47].month == 48
    assert result.monthly[47].replacements == 1
    assert all(m.replacements == 0 for m in result.monthly[:47])
    assert result.total_replacements == 1


def test_replacements_accumulate_over_cycles():
    result = project(_params(monthly_shipment=1, unit_cost=10.0, total_months=100))
    by_month = {m.month: m for m in result.monthly}

    assert by_month[47].replacements == 0
    assert all(by_month[t].replacements == 1 for t in range(48, 96))
    assert by_month[96].replacements == 2
    assert by_month[96].replacement_cost == 20.0
    assert by_month[96].new_machine_cost == 10.0


def test_half_rental_income_from_month_61():
    result = project(_params(monthly_shipment=1, rental_price=100.0, total_months=61))
    m60, m61 = result.monthly[59], result.monthly[60]

    assert m60.half_rental_machines == 0
    assert (m61.full_rental_machines, m61.half_rental_machines) == (60, 1)
    assert m61.monthly_income == 6050.0


def test_fleet_size_grows_linearly(growing_params):
    result = project(growing_params)

    for m in result.monthly:
        assert m.machine_count == growing_params.monthly_shipment * m.month
        assert m.full_rental_machines + m.half_rental_machines == m.machine_count


def test_months_are_complete_and_ordered(growing_params):
    result = project(growing_params)
    assert [m.month for m in result.monthly] == list(range(1, 121))


def test_cumulative_cash_flow_and_required_capital(growing_params):
    result = project(growing_params)
    net = np.array([m.monthly_net_cash_flow for m in result.monthly])
    cumulative = np.array([m.cumulative_cash_flow for m in result.monthly])

    assert np.allclose(cumulative, np.cumsum(net))
    assert result.required_capital == pytest.approx(abs(min(0.0, cumulative.min())))


def test_breakeven_is_first_positive_month(growing_params):
    result = project(growing_params)
    cumulative = [m.cumulative_cash_flow for m in result.monthly]
    first_positive = next(i + 1 for i, c in enumerate(cumulative) if c > 0)

    assert result.breakeven_month == first_positive


def test_breakeven_requires_strictly_positive_cash_flow():
    sim = simulate_months(
        _params(monthly_shipment=1, rental_price=100.0, unit_cost=50.0, fixed_cost=100.0, total_months=3)
    )
    # month 1: 100 - 150 = -50, month 2: 200 - 150 = +50 -> cumulative 0, month 3: +150
    assert [m.cumulative_cash_flow for m in sim.records] == [-50.0, 0.0, 150.0]
    assert sim.breakeven_month == 3


def test_roi_relative_to_required_capital():
    result = project(
        _params(monthly_shipment=1, rental_price=100.0, unit_cost=1000.0, total_months=12, tax_rate_percent=0.0)
    )

    assert result.required_capital == 4500.0
    assert result.final_net_profit == -4200.0
    assert result.roi == pytest.approx(-4200.0 / 4500.0 * 100.0)


def test_annual_tax_and_cumulative_profit(cost_free_params):
    result = project(cost_free_params)

    # fleet of 10*m machines earns 1000*m in month m
    assert [a.yearly_income for a in result.annual] == [78000.0, 222000.0]
    assert [a.yearly_tax for a in result.annual] == [19500.0, 55500.0]
    assert [a.yearly_profit_after_tax for a in result.annual] == [58500.0, 166500.0]
    assert [a.cumulative_profit_after_tax for a in result.annual] == [58500.0, 225000.0]
    assert result.cumulative_tax_paid == 75000.0
    assert result.final_net_profit == 225000.0


def test_partial_final_year_is_truncated(growing_params):
    params = ProjectionParams(
        monthly_shipment=growing_params.monthly_shipment,
        rental_price=growing_params.rental_price,
        fixed_cost=growing_params.fixed_cost,
        unit_cost=growing_params.unit_cost,
        total_months=30,
        tax_rate_percent=growing_params.tax_rate_percent,
    )
    result = project(params)

    assert len(result.annual) == 3
    assert [(a.start_month, a.end_month) for a in result.annual] == [(1, 12), (13, 24), (25, 30)]

    for a in result.annual:
        months = result.monthly[a.start_month - 1:a.end_month]
        assert a.yearly_income == pytest.approx(sum(m.monthly_income for m in months))
        assert a.yearly_cost == pytest.approx(sum(m.monthly_cost for m in months))


def test_losses_are_never_taxed():
    result = project(_params(monthly_shipment=2, rental_price=10.0, fixed_cost=1000.0, total_months=36, tax_rate_percent=45.0))

    for a in result.annual:
        assert a.yearly_profit_before_tax <= 0
        assert a.yearly_tax == 0.0
        assert a.yearly_profit_after_tax == a.yearly_profit_before_tax
    assert result.cumulative_tax_paid == 0.0


@pytest.mark.parametrize("rate", [0.0, 20.0, 100.0])
def test_yearly_tax(rate):
    assert yearly_tax(-100.0, rate) == 0.0
    assert yearly_tax(0.0, rate) == 0.0
    assert yearly_tax(1000.0, rate) == pytest.approx(10.0 * rate)


def test_aggregate_years_empty():
    assert aggregate_years([], 20.0) == []


def test_projection_is_deterministic(growing_params):
    assert project(growing_params) == project(growing_params)


def test_echoes_params(growing_params):
    result = project(growing_params)
    assert result.params == growing_params
    assert result.total_months == 120


def test_all_outputs_finite():
    result = project(_params(total_months=30))

    for m in result.monthly:
        assert all(math.isfinite(v) for v in (m.monthly_income, m.monthly_cost, m.cumulative_cash_flow))
    for a in result.annual:
        assert all(math.isfinite(v) for v in (a.yearly_tax, a.yearly_profit_after_tax))
    assert math.isfinite(result.roi)
    assert result.roi == 0.0
