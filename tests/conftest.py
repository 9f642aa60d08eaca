import pytest

from fleet_rental_projection.preprocessing.schema import ProjectionParams


@pytest.fixture
def growing_params():
    """Ten years of steady shipments with real costs."""
    return ProjectionParams(
        monthly_shipment=3,
        rental_price=150.0,
        fixed_cost=2000.0,
        unit_cost=4000.0,
        total_months=120,
        tax_rate_percent=20.0,
    )


@pytest.fixture
def cost_free_params():
    """Ten machines a month, rent only, no costs at all."""
    return ProjectionParams(
        monthly_shipment=10,
        rental_price=100.0,
        fixed_cost=0.0,
        unit_cost=0.0,
        total_months=24,
        tax_rate_percent=25.0,
    )
