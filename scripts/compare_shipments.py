from __future__ import annotations

import sys
from dataclasses import replace

from fleet_rental_projection.logging_config import setup_logging
from fleet_rental_projection.preprocessing.loaders import load_params
from fleet_rental_projection.reporting.format import format_currency, format_percentage
from fleet_rental_projection.simulation.projection import project


def main() -> None:
    setup_logging(level="WARNING")

    path = sys.argv[1] if len(sys.argv) > 1 else "data/scenarios/baseline.json"
    base = load_params(path)

    print("Horizon:", base.total_months, "months, tax rate:", format_percentage(base.tax_rate_percent))
    print()
    print(f"{'shipment':>8} | {'break-even':>10} | {'capital':>16} | {'net profit':>16} | {'tax':>16} | {'ROI':>8}")

    # Fresh projection per rate, nothing carried over between runs
    for shipment in range(0, 51, 5):
        result = project(replace(base, monthly_shipment=shipment))
        be = f"{result.breakeven_month} mo" if result.breaks_even else "never"
        print(
            f"{shipment:>8} | {be:>10} | {format_currency(result.required_capital):>16} | "
            f"{format_currency(result.final_net_profit):>16} | "
            f"{format_currency(result.cumulative_tax_paid):>16} | {format_percentage(result.roi):>8}"
        )


if __name__ == "__main__":
    main()
