import sys

from fleet_rental_projection.logging_config import setup_logging
from fleet_rental_projection.preprocessing.loaders import load_params
from fleet_rental_projection.reporting.summary import render_text_report
from fleet_rental_projection.simulation.projection import project


def main() -> None:
    setup_logging()

    path = sys.argv[1] if len(sys.argv) > 1 else "data/scenarios/baseline.json"
    params = load_params(path)

    result = project(params)
    print(render_text_report(result))


if __name__ == "__main__":
    main()
