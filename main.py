import logging

import pandas as pd

from tariff_engine.pipeline import run_pipeline
from tariff_engine.scenarios import PriceScenario
from tariff_optimizer.results_analysis import flexibility_metrics


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    pd.set_option('display.max_columns', None)

    for scenario in PriceScenario:
        manual = run_pipeline(scenario)
        smart = run_pipeline(scenario, optimisation=True)
        print(f"=== {scenario.value} ===")
        print(smart.hourly)
        print("Manual charging:", manual.totals(), manual.summary.outcome)
        print("Smart charging: ", smart.totals(), smart.summary.outcome)
        print("Flexibility:    ", flexibility_metrics(manual, smart))
        print()


if __name__ == "__main__":
    main()
