from dataclasses import dataclass

import pandas as pd

from tariff_engine.costs import DailySummary, aggregate
from tariff_engine.demand import EV_CHARGING, generate_demand
from tariff_engine.prices import generate_prices, peak_threshold
from tariff_engine.scenarios import DemandMode, PriceScenario


@dataclass(frozen=True)
class TariffResult:
    scenario: PriceScenario
    optimised: bool
    hourly: pd.DataFrame
    summary: DailySummary

    def records(self):
        """One dict per hour, for consumers that do not want a DataFrame."""
        records = []
        for hour, row in self.hourly.iterrows():
            record = {
                "hour": int(hour),
                "price": float(row["price"]),
                "demand": float(row["demand"]),
                "cost": float(row["cost"]),
                "is_peak": bool(row["is_peak"]),
            }
            if "reference_price" in self.hourly.columns:
                record["reference_price"] = float(row["reference_price"])
                record["reference_cost"] = float(row["reference_cost"])
            records.append(record)
        return records

    def totals(self):
        return self.summary.totals()


def run_pipeline(scenario, optimisation=False, seed=None, profile=EV_CHARGING):
    """
    Price, schedule and cost one day for a scenario.

    The same demand is also priced on the fixed tariff so the two can be
    compared; under the fixed scenario the reference is the tariff itself.
    Toggling `optimisation` never changes the price curve for a given seed.

    Parameters
    ----------
    scenario : PriceScenario or str
    optimisation : bool
        Place the profile's flexible charge in the cheapest hours.
    seed : int or None
        Seed for market-linked price curves.
    profile : DemandProfile

    Returns
    -------
    TariffResult
    """
    scenario = PriceScenario.parse(scenario)
    prices = generate_prices(scenario, seed)
    reference_prices = generate_prices(PriceScenario.FIXED)

    mode = DemandMode.SMART if optimisation else DemandMode.MANUAL
    demand = generate_demand(mode, prices=prices, profile=profile, scenario=scenario)

    hourly, summary = aggregate(
        prices, demand,
        reference_prices=reference_prices,
        peak_threshold=peak_threshold(scenario)
    )
    return TariffResult(scenario=scenario, optimised=optimisation, hourly=hourly, summary=summary)
