from dataclasses import dataclass

import pandas as pd


SAVING = "saving"
EXTRA_COST = "extra cost"
NO_CHANGE = "no change"


def hourly_costs(prices, demand):
    """Cost of each hour in pence, rounded to one decimal place."""
    prices = list(prices)
    demand = list(demand)
    if len(prices) != len(demand):
        raise ValueError(f"Got {len(prices)} prices but {len(demand)} demand values")
    return [round(float(p) * float(d), 1) for p, d in zip(prices, demand)]


def daily_total(costs):
    # Sum the already-rounded hourly costs, then round once more.
    return round(sum(costs), 1)


def savings_delta(total_a, total_b):
    """How much cheaper `total_b` is than `total_a` (negative when dearer)."""
    return round(total_a - total_b, 1)


def classify_delta(delta):
    if delta > 0:
        return SAVING
    if delta < 0:
        return EXTRA_COST
    return NO_CHANGE


@dataclass(frozen=True)
class DailySummary:
    primary_total: float
    reference_total: float | None = None

    @property
    def delta(self):
        """Saving of the primary tariff against the reference (pence), or None."""
        if self.reference_total is None:
            return None
        return savings_delta(self.reference_total, self.primary_total)

    @property
    def outcome(self):
        if self.delta is None:
            return None
        return classify_delta(self.delta)

    def totals(self):
        totals = {"primary": self.primary_total}
        if self.reference_total is not None:
            totals["reference"] = self.reference_total
        return totals


def aggregate(prices, demand, reference_prices=None, peak_threshold=None):
    """
    Combine hourly prices and demand into costs and daily totals.

    Parameters
    ----------
    prices : sequence of float
        Primary tariff prices (p/kWh).
    demand : sequence of float
        Energy drawn in each hour (kWh).
    reference_prices : sequence of float, optional
        A second tariff to price the same demand against.
    peak_threshold : float, optional
        Hours priced strictly above this are flagged `is_peak`.

    Returns
    -------
    (pd.DataFrame, DailySummary)
        DataFrame indexed by hour with columns price, demand, cost, is_peak
        and, when a reference is given, reference_price and reference_cost.
    """
    prices = [float(p) for p in prices]
    demand = [float(d) for d in demand]
    costs = hourly_costs(prices, demand)

    df = pd.DataFrame({
        "price": prices,
        "demand": demand,
        "cost": costs,
    }, index=pd.RangeIndex(len(prices), name="hour"))

    reference_total = None
    if reference_prices is not None:
        reference_prices = [float(p) for p in reference_prices]
        reference_costs = hourly_costs(reference_prices, demand)
        df["reference_price"] = reference_prices
        df["reference_cost"] = reference_costs
        reference_total = daily_total(reference_costs)

    if peak_threshold is None:
        df["is_peak"] = False
    else:
        df["is_peak"] = [p > peak_threshold for p in prices]

    summary = DailySummary(primary_total=daily_total(costs), reference_total=reference_total)
    return df, summary
