import logging
import struct

import numpy as np
import pandas as pd

from tariff_engine import config
from tariff_engine.scenarios import PriceScenario


logger = logging.getLogger(__name__)

# ---------------------------
# HOURLY INDEX
# ---------------------------

def build_hour_index(hours=config.HOURS_PER_DAY):
    return pd.RangeIndex(hours, name="hour")

# ---------------------------
# PRICE MODELS
# ---------------------------

def period_for_hour(hour, periods):
    """Return the first period whose [start, end) range contains `hour`."""
    for period in periods:
        start, end = period[0], period[1]
        if start <= hour < end:
            return period
    raise ValueError(f"No period covers hour {hour}")


def get_tou_prices(index, tou_periods):
    prices = []
    for hour in index:
        _, _, price = period_for_hour(hour, tou_periods)
        prices.append(price)
    return pd.Series(prices, index=index, dtype=float)


def seed_entropy(seed):
    # numpy only takes non-negative integers; reuse the bits of the float.
    return int.from_bytes(struct.pack("<d", float(seed)), "little")


def seeded_uniform(seed, hour, low, high):
    """
    Deterministic pseudo-random draw in [low, high) for one hour.

    The generator is seeded from (seed, hour), so the same pair always gives
    the same value regardless of how many other draws have been made.
    Any real number is accepted as a seed, including floats and negatives.
    """
    rng = np.random.default_rng([seed_entropy(seed), hour])
    return float(rng.uniform(low, high))


def get_banded_prices(index, bands, seed, spike_hours=(), spike=0.0):
    prices = []
    for hour in index:
        _, _, low, high = period_for_hour(hour, bands)
        price = seeded_uniform(seed, hour, low, high)
        if hour in spike_hours:
            price += spike
        prices.append(price)
    return pd.Series(prices, index=index, dtype=float)


SCENARIO_BANDS = {
    PriceScenario.WINDY: config.WINDY_BANDS,
    PriceScenario.SUNNY: config.SUNNY_BANDS,
    PriceScenario.VOLATILE: config.VOLATILE_BANDS,
}

# ---------------------------
# MAIN
# ---------------------------

def generate_prices(scenario, seed=None, hours=config.HOURS_PER_DAY):
    """
    Generate an hourly price curve for a pricing scenario.

    Parameters
    ----------
    scenario : PriceScenario or str
        "fixed", "windy", "sunny" or "volatile".
    seed : int, float or None
        Seed for the market-linked scenarios. Defaults to
        `config.DEFAULT_SEED`. Ignored for the fixed tariff.
    hours : int
        Number of hourly buckets (default 24).

    Returns
    -------
    pd.Series
        Prices in p/kWh indexed by hour, rounded to one decimal place.
    """
    scenario = PriceScenario.parse(scenario)
    if seed is None:
        seed = config.DEFAULT_SEED

    idx = build_hour_index(hours)

    if scenario is PriceScenario.FIXED:
        prices = get_tou_prices(idx, config.FIXED_TARIFF_PERIODS)
    elif scenario is PriceScenario.VOLATILE:
        prices = get_banded_prices(
            idx, SCENARIO_BANDS[scenario], seed,
            spike_hours=config.VOLATILE_SPIKE_HOURS,
            spike=config.VOLATILE_SPIKE_P_PER_KWH
        )
    else:
        prices = get_banded_prices(idx, SCENARIO_BANDS[scenario], seed)

    floor = config.PRICE_FLOORS.get(scenario.value)
    if floor is not None:
        prices = prices.clip(lower=floor)

    prices = pd.Series([round(float(p), 1) for p in prices], index=idx, name="price_p_per_kWh")
    logger.debug("Generated %s prices (seed=%s): %s", scenario.value, seed, prices.tolist())
    return prices


def peak_threshold(scenario):
    return config.PEAK_THRESHOLDS[PriceScenario.parse(scenario).value]
