import logging
import math
from dataclasses import dataclass

import pandas as pd

from tariff_engine import config
from tariff_engine.scenarios import DemandMode, PriceScenario


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemandProfile:
    """
    Daily demand shape: a fixed base load plus an optional flexible charge.

    base_load_kwh : list of float or None
        Energy drawn in each hour regardless of price. None means no base load.
    charge_energy_kwh : float
        Energy the flexible load needs over the day (0 for none).
    charge_rate_kw : float
        Power drawn while charging; one full hour draws this many kWh.
    manual_start_hour : int
        First hour of the contiguous charging window in manual mode.
    """
    name: str
    base_load_kwh: tuple | None = None
    charge_energy_kwh: float = 0.0
    charge_rate_kw: float = 0.0
    manual_start_hour: int = 0

    @property
    def charge_hours(self):
        if self.charge_energy_kwh <= 0 or self.charge_rate_kw <= 0:
            return 0.0
        return charging_hours(self.charge_energy_kwh, self.charge_rate_kw)


EV_CHARGING = DemandProfile(
    name="EV charging",
    charge_energy_kwh=config.EV_BATTERY_KWH,
    charge_rate_kw=config.EV_CHARGE_RATE_KW,
    manual_start_hour=config.EV_MANUAL_START_HOUR,
)

STORAGE_HEATING = DemandProfile(
    name="Storage heating",
    charge_energy_kwh=config.STORAGE_HEATING_KWH,
    charge_rate_kw=config.STORAGE_HEATING_RATE_KW,
    manual_start_hour=config.STORAGE_HEATING_MANUAL_START_HOUR,
)

HOUSEHOLD = DemandProfile(
    name="Household",
    base_load_kwh=tuple(config.HOUSEHOLD_LOAD_KWH),
)

HOUSEHOLD_EV = DemandProfile(
    name="Household + EV",
    base_load_kwh=tuple(config.HOUSEHOLD_LOAD_KWH),
    charge_energy_kwh=config.EV_BATTERY_KWH,
    charge_rate_kw=config.EV_CHARGE_RATE_KW,
    manual_start_hour=config.EV_MANUAL_START_HOUR,
)

PROFILES = {p.name: p for p in (EV_CHARGING, STORAGE_HEATING, HOUSEHOLD, HOUSEHOLD_EV)}


def charging_hours(energy_kwh, rate_kw, resolution=config.CHARGE_RESOLUTION_HOURS):
    """Hours needed to deliver `energy_kwh` at `rate_kw`, rounded to `resolution`."""
    if rate_kw <= 0:
        raise ValueError("Charge rate must be positive")
    if energy_kwh < 0:
        raise ValueError("Energy requirement must be non-negative")
    return round(energy_kwh / rate_kw / resolution) * resolution


def _split_slots(slots_needed):
    # Whole slots at full rate, plus the fraction drawn in the last slot.
    n_slots = math.ceil(slots_needed)
    fraction = slots_needed - math.floor(slots_needed)
    return n_slots, fraction


def contiguous_slots(n, slots_needed, start=0, rate=1.0):
    """
    Fill `slots_needed` slots at `rate`, starting at `start` and wrapping round.

    The final slot receives the fractional part when `slots_needed` is not whole.
    """
    if slots_needed < 0:
        raise ValueError("slots_needed must be non-negative")
    if slots_needed > n:
        raise ValueError(f"Cannot fit {slots_needed} slots into {n}")

    plan = [0.0] * n
    n_slots, fraction = _split_slots(slots_needed)
    for i in range(n_slots):
        plan[(start + i) % n] = rate
    if fraction and n_slots:
        plan[(start + n_slots - 1) % n] = rate * fraction
    return plan


def schedule_cheapest_slots(prices, slots_needed, rate=1.0):
    """
    Place fixed-rate work into the cheapest slots of a price sequence.

    Parameters
    ----------
    prices : sequence of float
        Price of each slot. Any length.
    slots_needed : float
        Number of slots of work, possibly fractional (e.g. 2.5).
    rate : float
        Quantity drawn in one full slot.

    Returns
    -------
    list of float
        Quantity scheduled in each slot. The ceil(slots_needed) cheapest slots
        are used, ties broken by lower slot index; the most expensive of the
        chosen slots takes the fractional remainder.
    """
    prices = list(prices)
    if rate < 0:
        raise ValueError("rate must be non-negative")
    if slots_needed < 0:
        raise ValueError("slots_needed must be non-negative")
    if slots_needed > len(prices):
        raise ValueError(f"Cannot fit {slots_needed} slots into {len(prices)}")

    plan = [0.0] * len(prices)
    n_slots, fraction = _split_slots(slots_needed)
    # sorted() is stable, so equal prices keep their original order
    cheapest = sorted(range(len(prices)), key=lambda i: prices[i])[:n_slots]

    for i in cheapest:
        plan[i] = rate
    if fraction and cheapest:
        plan[cheapest[-1]] = rate * fraction
    return plan


def generate_demand(mode, prices=None, profile=EV_CHARGING, scenario=None,
                    hours=config.HOURS_PER_DAY):
    """
    Generate an hourly demand curve.

    Parameters
    ----------
    mode : DemandMode or str
        "manual" places the flexible charge in the profile's fixed window;
        "smart" places it in the cheapest hours of `prices`.
    prices : sequence of float or None
        Hourly prices, required for smart mode.
    profile : DemandProfile
        Base load and flexible charge requirement.
    scenario : PriceScenario, str or None
        Scenario the prices came from, required when smart mode is given
        prices. Smart mode under the fixed tariff falls back to manual, as
        does smart mode without prices.
    hours : int
        Number of hourly buckets (default 24).

    Returns
    -------
    pd.Series
        Demand in kWh per hour, rounded to one decimal place, never negative.
    """
    mode = DemandMode(mode)
    idx = pd.RangeIndex(hours, name="hour")

    if mode is DemandMode.SMART:
        if prices is None:
            logger.info("Smart charging requested without prices, using manual schedule")
            mode = DemandMode.MANUAL
        elif scenario is None:
            raise ValueError("Smart charging needs the scenario the prices came from")
        elif not PriceScenario.parse(scenario).is_market_linked:
            logger.info("Smart charging has nothing to exploit on the fixed tariff, using manual schedule")
            mode = DemandMode.MANUAL
        elif len(prices) != hours:
            raise ValueError(f"Expected {hours} prices, got {len(prices)}")

    if mode is DemandMode.SMART:
        charge = schedule_cheapest_slots(prices, profile.charge_hours, profile.charge_rate_kw)
    else:
        charge = contiguous_slots(hours, profile.charge_hours,
                                  start=profile.manual_start_hour, rate=profile.charge_rate_kw)

    base = profile.base_load_kwh if profile.base_load_kwh is not None else [0.0] * hours
    if len(base) != hours:
        raise ValueError(f"Base load must have {hours} values, got {len(base)}")

    demand = [round(max(float(b) + c, 0.0), 1) for b, c in zip(base, charge)]
    return pd.Series(demand, index=idx, name="demand_kWh")
