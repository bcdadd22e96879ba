import pytest

from tariff_engine.demand import (
    EV_CHARGING,
    HOUSEHOLD,
    HOUSEHOLD_EV,
    STORAGE_HEATING,
    DemandProfile,
    charging_hours,
    contiguous_slots,
    generate_demand,
    schedule_cheapest_slots,
)
from tariff_engine.prices import generate_prices


@pytest.fixture
def spiky_prices():
    return [5, 1, 9, 3, 7, 2] + [50] * 18


def plan_cost(prices, plan):
    return sum(p * q for p, q in zip(prices, plan))


def test_charging_hours_round_to_half_hour():
    assert charging_hours(28, 11) == 2.5
    assert charging_hours(39.6, 3.6) == 11.0
    assert charging_hours(0, 11) == 0.0


def test_cheapest_slots_with_partial_last_slot(spiky_prices):
    plan = schedule_cheapest_slots(spiky_prices, 2.5, rate=11)
    expected = [0.0] * 24
    expected[1] = 11
    expected[5] = 11
    expected[3] = 5.5  # dearest of the three takes the half hour
    assert plan == expected


def test_no_cheaper_swap_exists(spiky_prices):
    plan = schedule_cheapest_slots(spiky_prices, 2.5, rate=11)
    cost = plan_cost(spiky_prices, plan)
    selected = [i for i, q in enumerate(plan) if q > 0]
    unselected = [i for i, q in enumerate(plan) if q == 0]
    for i in selected:
        for j in unselected:
            if spiky_prices[j] > spiky_prices[i]:
                swapped = list(plan)
                swapped[i], swapped[j] = swapped[j], swapped[i]
                assert plan_cost(spiky_prices, swapped) > cost


def test_ties_broken_by_lower_index():
    plan = schedule_cheapest_slots([4, 2, 2, 2, 9], 2)
    assert plan == [0.0, 1.0, 1.0, 0.0, 0.0]


def test_scheduler_works_for_any_length():
    prices = [3.0, 1.0, 2.0]
    assert schedule_cheapest_slots(prices, 1.5, rate=2) == [0.0, 2.0, 1.0]
    assert schedule_cheapest_slots([], 0) == []


def test_scheduler_rejects_too_many_slots():
    with pytest.raises(ValueError):
        schedule_cheapest_slots([1, 2, 3], 3.5)


def test_contiguous_slots_wrap_past_midnight():
    plan = contiguous_slots(24, 2.5, start=23, rate=2)
    assert plan[23] == 2
    assert plan[0] == 2
    assert plan[1] == 1
    assert sum(plan) == 5


def test_manual_ev_window():
    demand = generate_demand("manual", profile=EV_CHARGING)
    assert demand.tolist()[:5] == [0.0, 11.0, 11.0, 5.5, 0.0]
    assert demand.sum() == 27.5


def test_manual_storage_heating_fills_eleven_hours():
    demand = generate_demand("manual", profile=STORAGE_HEATING)
    assert demand.tolist() == [3.6] * 11 + [0.0] * 13


def test_smart_mode_uses_cheapest_hours():
    prices = generate_prices("windy", seed=5)
    demand = generate_demand("smart", prices=prices, profile=EV_CHARGING, scenario="windy")
    charged = demand[demand > 0]
    uncharged = demand[demand == 0]
    assert prices[charged.index].max() <= prices[uncharged.index].min()
    assert demand.sum() == 27.5


def test_smart_mode_falls_back_on_fixed_tariff():
    prices = generate_prices("fixed")
    smart = generate_demand("smart", prices=prices, profile=EV_CHARGING, scenario="fixed")
    manual = generate_demand("manual", profile=EV_CHARGING)
    assert smart.tolist() == manual.tolist()


def test_smart_mode_falls_back_without_prices():
    smart = generate_demand("smart", profile=HOUSEHOLD_EV)
    manual = generate_demand("manual", profile=HOUSEHOLD_EV)
    assert smart.tolist() == manual.tolist()


def test_household_profile_has_no_flexible_load():
    prices = generate_prices("sunny", seed=1)
    smart = generate_demand("smart", prices=prices, profile=HOUSEHOLD, scenario="sunny")
    assert smart.tolist() == list(HOUSEHOLD.base_load_kwh)


@pytest.mark.parametrize("scenario", ["windy", "sunny", "volatile"])
@pytest.mark.parametrize("profile", [EV_CHARGING, STORAGE_HEATING, HOUSEHOLD, HOUSEHOLD_EV])
def test_demand_never_negative(scenario, profile):
    prices = generate_prices(scenario, seed=9)
    for mode in ("manual", "smart"):
        demand = generate_demand(mode, prices=prices, profile=profile, scenario=scenario)
        assert (demand >= 0).all()


def test_negative_base_load_is_clamped():
    profile = DemandProfile(name="export", base_load_kwh=tuple([-1.0] * 24))
    demand = generate_demand("manual", profile=profile)
    assert demand.tolist() == [0.0] * 24


def test_wrong_number_of_prices_rejected():
    with pytest.raises(ValueError):
        generate_demand("smart", prices=[1.0] * 12, profile=EV_CHARGING, scenario="windy")


def test_smart_mode_with_prices_needs_scenario():
    prices = generate_prices("fixed")
    with pytest.raises(ValueError):
        generate_demand("smart", prices=prices, profile=EV_CHARGING)


def test_smart_mode_on_fixed_prices_keeps_manual_window():
    prices = generate_prices("fixed")
    smart = generate_demand("smart", prices=prices, profile=EV_CHARGING, scenario="fixed")
    assert smart.tolist()[:5] == [0.0, 11.0, 11.0, 5.5, 0.0]


def test_profile_base_load_may_be_none():
    assert DemandProfile.__annotations__["base_load_kwh"] == (tuple | None)
    assert EV_CHARGING.base_load_kwh is None
