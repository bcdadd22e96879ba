import logging

import pandas as pd
import pulp


logger = logging.getLogger(__name__)


def lp_schedule(prices, energy_kwh, rate_kw, dt=1.0):
    """
    Compute the cheapest charging plan with linear programming.

    Parameters
    ----------
    prices : sequence of float
        Price of each timestep (p/kWh).
    energy_kwh : float
        Energy that must be delivered over the whole horizon (kWh).
    rate_kw : float
        Maximum charging power (kW).
    dt : float
        Length of a timestep in hours (default 1).

    Returns
    -------
    (str, pd.DataFrame)
        Solver status and a DataFrame indexed by timestep with columns:
        - price: the input price
        - charge_kwh: energy drawn in the timestep
        - cost: price * charge_kwh
    """
    prices = [float(p) for p in prices]
    n = len(prices)

    # Variables
    charge = pulp.LpVariable.dicts("charge", range(n), lowBound=0, upBound=rate_kw * dt)

    # Problem
    prob = pulp.LpProblem("ChargingSchedule", pulp.LpMinimize)

    # Objective
    prob += pulp.lpSum([charge[t] * prices[t] for t in range(n)])

    # Required energy must be delivered
    prob += pulp.lpSum([charge[t] for t in range(n)]) == energy_kwh

    # Solve
    prob.solve(pulp.PULP_CBC_CMD(msg=False))
    status = pulp.LpStatus[prob.status]
    logger.info("LP status: %s, objective value: %s", status, pulp.value(prob.objective))

    charge_kwh = [pulp.value(charge[t]) or 0.0 for t in range(n)]
    results_df = pd.DataFrame({
        "price": prices,
        "charge_kwh": charge_kwh,
        "cost": [p * c for p, c in zip(prices, charge_kwh)],
    })
    results_df.index.name = "timestep"
    return status, results_df
