from tariff_engine import config
from tariff_engine.costs import savings_delta


def price_spread(df):
    """Difference between the dearest and cheapest hour (p/kWh)."""
    return round(df["price"].max() - df["price"].min(), 1)


def shifted_energy(base_df, shifted_df):
    """Energy (kWh) moved to different hours between two demand curves."""
    return round((base_df["demand"] - shifted_df["demand"]).abs().sum() / 2, 1)


def flexibility_metrics(base, shifted):
    """
    Headline figures for moving demand, as shown on the dashboard cards.

    `base` and `shifted` are TariffResults for the same scenario and seed,
    without and with optimised charging.
    """
    daily_p = savings_delta(base.summary.primary_total, shifted.summary.primary_total)
    return {
        "price_difference_p_per_kWh": price_spread(base.hourly),
        "shiftable_load_kWh": shifted_energy(base.hourly, shifted.hourly),
        "daily_savings_p": daily_p,
        "daily_savings_gbp": round(daily_p / 100, 2),
        "annual_savings_gbp": round(daily_p * config.DAYS_PER_YEAR / 100, 0),
    }
