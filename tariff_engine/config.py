HOURS_PER_DAY = 24
DEFAULT_SEED = 42          # used when the caller does not pin a seed

FIXED_TARIFF_PERIODS = [
    # start_hour (24h), end_hour, price in p/kWh
    (0, 8, 20.0),    # off-peak overnight
    (8, 23, 30.0),   # peak daytime and evening
    (23, 24, 20.0),  # off-peak from 23:00
]

# Wholesale-linked scenarios: start_hour, end_hour, low, high (p/kWh).
# Each hour is drawn uniformly from the band it falls in.
WINDY_BANDS = [
    (0, 6, -2.0, 6.0),     # wind surplus overnight
    (6, 9, 12.0, 22.0),
    (9, 17, 14.0, 24.0),
    (17, 20, 24.0, 34.0),  # evening peak
    (20, 22, 10.0, 18.0),
    (22, 24, -1.0, 8.0),
]

SUNNY_BANDS = [
    (0, 7, 16.0, 22.0),
    (7, 10, 18.0, 26.0),
    (10, 16, -4.0, 6.0),   # solar surplus around midday
    (16, 17, 14.0, 22.0),
    (17, 20, 28.0, 38.0),
    (20, 24, 18.0, 25.0),
]

VOLATILE_BANDS = [
    (0, 24, -5.0, 40.0),
]
VOLATILE_SPIKE_HOURS = (6, 8, 17, 19)
VOLATILE_SPIKE_P_PER_KWH = 30.0

# Minimum price per scenario; scenarios not listed may go negative.
PRICE_FLOORS = {
    "fixed": 5.0,
    "volatile": 5.0,
}

# Prices strictly above the threshold are flagged as peak hours.
PEAK_THRESHOLDS = {
    "fixed": 25.0,
    "windy": 25.0,
    "sunny": 25.0,
    "volatile": 40.0,
}

# Charging durations are rounded to half-hour settlement periods.
CHARGE_RESOLUTION_HOURS = 0.5

EV_BATTERY_KWH = 28.0      # topped up each night
EV_CHARGE_RATE_KW = 11.0   # 3-phase, 230V, 16A
EV_MANUAL_START_HOUR = 1

STORAGE_HEATING_KWH = 39.6
STORAGE_HEATING_RATE_KW = 3.6
STORAGE_HEATING_MANUAL_START_HOUR = 0

# Household load without EV (kWh per hour): higher overnight and in the
# evening, lowest around midday.
HOUSEHOLD_LOAD_KWH = [
    1.4, 1.3, 1.2, 1.2, 1.2, 1.3, 1.5, 1.8,
    1.6, 1.1, 0.9, 0.8, 0.7, 0.7, 0.8, 0.9,
    1.2, 2.2, 2.6, 2.4, 1.9, 1.7, 1.6, 1.5,
]

DAYS_PER_YEAR = 365
