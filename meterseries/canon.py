from __future__ import annotations
from typing import Final, Dict

INDEX_NAME: Final[str] = "timestamp"
RECORD_TIMESTAMP_KEY: Final[str] = "datetime"

# Provider rate codes
CONSUMPTION_TOTAL: Final[int] = 180
CONSUMPTION_OFF_PEAK: Final[int] = 181
CONSUMPTION_PEAK: Final[int] = 182
PRODUCTION_TOTAL: Final[int] = 280
PRODUCTION_OFF_PEAK: Final[int] = 281
PRODUCTION_PEAK: Final[int] = 282

RATE_CODES: Final[list[int]] = [
    CONSUMPTION_TOTAL,
    CONSUMPTION_OFF_PEAK,
    CONSUMPTION_PEAK,
    PRODUCTION_TOTAL,
    PRODUCTION_OFF_PEAK,
    PRODUCTION_PEAK,
]
BUCKET_CODES: Final[list[int]] = [
    CONSUMPTION_OFF_PEAK,
    CONSUMPTION_PEAK,
    PRODUCTION_OFF_PEAK,
    PRODUCTION_PEAK,
]

# kWh (or m3) → integer Wh-equivalent
UNIT_SCALE: Final[int] = 1000

# Periods
DAY: Final[str] = "DAY"
QUARTER_HOUR: Final[str] = "QUARTER_HOUR"
MONTH: Final[str] = "MONTH"
YEAR: Final[str] = "YEAR"
PERIODS: Final[tuple[str, ...]] = (DAY, QUARTER_HOUR, MONTH, YEAR)
PERIOD_ALIASES: Dict[str, str] = {"QUARTER_OF_AN_HOUR": QUARTER_HOUR}

# Enelogic endpoint layout
DEFAULT_HOST: Final[str] = "https://enelogic.com/api"
DATAPOINT_SEGMENTS: Dict[str, str] = {
    QUARTER_HOUR: "datapoints",
    DAY: "datapoint/days",
    MONTH: "datapoint/months",
}
# Quarter-hour payloads carry 'datetime', day/month payloads carry 'date'
TIMESTAMP_FIELDS: Dict[str, str] = {
    QUARTER_HOUR: "datetime",
    DAY: "date",
    MONTH: "date",
}

UNIT_TYPE_ELECTRICITY: Final[int] = 0
UNIT_TYPE_GAS: Final[int] = 1

# Tariff window defaults
DEFAULT_PEAK_START_HOUR: Final[int] = 7
DEFAULT_OFF_PEAK_START_HOUR: Final[int] = 23
DEFAULT_WEEKEND_IS_OFF_PEAK: Final[bool] = True

# Annual summary reads this many readings at each end of the year
ANNUAL_READINGS: Final[int] = 4
