from __future__ import annotations
import datetime as dt
import logging
from decimal import Decimal
from typing import Optional

from . import canon, exceptions, utils
from .client import MeterDataSource
from .types import YearConsumption

logger = logging.getLogger(__name__)


def _total(values: dict[str, Decimal], total: int, off_peak: int, peak: int) -> None:
    parts = (f"consumption_{off_peak}", f"consumption_{peak}")
    if all(p in values for p in parts):
        values[f"consumption_{total}"] = values[parts[0]] + values[parts[1]]
    else:
        logger.warning(
            "Cannot total consumption_%s: missing %s",
            total,
            ", ".join(p for p in parts if p not in values),
        )


def year_consumption(
    source: MeterDataSource,
    measuring_point_id: int | str,
    *,
    today: Optional[dt.date] = None,
) -> YearConsumption:
    """
    Consumption over the last year from the first and last daily readings.

    Returns start_<rate>, end_<rate> and consumption_<rate> for each rate,
    with consumption_180 / consumption_280 totalled from their tariff parts.

    Start and end readings are matched by rate code only; the provider is
    assumed to return the same rates at both ends of the year.
    """
    today = today or dt.date.today()
    samples = source.fetch_samples(
        measuring_point_id, canon.DAY, utils.shift_years(today, -1), today
    )
    exceptions.require(
        len(samples) > 0,
        f"No daily readings for measuring point {measuring_point_id}.",
        exceptions.EmptySeriesError,
    )

    n = canon.ANNUAL_READINGS
    begin = samples[:n]
    end = samples[max(len(samples) - n, 1):]

    values: dict[str, Decimal] = {}
    for reading in begin:
        values[f"start_{reading.rate}"] = utils.parse_quantity(reading.quantity)
    for reading in end:
        start_key = f"start_{reading.rate}"
        if start_key not in values:
            raise exceptions.SummaryError(
                f"No start reading for rate {reading.rate}; "
                f"start rates: {', '.join(str(s.rate) for s in begin)}"
            )
        quantity = utils.parse_quantity(reading.quantity)
        values[f"end_{reading.rate}"] = quantity
        values[f"consumption_{reading.rate}"] = quantity - values[start_key]

    _total(values, canon.CONSUMPTION_TOTAL, canon.CONSUMPTION_OFF_PEAK, canon.CONSUMPTION_PEAK)
    _total(values, canon.PRODUCTION_TOTAL, canon.PRODUCTION_OFF_PEAK, canon.PRODUCTION_PEAK)
    return {k: float(v) for k, v in values.items()}
