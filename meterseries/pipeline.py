from __future__ import annotations
import datetime as dt
import logging
from typing import Optional

from . import canon, utils
from .classify import classify
from .client import MeterDataSource
from .merge import merge_samples
from .types import Period, RateFrame, TariffWindow

logger = logging.getLogger(__name__)


def build_series(
    source: MeterDataSource,
    date_from: str | dt.date,
    date_to: str | dt.date,
    period: Period,
    *,
    measuring_point_id: int | str,
    window: Optional[TariffWindow] = None,
) -> RateFrame:
    """
    Fetch, merge, sort and classify one measuring point's readings.

    - YEAR is fetched (and classified) as MONTH data, keeping only
      January 1st entries.
    - QUARTER_HOUR covers [date_from, date_from + 1 day] and is seeded with
      the DAY readings of that range before the quarter-hour samples merge in.
    """
    requested = utils.resolve_period(period)
    granularity = canon.MONTH if requested == canon.YEAR else requested

    start = utils.to_date(date_from)
    end = utils.add_days(start, 1) if requested == canon.QUARTER_HOUR else utils.to_date(date_to)
    logger.info(
        "Building %s series for measuring point %s from %s to %s",
        requested,
        measuring_point_id,
        start,
        end,
    )

    records = None
    samples = source.fetch_samples(measuring_point_id, granularity, start, end)
    if requested == canon.QUARTER_HOUR:
        baseline = source.fetch_samples(measuring_point_id, canon.DAY, start, end)
        records = merge_samples(None, baseline)
    elif requested == canon.YEAR:
        samples = [s for s in samples if utils.is_new_year(s.timestamp)]
    logger.debug("Merging %d %s samples", len(samples), granularity)

    records = merge_samples(records, samples)
    records = RateFrame(records.sort_index(kind="stable"))
    return classify(records, granularity, window)
