from __future__ import annotations
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from . import canon, exceptions, utils, validate
from .types import Period, RateFrame, TariffWindow

C_TOTAL, C_OFF, C_PEAK = (
    canon.CONSUMPTION_TOTAL,
    canon.CONSUMPTION_OFF_PEAK,
    canon.CONSUMPTION_PEAK,
)
P_TOTAL, P_OFF, P_PEAK = (
    canon.PRODUCTION_TOTAL,
    canon.PRODUCTION_OFF_PEAK,
    canon.PRODUCTION_PEAK,
)


def off_peak_mask(timestamps: Iterable[str], window: TariffWindow) -> np.ndarray:
    """
    Boolean mask of off-peak timestamps.

    Off-peak when any of:
      - weekend_is_off_peak and the day is Saturday or Sunday
      - time of day <= peak_start_hour:00:00
      - time of day >  off_peak_start_hour:00:00
    So exactly peak_start_hour:00:00 is off-peak, exactly
    off_peak_start_hour:00:00 is still peak.
    """
    seconds, dow = utils.wall_clock(timestamps)
    off = (seconds <= window.peak_start_hour * 3600) | (
        seconds > window.off_peak_start_hour * 3600
    )
    if window.weekend_is_off_peak:
        off = off | (dow >= 5)
    return off


def _ensure_rate_columns(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    for code in canon.RATE_CODES:
        if code not in out.columns:
            out[code] = pd.array([pd.NA] * len(out), dtype="Int64")
    return out


def _total_buckets(df: pd.DataFrame) -> pd.DataFrame:
    # provider already split these by tariff; only the totals are derived
    for col in (C_OFF, C_PEAK, P_OFF, P_PEAK):
        df[col] = df[col].fillna(0).astype("Int64")
    df[C_TOTAL] = df[C_OFF] + df[C_PEAK]
    df[P_TOTAL] = df[P_OFF] + df[P_PEAK]
    return df


def _derive_quarter_hour(df: pd.DataFrame, window: TariffWindow) -> pd.DataFrame:
    total = df[C_TOTAL]
    if total.isna().all():
        raise exceptions.ClassificationError(
            f"No cumulative consumption reading (rate {C_TOTAL}) in the series."
        )

    # rows without a reading (e.g. the closing day baseline) carry the
    # previous one, so they contribute no consumption delta
    consumption = total.ffill().bfill().to_numpy(dtype="int64")
    df[C_TOTAL] = pd.array(consumption, dtype="Int64")
    d_consumption = np.diff(consumption, prepend=consumption[0])

    # absent production counts as 0 and contributes no delta of its own
    has_production = df[P_TOTAL].notna().to_numpy(dtype=bool)
    production = df[P_TOTAL].fillna(0).to_numpy(dtype="int64")
    d_production = np.diff(production, prepend=production[0])
    d_production[~has_production] = 0

    off = off_peak_mask(df.index, window)

    first = df.iloc[0]
    seed = {
        code: 0 if pd.isna(first[code]) else int(first[code])
        for code in canon.BUCKET_CODES
    }

    # running accumulator over {181, 182, 281, 282}, seeded by the first row
    buckets = {
        C_OFF: np.where(off, d_consumption, 0),
        C_PEAK: np.where(off, 0, d_consumption),
        P_OFF: np.where(off, d_production, 0),
        P_PEAK: np.where(off, 0, d_production),
    }
    df[P_TOTAL] = pd.array(production, dtype="Int64")
    for code, deltas in buckets.items():
        df[code] = pd.array(seed[code] + np.cumsum(deltas), dtype="Int64")
    return df


def classify(
    records: pd.DataFrame,
    period: Period,
    window: Optional[TariffWindow] = None,
) -> RateFrame:
    """
    Fill peak/off-peak/total fields on merged, ascending records.

    DAY / MONTH / YEAR: totals each row from its tariff buckets.
    QUARTER_HOUR: splits cumulative 180/280 readings into cumulative
    off-peak (181/281) and peak (182/282) counters using `window`.

    Returns a new RateFrame; `records` is left untouched.
    """
    period = utils.resolve_period(period)
    exceptions.require(
        len(records) > 0,
        "Cannot classify an empty series; at least one record is required.",
        exceptions.EmptySeriesError,
    )
    validate.assert_rate_frame(records)
    window = window or TariffWindow()

    df = _ensure_rate_columns(records)
    if period == canon.QUARTER_HOUR:
        out = _derive_quarter_hour(df, window)
    else:
        out = _total_buckets(df)
    return RateFrame(out)
