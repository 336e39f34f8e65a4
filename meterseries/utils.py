# meterseries/utils.py
from __future__ import annotations
import datetime as dt
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Mapping, Any

import numpy as np
import pandas as pd

from . import canon, exceptions
from .types import RateFrame


def parse_quantity(value: Any) -> Decimal:
    """Parse a provider quantity (decimal text) without losing precision."""
    try:
        out = Decimal(value if isinstance(value, str) else str(value))
    except (InvalidOperation, TypeError, ValueError) as err:
        raise exceptions.MalformedQuantityError(
            f"Quantity {value!r} is not a decimal number."
        ) from err
    if not out.is_finite():
        raise exceptions.MalformedQuantityError(
            f"Quantity {value!r} is not a finite decimal number."
        )
    return out


def to_units(value: Any) -> int:
    """kWh text → integer Wh-equivalent, rounding half up."""
    scaled = parse_quantity(value) * canon.UNIT_SCALE
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def resolve_period(period: str) -> str:
    """Normalise a period name; unknown names raise InvalidPeriodError."""
    key = str(period).strip().upper()
    key = canon.PERIOD_ALIASES.get(key, key)
    if key not in canon.PERIODS:
        raise exceptions.InvalidPeriodError(
            f"Period must be one of {', '.join(canon.PERIODS)}. Given: {period!r}"
        )
    return key


def to_date(value: str | dt.date | pd.Timestamp) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return pd.Timestamp(value).date()


def format_date(value: str | dt.date | pd.Timestamp) -> str:
    return to_date(value).strftime("%Y-%m-%d")


def add_days(value: str | dt.date | pd.Timestamp, days: int) -> dt.date:
    return to_date(value) + dt.timedelta(days=days)


def shift_years(value: str | dt.date | pd.Timestamp, years: int) -> dt.date:
    """Same calendar day `years` away; Feb 29 falls back to Feb 28."""
    return (pd.Timestamp(to_date(value)) + pd.DateOffset(years=years)).date()


def is_new_year(timestamp: str) -> bool:
    """True when the date part of the timestamp is January 1st."""
    return pd.Timestamp(timestamp).strftime("%m-%d") == "01-01"


def wall_clock(timestamps: Iterable[str]) -> tuple[np.ndarray, np.ndarray]:
    """
    Seconds since local midnight and day of week (Mon=0..Sun=6) for each
    timestamp, read from the wall-clock fields as written (offsets are kept,
    not converted).
    """
    parsed = [pd.Timestamp(ts) for ts in timestamps]
    seconds = np.array(
        [
            t.hour * 3600 + t.minute * 60 + t.second + t.microsecond / 1e6
            for t in parsed
        ],
        dtype=float,
    )
    dow = np.array([t.dayofweek for t in parsed], dtype=int)
    return seconds, dow


def build_rate_frame(rows: Mapping[str, Mapping[int, int]]) -> RateFrame:
    """
    Build a RateFrame from {timestamp: {rate: units}} keeping row order.

    Every standard rate code gets a column; absent fields are <NA>.
    """
    extra = sorted({int(c) for f in rows.values() for c in f} - set(canon.RATE_CODES))
    columns = [*canon.RATE_CODES, *extra]
    data = {
        code: pd.array([fields.get(code) for fields in rows.values()], dtype="Int64")
        for code in columns
    }
    idx = pd.Index(list(rows.keys()), dtype=object, name=canon.INDEX_NAME)
    return RateFrame(data, index=idx)


def empty_rate_frame() -> RateFrame:
    return build_rate_frame({})


def frame_rows(df: pd.DataFrame) -> dict[str, dict[int, int]]:
    """RateFrame → {timestamp: {rate: units}} with absent fields dropped."""
    return {
        str(ts): {int(code): int(v) for code, v in row.items() if not pd.isna(v)}
        for ts, row in df.iterrows()
    }
