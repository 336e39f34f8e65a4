from __future__ import annotations
import pandas as pd

from . import canon, exceptions


def assert_rate_frame(df: pd.DataFrame) -> None:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.SeriesError(f"Index must be '{canon.INDEX_NAME}'.")
    if not df.index.is_unique:
        dupes = df.index[df.index.duplicated()].unique()
        raise exceptions.SeriesError(
            f"Duplicate timestamps detected: {', '.join(map(str, dupes[:5]))}."
        )
    labels = [str(ts) for ts in df.index]
    if labels != sorted(labels):
        raise exceptions.SeriesError("Index must be sorted ascending.")
    for col in df.columns:
        if not pd.api.types.is_integer(col):
            raise exceptions.SeriesError(f"Column {col!r} is not a rate code.")


def assert_totals(df: pd.DataFrame) -> None:
    """Check 180 == 181 + 182 and 280 == 281 + 282 on every row."""
    for total, off_peak, peak in (
        (canon.CONSUMPTION_TOTAL, canon.CONSUMPTION_OFF_PEAK, canon.CONSUMPTION_PEAK),
        (canon.PRODUCTION_TOTAL, canon.PRODUCTION_OFF_PEAK, canon.PRODUCTION_PEAK),
    ):
        for col in (total, off_peak, peak):
            if col not in df.columns:
                raise exceptions.SeriesError(f"Missing rate column {col}.")
        bad = df[total].ne(df[off_peak] + df[peak]).fillna(True)
        if bad.any():
            raise exceptions.SeriesError(
                f"Rate {total} differs from {off_peak} + {peak} at: "
                f"{', '.join(map(str, df.index[bad.to_numpy(dtype=bool)][:5]))}"
            )
