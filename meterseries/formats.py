from __future__ import annotations
from typing import Any, Iterable, Mapping

import pandas as pd

from . import canon, utils, validate
from .types import RateFrame


def to_records(df: pd.DataFrame) -> list[dict[Any, Any]]:
    """
    Convert a RateFrame into plain records:

        [{"datetime": "2021-01-01", 180: 1500, 181: 1000, 182: 500, ...}, ...]

    Absent fields are omitted, so each record only carries rates it has.
    """
    validate.assert_rate_frame(df)
    return [
        {canon.RECORD_TIMESTAMP_KEY: ts, **fields}
        for ts, fields in utils.frame_rows(df).items()
    ]


def from_records(records: Iterable[Mapping[Any, Any]]) -> RateFrame:
    """
    Inverse of to_records. Rate keys may be ints or digit strings
    (as they come back from JSON); the timestamp key is 'datetime'.
    """
    rows: dict[str, dict[int, int]] = {}
    for rec in records:
        ts = str(rec[canon.RECORD_TIMESTAMP_KEY])
        fields = rows.setdefault(ts, {})
        for key, value in rec.items():
            if key == canon.RECORD_TIMESTAMP_KEY or value is None:
                continue
            fields[int(key)] = int(value)
    return utils.build_rate_frame(rows)
