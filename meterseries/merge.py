from __future__ import annotations
from typing import Iterable, Mapping, Optional, Any

import pandas as pd

from . import exceptions, utils
from .types import RateFrame, RawSample


def _as_sample(sample: RawSample | Mapping[str, Any], timestamp_field: str) -> RawSample:
    if isinstance(sample, RawSample):
        return sample
    return RawSample.from_payload(sample, timestamp_field)


def merge_samples(
    records: Optional[pd.DataFrame],
    samples: Iterable[RawSample | Mapping[str, Any]],
    timestamp_field: str = "date",
) -> RateFrame:
    """
    Merge rate-keyed samples into one row per timestamp.

    - Each quantity becomes round(quantity * 1000) in its rate column.
    - A sample for a timestamp already present overwrites that rate only;
      otherwise a new row is appended (last write wins).
    - Existing rows keep their order; new timestamps follow in first-seen order.

    `records` is left untouched; a new RateFrame is returned.
    """
    rows = utils.frame_rows(records) if records is not None else {}
    for raw in samples:
        sample = _as_sample(raw, timestamp_field)
        try:
            units = utils.to_units(sample.quantity)
        except exceptions.MalformedQuantityError as err:
            raise exceptions.MalformedQuantityError(
                f"{err} (timestamp {sample.timestamp}, rate {sample.rate})"
            ) from err
        rows.setdefault(sample.timestamp, {})[sample.rate] = units
    return utils.build_rate_frame(rows)
