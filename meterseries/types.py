from __future__ import annotations
from typing import Literal, Mapping, Dict, Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import canon, exceptions

Period = Literal["DAY", "QUARTER_HOUR", "MONTH", "YEAR"]

# start_<rate> / end_<rate> / consumption_<rate> -> value
YearConsumption = Dict[str, float]


# Merged series frame
class RateFrame(pd.DataFrame):
    """
    Merged per-timestamp meter records.

    Expected:
      - Index named 'timestamp' holding ISO date / date-time strings, unique
      - One nullable Int64 column per rate code (180..282), Wh-equivalent units
    """

    @property
    def _constructor(self):
        return RateFrame

    @property
    def consumption_total(self) -> pd.Series:
        return self[canon.CONSUMPTION_TOTAL]

    @property
    def consumption_off_peak(self) -> pd.Series:
        return self[canon.CONSUMPTION_OFF_PEAK]

    @property
    def consumption_peak(self) -> pd.Series:
        return self[canon.CONSUMPTION_PEAK]

    @property
    def production_total(self) -> pd.Series:
        return self[canon.PRODUCTION_TOTAL]

    @property
    def production_off_peak(self) -> pd.Series:
        return self[canon.PRODUCTION_OFF_PEAK]

    @property
    def production_peak(self) -> pd.Series:
        return self[canon.PRODUCTION_PEAK]


class RawSample(BaseModel):
    """One provider reading: a rate-keyed quantity at a timestamp.

    Attributes:
        timestamp: ISO date or date-time, comparable as text
        rate: provider rate code (e.g. 181 for off-peak consumption)
        quantity: decimal text in kWh (or m3 for gas)
    """

    model_config = ConfigDict(frozen=True)

    timestamp: str
    rate: int
    quantity: str

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity_as_text(cls, v: Any) -> str:
        return v if isinstance(v, str) else str(v)

    @classmethod
    def from_payload(
        cls, line: Mapping[str, Any], timestamp_field: str = "date"
    ) -> "RawSample":
        try:
            return cls(
                timestamp=line[timestamp_field],
                rate=line["rate"],
                quantity=line["quantity"],
            )
        except KeyError as err:
            raise exceptions.IngestError(
                f"Provider sample is missing field {err.args[0]!r}: {dict(line)}"
            ) from err
        except ValidationError as err:
            raise exceptions.IngestError(
                f"Provider sample is malformed: {dict(line)} ({err.error_count()} errors)"
            ) from err


class MeasuringPoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    unit_type: int = Field(alias="unitType")

    @property
    def is_electricity(self) -> bool:
        return self.unit_type == canon.UNIT_TYPE_ELECTRICITY

    @property
    def is_gas(self) -> bool:
        return self.unit_type == canon.UNIT_TYPE_GAS


class TariffWindow(BaseModel):
    """Daily peak window plus weekend override.

    Peak runs from just after peak_start_hour:00:00 up to and including
    off_peak_start_hour:00:00 on weekdays; everything else is off-peak.
    """

    peak_start_hour: int = Field(default=canon.DEFAULT_PEAK_START_HOUR, ge=0, le=23)
    off_peak_start_hour: int = Field(
        default=canon.DEFAULT_OFF_PEAK_START_HOUR, ge=0, le=23
    )
    weekend_is_off_peak: bool = canon.DEFAULT_WEEKEND_IS_OFF_PEAK
