from __future__ import annotations
import datetime as dt
import logging
from typing import Any, Optional, Protocol, TYPE_CHECKING

import requests

from . import canon, exceptions, utils
from .types import MeasuringPoint, RawSample

if TYPE_CHECKING:
    from .config import SeriesConfig

logger = logging.getLogger(__name__)


class MeterDataSource(Protocol):
    """Where raw samples come from. EnelogicClient is the HTTP implementation."""

    def fetch_samples(
        self,
        measuring_point_id: int | str,
        granularity: str,
        date_from: str | dt.date,
        date_to: str | dt.date,
    ) -> list[RawSample]: ...

    def measuring_points(self) -> list[MeasuringPoint]: ...


class EnelogicClient:
    """Thin JSON client for the Enelogic measuring point API."""

    def __init__(
        self,
        access_token: str,
        *,
        host: str = canon.DEFAULT_HOST,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.access_token = access_token
        self.host = host.rstrip("/")
        # only a session created here is closed by close()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: "SeriesConfig") -> "EnelogicClient":
        return cls(config.access_token, host=config.host, timeout=config.timeout)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "EnelogicClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def url(self, path: str) -> str:
        if path.lower().startswith("http"):
            return path
        return self.host + "/" + path.lstrip("/")

    def fetch_json(self, url: str) -> Any:
        url = self.url(url)
        logger.debug("GET %s", url)
        response = self.session.get(
            url, params={"access_token": self.access_token}, timeout=self.timeout
        )
        if response.status_code != 200:
            raise exceptions.FetchError(url, response.status_code, response.reason or "")
        return response.json()

    # ------------------ measuring points ------------------

    def measuring_points(self) -> list[MeasuringPoint]:
        data = self.fetch_json("/measuringpoints")
        return [MeasuringPoint.model_validate(line) for line in data]

    def electricity_measuring_points(self) -> list[MeasuringPoint]:
        return [mp for mp in self.measuring_points() if mp.is_electricity]

    def gas_measuring_points(self) -> list[MeasuringPoint]:
        return [mp for mp in self.measuring_points() if mp.is_gas]

    # ------------------ datapoints ------------------

    def datapoint_path(
        self,
        measuring_point_id: int | str,
        granularity: str,
        date_from: str | dt.date,
        date_to: str | dt.date,
    ) -> str:
        granularity = utils.resolve_period(granularity)
        if granularity not in canon.DATAPOINT_SEGMENTS:
            raise exceptions.InvalidPeriodError(
                f"The provider serves {', '.join(canon.DATAPOINT_SEGMENTS)} data only. "
                f"Given: {granularity!r}"
            )
        return (
            f"/measuringpoints/{measuring_point_id}/"
            f"{canon.DATAPOINT_SEGMENTS[granularity]}/"
            f"{utils.format_date(date_from)}/{utils.format_date(date_to)}"
        )

    def fetch_samples(
        self,
        measuring_point_id: int | str,
        granularity: str,
        date_from: str | dt.date,
        date_to: str | dt.date,
    ) -> list[RawSample]:
        path = self.datapoint_path(measuring_point_id, granularity, date_from, date_to)
        data = self.fetch_json(path)
        field = canon.TIMESTAMP_FIELDS[utils.resolve_period(granularity)]
        samples = [RawSample.from_payload(line, field) for line in data]
        logger.debug("Fetched %d %s samples from %s", len(samples), granularity, path)
        return samples
