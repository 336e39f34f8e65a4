from __future__ import annotations


class MeterSeriesError(Exception): ...


class FetchError(MeterSeriesError):
    """A provider request did not come back with HTTP 200."""

    def __init__(self, url: str, status: int, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        super().__init__(
            f"Error fetching meter data from URL {url}: {status} - {reason}"
        )


class IngestError(MeterSeriesError): ...


class MalformedQuantityError(IngestError): ...


class SeriesError(MeterSeriesError): ...


class EmptySeriesError(SeriesError): ...


class ClassificationError(SeriesError): ...


class InvalidPeriodError(MeterSeriesError, ValueError): ...


class SummaryError(MeterSeriesError): ...


def require(condition: bool, message: str, exc: type[MeterSeriesError] = MeterSeriesError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
