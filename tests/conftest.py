import pytest

from meterseries.types import RawSample


class FakeSource:
    """In-memory MeterDataSource recording every fetch."""

    def __init__(self, data=None, points=None):
        self.data = data or {}
        self.points = points or []
        self.calls = []

    def fetch_samples(self, measuring_point_id, granularity, date_from, date_to):
        self.calls.append((measuring_point_id, granularity, date_from, date_to))
        return list(self.data.get(granularity, []))

    def measuring_points(self):
        return list(self.points)


def samples(rows):
    """[(timestamp, rate, quantity), ...] -> [RawSample, ...]"""
    return [RawSample(timestamp=ts, rate=rate, quantity=q) for ts, rate, q in rows]


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def day_samples():
    # Two days, delivered out of order, already split by tariff
    return samples(
        [
            ("2021-01-02", 181, "1.250"),
            ("2021-01-02", 182, "0.750"),
            ("2021-01-02", 281, "0.100"),
            ("2021-01-02", 282, "0.200"),
            ("2021-01-01", 181, "1.000"),
            ("2021-01-01", 182, "0.500"),
        ]
    )


@pytest.fixture
def weekday_quarter_hours():
    # Monday 2021-06-07, cumulative 180 readings around both window edges
    return samples(
        [
            ("2021-06-07 06:45:00", 180, "1.000"),
            ("2021-06-07 07:00:00", 180, "1.100"),
            ("2021-06-07 07:15:00", 180, "1.250"),
            ("2021-06-07 22:45:00", 180, "1.300"),
            ("2021-06-07 23:00:00", 180, "1.400"),
            ("2021-06-07 23:15:00", 180, "1.600"),
        ]
    )


@pytest.fixture
def make_samples():
    return samples
