"""Peak / off-peak classification of merged records."""

import numpy as np
import pytest

from meterseries import classify, exceptions, merge, validate
from meterseries.types import TariffWindow


def _qh(make_samples, rows):
    return merge.merge_samples(None, make_samples(rows))


def test_day_totals_from_buckets(make_samples):
    records = merge.merge_samples(
        None,
        make_samples(
            [("2021-01-01", 181, "1.000"), ("2021-01-01", 182, "0.500")]
        ),
    )
    out = classify.classify(records, "DAY")
    assert len(out) == 1
    row = out.loc["2021-01-01"]
    assert (row[181], row[182], row[180]) == (1000, 500, 1500)
    assert (row[281], row[282], row[280]) == (0, 0, 0)


def test_day_month_year_totals_invariant(day_samples):
    records = merge.merge_samples(None, day_samples).sort_index()
    for period in ("DAY", "MONTH", "YEAR"):
        out = classify.classify(records, period)
        validate.assert_totals(out)
    assert out.loc["2021-01-02", 280] == 300


def test_classify_does_not_touch_input(day_samples):
    records = merge.merge_samples(None, day_samples).sort_index()
    classify.classify(records, "DAY")
    assert records[180].isna().all()


def test_weekend_quarter_hours_go_off_peak(make_samples):
    # 2021-06-05 is a Saturday
    records = _qh(
        make_samples,
        [("2021-06-05T03:00:00", 180, "1.000"), ("2021-06-05T03:15:00", 180, "1.200")],
    )
    out = classify.classify(records, "QUARTER_HOUR")
    assert out[181].tolist() == [0, 200]
    assert out[182].tolist() == [0, 0]


def test_weekend_override_ignores_hour(make_samples):
    records = _qh(
        make_samples,
        [("2021-06-06 12:00:00", 180, "1.000"), ("2021-06-06 12:15:00", 180, "1.500")],
    )
    out = classify.classify(records, "QUARTER_HOUR")
    assert out.loc["2021-06-06 12:15:00", 181] == 500
    assert out.loc["2021-06-06 12:15:00", 182] == 0

    weekday_rules = TariffWindow(weekend_is_off_peak=False)
    out = classify.classify(records, "QUARTER_HOUR", weekday_rules)
    assert out.loc["2021-06-06 12:15:00", 181] == 0
    assert out.loc["2021-06-06 12:15:00", 182] == 500


def test_quarter_hour_window_edges(weekday_quarter_hours):
    records = merge.merge_samples(None, weekday_quarter_hours)
    out = classify.classify(records, "QUARTER_HOUR")
    # deltas: 0, 100 (07:00 off), 150 (peak), 50 (peak), 100 (23:00 peak), 200 (off)
    assert out[181].tolist() == [0, 100, 100, 100, 100, 300]
    assert out[182].tolist() == [0, 0, 150, 200, 300, 300]
    # 180 readings are left as delivered
    assert out[180].tolist() == [1000, 1100, 1250, 1300, 1400, 1600]


def test_quarter_hour_seeds_from_first_record(make_samples):
    records = _qh(
        make_samples,
        [
            ("2021-06-07", 180, "10.000"),
            ("2021-06-07", 181, "4.000"),
            ("2021-06-07", 182, "6.000"),
            ("2021-06-07 00:15:00", 180, "10.100"),
            ("2021-06-07 12:00:00", 180, "10.300"),
        ],
    )
    out = classify.classify(records, "QUARTER_HOUR")
    assert out[181].tolist() == [4000, 4100, 4100]
    assert out[182].tolist() == [6000, 6000, 6200]


def test_quarter_hour_cumulative_monotonic(weekday_quarter_hours):
    out = classify.classify(
        merge.merge_samples(None, weekday_quarter_hours), "QUARTER_HOUR"
    )
    used = (out[181] + out[182]).to_numpy(dtype="int64")
    assert np.all(np.diff(used) >= 0)
    # every delta lands in exactly one bucket
    assert (used == out[180].to_numpy(dtype="int64") - 1000).all()


def test_quarter_hour_production_split(make_samples):
    records = _qh(
        make_samples,
        [
            ("2021-06-07 06:45:00", 180, "1.000"),
            ("2021-06-07 06:45:00", 280, "2.000"),
            ("2021-06-07 07:00:00", 180, "1.000"),
            ("2021-06-07 07:00:00", 280, "2.050"),
            ("2021-06-07 12:00:00", 180, "1.000"),
            ("2021-06-07 12:00:00", 280, "2.500"),
        ],
    )
    out = classify.classify(records, "QUARTER_HOUR")
    assert out[281].tolist() == [0, 50, 50]
    assert out[282].tolist() == [0, 0, 450]


def test_quarter_hour_without_production(weekday_quarter_hours):
    out = classify.classify(
        merge.merge_samples(None, weekday_quarter_hours), "QUARTER_HOUR"
    )
    assert (out[280] == 0).all()
    assert (out[281] == 0).all() and (out[282] == 0).all()


def test_quarter_hour_row_without_total_carries_previous(make_samples):
    records = _qh(
        make_samples,
        [
            ("2021-06-07 00:15:00", 180, "1.0"),
            ("2021-06-07 00:30:00", 181, "1.0"),
            ("2021-06-07 00:45:00", 180, "1.3"),
        ],
    )
    out = classify.classify(records, "QUARTER_HOUR")
    assert out[180].tolist() == [1000, 1000, 1300]
    assert out[181].tolist() == [0, 0, 300]
    assert out[182].tolist() == [0, 0, 0]


def test_quarter_hour_leading_row_without_total(make_samples):
    records = _qh(
        make_samples,
        [
            ("2021-06-07", 181, "4.0"),
            ("2021-06-07 00:15:00", 180, "10.0"),
            ("2021-06-07 00:30:00", 180, "10.2"),
        ],
    )
    out = classify.classify(records, "QUARTER_HOUR")
    assert out[181].tolist() == [4000, 4000, 4200]


def test_quarter_hour_requires_some_total(make_samples):
    records = _qh(make_samples, [("2021-06-07 00:15:00", 181, "1.0")])
    with pytest.raises(exceptions.ClassificationError):
        classify.classify(records, "QUARTER_HOUR")


def test_classify_empty_fails_fast():
    empty = merge.merge_samples(None, [])
    with pytest.raises(exceptions.EmptySeriesError):
        classify.classify(empty, "DAY")


def test_classify_rejects_unsorted(make_samples):
    records = _qh(
        make_samples,
        [("2021-06-07 00:30:00", 180, "1.0"), ("2021-06-07 00:15:00", 180, "0.9")],
    )
    with pytest.raises(exceptions.SeriesError):
        classify.classify(records, "QUARTER_HOUR")


def test_classify_rejects_unknown_period(day_samples):
    records = merge.merge_samples(None, day_samples).sort_index()
    with pytest.raises(exceptions.InvalidPeriodError):
        classify.classify(records, "WEEK")


def test_off_peak_mask_boundaries():
    mask = classify.off_peak_mask(
        [
            "2021-06-07 07:00:00",
            "2021-06-07 07:00:01",
            "2021-06-07 23:00:00",
            "2021-06-07 23:00:01",
            "2021-06-07",
        ],
        TariffWindow(),
    )
    assert mask.tolist() == [True, False, False, True, True]


def test_off_peak_mask_custom_window():
    window = TariffWindow(peak_start_hour=6, off_peak_start_hour=21)
    mask = classify.off_peak_mask(
        ["2021-06-07 06:30:00", "2021-06-07 21:00:00", "2021-06-07 21:15:00"], window
    )
    assert mask.tolist() == [False, False, True]
