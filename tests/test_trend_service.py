"""Tests for daily gap-filled and weekly trend series."""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta, timezone

import pytest

from app.services.dates import tz_from_offset
from app.services.trend_service import (
    _interpolate,
    build_daily_series,
    build_series,
    build_weekly_series,
    gap_value,
)
from conftest import ts

# ---- daily series ----


def test_daily_empty_input():
    assert build_daily_series([]) == []


def test_daily_gap_fill_between_neighbours(make_entry):
    entries = [
        make_entry(8, ts(2026, 3, 4, 9)),
        make_entry(2, ts(2026, 3, 2, 8)),
        make_entry(4, ts(2026, 3, 2, 20)),
    ]
    series = build_daily_series(entries)

    assert [d.date for d in series] == [date(2026, 3, 2), date(2026, 3, 3), date(2026, 3, 4)]
    assert series[0].avg == 3
    assert series[0].min == 2
    assert series[0].max == 4
    assert series[1].final_value == pytest.approx(5.5)
    assert series[1].moods == []
    assert series[1].avg is None
    assert [d.interpolated for d in series] == [False, True, False]


def test_daily_series_has_no_gaps(make_entry):
    entries = [
        make_entry(3, ts(2026, 3, 10)),
        make_entry(5, ts(2026, 3, 1)),
        make_entry(7, ts(2026, 3, 5)),
    ]
    series = build_daily_series(entries)

    assert len(series) == 10
    for prev, cur in zip(series, series[1:]):
        assert cur.date - prev.date == timedelta(days=1)


def test_daily_interpolation_hits_endpoints_and_is_monotonic(make_entry):
    entries = [make_entry(2, ts(2026, 3, 1)), make_entry(10, ts(2026, 3, 5))]
    values = [d.final_value for d in build_daily_series(entries)]

    assert values == pytest.approx([2, 4, 6, 8, 10])
    assert values == sorted(values)


def test_daily_real_days_keep_their_average(make_entry):
    entries = [make_entry(1, ts(2026, 3, 1)), make_entry(6, ts(2026, 3, 2)), make_entry(2, ts(2026, 3, 2))]
    series = build_daily_series(entries)

    assert series[1].final_value == 4
    assert not any(d.interpolated for d in series)


def test_daily_uses_client_timezone(make_entry):
    entry = make_entry(4, ts(2026, 3, 2, 23, 30))
    series = build_daily_series([entry], tz=tz_from_offset(120))
    assert series[0].date == date(2026, 3, 3)


def test_daily_max_days_window(make_entry):
    entries = [
        make_entry(1, ts(2026, 3, 1)),
        make_entry(3, ts(2026, 3, 8)),
        make_entry(5, ts(2026, 3, 10)),
    ]
    series = build_daily_series(entries, max_days=3)

    assert [d.date for d in series] == [date(2026, 3, 8), date(2026, 3, 9), date(2026, 3, 10)]
    assert series[1].final_value == pytest.approx(4)


@pytest.mark.parametrize("max_days", [0, -2])
def test_daily_window_below_one_means_no_window(make_entry, max_days):
    entries = [make_entry(1, ts(2026, 3, 1)), make_entry(5, ts(2026, 3, 10))]
    assert build_daily_series(entries, max_days=max_days) == build_daily_series(entries)
    assert len(build_daily_series(entries, max_days=max_days)) == 10


# ---- gap values ----


def test_gap_value_between_neighbours():
    value = gap_value(date(2026, 3, 3), (date(2026, 3, 1), 2.0), (date(2026, 3, 5), 6.0))
    assert value == pytest.approx(4)


def test_gap_value_holds_single_neighbour():
    assert gap_value(date(2026, 3, 3), (date(2026, 3, 1), 2.5), None) == 2.5
    assert gap_value(date(2026, 3, 3), None, (date(2026, 3, 5), 7.0)) == 7.0


def test_gap_value_without_neighbours_is_neutral():
    assert gap_value(date(2026, 3, 3), None, None) == 5.0


def test_interpolate_same_x_returns_left_value():
    assert _interpolate(10, 5, 3.0, 5, 9.0) == 3.0
    assert _interpolate(5, 0, 0.0, 10, 10.0) == pytest.approx(5)


def test_daily_is_order_independent(make_entry):
    entries = [make_entry(m, ts(2026, 3, d, h)) for m, d, h in [(1, 1, 8), (9, 1, 9), (4, 3, 10), (6, 6, 22)]]
    shuffled = entries[:]
    random.Random(7).shuffle(shuffled)

    assert build_daily_series(shuffled) == build_daily_series(entries)


def test_daily_same_timestamp_keeps_input_order(make_entry):
    entries = [make_entry(9, ts(2026, 3, 1)), make_entry(1, ts(2026, 3, 1))]
    assert build_daily_series(entries)[0].moods == [9, 1]


# ---- weekly series ----


def test_weekly_buckets_are_monday_aligned(make_entry):
    entries = [
        make_entry(2, ts(2026, 3, 2)),   # Monday
        make_entry(6, ts(2026, 3, 8)),   # Sunday, same week
        make_entry(4, ts(2026, 3, 4)),
        make_entry(7, ts(2026, 3, 17)),  # two weeks later
    ]
    series = build_weekly_series(entries)

    assert [w.week_start for w in series] == [date(2026, 3, 2), date(2026, 3, 16)]
    assert series[0].moods == [2, 4, 6]


def test_weekly_missing_weeks_are_absent(make_entry):
    entries = [make_entry(3, ts(2026, 3, 2)), make_entry(5, ts(2026, 3, 23))]
    series = build_weekly_series(entries)
    assert len(series) == 2


def test_weekly_final_value_is_median(make_entry):
    entries = [make_entry(m, ts(2026, 3, 2, h)) for m, h in [(1, 8), (2, 9), (10, 10)]]
    week = build_weekly_series(entries)[0]

    assert week.final_value == 2
    assert week.avg == pytest.approx(13 / 3)
    assert week.quartiles.min == 1
    assert week.quartiles.max == 10


def test_weekly_max_weeks_drops_old_entries(make_entry):
    now = datetime(2026, 3, 20, 12, tzinfo=timezone.utc)
    entries = [make_entry(3, ts(2026, 1, 5)), make_entry(5, ts(2026, 3, 16))]
    series = build_weekly_series(entries, max_weeks=4, now=now)
    assert [w.week_start for w in series] == [date(2026, 3, 16)]


def test_weekly_empty_input():
    assert build_weekly_series([]) == []


# ---- dispatch ----


def test_build_series_dispatch(make_entry):
    entries = [make_entry(3, ts(2026, 3, 2)), make_entry(5, ts(2026, 3, 4))]
    assert len(build_series(entries, "day")) == 3
    assert len(build_series(entries, "week")) == 1


def test_build_series_unknown_granularity():
    with pytest.raises(ValueError):
        build_series([], "month")
