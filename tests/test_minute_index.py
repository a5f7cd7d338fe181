"""
tests/test_minute_index.py

Tests for traffic/minute_index.py — minute-of-day conversion and bucket coverage.
"""

from __future__ import annotations

from datetime import datetime

import pandas as pd
import pytest

from bluetraffic.traffic.minute_index import (
    MINUTES_PER_DAY,
    MinuteIndex,
    minutes_since_midnight,
)
from bluetraffic.traffic.types import Trip

from conftest import make_trip


class TestMinutesSinceMidnight:

    @pytest.mark.parametrize(
        "ts, expected",
        [
            (datetime(2024, 3, 1, 0, 0), 0),
            (datetime(2024, 3, 1, 8, 5), 485),
            (datetime(2024, 3, 1, 8, 5, 59), 485),
            (datetime(2024, 3, 1, 23, 59, 59), 1439),
            (pd.Timestamp("2024-03-01 20:00"), 1200),
        ],
    )
    def test_minute_of_day(self, ts, expected):
        assert minutes_since_midnight(ts) == expected

    @pytest.mark.parametrize("bad", [None, pd.NaT, float("nan")])
    def test_invalid_timestamp_raises(self, bad):
        with pytest.raises(ValueError):
            minutes_since_midnight(bad)


class TestMinuteIndexBuild:

    def test_has_one_slot_per_minute(self):
        index = MinuteIndex.build([])
        assert len(index.departures_by_minute) == MINUTES_PER_DAY
        assert len(index.arrivals_by_minute) == MINUTES_PER_DAY
        assert index.trip_count == 0

    def test_each_trip_lands_once_in_each_index(self, day_trips):
        index = MinuteIndex.build(day_trips)

        for trip in day_trips:
            dep_hits = [
                m for m, bucket in enumerate(index.departures_by_minute)
                for t in bucket if t is trip
            ]
            arr_hits = [
                m for m, bucket in enumerate(index.arrivals_by_minute)
                for t in bucket if t is trip
            ]
            assert dep_hits == [minutes_since_midnight(trip.started_at)]
            assert arr_hits == [minutes_since_midnight(trip.ended_at)]

        assert index.trip_count == len(day_trips)
        assert sum(len(b) for b in index.arrivals_by_minute) == len(day_trips)

    def test_keeps_insertion_order_within_minute(self):
        first = make_trip("A", "B", "2024-03-01 08:05:01", "2024-03-01 08:20")
        second = make_trip("C", "B", "2024-03-01 08:05:40", "2024-03-01 08:20")
        index = MinuteIndex.build([first, second])

        assert index.departures_by_minute[485] == (first, second)
        assert index.arrivals_by_minute[500] == (first, second)

    def test_trip_with_bad_timestamp_is_skipped_everywhere(self):
        good = make_trip()
        bad = Trip("A", "B", datetime(2024, 3, 1, 9, 0), pd.NaT)
        index = MinuteIndex.build([good, bad])

        assert index.skipped == 1
        assert index.trip_count == 1
        assert index.departures_by_minute[540] == ()

    def test_buckets_are_immutable(self, day_trips):
        index = MinuteIndex.build(day_trips)
        with pytest.raises(AttributeError):
            index.departures_by_minute[485].append(make_trip())

    def test_progress_bar_does_not_change_result(self, day_trips):
        plain = MinuteIndex.build(day_trips)
        with_bar = MinuteIndex.build(day_trips, progress=True)
        assert plain == with_bar


class TestUnreadableTimestampTypes:

    @pytest.mark.parametrize("bad", ["2024-03-01T08:05", 485, object()])
    def test_non_datetime_raises_value_error(self, bad):
        with pytest.raises(ValueError):
            minutes_since_midnight(bad)

    def test_raw_string_timestamp_is_skipped(self):
        good = make_trip()
        raw = Trip("A", "B", "2024-03-01T09:00", datetime(2024, 3, 1, 9, 30))
        index = MinuteIndex.build([good, raw])

        assert index.skipped == 1
        assert index.trip_count == 1
        assert index.arrivals_by_minute[570] == ()
