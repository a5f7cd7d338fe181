"""
tests/conftest.py

Shared fixtures: a handful of stations and trips spread across the day,
including trips near midnight for the wraparound cases.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from bluetraffic.traffic.types import Station, Trip


def make_trip(start="A", end="B", started="2024-03-01 08:05", ended="2024-03-01 08:20") -> Trip:
    return Trip(
        start_station_id=start,
        end_station_id=end,
        started_at=datetime.fromisoformat(started),
        ended_at=datetime.fromisoformat(ended),
    )


@pytest.fixture
def stations():
    return [
        Station(short_name="A", lon=-71.09, lat=42.36, name="Kendall"),
        Station(short_name="B", lon=-71.10, lat=42.37, name="Central"),
        Station(short_name="C", lon=-71.11, lat=42.38, name="Harvard"),
    ]


@pytest.fixture
def day_trips():
    return [
        make_trip("A", "B", "2024-03-01 08:05", "2024-03-01 08:20"),
        make_trip("B", "A", "2024-03-01 08:30", "2024-03-01 08:45"),
        make_trip("A", "C", "2024-03-01 17:10", "2024-03-01 17:40"),
        make_trip("C", "A", "2024-03-01 23:50", "2024-03-02 00:10"),
        make_trip("B", "C", "2024-03-02 00:10", "2024-03-02 00:25"),
        make_trip("Z", "A", "2024-03-01 12:00", "2024-03-01 12:15"),
    ]
