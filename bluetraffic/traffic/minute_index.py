# bluetraffic/traffic/minute_index.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Tuple

import pandas as pd
from tqdm import tqdm

from bluetraffic.traffic.types import Trip


MINUTES_PER_DAY = 1440


def minutes_since_midnight(ts) -> int:
    """
    Minute-of-day (0..1439) of a timestamp, using its own wall-clock fields.
    Seconds are discarded.
    """
    if not isinstance(ts, datetime) or pd.isna(ts):
        raise ValueError("timestamp is missing or invalid")
    return int(ts.hour) * 60 + int(ts.minute)


@dataclass(frozen=True)
class MinuteIndex:
    """
    departures_by_minute[m]: trips whose started_at falls in minute m
    arrivals_by_minute[m]:   trips whose ended_at falls in minute m
    skipped: trips left out because a timestamp could not be read
    """
    departures_by_minute: Tuple[Tuple[Trip, ...], ...]
    arrivals_by_minute: Tuple[Tuple[Trip, ...], ...]
    skipped: int = 0

    @property
    def trip_count(self) -> int:
        return sum(len(b) for b in self.departures_by_minute)

    @classmethod
    def build(cls, trips: Iterable[Trip], *, progress: bool = False) -> "MinuteIndex":
        departures: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        arrivals: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        skipped = 0

        it = trips
        if progress:
            it = tqdm(trips, desc="Indexing trips")

        for trip in it:
            # both minutes are resolved before appending so a bad trip
            # never lands in just one of the two indices
            try:
                started = minutes_since_midnight(trip.started_at)
                ended = minutes_since_midnight(trip.ended_at)
            except ValueError:
                skipped += 1
                continue

            departures[started].append(trip)
            arrivals[ended].append(trip)

        return cls(
            departures_by_minute=tuple(tuple(b) for b in departures),
            arrivals_by_minute=tuple(tuple(b) for b in arrivals),
            skipped=skipped,
        )
