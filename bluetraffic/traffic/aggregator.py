# bluetraffic/traffic/aggregator.py
from __future__ import annotations

from collections import Counter
from dataclasses import replace
from typing import Iterable, List, Mapping, Sequence

import numpy as np
import pandas as pd

from bluetraffic.traffic.minute_index import MinuteIndex
from bluetraffic.traffic.types import Station, Trip
from bluetraffic.traffic.window import ANY_TIME, filter_by_minute
from bluetraffic.util.load_trips import DEFAULT_TIME_FORMAT, trips_from_rows


FRAME_COLUMNS = [
    "short_name",
    "name",
    "lon",
    "lat",
    "departures",
    "arrivals",
    "total_traffic",
    "departure_ratio",
]


class TrafficAggregator:
    """
    Station departures/arrivals over all trips or over a ±60 minute window.

    The minute index is built once from the trip list; every query reads it
    and returns fresh Station records, so repeated slider queries never see
    each other's results.
    """

    def __init__(self, trips: Iterable[Trip], *, progress: bool = False):
        self.index = MinuteIndex.build(trips, progress=progress)

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Mapping[str, str]],
        *,
        time_format: str | None = DEFAULT_TIME_FORMAT,
        progress: bool = False,
    ) -> "TrafficAggregator":
        return cls(trips_from_rows(rows, time_format=time_format), progress=progress)

    @property
    def trip_count(self) -> int:
        return self.index.trip_count

    # ----------------------------
    # Groupings
    # ----------------------------
    def departure_counts(self, time_filter: int = ANY_TIME) -> Counter:
        trips = filter_by_minute(self.index.departures_by_minute, time_filter)
        return Counter(t.start_station_id for t in trips)

    def arrival_counts(self, time_filter: int = ANY_TIME) -> Counter:
        trips = filter_by_minute(self.index.arrivals_by_minute, time_filter)
        return Counter(t.end_station_id for t in trips)

    # ----------------------------
    # Station traffic
    # ----------------------------
    def compute_station_traffic(
        self,
        stations: Sequence[Station],
        time_filter: int = ANY_TIME,
    ) -> List[Station]:
        """
        Annotate every station with its traffic inside the time filter.

        Returns new Station records in input order; stations with no trips
        get zeros. Trips pointing at ids not in `stations` are ignored.
        """
        departures = self.departure_counts(time_filter)
        arrivals = self.arrival_counts(time_filter)

        return [
            replace(
                s,
                arrivals=arrivals.get(s.short_name, 0),
                departures=departures.get(s.short_name, 0),
            )
            for s in stations
        ]

    def traffic_frame(
        self,
        stations: Sequence[Station],
        time_filter: int = ANY_TIME,
    ) -> pd.DataFrame:
        """
        Same as compute_station_traffic, as a DataFrame (one row per station).
        departure_ratio is NaN for stations without traffic.
        """
        annotated = self.compute_station_traffic(stations, time_filter)
        df = pd.DataFrame([s.to_dict() for s in annotated], columns=FRAME_COLUMNS[:-1])

        total = df["total_traffic"].to_numpy(dtype=np.float64)
        dep = df["departures"].to_numpy(dtype=np.float64)
        with np.errstate(divide="ignore", invalid="ignore"):
            df["departure_ratio"] = np.where(total > 0, dep / total, np.nan)

        return df[FRAME_COLUMNS]
