# bluetraffic/traffic/types.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Trip:
    start_station_id: str
    end_station_id: str
    started_at: datetime
    ended_at: datetime


@dataclass(frozen=True)
class Station:
    """
    A dock location plus its traffic counts for one time filter.

    short_name is the id trips refer to (start_station_id / end_station_id).
    """
    short_name: str
    lon: float
    lat: float
    name: str | None = None
    arrivals: int = 0
    departures: int = 0

    @property
    def total_traffic(self) -> int:
        return self.arrivals + self.departures

    def to_dict(self) -> dict:
        return {
            "short_name": self.short_name,
            "name": self.name,
            "lon": self.lon,
            "lat": self.lat,
            "arrivals": self.arrivals,
            "departures": self.departures,
            "total_traffic": self.total_traffic,
        }
