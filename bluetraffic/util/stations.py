# bluetraffic/util/stations.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from colorama import Fore, Style

from bluetraffic.traffic.types import Station


def stations_from_records(records: Iterable[Mapping[str, Any]]) -> List[Station]:
    """
    Build Station records from raw station dicts.

    Each record needs short_name, lon and lat (numbers or numeric strings).
    Records without a short_name are skipped; a repeated short_name is an error.
    """
    stations: List[Station] = []
    seen = set()

    for s in records:
        sid = str(s.get("short_name") or "").strip()
        if not sid:
            continue
        if sid in seen:
            raise ValueError(f"Duplicate station short_name: {sid}")
        seen.add(sid)

        try:
            lon = float(s["lon"])
            lat = float(s["lat"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Station {sid} has no usable lon/lat") from e

        stations.append(
            Station(
                short_name=sid,
                lon=lon,
                lat=lat,
                name=s.get("name"),
            )
        )

    return stations


def load_stations(path: str | Path) -> List[Station]:
    """
    Load Bluebikes stations from a station information JSON file
    ({"data": {"stations": [...]}}).
    """
    print(f"{Fore.CYAN}Loading station registry from {path}…{Style.RESET_ALL}")
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    try:
        records = raw["data"]["stations"]
    except (KeyError, TypeError) as e:
        raise ValueError("Station JSON must contain data.stations") from e

    stations = stations_from_records(records)
    print(f"{Fore.GREEN}Loaded {len(stations):,} stations{Style.RESET_ALL}")
    return stations
