# bluetraffic/util/load_trips.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping

import pandas as pd
from colorama import Fore, Style

from bluetraffic.traffic.types import Trip


TRIP_COLUMNS = ["start_station_id", "end_station_id", "started_at", "ended_at"]

# parse each value on its own, so one odd row can't break format inference
DEFAULT_TIME_FORMAT = "mixed"

# trailing UTC offset, e.g. "Z", "-05:00", "+0000"
UTC_OFFSET_RE = r"(?<=\d)\s*(?:Z|[+-]\d{2}:?\d{2})$"


def parse_wall_clock(values: pd.Series, time_format: str | None = DEFAULT_TIME_FORMAT) -> pd.Series:
    """
    Parse timestamps as naive local wall-clock times.

    Any UTC offset is dropped per value, so rows on either side of a DST
    change (-05:00 / -04:00) keep their own hour and minute.
    Unparseable values become NaT.
    """
    text = values.astype("string").str.strip().str.replace(UTC_OFFSET_RE, "", regex=True)
    text = text.astype(object).where(text.notna(), None)
    return pd.to_datetime(text, format=time_format, errors="coerce")


def trips_from_frame(
    df: pd.DataFrame,
    *,
    time_format: str | None = DEFAULT_TIME_FORMAT,
) -> List[Trip]:
    """
    Turn a raw trips table into Trip records.

    df must have start_station_id, end_station_id, started_at, ended_at.
    Rows with an unparseable timestamp or a blank station id are dropped.
    """
    # normalize column names (stray spaces are common in exported CSVs)
    colmap = {str(c).strip(): c for c in df.columns}
    missing = [c for c in TRIP_COLUMNS if c not in colmap]
    if missing:
        raise ValueError(f"Trips data missing columns: {', '.join(missing)}")

    out = pd.DataFrame()
    for col in ("start_station_id", "end_station_id"):
        ids = df[colmap[col]].astype("string").str.strip()
        out[col] = ids.mask(ids.fillna("") == "")

    out["started_at"] = parse_wall_clock(df[colmap["started_at"]], time_format)
    out["ended_at"] = parse_wall_clock(df[colmap["ended_at"]], time_format)

    # drop malformed rows
    n_raw = len(out)
    out = out.dropna(subset=TRIP_COLUMNS)
    dropped = n_raw - len(out)
    if dropped:
        print(f"{Fore.YELLOW}Dropped {dropped:,} malformed trip rows{Style.RESET_ALL}")

    return [
        Trip(
            start_station_id=str(s0),
            end_station_id=str(s1),
            started_at=t0.to_pydatetime(),
            ended_at=t1.to_pydatetime(),
        )
        for s0, s1, t0, t1 in zip(
            out["start_station_id"],
            out["end_station_id"],
            out["started_at"],
            out["ended_at"],
        )
    ]


def trips_from_rows(
    rows: Iterable[Mapping[str, str]],
    *,
    time_format: str | None = DEFAULT_TIME_FORMAT,
) -> List[Trip]:
    rows = list(rows)
    if not rows:
        return []
    return trips_from_frame(pd.DataFrame(rows), time_format=time_format)


def load_trip_csv(
    trips_csv: str | Path,
    *,
    time_format: str | None = DEFAULT_TIME_FORMAT,
) -> List[Trip]:
    """
    Loads a Bluebikes trips CSV with columns like:

      ride_id, rideable_type, started_at, ended_at,
      start_station_id, end_station_id, is_member

    Only the four columns in TRIP_COLUMNS are used.
    """
    trips_csv = Path(trips_csv)

    print(f"{Fore.CYAN}Loading trips from {trips_csv}…{Style.RESET_ALL}")
    # ids stay strings: they are matched against station short_name
    df = pd.read_csv(trips_csv, dtype=str, skipinitialspace=True)

    trips = trips_from_frame(df, time_format=time_format)
    print(f"{Fore.GREEN}Loaded {len(trips):,} trips{Style.RESET_ALL}")
    return trips
