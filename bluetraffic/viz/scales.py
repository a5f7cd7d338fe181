# bluetraffic/viz/scales.py
from __future__ import annotations

from typing import Dict, Sequence

import numpy as np

from bluetraffic.traffic.types import Station
from bluetraffic.traffic.window import ANY_TIME


RADIUS_RANGE_ANY_TIME = (0.0, 25.0)
RADIUS_RANGE_FILTERED = (3.0, 50.0)

# departure share -> flow class (mostly arrivals / balanced / mostly departures)
FLOW_LEVELS = (0.0, 0.5, 1.0)


def sqrt_scale(values, domain_max: float, out_range: tuple[float, float]) -> np.ndarray:
    """
    Square-root scale from [0, domain_max] onto out_range.
    An empty domain (domain_max == 0) maps everything to the middle of the range.
    """
    x = np.asarray(values, dtype=np.float64)
    r0, r1 = out_range

    if domain_max <= 0:
        return np.full_like(x, (r0 + r1) / 2.0)

    t = np.sqrt(x) / np.sqrt(float(domain_max))
    return r0 + (r1 - r0) * t


def station_radii(
    stations: Sequence[Station],
    time_filter: int = ANY_TIME,
    domain_max: float | None = None,
) -> Dict[str, float]:
    """
    Circle radius per station (by short_name), sized by total_traffic.

    domain_max should be the busiest station's all-time total so sizes stay
    comparable across slider positions; it defaults to the max of `stations`.
    A filtered view uses a larger range with a non-zero floor so quiet
    stations stay visible.
    """
    if not stations:
        return {}

    totals = np.array([s.total_traffic for s in stations], dtype=np.float64)
    if domain_max is None:
        domain_max = totals.max()

    out_range = RADIUS_RANGE_ANY_TIME if time_filter == ANY_TIME else RADIUS_RANGE_FILTERED
    radii = sqrt_scale(totals, domain_max, out_range)

    return {s.short_name: float(r) for s, r in zip(stations, radii)}


def departure_flow(departures: int, total: int) -> float | None:
    """
    Quantize the departure share into FLOW_LEVELS (three equal steps over [0, 1]).
    None when the station has no traffic.
    """
    if total <= 0:
        return None

    n = len(FLOW_LEVELS)
    thresholds = [i / n for i in range(1, n)]
    idx = int(np.digitize(departures / total, thresholds))
    return FLOW_LEVELS[min(idx, n - 1)]
