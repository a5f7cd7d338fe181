# bluetraffic/traffic/window.py
from __future__ import annotations

from itertools import chain
from numbers import Integral
from typing import List, Sequence, TypeVar

from bluetraffic.traffic.minute_index import MINUTES_PER_DAY


T = TypeVar("T")

ANY_TIME = -1
WINDOW_HALF_WIDTH = 60


def validate_minute(minute) -> int:
    if isinstance(minute, bool) or not isinstance(minute, Integral):
        raise ValueError(f"minute must be an int, got {minute!r}")
    if minute != ANY_TIME and not (0 <= minute < MINUTES_PER_DAY):
        raise ValueError(
            f"minute must be -1 (any time) or in [0, {MINUTES_PER_DAY - 1}], got {minute}"
        )
    return int(minute)


def window_bounds(minute: int) -> tuple[int, int]:
    """
    (min_minute, max_minute) of the half-open window around minute.
    min_minute > max_minute means the window wraps past midnight.
    """
    minute = validate_minute(minute)
    if minute == ANY_TIME:
        return 0, MINUTES_PER_DAY

    min_minute = (minute - WINDOW_HALF_WIDTH + MINUTES_PER_DAY) % MINUTES_PER_DAY
    max_minute = (minute + WINDOW_HALF_WIDTH) % MINUTES_PER_DAY
    return min_minute, max_minute


def window_minutes(minute: int) -> List[int]:
    """Bucket indices covered by the window, in the order they are read."""
    min_minute, max_minute = window_bounds(minute)
    if min_minute > max_minute:
        return list(range(min_minute, MINUTES_PER_DAY)) + list(range(0, max_minute))
    return list(range(min_minute, max_minute))


def filter_by_minute(trips_by_minute: Sequence[Sequence[T]], minute: int) -> List[T]:
    """
    Flatten the buckets that fall inside the window around minute.

    minute == -1 returns every bucket. Items are returned as-is (no copies),
    ordered by minute and then by insertion order within the minute.
    """
    if len(trips_by_minute) != MINUTES_PER_DAY:
        raise ValueError(f"expected {MINUTES_PER_DAY} buckets, got {len(trips_by_minute)}")

    minute = validate_minute(minute)
    if minute == ANY_TIME:
        return list(chain.from_iterable(trips_by_minute))

    min_minute, max_minute = window_bounds(minute)

    # window crosses midnight
    if min_minute > max_minute:
        before_midnight = trips_by_minute[min_minute:]
        after_midnight = trips_by_minute[:max_minute]
        return list(chain.from_iterable(chain(before_midnight, after_midnight)))

    return list(chain.from_iterable(trips_by_minute[min_minute:max_minute]))
