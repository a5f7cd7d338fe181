# bluetraffic/viz/time_label.py
from bluetraffic.traffic.minute_index import MINUTES_PER_DAY
from bluetraffic.traffic.window import ANY_TIME

ANY_TIME_LABEL = "(any time)"


def format_time(minutes: int) -> str:
    """
    Minute-of-day -> en-US short time, e.g. 485 -> "8:05 AM", 0 -> "12:00 AM".
    Values past the end of the day wrap around.
    """
    minutes = int(minutes) % MINUTES_PER_DAY
    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def time_label(time_filter: int) -> str:
    if time_filter == ANY_TIME:
        return ANY_TIME_LABEL
    return format_time(time_filter)


def slider_percent(value: int) -> float:
    # slider runs -1..1439, i.e. 1441 positions
    return (int(value) + 1) / (MINUTES_PER_DAY + 1) * 100
