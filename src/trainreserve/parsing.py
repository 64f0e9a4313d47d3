"""Parsing helpers for weekday abbreviations and clock times."""

from datetime import time
from typing import Dict, FrozenSet, Iterable

WEEKDAYS: Dict[str, int] = {
    "MON": 0,
    "TUE": 1,
    "WED": 2,
    "THU": 3,
    "FRI": 4,
    "SAT": 5,
    "SUN": 6,
}


def parse_weekday(value: str) -> int:
    """
    Convert a three-letter weekday abbreviation to a ``date.weekday()`` number.

    Raises:
        ValueError: If the abbreviation is not recognised.
    """
    key = value.strip().upper()
    if key not in WEEKDAYS:
        raise ValueError(f"Invalid day: {value}")
    return WEEKDAYS[key]


def parse_weekdays(values: Iterable[str]) -> FrozenSet[int]:
    return frozenset(parse_weekday(v) for v in values if v.strip())


def parse_clock_time(value: str) -> time:
    """
    Parse an ``HH:MM`` string into a ``datetime.time``.

    Raises:
        ValueError: If the value is not a valid 24-hour clock time.
    """
    parts = value.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time: {value}")
    hour, minute = parts
    return time(int(hour), int(minute))
