"""Shared fixtures for the reservation tests."""

from datetime import date, time, timedelta
from decimal import Decimal

from trainreserve.models import Station
from trainreserve.train import Train

MONDAY = date(2026, 10, 19)
TUESDAY = MONDAY + timedelta(days=1)


def make_stops(*specs):
    """Build stations from (code, departure "HH:MM", distance) tuples."""
    stops = []
    for code, departure, distance in specs:
        hour, minute = (int(part) for part in departure.split(":"))
        stops.append(Station(code, f"{code} Junction", time(hour, minute), time(hour, minute), distance))
    return stops


def make_train(train_id="T1", capacity=5, departure="06:00", arrival="12:00", running_days=None):
    """Train A -> B -> C with 200 distance units end to end and one SL class at 500."""
    return Train(
        train_id=train_id,
        name=f"Express {train_id}",
        stops=make_stops(("A", departure, 0), ("B", "09:00", 100), ("C", arrival, 200)),
        class_base_fares={"SL": Decimal("500")},
        class_capacity={"SL": capacity},
        running_days=running_days if running_days is not None else {MONDAY.weekday()},
    )
