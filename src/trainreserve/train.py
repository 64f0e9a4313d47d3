"""Train: route, fares, running days and seat inventory."""

from datetime import time
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping

from .models import Station
from .route import Route
from .seat_inventory import SeatInventory

# Base fares are quoted per this many distance units
FARE_DISTANCE_UNIT = 100


class Train:
    """
    A train with a fixed route and one seat inventory per travel class.

    Route, fares and running days do not change after construction; the seat
    inventories are the only mutable state.
    """

    def __init__(
        self,
        train_id: str,
        name: str,
        stops: Iterable[Station],
        class_base_fares: Mapping[str, Decimal],
        class_capacity: Mapping[str, int],
        running_days: Iterable[int],
    ):
        """
        Initialize the train.

        Args:
            train_id: Train number (e.g., "12951").
            name: Display name.
            stops: Stops in travel order.
            class_base_fares: Class code -> fare per 100 distance units.
            class_capacity: Class code -> number of seats.
            running_days: Weekday numbers the train runs on (Monday = 0).
        """
        self.train_id = train_id
        self.name = name
        self.route = Route(stops)
        self._base_fares: Dict[str, Decimal] = {
            cls: Decimal(str(fare)) for cls, fare in class_base_fares.items()
        }
        self.running_days = frozenset(running_days)
        self._inventory: Dict[str, SeatInventory] = {
            cls: SeatInventory(capacity, cls) for cls, capacity in class_capacity.items()
        }

    def __repr__(self) -> str:
        return f"Train({self.train_id!r}, {self.name!r})"

    @property
    def stops(self) -> List[Station]:
        return self.route.stops

    @property
    def travel_classes(self) -> List[str]:
        return sorted(self._inventory)

    @property
    def first_departure(self) -> time:
        return self.route.origin.departure_time

    @property
    def last_arrival(self) -> time:
        return self.route.terminus.arrival_time

    def has_class(self, travel_class: str) -> bool:
        return travel_class in self._inventory and travel_class in self._base_fares

    def serves(self, source_code: str, destination_code: str) -> bool:
        return self.route.serves(source_code, destination_code)

    def runs_on(self, weekday: int) -> bool:
        return weekday in self.running_days

    def get_fare(self, travel_class: str, source_code: str, destination_code: str) -> Decimal:
        """
        Fare for one journey between two stations.

        Callers must check ``serves`` first; a reversed pair yields a negative
        fare.

        Raises:
            KeyError: If the class has no base fare.
            InvalidRoute: If either station is not on the route.
        """
        base_fare = self._base_fares[travel_class]
        distance = self.route.segment_distance(source_code, destination_code)
        return base_fare * distance / FARE_DISTANCE_UNIT

    def assign_seats(self, travel_class: str, count: int) -> List[str]:
        return self._inventory[travel_class].assign(count)

    def release_seats(self, travel_class: str, seats: Iterable[str]) -> None:
        self._inventory[travel_class].release(seats)

    def available_seats(self, travel_class: str) -> int:
        return self._inventory[travel_class].available_count

    def capacity(self, travel_class: str) -> int:
        return self._inventory[travel_class].capacity

    def free_seats(self, travel_class: str) -> List[str]:
        return self._inventory[travel_class].free_seats()
