"""Per-class pool of free seats for one train."""

import heapq
import logging
import threading
from typing import Iterable, List, Set, Tuple

from .exceptions import InsufficientCapacity

logger = logging.getLogger(__name__)


def seat_sort_key(seat: str) -> Tuple[int, int, str]:
    """Order numeric seat ids by value, ahead of any non-numeric ids."""
    if seat.isdecimal():
        return (0, int(seat), seat)
    return (1, 0, seat)


class SeatInventory:
    """
    Free seat identifiers for one travel class of a train.

    Seats are handed out lowest first, so two inventories in the same state
    always assign the same seats.
    """

    def __init__(self, capacity: int, travel_class: str = ""):
        """
        Initialize the inventory with seats "1" to ``capacity``.

        Args:
            capacity: Number of seats in the class.
            travel_class: Class code, used in error messages and logs.
        """
        if capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self.travel_class = travel_class
        self._lock = threading.Lock()
        self._free: Set[str] = {str(i) for i in range(1, capacity + 1)}
        self._heap: List[Tuple[Tuple[int, int, str], str]] = [
            (seat_sort_key(seat), seat) for seat in self._free
        ]
        heapq.heapify(self._heap)

    @property
    def available_count(self) -> int:
        return len(self._free)

    def free_seats(self) -> List[str]:
        """Return a sorted snapshot of the free seats."""
        with self._lock:
            return sorted(self._free, key=seat_sort_key)

    def assign(self, count: int) -> List[str]:
        """
        Take the ``count`` lowest free seats out of the pool.

        Either all requested seats are assigned or none are.

        Args:
            count: Number of seats, at least 1.

        Returns:
            The assigned seat identifiers, lowest first.

        Raises:
            ValueError: If count is less than 1.
            InsufficientCapacity: If fewer than ``count`` seats are free.
        """
        if count < 1:
            raise ValueError(f"Seat count must be at least 1, got {count}")

        with self._lock:
            if len(self._free) < count:
                raise InsufficientCapacity(count, len(self._free), self.travel_class)

            assigned = [heapq.heappop(self._heap)[1] for _ in range(count)]
            self._free.difference_update(assigned)

        logger.debug(f"Assigned seats {assigned} in class {self.travel_class}")
        return assigned

    def release(self, seats: Iterable[str]) -> None:
        """
        Return seats to the pool.

        Releasing a seat that is already free does nothing.
        """
        with self._lock:
            for seat in seats:
                if seat in self._free:
                    continue
                self._free.add(seat)
                heapq.heappush(self._heap, (seat_sort_key(seat), seat))
        logger.debug(f"Released seats in class {self.travel_class}")
