"""Per-user collection of confirmed bookings."""

import threading
from typing import Dict, List, Optional

from .models import Booking


class ReservationLedger:
    """Maps each user to their bookings in the order they were made."""

    def __init__(self):
        self._bookings: Dict[str, List[Booking]] = {}
        self._lock = threading.Lock()

    def add(self, booking: Booking) -> None:
        with self._lock:
            self._bookings.setdefault(booking.user_id, []).append(booking)

    def has_user(self, user_id: str) -> bool:
        return user_id in self._bookings

    def bookings_for(self, user_id: str) -> List[Booking]:
        """Snapshot of a user's bookings; empty if the user never booked."""
        with self._lock:
            return list(self._bookings.get(user_id, []))

    def find(self, user_id: str, booking_id: str) -> Optional[Booking]:
        with self._lock:
            for booking in self._bookings.get(user_id, []):
                if booking.booking_id == booking_id:
                    return booking
        return None

    def remove(self, booking: Booking) -> bool:
        """Drop a booking from its user's entry. The user entry itself is kept."""
        with self._lock:
            bookings = self._bookings.get(booking.user_id, [])
            for index, existing in enumerate(bookings):
                if existing is booking:
                    del bookings[index]
                    return True
        return False

    def all_bookings(self) -> List[Booking]:
        with self._lock:
            return [b for bookings in self._bookings.values() for b in bookings]
