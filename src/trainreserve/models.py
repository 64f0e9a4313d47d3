"""Data models for the train reservation system."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional

from .exceptions import ReservationError


@dataclass(frozen=True)
class Station:
    """A stop on a train's route."""
    code: str
    name: str
    arrival_time: time
    departure_time: time
    distance: int  # Cumulative distance from the origin


@dataclass
class Passenger:
    """A traveller on a booking. The seat is filled in when the booking is confirmed."""
    name: str
    seat: Optional[str] = None


@dataclass
class Booking:
    """A confirmed reservation held in the ledger."""
    booking_id: str
    train_id: str
    user_id: str
    passengers: List[Passenger]
    travel_class: str
    source_code: str
    destination_code: str
    travel_date: date
    fare: Decimal
    is_tatkal: bool = False
    booked_at: datetime = field(default_factory=datetime.now)

    @property
    def assigned_seats(self) -> List[str]:
        """Seats held by the booking, parallel to ``passengers``."""
        return [p.seat for p in self.passengers]

    @property
    def is_empty(self) -> bool:
        return not self.passengers

    def remove_passengers(self, names: Iterable[str]) -> List[str]:
        """
        Remove passengers by name and return the seats they held.

        Each listed name removes the first remaining passenger with that name,
        so a name listed twice removes two passengers sharing it. Names with
        no match are ignored.

        Args:
            names: Passenger names to remove.

        Returns:
            Seats of the removed passengers, in the order the names were given.
        """
        released: List[str] = []
        for name in names:
            for index, passenger in enumerate(self.passengers):
                if passenger.name == name:
                    released.append(passenger.seat)
                    del self.passengers[index]
                    break
        return released


class FailureKind(Enum):
    """Reasons a booking request can be rejected."""
    TRAIN_NOT_FOUND = "train_not_found"
    INSUFFICIENT_CAPACITY = "insufficient_capacity"
    TATKAL_WINDOW_VIOLATION = "tatkal_window_violation"
    INVALID_ROUTE = "invalid_route"


@dataclass
class BookingResult:
    """Outcome of a booking request: either a booking or a failure kind."""
    booking: Optional[Booking] = None
    failure: Optional[FailureKind] = None
    error: Optional[ReservationError] = None

    @property
    def ok(self) -> bool:
        return self.booking is not None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""

    @classmethod
    def confirmed(cls, booking: Booking) -> "BookingResult":
        return cls(booking=booking)

    @classmethod
    def rejected(cls, failure: FailureKind, error: ReservationError) -> "BookingResult":
        return cls(failure=failure, error=error)

    def unwrap(self) -> Booking:
        """Return the booking, or raise the error that rejected the request."""
        if self.booking is None:
            raise self.error
        return self.booking
