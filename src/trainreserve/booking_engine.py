"""Main BookingEngine class."""

import logging
import threading
import uuid
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .exceptions import (
    InsufficientCapacity,
    InvalidRoute,
    TatkalWindowViolation,
    TrainAlreadyRegistered,
    TrainNotFound,
)
from .ledger import ReservationLedger
from .models import Booking, BookingResult, FailureKind, Passenger, Station
from .train import Train
from .train_loader import TrainLoader

logger = logging.getLogger(__name__)

# Tatkal bookings are accepted from TATKAL_WINDOW_START up to, not including, TATKAL_WINDOW_END
TATKAL_WINDOW_START = time(10, 0)
TATKAL_WINDOW_END = time(12, 0)
TATKAL_SURCHARGE = Decimal("1.30")
FARE_QUANTUM = Decimal("0.01")


class KeyedLocks:
    """Hands out one lock per key, creating it on first use."""

    def __init__(self):
        self._locks: Dict[Tuple[str, ...], threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, *key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


class BookingEngine:
    """
    Books and cancels seats on registered trains.

    This class provides methods to:
    - Search trains serving a station pair on a given date
    - Book seats, with the tatkal surcharge and time window
    - Cancel whole bookings or individual passengers
    - Read schedules and a user's bookings

    Booking and cancellation on the same train and class are serialized by a
    per (train, class) lock. Searches and schedule reads take no lock and may
    see seat counts that are already out of date.
    """

    def __init__(
        self,
        trains: Optional[Iterable[Train]] = None,
        trains_path: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
        tatkal_window: Tuple[time, time] = (TATKAL_WINDOW_START, TATKAL_WINDOW_END),
        tatkal_surcharge: Decimal = TATKAL_SURCHARGE,
    ):
        """
        Initialize the engine.

        Args:
            trains: Trains to register up front.
            trains_path: Optional train definition file to load on init.
            clock: Returns the current time; used for the tatkal window check.
            tatkal_window: Daily [start, end) window for tatkal bookings.
            tatkal_surcharge: Multiplier applied to tatkal fares.
        """
        self._trains: Dict[str, Train] = {}
        self._ledger = ReservationLedger()
        self._locks = KeyedLocks()
        self._registry_lock = threading.Lock()
        self._clock = clock or datetime.now
        self.tatkal_window = tatkal_window
        self.tatkal_surcharge = tatkal_surcharge

        for train in trains or []:
            self.add_train(train)

        if trains_path:
            self.load_trains_from_file(trains_path)

    # Registry

    def add_train(self, train: Train) -> None:
        """
        Register a train.

        A train with the same id is replaced only while no booking holds its
        seats; otherwise the held seats would be handed out again.

        Raises:
            TrainAlreadyRegistered: If the id is registered and has bookings.
        """
        with self._registry_lock:
            if train.train_id in self._trains:
                if any(b.train_id == train.train_id for b in self._ledger.all_bookings()):
                    raise TrainAlreadyRegistered(train.train_id)
                logger.warning(f"Replacing existing definition of train {train.train_id}")
            self._trains[train.train_id] = train

    def load_trains_from_file(self, path: str) -> int:
        """Load train definitions from a file. Returns the number of trains added."""
        trains = TrainLoader().load_from_file(path)
        for train in trains:
            self.add_train(train)
        return len(trains)

    def load_trains_from_url(self, url: str) -> int:
        """Download train definitions and register them. Returns the number added."""
        trains = TrainLoader().load_from_url(url)
        for train in trains:
            self.add_train(train)
        return len(trains)

    @property
    def trains(self) -> List[Train]:
        return list(self._trains.values())

    def get_train(self, train_id: str) -> Train:
        """
        Get a train by id.

        Raises:
            TrainNotFound: If no train has this id.
        """
        if train_id not in self._trains:
            raise TrainNotFound(train_id)
        return self._trains[train_id]

    # Queries

    def search_trains(
        self,
        source_code: str,
        destination_code: str,
        travel_date: date,
        travel_class: Optional[str] = None,
    ) -> List[Train]:
        """
        Find trains running from source to destination on a date.

        Seat availability is not checked, so a returned train may still be
        full when booked.

        Args:
            source_code: Boarding station code.
            destination_code: Alighting station code.
            travel_date: Date of travel; only its weekday matters.
            travel_class: If given, skip trains without this class.

        Returns:
            Matching trains in registration order.
        """
        weekday = travel_date.weekday()
        results = []
        for train in list(self._trains.values()):
            if not train.serves(source_code, destination_code) or not train.runs_on(weekday):
                continue
            if travel_class is not None and not train.has_class(travel_class):
                continue
            results.append(train)
        return results

    def get_bookings(self, user_id: str) -> List[Booking]:
        return self._ledger.bookings_for(user_id)

    def get_train_schedule(self, train_id: str) -> List[Station]:
        """All stops of a train in travel order; empty for an unknown train."""
        train = self._trains.get(train_id)
        return train.stops if train else []

    def available_seats(self, train_id: str, travel_class: str) -> int:
        return self.get_train(train_id).available_seats(travel_class)

    @staticmethod
    def sort_trains_by_departure_time(trains: Sequence[Train], ascending: bool = True) -> List[Train]:
        """Stable sort on the departure time from the first stop."""
        return sorted(trains, key=lambda t: t.first_departure, reverse=not ascending)

    @staticmethod
    def sort_trains_by_arrival_time(trains: Sequence[Train], ascending: bool = True) -> List[Train]:
        """Stable sort on the arrival time at the last stop."""
        return sorted(trains, key=lambda t: t.last_arrival, reverse=not ascending)

    # Booking

    def in_tatkal_window(self, moment: datetime) -> bool:
        start, end = self.tatkal_window
        return start <= moment.time() < end

    def book_tickets(
        self,
        train_id: str,
        user_id: str,
        passengers: Sequence[Union[str, Passenger]],
        travel_class: str,
        source_code: str,
        destination_code: str,
        travel_date: date,
        is_tatkal: bool = False,
    ) -> BookingResult:
        """
        Reserve one seat per passenger and record the booking.

        Either the booking is confirmed in full or nothing changes.

        Args:
            train_id: Train to book on.
            user_id: Owner of the booking.
            passengers: Passenger names or Passenger objects, in seat order.
            travel_class: Class code (e.g., "SL").
            source_code: Boarding station code.
            destination_code: Alighting station code.
            travel_date: Date of travel.
            is_tatkal: Book under tatkal: surcharge applies and the request
                must be made inside the daily tatkal window.

        Returns:
            BookingResult holding the booking, or the reason it was rejected.

        Raises:
            ValueError: If the passenger list is empty.
        """
        if not passengers:
            raise ValueError("At least one passenger is required")
        names = [p.name if isinstance(p, Passenger) else p for p in passengers]

        try:
            train = self.get_train(train_id)
        except TrainNotFound as e:
            return self._reject(FailureKind.TRAIN_NOT_FOUND, e)

        if is_tatkal:
            now = self._clock()
            if not self.in_tatkal_window(now):
                start, end = self.tatkal_window
                error = TatkalWindowViolation(
                    f"Tatkal booking is only allowed between {start:%H:%M} and {end:%H:%M}, "
                    f"attempted at {now:%H:%M}"
                )
                return self._reject(FailureKind.TATKAL_WINDOW_VIOLATION, error)

        if not train.has_class(travel_class):
            error = InvalidRoute(f"Train {train_id} has no class {travel_class}")
            return self._reject(FailureKind.INVALID_ROUTE, error)
        if not train.serves(source_code, destination_code):
            error = InvalidRoute(f"Train {train_id} does not run from {source_code} to {destination_code}")
            return self._reject(FailureKind.INVALID_ROUTE, error)

        with self._locks.get(train_id, travel_class):
            try:
                seats = train.assign_seats(travel_class, len(names))
            except InsufficientCapacity as e:
                return self._reject(FailureKind.INSUFFICIENT_CAPACITY, e)

            fare = train.get_fare(travel_class, source_code, destination_code)
            if is_tatkal:
                fare *= self.tatkal_surcharge

            booking = Booking(
                booking_id=str(uuid.uuid4()),
                train_id=train_id,
                user_id=user_id,
                passengers=[Passenger(name, seat) for name, seat in zip(names, seats)],
                travel_class=travel_class,
                source_code=source_code,
                destination_code=destination_code,
                travel_date=travel_date,
                fare=fare.quantize(FARE_QUANTUM, rounding=ROUND_HALF_UP),
                is_tatkal=is_tatkal,
                booked_at=self._clock(),
            )
            self._ledger.add(booking)

        logger.info(
            f"Booked {len(seats)} seats {seats} on train {train_id} class {travel_class} "
            f"for {user_id} (booking {booking.booking_id}, fare {booking.fare})"
        )
        return BookingResult.confirmed(booking)

    @staticmethod
    def _reject(failure: FailureKind, error: Exception) -> BookingResult:
        logger.warning(f"Booking rejected ({failure.value}): {error}")
        return BookingResult.rejected(failure, error)

    # Cancellation

    def cancel_booking(
        self,
        user_id: str,
        booking_id: str,
        passenger_names: Optional[Iterable[str]] = None,
    ) -> bool:
        """
        Cancel a whole booking, or only the named passengers on it.

        Freed seats go back to the train's inventory. A booking left with no
        passengers is removed from the ledger. Passengers are matched by name;
        each name cancels the first remaining passenger that has it.

        Args:
            user_id: Owner of the booking.
            booking_id: Booking to cancel.
            passenger_names: Names to cancel. None or empty cancels everyone.

        Returns:
            True if the booking was found, False otherwise.
        """
        if not self._ledger.has_user(user_id):
            return False

        booking = self._ledger.find(user_id, booking_id)
        if booking is None:
            return False

        names = list(passenger_names or [])
        train = self._trains[booking.train_id]

        with self._locks.get(booking.train_id, booking.travel_class):
            # A concurrent cancellation may have removed it while we waited
            if self._ledger.find(user_id, booking_id) is not booking:
                return False

            if not names:
                released = booking.assigned_seats
                self._ledger.remove(booking)
            else:
                released = booking.remove_passengers(names)
                if booking.is_empty:
                    self._ledger.remove(booking)

            train.release_seats(booking.travel_class, released)

        logger.info(
            f"Cancelled seats {released} of booking {booking_id} on train {booking.train_id} "
            f"for {user_id}"
        )
        return True
