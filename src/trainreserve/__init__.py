"""trainreserve - Seat reservation ledger for trains with per-class seat pools."""

__version__ = "0.1.0"

from .models import Station, Passenger, Booking, BookingResult, FailureKind
from .exceptions import (
    ReservationError,
    TrainNotFound,
    InsufficientCapacity,
    TatkalWindowViolation,
    InvalidRoute,
    TrainDefinitionError,
    TrainAlreadyRegistered,
)
from .route import Route
from .seat_inventory import SeatInventory
from .train import Train
from .ledger import ReservationLedger
from .booking_engine import BookingEngine
from .train_loader import TrainLoader

__all__ = [
    "BookingEngine",
    "TrainLoader",
    "Train",
    "Route",
    "SeatInventory",
    "ReservationLedger",
    "Station",
    "Passenger",
    "Booking",
    "BookingResult",
    "FailureKind",
    "ReservationError",
    "TrainNotFound",
    "InsufficientCapacity",
    "TatkalWindowViolation",
    "InvalidRoute",
    "TrainDefinitionError",
    "TrainAlreadyRegistered",
]
