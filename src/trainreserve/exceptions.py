"""Exception hierarchy for the reservation system."""


class ReservationError(Exception):
    """Base class for all reservation errors."""


class TrainNotFound(ReservationError, LookupError):
    """Raised when a train id is not registered."""

    def __init__(self, train_id: str):
        self.train_id = train_id
        super().__init__(f"Train {train_id} not found")


class InsufficientCapacity(ReservationError):
    """Raised when a class has fewer free seats than requested."""

    def __init__(self, requested: int, available: int, travel_class: str = ""):
        self.requested = requested
        self.available = available
        self.travel_class = travel_class
        label = f" in class {travel_class}" if travel_class else ""
        super().__init__(f"Requested {requested} seats{label}, only {available} available")


class TatkalWindowViolation(ReservationError):
    """Raised when a tatkal booking is attempted outside the daily window."""


class InvalidRoute(ReservationError, ValueError):
    """Raised for malformed routes or station pairs a train does not serve."""


class TrainDefinitionError(ReservationError, ValueError):
    """Raised when a train definition record cannot be parsed."""


class TrainAlreadyRegistered(ReservationError, ValueError):
    """Raised when replacing a train that still has bookings in the ledger."""

    def __init__(self, train_id: str):
        self.train_id = train_id
        super().__init__(f"Train {train_id} is already registered and has active bookings")
