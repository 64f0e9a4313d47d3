"""Simulate concurrent users booking and cancelling seats."""

import logging
import random
import sys
import threading
from datetime import date, timedelta
from pathlib import Path

# Add src to path so we can import trainreserve
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from trainreserve import BookingEngine

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).parent / "data" / "trains.csv"

# (source, destination, class) journeys each simulated user picks from
JOURNEYS = [
    ("NDLS", "BCT", "3A"),
    ("SBC", "TVC", "SL"),
    ("PURI", "NDLS", "SL"),
]


def next_running_date(engine: BookingEngine, source: str, destination: str) -> date:
    """First date within a week on which some train serves the journey."""
    day = date.today()
    for offset in range(7):
        candidate = day + timedelta(days=offset)
        if engine.search_trains(source, destination, candidate):
            return candidate
    return day


def simulate_user(engine: BookingEngine, user_id: str, journey: tuple, rounds: int = 3):
    """
    Search, book and sometimes cancel, the way one user would.

    Args:
        engine: Shared booking engine.
        user_id: Simulated user's id.
        journey: (source, destination, class) tuple.
        rounds: Number of booking attempts.
    """
    source, destination, travel_class = journey
    travel_date = next_running_date(engine, source, destination)

    for round_number in range(rounds):
        trains = engine.search_trains(source, destination, travel_date, travel_class)
        if not trains:
            logger.info(f"{user_id}: no trains from {source} to {destination} on {travel_date}")
            return

        train = engine.sort_trains_by_departure_time(trains)[0]
        party = [f"{user_id}-P{round_number}-{i}" for i in range(random.randint(1, 4))]
        result = engine.book_tickets(
            train.train_id, user_id, party, travel_class, source, destination, travel_date
        )
        if not result.ok:
            logger.info(f"{user_id}: booking failed: {result.message}")
            continue

        booking = result.booking
        if random.random() < 0.3:
            engine.cancel_booking(user_id, booking.booking_id)
        elif len(booking.passengers) > 1 and random.random() < 0.3:
            engine.cancel_booking(user_id, booking.booking_id, [booking.passengers[0].name])


def main(users: int = 6):
    engine = BookingEngine(trains_path=str(DATA_FILE))

    threads = [
        threading.Thread(
            target=simulate_user,
            args=(engine, f"USER{i + 1}", JOURNEYS[i % len(JOURNEYS)]),
        )
        for i in range(users)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    print(f"\n{'='*70}")
    for i in range(users):
        user_id = f"USER{i + 1}"
        for booking in engine.get_bookings(user_id):
            seats = ", ".join(booking.assigned_seats)
            print(
                f"{user_id}: train {booking.train_id} {booking.source_code}→{booking.destination_code} "
                f"class {booking.travel_class} seats [{seats}] fare {booking.fare}"
            )
    print(f"{'='*70}\n")


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 6)
