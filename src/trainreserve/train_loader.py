"""Loader for delimited train definition files."""

import csv
import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Tuple

import requests

from .exceptions import TrainDefinitionError
from .models import Station
from .parsing import parse_clock_time, parse_weekdays
from .train import Train

logger = logging.getLogger(__name__)

# Separates the fields of one pair, e.g. "SL::500"
FIELD_DELIMITER = "::"
# Separates pairs in a list, e.g. "SL::500;3A::1200"
PAIR_DELIMITER = ";"
DEFAULT_TIMEOUT = 10

COLUMNS = ("train_number", "train_name", "class_fares", "class_capacity", "running_days", "stops")


class TrainLoader:
    """
    Parses train definitions into Train objects.

    Each record has six columns: train number, train name, ``class::fare``
    pairs, ``class::capacity`` pairs, weekday abbreviations and stops written
    as ``code::name::HH:MM::HH:MM::distance`` (arrival, departure, distance).
    """

    def __init__(self, field_delimiter: str = FIELD_DELIMITER, pair_delimiter: str = PAIR_DELIMITER):
        self.field_delimiter = field_delimiter
        self.pair_delimiter = pair_delimiter

    def load_from_file(self, path: str) -> List[Train]:
        """Load trains from a local CSV file with a header row."""
        logger.info(f"Loading train definitions from {path}")
        with open(path, "r", encoding="utf-8") as f:
            return self.load_from_string(f.read())

    def load_from_url(self, url: str, timeout: int = DEFAULT_TIMEOUT) -> List[Train]:
        """Download and load train definitions over HTTP."""
        logger.info(f"Downloading train definitions from {url}")
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to download train definitions: {e}")
            raise
        return self.load_from_string(response.text)

    def load_from_string(self, csv_content: str) -> List[Train]:
        """
        Parse CSV content into trains.

        Blank lines are skipped.

        Raises:
            TrainDefinitionError: If the header is missing a column or a row
                cannot be parsed. The message names the offending line.
        """
        reader = csv.DictReader(io.StringIO(csv_content))
        missing = [c for c in COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise TrainDefinitionError(f"Missing columns: {', '.join(missing)}")

        trains: List[Train] = []
        for row in reader:
            if not any(isinstance(value, str) and value.strip() for value in row.values()):
                continue
            try:
                trains.append(self._parse_row(row))
            except (ValueError, KeyError, IndexError, AttributeError) as e:
                logger.error(f"Invalid train definition on line {reader.line_num}: {e}")
                raise TrainDefinitionError(f"Line {reader.line_num}: {e}") from e

        logger.info(f"Loaded {len(trains)} trains")
        return trains

    def _parse_row(self, row: Dict[str, str]) -> Train:
        train_id = row["train_number"].strip()
        if not train_id:
            raise ValueError("empty train number")

        fares = {cls: self._parse_fare(value) for cls, value in self._pairs(row["class_fares"])}
        capacity = {cls: int(value) for cls, value in self._pairs(row["class_capacity"])}
        unpriced = set(capacity) - set(fares)
        if unpriced:
            raise ValueError(f"no fare for classes {sorted(unpriced)}")

        days = parse_weekdays(row["running_days"].split(self.pair_delimiter))
        stops = [self._parse_stop(spec) for spec in self._items(row["stops"])]

        return Train(train_id, row["train_name"].strip(), stops, fares, capacity, days)

    def _items(self, value: str) -> List[str]:
        return [item.strip() for item in value.split(self.pair_delimiter) if item.strip()]

    def _pairs(self, value: str) -> List[Tuple[str, str]]:
        pairs = []
        for item in self._items(value):
            key, val = item.split(self.field_delimiter)
            pairs.append((key.strip(), val.strip()))
        return pairs

    @staticmethod
    def _parse_fare(value: str) -> Decimal:
        try:
            return Decimal(value)
        except InvalidOperation:
            raise ValueError(f"invalid fare {value!r}")

    def _parse_stop(self, spec: str) -> Station:
        code, name, arrival, departure, distance = spec.split(self.field_delimiter)
        return Station(
            code=code.strip(),
            name=name.strip(),
            arrival_time=parse_clock_time(arrival),
            departure_time=parse_clock_time(departure),
            distance=int(distance.strip()),
        )
