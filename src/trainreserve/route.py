"""Ordered stops served by a train."""

from typing import Dict, Iterable, List, Tuple

from .exceptions import InvalidRoute
from .models import Station


class Route:
    """
    An ordered, read-only sequence of stops.

    Stop order defines the direction of travel. Distances are cumulative from
    the first stop and never decrease along the route.
    """

    def __init__(self, stops: Iterable[Station]):
        """
        Build a route from its stops in travel order.

        Raises:
            InvalidRoute: If there are no stops, a station code repeats, or a
                distance is negative or smaller than the previous stop's.
        """
        self._stops: Tuple[Station, ...] = tuple(stops)
        if not self._stops:
            raise InvalidRoute("A route needs at least one stop")

        self._index: Dict[str, int] = {}
        previous = 0
        for position, stop in enumerate(self._stops):
            if stop.code in self._index:
                raise InvalidRoute(f"Station {stop.code} appears twice in route")
            if stop.distance < previous:
                raise InvalidRoute(
                    f"Distance at {stop.code} ({stop.distance}) is less than previous stop ({previous})"
                )
            self._index[stop.code] = position
            previous = stop.distance

    @property
    def stops(self) -> List[Station]:
        return list(self._stops)

    @property
    def origin(self) -> Station:
        return self._stops[0]

    @property
    def terminus(self) -> Station:
        return self._stops[-1]

    def index_of(self, code: str) -> int:
        """Position of a station in the route. Raises InvalidRoute if absent."""
        if code not in self._index:
            raise InvalidRoute(f"Station {code} is not on this route")
        return self._index[code]

    def distance_of(self, code: str) -> int:
        return self._stops[self.index_of(code)].distance

    def serves(self, source_code: str, destination_code: str) -> bool:
        """True if both stations are on the route and source comes strictly first."""
        if source_code not in self._index or destination_code not in self._index:
            return False
        return self._index[source_code] < self._index[destination_code]

    def segment_distance(self, source_code: str, destination_code: str) -> int:
        return self.distance_of(destination_code) - self.distance_of(source_code)
