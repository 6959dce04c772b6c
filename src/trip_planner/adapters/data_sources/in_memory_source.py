"""
In-memory data source.

Dict-backed GraphDataSource that keeps insertion order for routes and
flights, so "first encountered" tie-breaking in the planners is fully
determined by the order edges were added.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

import pandas as pd

from src.trip_planner.ports.graph_data_source import GraphDataSource
from src.trip_planner.schemas.airport import Airport, airports_from_df
from src.trip_planner.schemas.flight import Flight, flights_from_df
from src.trip_planner.schemas.route import Route, routes_from_df

logger = logging.getLogger(__name__)


class InMemoryGraphDataSource(GraphDataSource):
    """
    Data source holding the whole network in plain dictionaries.

    Duplicate airports (same code) and exact duplicate routes or flights
    are ignored, matching the uniqueness rules of the SQLite store.

    Example:
        >>> source = InMemoryGraphDataSource(
        ...     airports=[Airport("LHR"), Airport("CDG")],
        ...     routes=[Route("LHR", "CDG", 460)],
        ... )
        >>> source.routes_from("LHR")
        [Route(origin_code='LHR', destination_code='CDG', distance_in_kilometers=460)]
    """

    def __init__(
        self,
        airports: Iterable[Airport] = (),
        routes: Iterable[Route] = (),
        flights: Iterable[Flight] = (),
    ) -> None:
        self._airports: Dict[str, Airport] = {}
        self._routes: Dict[str, List[Route]] = {}
        self._flights: Dict[str, List[Flight]] = {}

        for airport in airports:
            self.add_airport(airport)
        for route in routes:
            self.add_route(route)
        for flight in flights:
            self.add_flight(flight)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_airport(self, airport: Airport) -> bool:
        """Store an airport; returns False if the code already exists."""
        if airport.code in self._airports:
            logger.debug("Airport %s already stored, skipping", airport.code)
            return False
        self._airports[airport.code] = airport
        return True

    def add_route(self, route: Route) -> bool:
        """Store a route; returns False for an exact duplicate."""
        bucket = self._routes.setdefault(route.origin_code, [])
        if route in bucket:
            logger.debug("Route %s already stored, skipping", route)
            return False
        bucket.append(route)
        return True

    def add_flight(self, flight: Flight) -> bool:
        """Store a flight; returns False for an exact duplicate."""
        bucket = self._flights.setdefault(flight.origin_code, [])
        if flight in bucket:
            logger.debug("Flight %s already stored, skipping", flight)
            return False
        bucket.append(flight)
        return True

    def write_airports(self, airports_df: pd.DataFrame) -> int:
        return sum(self.add_airport(a) for a in airports_from_df(airports_df))

    def write_routes(self, routes_df: pd.DataFrame) -> int:
        return sum(self.add_route(r) for r in routes_from_df(routes_df))

    def write_flights(self, flights_df: pd.DataFrame) -> int:
        return sum(self.add_flight(f) for f in flights_from_df(flights_df))

    def clear(self) -> None:
        """Remove all airports, routes and flights."""
        self._airports.clear()
        self._routes.clear()
        self._flights.clear()

    # ------------------------------------------------------------------
    # GraphDataSource
    # ------------------------------------------------------------------

    def all_airports(self) -> Set[Airport]:
        return set(self._airports.values())

    def get_airport(self, code: str) -> Optional[Airport]:
        return self._airports.get(code)

    def routes_from(self, code: str) -> List[Route]:
        return list(self._routes.get(code, ()))

    def flights_from(self, code: str) -> List[Flight]:
        return list(self._flights.get(code, ()))

    @property
    def name(self) -> str:
        return "In-Memory"
