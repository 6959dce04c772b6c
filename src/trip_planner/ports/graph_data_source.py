"""
Graph Data Source port interface.

Defines the contract the planners use to read the airport network. The
network is never handed over as an adjacency structure: planners ask for
the edges of one airport at a time while they expand their frontier.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Set

from src.trip_planner.schemas.airport import Airport
from src.trip_planner.schemas.flight import Flight
from src.trip_planner.schemas.route import Route
from src.trip_planner.schemas.stats import NetworkStats


class TripPlannerError(Exception):
    """Base exception for trip planner errors."""

    pass


class DataAccessError(TripPlannerError):
    """
    Raised when the underlying store cannot be read or written.

    Adapters chain the driver exception (`raise ... from e`). Planners never
    catch it: a search that lost part of the graph cannot be trusted.
    """

    pass


class GraphDataSource(ABC):
    """
    Abstract interface for airport network sources.

    Lookups for unknown codes return None or an empty list, never an error.
    Results must stay consistent for the duration of one planning call.

    Implementations:
    - SQLiteGraphDataSource: persistent store, one query per lookup
    - InMemoryGraphDataSource: dict-backed, for tests and dry runs
    - NetworkSnapshot: read-once copy of another source
    """

    @abstractmethod
    def all_airports(self) -> Set[Airport]:
        """
        Return every airport in the network.

        Raises:
            DataAccessError: If the store is unavailable.
        """
        ...

    @abstractmethod
    def get_airport(self, code: str) -> Optional[Airport]:
        """
        Look up an airport by IATA code.

        Returns:
            The airport, or None if the code is unknown.

        Raises:
            DataAccessError: If the store is unavailable.
        """
        ...

    @abstractmethod
    def routes_from(self, code: str) -> List[Route]:
        """
        Return routes leaving the airport, in store order.

        Raises:
            DataAccessError: If the store is unavailable.
        """
        ...

    @abstractmethod
    def flights_from(self, code: str) -> List[Flight]:
        """
        Return flights leaving the airport, in store order.

        Raises:
            DataAccessError: If the store is unavailable.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this data source."""
        ...

    @property
    def is_available(self) -> bool:
        """
        Check if the data source is currently available.

        Default implementation returns True. Override for sources
        that need connection health checks.
        """
        return True

    # ------------------------------------------------------------------
    # Derived lookups. Defaults are built on the primitives above;
    # adapters with a query language override them.
    # ------------------------------------------------------------------

    def get_route(self, origin_code: str, destination_code: str) -> Optional[Route]:
        """Return the first route from origin to destination, or None."""
        for route in self.routes_from(origin_code):
            if route.destination_code == destination_code:
                return route
        return None

    def flights_between(self, origin_code: str, destination_code: str) -> List[Flight]:
        """Return all flights serving origin -> destination, in store order."""
        return [
            flight
            for flight in self.flights_from(origin_code)
            if flight.destination_code == destination_code
        ]

    def has_direct_flight(self, origin_code: str, destination_code: str) -> bool:
        """Check whether at least one flight serves origin -> destination."""
        return any(
            flight.destination_code == destination_code
            for flight in self.flights_from(origin_code)
        )

    def stats(self) -> NetworkStats:
        """Count airports, routes and flights in the network."""
        airports = self.all_airports()
        return NetworkStats(
            total_airports=len(airports),
            total_routes=sum(len(self.routes_from(a.code)) for a in airports),
            total_flights=sum(len(self.flights_from(a.code)) for a in airports),
        )
