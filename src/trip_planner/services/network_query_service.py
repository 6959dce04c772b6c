"""
Network Query Service - direct lookups on the airport network.

Answers the non-planning questions: is there a direct connection, which
route joins two airports, which flights serve a route, how big is the
network.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from src.trip_planner.schemas.airport import Airport
from src.trip_planner.schemas.flight import Flight
from src.trip_planner.schemas.route import Route
from src.trip_planner.schemas.stats import NetworkStats

if TYPE_CHECKING:
    from src.trip_planner.ports.graph_data_source import GraphDataSource

logger = logging.getLogger(__name__)


class NetworkQueryService:
    """
    Stateless query facade over a GraphDataSource.

    Attributes:
        _source: Network the service reads from.
    """

    def __init__(self, source: GraphDataSource) -> None:
        self._source = source

    def has_direct_route(self, from_airport: Airport, to_airport: Airport) -> bool:
        """Check whether any flight connects the two airports directly."""
        connected = self._source.has_direct_flight(from_airport.code, to_airport.code)
        logger.debug(
            "Direct connection %s -> %s: %s", from_airport.code, to_airport.code, connected
        )
        return connected

    def get_route(self, origin_code: str, destination_code: str) -> Optional[Route]:
        """Return the route joining two airport codes, or None."""
        return self._source.get_route(origin_code, destination_code)

    def get_flights(self, route: Route) -> List[Flight]:
        """Return every flight serving the route's airport pair."""
        flights = self._source.flights_between(route.origin_code, route.destination_code)
        logger.debug("Found %d flights on route %s", len(flights), route)
        return flights

    def stats(self) -> NetworkStats:
        """Count airports, routes and flights."""
        return self._source.stats()
