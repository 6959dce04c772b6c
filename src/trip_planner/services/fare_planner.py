"""
Fare Planner - priced flight itineraries under a selectable criterion.

Two strategies share one entry point:
- "shortest": distance-optimal route path, then the cheapest flight per leg
- "cheapest": Dijkstra over the flight multigraph weighted by fare
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from src.dijkstra.alg import cheapest_parallel_edges, shortest_path_tree
from src.dijkstra.reconstruction import reconstruct_path
from src.trip_planner.schemas.airport import Airport
from src.trip_planner.schemas.flight import Flight
from src.trip_planner.schemas.route import Route
from src.trip_planner.services.distance_planner import DistancePlanner

if TYPE_CHECKING:
    from src.trip_planner.ports.graph_data_source import GraphDataSource

logger = logging.getLogger(__name__)


class Criterion(str, Enum):
    """Optimisation objective of a trip plan."""

    SHORTEST = "shortest"
    CHEAPEST = "cheapest"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Criterion"]:
        """
        Match a criterion name case-insensitively.

        Returns:
            The criterion, or None for None, empty or unknown strings.
        """
        if not value:
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


def _fare(flight: Flight) -> Optional[int]:
    return flight.cost_in_euros


class FarePlanner:
    """
    Plans flight itineraries between two airports.

    Itineraries are all-or-nothing: if any leg cannot be priced the result
    is empty, never a partial list.

    Attributes:
        _source: Network the planner reads from.
        _distance_planner: Planner used by the "shortest" criterion.
    """

    def __init__(
        self,
        source: GraphDataSource,
        distance_planner: Optional[DistancePlanner] = None,
    ) -> None:
        self._source = source
        self._distance_planner = distance_planner or DistancePlanner(source)

    def plan_trip(
        self,
        from_airport: Optional[Airport],
        to_airport: Optional[Airport],
        criterion: Optional[str],
    ) -> List[Flight]:
        """
        Plan a flight itinerary.

        Args:
            from_airport: Origin airport.
            to_airport: Destination airport.
            criterion: "shortest" or "cheapest", case-insensitive.

        Returns:
            Flights in travel order. Empty when any argument is missing,
            the criterion is not recognised, no path exists, or a leg of
            the distance-optimal path has no priced flight.

        Raises:
            DataAccessError: If the data source fails during planning.
        """
        if from_airport is None or to_airport is None or criterion is None:
            return []

        selected = Criterion.parse(criterion)
        if selected is None:
            logger.debug("Unknown criterion %r, returning no itinerary", criterion)
            return []

        start = time.perf_counter()

        if selected is Criterion.SHORTEST:
            flights = self._find_shortest_flights(from_airport, to_airport)
        else:
            flights = self._find_cheapest_flights(from_airport, to_airport)

        logger.debug(
            "Planned %s trip %s -> %s: %d flights, %d € in %.3fms",
            selected.value,
            from_airport.code,
            to_airport.code,
            len(flights),
            sum(flight.cost_in_euros or 0 for flight in flights),
            (time.perf_counter() - start) * 1000,
        )
        return flights

    def _find_shortest_flights(self, from_airport: Airport, to_airport: Airport) -> List[Flight]:
        routes = self._distance_planner.find_shortest_path(from_airport, to_airport)
        if not routes:
            return []
        return self.map_routes_to_flights(routes)

    def _find_cheapest_flights(self, from_airport: Airport, to_airport: Airport) -> List[Flight]:
        predecessors = shortest_path_tree(
            source=from_airport,
            target=to_airport,
            vertices=self._source.all_airports(),
            out_edges=lambda airport: self._source.flights_from(airport.code),
            head=lambda flight: self._source.get_airport(flight.destination_code),
            weight=_fare,
            select_edges=lambda flights: cheapest_parallel_edges(
                flights,
                destination_of=lambda flight: flight.destination_code,
                weight=_fare,
            ),
        )
        return reconstruct_path(
            predecessors,
            source=from_airport,
            target=to_airport,
            tail=lambda flight: self._source.get_airport(flight.origin_code),
        )

    def map_routes_to_flights(self, routes: List[Route]) -> List[Flight]:
        """
        Price each route leg with its cheapest serving flight.

        Ties on fare keep the flight listed first by the data source.
        Flights without a fare never serve a leg.

        Returns:
            One flight per leg, or an empty list if any leg is unserved.
        """
        flights: List[Flight] = []

        for route in routes:
            candidates = [
                flight
                for flight in self._source.flights_from(route.origin_code)
                if flight.destination_code == route.destination_code
            ]
            cheapest = cheapest_parallel_edges(
                candidates,
                destination_of=lambda flight: flight.destination_code,
                weight=_fare,
            )
            if not cheapest:
                logger.debug(
                    "No priced flight for leg %s -> %s, dropping itinerary",
                    route.origin_code,
                    route.destination_code,
                )
                return []
            flights.append(cheapest[0])

        return flights
