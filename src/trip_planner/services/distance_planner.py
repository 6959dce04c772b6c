"""
Distance Planner - minimum total-distance path over the route graph.

Runs the shared Dijkstra routine with route distance as the weight,
expanding the graph lazily through the GraphDataSource.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, List, Optional

from src.dijkstra.alg import shortest_path_tree
from src.dijkstra.reconstruction import reconstruct_path
from src.trip_planner.schemas.airport import Airport
from src.trip_planner.schemas.route import Route

if TYPE_CHECKING:
    from src.trip_planner.ports.graph_data_source import GraphDataSource

logger = logging.getLogger(__name__)


class DistancePlanner:
    """
    Finds the shortest route sequence between two airports.

    Stateless between calls: distances, predecessors and the frontier live
    only inside find_shortest_path.

    Attributes:
        _source: Network the planner reads from.
    """

    def __init__(self, source: GraphDataSource) -> None:
        self._source = source

    def find_shortest_path(
        self,
        from_airport: Optional[Airport],
        to_airport: Optional[Airport],
    ) -> List[Route]:
        """
        Find the minimum-distance route sequence from one airport to another.

        Args:
            from_airport: Origin airport (None yields an empty result).
            to_airport: Destination airport (None yields an empty result).

        Returns:
            Routes in travel order. Empty when either airport is missing,
            when the destination is unreachable, or when origin and
            destination are the same airport.

        Raises:
            DataAccessError: If the data source fails during the search.
        """
        if from_airport is None or to_airport is None:
            return []

        start = time.perf_counter()

        predecessors = shortest_path_tree(
            source=from_airport,
            target=to_airport,
            vertices=self._source.all_airports(),
            out_edges=lambda airport: self._source.routes_from(airport.code),
            head=lambda route: self._source.get_airport(route.destination_code),
            weight=lambda route: route.distance_in_kilometers,
        )
        path = reconstruct_path(
            predecessors,
            source=from_airport,
            target=to_airport,
            tail=lambda route: self._source.get_airport(route.origin_code),
        )

        logger.debug(
            "Shortest path %s -> %s: %d legs, %d km in %.3fms",
            from_airport.code,
            to_airport.code,
            len(path),
            sum(route.distance_in_kilometers for route in path),
            (time.perf_counter() - start) * 1000,
        )
        return path
