"""
TripPlanner Use Case - Public API for the trip planning engine.

This module provides the main entry point for consumers. It acts as a
Facade/Factory, wiring the data source, planners and query service from
settings and exposing a code-based interface.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from src.trip_planner.adapters.data_sources.sqlite_source import SQLiteGraphDataSource
from src.trip_planner.adapters.ingestion.csv_loader import CsvNetworkLoader, IngestionReport
from src.trip_planner.adapters.repositories.network_snapshot import NetworkSnapshot
from src.trip_planner.config import Settings
from src.trip_planner.ports.graph_data_source import GraphDataSource
from src.trip_planner.ports.network_writer import NetworkWriter
from src.trip_planner.schemas.airport import Airport
from src.trip_planner.schemas.flight import Flight
from src.trip_planner.schemas.route import Route
from src.trip_planner.schemas.stats import NetworkStats
from src.trip_planner.services.distance_planner import DistancePlanner
from src.trip_planner.services.fare_planner import FarePlanner
from src.trip_planner.services.network_query_service import NetworkQueryService
from src.trip_planner.services.path_formatter import format_flight_trip, format_route

logger = logging.getLogger(__name__)


class TripPlanner:
    """
    Public API for trip planning.

    Example usage:
        >>> planner = TripPlanner(Settings(db_path="flightnetwork.db"))
        >>> lhr, bgy = planner.resolve_airport("LHR"), planner.resolve_airport("BGY")
        >>> planner.plan_and_format_trip(lhr, bgy, "cheapest")
        'LHR (Air France) → CDG (easyJet) → BGY (Total Cost: 190 €)'

    Attributes:
        _source: Backing data source.
        _snapshot_per_request: If True, each planning call runs against a
            fresh NetworkSnapshot of the source.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        data_source: Optional[GraphDataSource] = None,
    ) -> None:
        """
        Initialize the planner with optional custom dependencies.

        Args:
            settings: Application settings. Defaults to Settings().
            data_source: Custom data source. If None, uses SQLiteGraphDataSource
                at settings.db_path.
        """
        self._settings = settings or Settings()

        if data_source is not None:
            self._source = data_source
        else:
            self._source = SQLiteGraphDataSource(self._settings.db_path)

        self._snapshot_per_request = self._settings.snapshot_per_request
        self._query_service = NetworkQueryService(self._source)
        self._loader = CsvNetworkLoader()

        logger.info(
            "TripPlanner initialized with %s data source (snapshot per request: %s)",
            self._source.name,
            self._snapshot_per_request,
        )

    def _planning_source(self) -> GraphDataSource:
        if self._snapshot_per_request:
            return NetworkSnapshot.load(self._source)
        return self._source

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def resolve_airport(self, code: Optional[str]) -> Optional[Airport]:
        """
        Resolve a user-supplied airport code.

        Codes are trimmed and upper-cased before lookup.

        Returns:
            The airport, or None if the code is empty or unknown.
        """
        if code is None or not code.strip():
            return None
        return self._source.get_airport(code.strip().upper())

    def has_direct_route(self, from_airport: Airport, to_airport: Airport) -> bool:
        """Check whether a flight connects the two airports directly."""
        return self._query_service.has_direct_route(from_airport, to_airport)

    def get_route(self, origin_code: str, destination_code: str) -> Optional[Route]:
        """Return the route between two codes, or None."""
        return self._query_service.get_route(
            origin_code.strip().upper(), destination_code.strip().upper()
        )

    def get_flights(self, route: Route) -> List[Flight]:
        """Return the flights serving a route."""
        return self._query_service.get_flights(route)

    def stats(self) -> NetworkStats:
        """Count airports, routes and flights."""
        return self._query_service.stats()

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def find_shortest_path(
        self, from_airport: Optional[Airport], to_airport: Optional[Airport]
    ) -> List[Route]:
        """Minimum-distance route path; empty if none."""
        start = time.perf_counter()
        routes = DistancePlanner(self._planning_source()).find_shortest_path(
            from_airport, to_airport
        )
        logger.info(
            "Route plan %s -> %s: %d legs in %.3fms",
            from_airport,
            to_airport,
            len(routes),
            (time.perf_counter() - start) * 1000,
        )
        return routes

    def plan_trip(
        self,
        from_airport: Optional[Airport],
        to_airport: Optional[Airport],
        criterion: Optional[str],
    ) -> List[Flight]:
        """Flight itinerary for "shortest" or "cheapest"; empty if none."""
        start = time.perf_counter()
        flights = FarePlanner(self._planning_source()).plan_trip(
            from_airport, to_airport, criterion
        )
        logger.info(
            "Flight plan %s -> %s (%s): %d flights in %.3fms",
            from_airport,
            to_airport,
            criterion,
            len(flights),
            (time.perf_counter() - start) * 1000,
        )
        return flights

    def plan_and_format_route(
        self, from_airport: Optional[Airport], to_airport: Optional[Airport]
    ) -> str:
        """Plan a route path and render it as text."""
        return format_route(self.find_shortest_path(from_airport, to_airport))

    def plan_and_format_trip(
        self,
        from_airport: Optional[Airport],
        to_airport: Optional[Airport],
        criterion: Optional[str],
    ) -> str:
        """Plan a flight itinerary and render it as text."""
        return format_flight_trip(self.plan_trip(from_airport, to_airport, criterion))

    # ------------------------------------------------------------------
    # Data management
    # ------------------------------------------------------------------

    def ingest_csv(
        self,
        airports_csv: Optional[Union[str, Path]] = None,
        routes_csv: Optional[Union[str, Path]] = None,
        flights_csv: Optional[Union[str, Path]] = None,
        clear: bool = False,
    ) -> IngestionReport:
        """
        Load network CSV files into the data source.

        Paths default to the files configured in settings.

        Args:
            clear: Delete existing data first (if the source supports it).

        Raises:
            TypeError: If the data source is read-only.
            FileNotFoundError: If a CSV file is missing.
        """
        if not isinstance(self._source, NetworkWriter):
            raise TypeError(f"Data source {self._source.name} does not accept writes")

        if clear and hasattr(self._source, "clear"):
            self._source.clear()

        return self._loader.load(
            self._source,
            airports_csv or self._settings.airports_path,
            routes_csv or self._settings.routes_path,
            flights_csv or self._settings.flights_path,
        )

    def close(self) -> None:
        """Release the data source's resources."""
        if hasattr(self._source, "close"):
            self._source.close()
