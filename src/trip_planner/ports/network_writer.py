"""
Bulk network I/O port interfaces.

Defines the bulk write side used by CSV ingestion and the bulk read side
used to snapshot a store in one pass. Planning itself never writes, so
these live apart from GraphDataSource.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:
    import pandas as pd


@runtime_checkable
class NetworkWriter(Protocol):
    """
    Protocol for stores that accept bulk network data.

    Frames passed in are already validated against AirportSchema,
    RouteSchema and FlightSchema. Rows that duplicate stored data are
    skipped, not treated as errors.
    """

    def write_airports(self, airports_df: pd.DataFrame) -> int:
        """
        Store airports.

        Returns:
            Number of rows actually stored.
        """
        ...

    def write_routes(self, routes_df: pd.DataFrame) -> int:
        """
        Store routes.

        Returns:
            Number of rows actually stored.
        """
        ...

    def write_flights(self, flights_df: pd.DataFrame) -> int:
        """
        Store flights.

        Returns:
            Number of rows actually stored.
        """
        ...


@runtime_checkable
class NetworkExporter(Protocol):
    """Protocol for stores that can return the whole network in one read."""

    def read_frames(self) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
        """
        Return (airports_df, routes_df, flights_df), schema-validated.

        Row order within each frame is store order.
        """
        ...
