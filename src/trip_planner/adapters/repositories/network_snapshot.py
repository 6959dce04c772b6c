"""
Network Snapshot - read-once, index-based copy of a data source.

Planners ask their data source for the edges of one airport at a time.
Against a remote or disk-backed store that means one round trip per
expanded vertex. A snapshot reads the network once, keeps it in DataFrames
sorted by origin, and answers every lookup from memory:
- Per-airport edges are a row slice located through OriginIndex
- Stable sort, so per-origin edge order matches store order
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Set

import numpy as np
import pandas as pd

from src.trip_planner.ports.graph_data_source import GraphDataSource
from src.trip_planner.ports.network_writer import NetworkExporter
from src.trip_planner.schemas.airport import Airport, airports_from_df
from src.trip_planner.schemas.flight import Flight, FlightSchema, flights_from_df
from src.trip_planner.schemas.route import Route, RouteSchema, routes_from_df
from src.trip_planner.schemas.stats import NetworkStats

logger = logging.getLogger(__name__)


# =============================================================================
# ORIGIN INDEX
# =============================================================================


@dataclass(frozen=True)
class OriginIndex:
    """Half-open row span [start, end) holding one airport's outgoing edges."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end:
            raise ValueError(f"Invalid origin span [{self.start}, {self.end})")


def build_origin_index(df: pd.DataFrame) -> Dict[str, OriginIndex]:
    """
    Map every origin airport to the block of rows holding its edges.

    `df` must come out of _sort_by_origin (sorted by origin_code, index
    0..n-1), so each airport's edges are contiguous. The first row of a
    code opens its block and the first row of the next code closes it.

    Example:
        >>> df = pd.DataFrame({'origin_code': ['CDG', 'LHR', 'LHR']})
        >>> build_origin_index(df)['LHR']
        OriginIndex(start=1, end=3)
    """
    if df.empty:
        return {}

    codes, first_rows = np.unique(df["origin_code"].to_numpy(), return_index=True)
    order = np.argsort(first_rows)
    codes, first_rows = codes[order], first_rows[order]
    block_ends = np.append(first_rows[1:], len(df))

    return {
        str(code): OriginIndex(start=int(start), end=int(end))
        for code, start, end in zip(codes, first_rows, block_ends)
    }


def _sort_by_origin(df: pd.DataFrame) -> pd.DataFrame:
    # mergesort is stable: edges of one origin keep their store order
    return df.sort_values("origin_code", kind="mergesort").reset_index(drop=True)


# =============================================================================
# NETWORK SNAPSHOT
# =============================================================================


class NetworkSnapshot(GraphDataSource):
    """
    Immutable in-memory copy of a network, served as a GraphDataSource.

    Attributes:
        routes_df: Routes sorted by origin_code, index reset.
        flights_df: Flights sorted by origin_code, index reset.
        route_index: Origin code -> row range in routes_df.
        flight_index: Origin code -> row range in flights_df.
        built_at: Timestamp when the snapshot was taken.
    """

    def __init__(
        self,
        airports: List[Airport],
        routes_df: pd.DataFrame,
        flights_df: pd.DataFrame,
        source_name: str = "unknown",
    ) -> None:
        self._airports: Dict[str, Airport] = {a.code: a for a in airports}
        self.routes_df = _sort_by_origin(routes_df)
        self.flights_df = _sort_by_origin(flights_df)
        self.route_index = build_origin_index(self.routes_df)
        self.flight_index = build_origin_index(self.flights_df)
        self.built_at = datetime.now()
        self._source_name = source_name

    @classmethod
    def load(cls, source: GraphDataSource) -> "NetworkSnapshot":
        """
        Take a snapshot of a data source.

        Sources implementing NetworkExporter are read in one bulk pass;
        others are walked airport by airport.

        Raises:
            DataAccessError: If the source fails while being read.
        """
        if isinstance(source, NetworkExporter):
            airports_df, routes_df, flights_df = source.read_frames()
            airports = airports_from_df(airports_df)
        else:
            airports = sorted(source.all_airports(), key=lambda a: a.code)
            routes: List[Route] = []
            flights: List[Flight] = []
            for airport in airports:
                routes.extend(source.routes_from(airport.code))
                flights.extend(source.flights_from(airport.code))
            routes_df = RouteSchema.validate(_routes_to_df(routes))
            flights_df = FlightSchema.validate(_flights_to_df(flights))

        snapshot = cls(airports, routes_df, flights_df, source_name=source.name)
        logger.debug(
            "Snapshot of %s: %d airports, %d routes, %d flights",
            source.name,
            len(airports),
            len(snapshot.routes_df),
            len(snapshot.flights_df),
        )
        return snapshot

    def _slice(
        self, df: pd.DataFrame, index: Dict[str, OriginIndex], code: str
    ) -> Optional[pd.DataFrame]:
        idx = index.get(code)
        if idx is None:
            return None
        return df.iloc[idx.start : idx.end]

    def all_airports(self) -> Set[Airport]:
        return set(self._airports.values())

    def get_airport(self, code: str) -> Optional[Airport]:
        return self._airports.get(code)

    def routes_from(self, code: str) -> List[Route]:
        rows = self._slice(self.routes_df, self.route_index, code)
        return [] if rows is None else routes_from_df(rows)

    def flights_from(self, code: str) -> List[Flight]:
        rows = self._slice(self.flights_df, self.flight_index, code)
        return [] if rows is None else flights_from_df(rows)

    def stats(self) -> NetworkStats:
        return NetworkStats(
            total_airports=len(self._airports),
            total_routes=len(self.routes_df),
            total_flights=len(self.flights_df),
        )

    @property
    def name(self) -> str:
        return f"Snapshot of {self._source_name}"


def _routes_to_df(routes: List[Route]) -> pd.DataFrame:
    return pd.DataFrame(
        [(r.origin_code, r.destination_code, r.distance_in_kilometers) for r in routes],
        columns=["origin_code", "destination_code", "distance_in_kilometers"],
    )


def _flights_to_df(flights: List[Flight]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            (f.origin_code, f.destination_code, f.airline, f.cost_in_euros)
            for f in flights
        ],
        columns=["origin_code", "destination_code", "airline", "cost_in_euros"],
    )
