"""
SQLite Data Source - persistent store for the airport network.

Creates the airports/routes/flights schema on first connection, accepts
bulk writes from the ingestion pipeline and answers the per-airport
lookups the planners issue while expanding their frontier.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple, Union

import pandas as pd

from src.trip_planner.ports.graph_data_source import DataAccessError, GraphDataSource
from src.trip_planner.schemas.airport import (
    Airport,
    AirportSchema,
    airport_from_row,
    airports_from_df,
)
from src.trip_planner.schemas.flight import Flight, FlightSchema, flights_from_df
from src.trip_planner.schemas.route import Route, RouteSchema, routes_from_df
from src.trip_planner.schemas.stats import NetworkStats

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"

_SCHEMA = (
    # Every airport has its own IATA code, a city can have several airports
    """
    CREATE TABLE IF NOT EXISTS airports (
        code TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        city TEXT,
        country TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS routes (
        origin_code TEXT NOT NULL,
        destination_code TEXT NOT NULL,
        distance_in_kilometers INTEGER NOT NULL,
        FOREIGN KEY (origin_code) REFERENCES airports(code),
        FOREIGN KEY (destination_code) REFERENCES airports(code),
        UNIQUE (origin_code, destination_code, distance_in_kilometers)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS flights (
        origin_code TEXT NOT NULL,
        destination_code TEXT NOT NULL,
        airline TEXT NOT NULL,
        cost_in_euros INTEGER,
        FOREIGN KEY (origin_code) REFERENCES airports(code),
        FOREIGN KEY (destination_code) REFERENCES airports(code)
    )
    """,
    # NULL costs compare as distinct in a plain UNIQUE constraint; an
    # unpriced flight is keyed by the empty string instead
    """
    CREATE UNIQUE INDEX IF NOT EXISTS idx_flights_unique ON flights (
        origin_code, destination_code, airline, IFNULL(cost_in_euros, '')
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_routes_origin ON routes (origin_code)",
    "CREATE INDEX IF NOT EXISTS idx_flights_origin ON flights (origin_code)",
)

_AIRPORT_COLUMNS = "code, name, city, country"
_ROUTE_COLUMNS = "origin_code, destination_code, distance_in_kilometers"
_FLIGHT_COLUMNS = "origin_code, destination_code, airline, cost_in_euros"


class SQLiteGraphDataSource(GraphDataSource):
    """
    GraphDataSource backed by a SQLite database file.

    The connection is opened lazily and shared between threads; a lock
    serialises access so the HTTP thread pool can use one instance.
    Every driver error surfaces as DataAccessError.

    Attributes:
        _db_path: Database file path, or ":memory:".
        _conn: SQLite connection (lazy initialized).
    """

    def __init__(self, db_path: Union[str, Path] = "flightnetwork.db") -> None:
        """
        Initialize the SQLite data source.

        Args:
            db_path: Path to the database file. Created on first use.
                Use ":memory:" for a throwaway database.
        """
        self._db_path = str(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection, creating tables on first use."""
        if self._conn is None:
            if self._db_path != IN_MEMORY:
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            logger.debug("Connecting to database: %s", self._db_path)
            conn = sqlite3.connect(self._db_path, check_same_thread=False)
            cursor = conn.cursor()
            for statement in _SCHEMA:
                cursor.execute(statement)
            conn.commit()
            logger.info("Database tables created/verified at %s", self._db_path)
            self._conn = conn
        return self._conn

    @contextmanager
    def _session(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Serialise access and translate driver errors into DataAccessError."""
        with self._lock:
            try:
                yield self._get_connection()
            except (sqlite3.Error, pd.errors.DatabaseError) as e:
                logger.error("SQLite %s failed: %s", operation, e)
                raise DataAccessError(f"{operation} failed: {e}") from e

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("Database connection closed")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _insert_many(self, table: str, columns: str, rows: List[tuple]) -> int:
        placeholders = ", ".join("?" for _ in columns.split(","))
        query = f"INSERT OR IGNORE INTO {table} ({columns}) VALUES ({placeholders})"

        with self._session(f"insert into {table}") as conn:
            before = conn.total_changes
            conn.executemany(query, rows)
            conn.commit()
            inserted = conn.total_changes - before

        skipped = len(rows) - inserted
        if skipped:
            logger.info("Skipped %d duplicate rows for table %s", skipped, table)
        logger.debug("Inserted %d rows into %s", inserted, table)
        return inserted

    def insert_airport(self, airport: Airport) -> bool:
        """Store an airport; returns False if the code already exists."""
        row = (airport.code, airport.name, airport.city, airport.country)
        return self._insert_many("airports", _AIRPORT_COLUMNS, [row]) == 1

    def insert_route(self, route: Route) -> bool:
        """Store a route; returns False for an exact duplicate."""
        row = (route.origin_code, route.destination_code, route.distance_in_kilometers)
        return self._insert_many("routes", _ROUTE_COLUMNS, [row]) == 1

    def insert_flight(self, flight: Flight) -> bool:
        """Store a flight; returns False for an exact duplicate."""
        row = (
            flight.origin_code,
            flight.destination_code,
            flight.airline,
            flight.cost_in_euros,
        )
        return self._insert_many("flights", _FLIGHT_COLUMNS, [row]) == 1

    def write_airports(self, airports_df: pd.DataFrame) -> int:
        rows = [
            (a.code, a.name, a.city, a.country) for a in airports_from_df(airports_df)
        ]
        return self._insert_many("airports", _AIRPORT_COLUMNS, rows)

    def write_routes(self, routes_df: pd.DataFrame) -> int:
        rows = [
            (r.origin_code, r.destination_code, r.distance_in_kilometers)
            for r in routes_from_df(routes_df)
        ]
        return self._insert_many("routes", _ROUTE_COLUMNS, rows)

    def write_flights(self, flights_df: pd.DataFrame) -> int:
        rows = [
            (f.origin_code, f.destination_code, f.airline, f.cost_in_euros)
            for f in flights_from_df(flights_df)
        ]
        return self._insert_many("flights", _FLIGHT_COLUMNS, rows)

    def clear(self) -> None:
        """Delete all stored flights, routes and airports."""
        with self._session("clear tables") as conn:
            conn.execute("DELETE FROM flights")
            conn.execute("DELETE FROM routes")
            conn.execute("DELETE FROM airports")
            conn.commit()
        logger.info("All table data cleared")

    # ------------------------------------------------------------------
    # GraphDataSource
    # ------------------------------------------------------------------

    def all_airports(self) -> Set[Airport]:
        with self._session("read airports") as conn:
            df = pd.read_sql(f"SELECT {_AIRPORT_COLUMNS} FROM airports", conn)
        return set(airports_from_df(df))

    def get_airport(self, code: str) -> Optional[Airport]:
        with self._session("read airport") as conn:
            row = conn.execute(
                f"SELECT {_AIRPORT_COLUMNS} FROM airports WHERE code = ?", (code,)
            ).fetchone()
        return airport_from_row(row)

    def routes_from(self, code: str) -> List[Route]:
        with self._session("read routes") as conn:
            rows = conn.execute(
                f"SELECT {_ROUTE_COLUMNS} FROM routes WHERE origin_code = ? ORDER BY rowid",
                (code,),
            ).fetchall()
        return [Route(o, d, int(km)) for o, d, km in rows]

    def flights_from(self, code: str) -> List[Flight]:
        with self._session("read flights") as conn:
            rows = conn.execute(
                f"SELECT {_FLIGHT_COLUMNS} FROM flights WHERE origin_code = ? ORDER BY rowid",
                (code,),
            ).fetchall()
        return [
            Flight(o, d, airline, None if cost is None else int(cost))
            for o, d, airline, cost in rows
        ]

    def get_route(self, origin_code: str, destination_code: str) -> Optional[Route]:
        with self._session("read route") as conn:
            row = conn.execute(
                f"SELECT {_ROUTE_COLUMNS} FROM routes "
                "WHERE origin_code = ? AND destination_code = ? ORDER BY rowid LIMIT 1",
                (origin_code, destination_code),
            ).fetchone()
        if row is None:
            return None
        return Route(row[0], row[1], int(row[2]))

    def flights_between(self, origin_code: str, destination_code: str) -> List[Flight]:
        with self._session("read flights") as conn:
            rows = conn.execute(
                f"SELECT {_FLIGHT_COLUMNS} FROM flights "
                "WHERE origin_code = ? AND destination_code = ? ORDER BY rowid",
                (origin_code, destination_code),
            ).fetchall()
        return [
            Flight(o, d, airline, None if cost is None else int(cost))
            for o, d, airline, cost in rows
        ]

    def has_direct_flight(self, origin_code: str, destination_code: str) -> bool:
        with self._session("check direct flight") as conn:
            row = conn.execute(
                "SELECT 1 FROM flights WHERE origin_code = ? AND destination_code = ? LIMIT 1",
                (origin_code, destination_code),
            ).fetchone()
        return row is not None

    def stats(self) -> NetworkStats:
        with self._session("count network") as conn:
            airports = conn.execute("SELECT COUNT(*) FROM airports").fetchone()[0]
            routes = conn.execute("SELECT COUNT(*) FROM routes").fetchone()[0]
            flights = conn.execute("SELECT COUNT(*) FROM flights").fetchone()[0]
        return NetworkStats(
            total_airports=int(airports),
            total_routes=int(routes),
            total_flights=int(flights),
        )

    # ------------------------------------------------------------------
    # NetworkExporter
    # ------------------------------------------------------------------

    def read_frames(self) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
        """Read the whole network in three queries, validated per table."""
        with self._session("read network") as conn:
            airports_df = pd.read_sql(f"SELECT {_AIRPORT_COLUMNS} FROM airports", conn)
            routes_df = pd.read_sql(
                f"SELECT {_ROUTE_COLUMNS} FROM routes ORDER BY rowid", conn
            )
            flights_df = pd.read_sql(
                f"SELECT {_FLIGHT_COLUMNS} FROM flights ORDER BY rowid", conn
            )

        logger.info(
            "Loaded %d airports, %d routes, %d flights from SQLite",
            len(airports_df),
            len(routes_df),
            len(flights_df),
        )
        return (
            AirportSchema.validate(airports_df),
            RouteSchema.validate(routes_df),
            FlightSchema.validate(flights_df),
        )

    @property
    def name(self) -> str:
        """Human-readable source name."""
        return "SQLite"

    @property
    def is_available(self) -> bool:
        """Check if the database can be opened."""
        if self._db_path == IN_MEMORY:
            return True
        return Path(self._db_path).exists()
