"""
CSV Network Loader - bulk ingestion of airports, routes and flights.

Reads the three CSV files with pandas, normalises them to the tabular
schemas, validates at the boundary with Pandera and hands the clean frames
to a NetworkWriter. Bad rows are dropped and counted, never fatal.

Expected columns (by position, header row skipped):
- airports: name, code, city, country
- routes:   origin, destination, distance in km
- flights:  origin, destination, airline, cost in euros
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Type, Union

import pandas as pd
import pandera as pa

from src.trip_planner.ports.network_writer import NetworkWriter
from src.trip_planner.schemas.airport import AirportSchema
from src.trip_planner.schemas.flight import FlightSchema
from src.trip_planner.schemas.route import RouteSchema

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

AIRPORT_COLUMNS = ["name", "code", "city", "country"]
ROUTE_COLUMNS = ["origin_code", "destination_code", "distance_in_kilometers"]
FLIGHT_COLUMNS = ["origin_code", "destination_code", "airline", "cost_in_euros"]


@dataclass
class IngestionReport:
    """
    Outcome of one CSV ingestion run.

    Attributes:
        airports: Airports stored.
        routes: Routes stored.
        flights: Flights stored.
        rejected: Rows dropped per file kind (malformed or failing schema).
        duplicates: Rows the store already held, per file kind.
    """

    airports: int = 0
    routes: int = 0
    flights: int = 0
    rejected: Dict[str, int] = field(default_factory=dict)
    duplicates: Dict[str, int] = field(default_factory=dict)

    @property
    def total_rejected(self) -> int:
        return sum(self.rejected.values())


def read_csv_columns(path: PathLike, columns: List[str]) -> pd.DataFrame:
    """
    Read a CSV file and name its leading columns positionally.

    All values are read as trimmed strings; extra columns are ignored and
    short rows come back with NaN in the missing positions.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    df = pd.read_csv(
        path,
        header=None,
        skiprows=1,
        names=columns,
        usecols=range(len(columns)),
        dtype=str,
        skipinitialspace=True,
        keep_default_na=False,
        na_values=[""],
    )
    for column in columns:
        df[column] = df[column].str.strip().replace("", pd.NA)
    return df


def coerce_numeric(df: pd.DataFrame, column: str) -> Tuple[pd.DataFrame, int]:
    """
    Convert a column to numbers, dropping rows that do not parse.

    Whole numbers only; "12.5" or "abc" are rejected like a missing value.

    Returns:
        (clean DataFrame, number of dropped rows)
    """
    numbers = pd.to_numeric(df[column], errors="coerce")
    valid = numbers.notna() & (numbers == numbers.round())
    dropped = int((~valid).sum())

    if dropped:
        logger.info("Dropping %d rows with non-integer %s", dropped, column)

    clean = df.loc[valid].copy()
    clean[column] = numbers[valid].astype("int64")
    return clean, dropped


def validate_rows(
    df: pd.DataFrame, schema: Type[pa.DataFrameModel]
) -> Tuple[pd.DataFrame, int]:
    """
    Validate a frame, dropping the rows that fail row-level checks.

    Uses lazy validation so every failing row is reported at once.

    Returns:
        (validated DataFrame, number of dropped rows)

    Raises:
        pandera.errors.SchemaErrors: If a failure is not tied to a row
            (e.g. a missing column).
    """
    try:
        return schema.validate(df, lazy=True), 0
    except pa.errors.SchemaErrors as err:
        failure_cases = err.failure_cases
        bad_index = sorted({int(i) for i in failure_cases["index"].dropna()})
        if not bad_index:
            raise

        logger.warning(
            "%s rejected %d rows: %s",
            schema.__name__,
            len(bad_index),
            failure_cases["check"].unique().tolist(),
        )
        remaining = df.drop(index=bad_index, errors="ignore")
        return schema.validate(remaining), len(bad_index)


class CsvNetworkLoader:
    """
    Loads the three network CSV files into a NetworkWriter.

    Airports are written first so that routes and flights reference stored
    codes; references to unknown airports are still accepted (the planners
    skip dangling edges).
    """

    def load_airports(self, path: PathLike) -> Tuple[pd.DataFrame, int]:
        """Read and validate airports; returns (frame, rejected rows)."""
        df = read_csv_columns(path, AIRPORT_COLUMNS)

        complete = df["name"].notna() & df["code"].notna()
        rejected = int((~complete).sum())
        df = df.loc[complete]

        unique = ~df["code"].duplicated(keep="first")
        rejected += int((~unique).sum())
        df = df.loc[unique].reset_index(drop=True)

        df, invalid = validate_rows(df, AirportSchema)
        return df, rejected + invalid

    def load_routes(self, path: PathLike) -> Tuple[pd.DataFrame, int]:
        """Read and validate routes; returns (frame, rejected rows)."""
        df = read_csv_columns(path, ROUTE_COLUMNS)
        df, rejected = self._drop_incomplete(df, ["origin_code", "destination_code"])
        df, malformed = coerce_numeric(df, "distance_in_kilometers")
        df, invalid = validate_rows(df.reset_index(drop=True), RouteSchema)
        return df, rejected + malformed + invalid

    def load_flights(self, path: PathLike) -> Tuple[pd.DataFrame, int]:
        """Read and validate flights; returns (frame, rejected rows)."""
        df = read_csv_columns(path, FLIGHT_COLUMNS)
        df, rejected = self._drop_incomplete(
            df, ["origin_code", "destination_code", "airline"]
        )
        df, malformed = coerce_numeric(df, "cost_in_euros")
        df, invalid = validate_rows(df.reset_index(drop=True), FlightSchema)
        return df, rejected + malformed + invalid

    def load(
        self,
        writer: NetworkWriter,
        airports_csv: PathLike,
        routes_csv: PathLike,
        flights_csv: PathLike,
    ) -> IngestionReport:
        """
        Ingest all three files into the writer.

        Args:
            writer: Destination store (SQLite or in-memory source).
            airports_csv: Path to the airports file.
            routes_csv: Path to the routes file.
            flights_csv: Path to the flights file.

        Returns:
            IngestionReport with stored, rejected and duplicate counts.

        Raises:
            FileNotFoundError: If any file is missing (checked before writing).
            DataAccessError: If the writer's store fails.
        """
        for path in (airports_csv, routes_csv, flights_csv):
            if not Path(path).exists():
                raise FileNotFoundError(f"CSV file not found: {path}")

        report = IngestionReport()

        airports_df, report.rejected["airports"] = self.load_airports(airports_csv)
        report.airports = writer.write_airports(airports_df)
        report.duplicates["airports"] = len(airports_df) - report.airports

        routes_df, report.rejected["routes"] = self.load_routes(routes_csv)
        report.routes = writer.write_routes(routes_df)
        report.duplicates["routes"] = len(routes_df) - report.routes

        flights_df, report.rejected["flights"] = self.load_flights(flights_csv)
        report.flights = writer.write_flights(flights_df)
        report.duplicates["flights"] = len(flights_df) - report.flights

        logger.info(
            "Ingested %d airports, %d routes, %d flights (%d rows rejected)",
            report.airports,
            report.routes,
            report.flights,
            report.total_rejected,
        )
        return report

    @staticmethod
    def _drop_incomplete(df: pd.DataFrame, required: List[str]) -> Tuple[pd.DataFrame, int]:
        complete = df[required].notna().all(axis=1)
        dropped = int((~complete).sum())
        if dropped:
            logger.info("Dropping %d rows with missing %s", dropped, required)
        return df.loc[complete], dropped
