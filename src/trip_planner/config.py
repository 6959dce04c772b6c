"""
Configuration module for the Trip Planner.

Loads environment variables (optionally from a .env file) and exposes
them as an immutable Settings object.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "TRIP_PLANNER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(ENV_PREFIX + name, default)


def _env_bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    """
    Application settings.

    Attributes:
        db_path: SQLite database file.
        data_dir: Directory holding the network CSV files.
        airports_csv: Airports file name (relative to data_dir).
        routes_csv: Routes file name (relative to data_dir).
        flights_csv: Flights file name (relative to data_dir).
        load_csv_on_startup: Clear the database and ingest the CSVs at start.
        snapshot_per_request: Read the network once per planning call
            instead of querying the database per expanded airport.
        log_level: Root logging level name.
        log_file: Optional log file path.
        host: HTTP bind address.
        port: HTTP port.
    """

    db_path: str = "flightnetwork.db"
    data_dir: str = "data"
    airports_csv: str = "airports.csv"
    routes_csv: str = "routes.csv"
    flights_csv: str = "flights.csv"
    load_csv_on_startup: bool = False
    snapshot_per_request: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 7070

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")

    @property
    def airports_path(self) -> Path:
        return Path(self.data_dir) / self.airports_csv

    @property
    def routes_path(self) -> Path:
        return Path(self.data_dir) / self.routes_csv

    @property
    def flights_path(self) -> Path:
        return Path(self.data_dir) / self.flights_csv

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from TRIP_PLANNER_* environment variables.

        Args:
            dotenv_path: Optional .env file; the default lookup is used if None.

        Raises:
            ValueError: If a numeric variable does not parse.
        """
        load_dotenv(dotenv_path)
        defaults = cls()

        port = _env("PORT")
        return cls(
            db_path=_env("DB_PATH", defaults.db_path),
            data_dir=_env("DATA_DIR", defaults.data_dir),
            airports_csv=_env("AIRPORTS_CSV", defaults.airports_csv),
            routes_csv=_env("ROUTES_CSV", defaults.routes_csv),
            flights_csv=_env("FLIGHTS_CSV", defaults.flights_csv),
            load_csv_on_startup=_env_bool("LOAD_CSV_ON_STARTUP", defaults.load_csv_on_startup),
            snapshot_per_request=_env_bool("SNAPSHOT_PER_REQUEST", defaults.snapshot_per_request),
            log_level=_env("LOG_LEVEL", defaults.log_level).upper(),
            log_file=_env("LOG_FILE", defaults.log_file),
            host=_env("HOST", defaults.host),
            port=int(port) if port else defaults.port,
        )
