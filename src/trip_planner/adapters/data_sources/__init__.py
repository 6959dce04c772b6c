"""
Data source adapters for the airport network.
"""

from src.trip_planner.adapters.data_sources.in_memory_source import (
    InMemoryGraphDataSource,
)
from src.trip_planner.adapters.data_sources.sqlite_source import (
    SQLiteGraphDataSource,
)

__all__ = [
    "InMemoryGraphDataSource",
    "SQLiteGraphDataSource",
]
