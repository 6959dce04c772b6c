"""
Bulk ingestion adapters.
"""

from src.trip_planner.adapters.ingestion.csv_loader import (
    CsvNetworkLoader,
    IngestionReport,
)

__all__ = [
    "CsvNetworkLoader",
    "IngestionReport",
]
