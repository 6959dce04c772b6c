"""
Port interfaces for the Trip Planner.

Ports define the abstract interfaces that the planning core uses to
communicate with external systems. This follows the Ports and Adapters
(Hexagonal) architecture pattern.
"""

from src.trip_planner.ports.graph_data_source import (
    DataAccessError,
    GraphDataSource,
    TripPlannerError,
)
from src.trip_planner.ports.network_writer import NetworkExporter, NetworkWriter

__all__ = [
    "DataAccessError",
    "GraphDataSource",
    "NetworkExporter",
    "NetworkWriter",
    "TripPlannerError",
]
