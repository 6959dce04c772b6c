"""
Domain services for the Trip Planner.

Services run the planning algorithms and direct network queries on top of
a GraphDataSource port.
"""

from src.trip_planner.services.distance_planner import DistancePlanner
from src.trip_planner.services.fare_planner import Criterion, FarePlanner
from src.trip_planner.services.network_query_service import NetworkQueryService

__all__ = [
    "Criterion",
    "DistancePlanner",
    "FarePlanner",
    "NetworkQueryService",
]
