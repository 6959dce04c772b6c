"""
Schema definitions for the Trip Planner.

Immutable value objects for the planning graphs, plus Pandera-validated
DataFrame models used at the ingestion and persistence boundaries.
"""

from .airport import Airport, AirportSchema, airports_from_df
from .flight import Flight, FlightSchema, flights_from_df
from .route import Route, RouteSchema, routes_from_df
from .stats import NetworkStats

__all__ = [
    # Value objects
    "Airport",
    "Route",
    "Flight",
    "NetworkStats",
    # DataFrame schemas
    "AirportSchema",
    "RouteSchema",
    "FlightSchema",
    # Converters
    "airports_from_df",
    "routes_from_df",
    "flights_from_df",
]
