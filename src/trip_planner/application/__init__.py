"""
Application layer for the Trip Planner.

This layer provides the public API for the trip planning engine.
It acts as a facade, handling dependency initialization and providing
a simple interface for consumers.
"""

from src.trip_planner.application.trip_planner import TripPlanner

__all__ = ["TripPlanner"]
