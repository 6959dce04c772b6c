"""Human-readable summaries of planned paths."""

from typing import Sequence

from src.trip_planner.schemas.flight import Flight
from src.trip_planner.schemas.route import Route

NO_ROUTE = "No route found"
NO_FLIGHTS = "No flights found"


def total_distance(routes: Sequence[Route]) -> int:
    """Sum of route distances in kilometers."""
    return sum(route.distance_in_kilometers for route in routes)


def total_cost(flights: Sequence[Flight]) -> int:
    """Sum of flight fares in euros; unpriced flights count as zero."""
    return sum(flight.cost_in_euros or 0 for flight in flights)


def format_route(routes: Sequence[Route]) -> str:
    """
    Summarise a route path.

    Example:
        >>> format_route([Route("LHR", "CDG", 460), Route("CDG", "BGY", 650)])
        'LHR → CDG to BGY (Total: 1110 km)'
    """
    if not routes:
        return NO_ROUTE

    stops = " → ".join(route.origin_code for route in routes)
    return f"{stops} to {routes[-1].destination_code} (Total: {total_distance(routes)} km)"


def format_flight_trip(flights: Sequence[Flight]) -> str:
    """
    Summarise a flight itinerary with the airline of each leg.

    Example:
        >>> format_flight_trip([Flight("LHR", "CDG", "Air France", 80)])
        'LHR (Air France) → CDG (Total Cost: 80 €)'
    """
    if not flights:
        return NO_FLIGHTS

    legs = " → ".join(f"{flight.origin_code} ({flight.airline})" for flight in flights)
    return f"{legs} → {flights[-1].destination_code} (Total Cost: {total_cost(flights)} €)"
