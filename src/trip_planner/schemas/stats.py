from dataclasses import dataclass


@dataclass(frozen=True)
class NetworkStats:
    """Size of the stored network."""

    total_airports: int
    total_routes: int
    total_flights: int
