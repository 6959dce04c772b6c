"""
Shared fixtures for performance benchmarks.

Synthetic networks are generated once per module so benchmarks measure
only the hot paths (index building, planning), not data generation.
"""

from typing import Tuple

import numpy as np
import pandas as pd
import pytest

from src.trip_planner.adapters.data_sources.in_memory_source import InMemoryGraphDataSource
from src.trip_planner.adapters.repositories.network_snapshot import NetworkSnapshot
from src.trip_planner.schemas.airport import Airport
from src.trip_planner.schemas.flight import FlightSchema, flights_from_df
from src.trip_planner.schemas.route import RouteSchema, routes_from_df

AIRLINES = np.array(["Air France", "BA", "easyJet", "Lufthansa", "Ryanair", "Vueling"])


# =============================================================================
# SYNTHETIC DATA GENERATORS
# =============================================================================


def airport_codes(num_airports: int):
    """Generate airport codes AAA, AAB, ..."""
    return [
        f"{chr(65 + i // 26 // 26)}{chr(65 + i // 26 % 26)}{chr(65 + i % 26)}"
        for i in range(num_airports)
    ]


def generate_synthetic_network(
    num_routes: int,
    flights_per_route: int = 3,
    num_airports: int = 300,
    seed: int = 42,
) -> Tuple[list, pd.DataFrame, pd.DataFrame]:
    """
    Generate a random network for scaling benchmarks.

    Returns:
        (codes, routes DataFrame, flights DataFrame) matching RouteSchema
        and FlightSchema.
    """
    rng = np.random.default_rng(seed)
    codes = airport_codes(num_airports)

    origins = rng.choice(codes, size=num_routes)
    destinations = rng.choice(codes, size=num_routes)

    # Ensure no self-loops
    mask = origins == destinations
    while mask.any():
        destinations[mask] = rng.choice(codes, size=mask.sum())
        mask = origins == destinations

    routes_df = pd.DataFrame({
        "origin_code": origins,
        "destination_code": destinations,
        "distance_in_kilometers": rng.integers(100, 5_000, size=num_routes),
    })

    num_flights = num_routes * flights_per_route
    flights_df = pd.DataFrame({
        "origin_code": np.repeat(origins, flights_per_route),
        "destination_code": np.repeat(destinations, flights_per_route),
        "airline": rng.choice(AIRLINES, size=num_flights),
        "cost_in_euros": rng.integers(20, 600, size=num_flights).astype(float),
    })

    return codes, RouteSchema.validate(routes_df), FlightSchema.validate(flights_df)


@pytest.fixture(scope="module")
def synthetic_network():
    """5,000 routes and 15,000 flights over 300 airports."""
    return generate_synthetic_network(5_000)


@pytest.fixture(scope="module")
def in_memory_network(synthetic_network) -> InMemoryGraphDataSource:
    codes, routes_df, flights_df = synthetic_network
    return InMemoryGraphDataSource(
        airports=[Airport(code) for code in codes],
        routes=routes_from_df(routes_df),
        flights=flights_from_df(flights_df),
    )


@pytest.fixture(scope="module")
def snapshot_network(in_memory_network) -> NetworkSnapshot:
    """Pre-loaded snapshot; the bulk read happens once here."""
    return NetworkSnapshot.load(in_memory_network)


@pytest.fixture
def sorted_flights_100k() -> pd.DataFrame:
    """100,000 synthetic flights sorted by origin."""
    _, _, flights_df = generate_synthetic_network(25_000, flights_per_route=4)
    return flights_df.sort_values("origin_code", kind="mergesort").reset_index(drop=True)
