"""
Planner and index benchmarks.

Measures:
- build_origin_index on a large sorted frame (should be O(n))
- Distance and fare planning against the dict-backed source and a snapshot
- Snapshot cold start
"""

import pytest

from src.trip_planner.adapters.repositories.network_snapshot import (
    NetworkSnapshot,
    build_origin_index,
)
from src.trip_planner.schemas.airport import Airport
from src.trip_planner.services.distance_planner import DistancePlanner
from src.trip_planner.services.fare_planner import FarePlanner

ORIGIN = Airport("AAA")
DESTINATION = Airport("ALK")


class TestIndexBuilding:
    def test_build_origin_index_100k(self, benchmark, sorted_flights_100k):
        """Index building with 100,000 flights."""
        result = benchmark(build_origin_index, sorted_flights_100k)

        assert len(result) > 0, "Index should contain airports"
        assert sum(idx.end - idx.start for idx in result.values()) == len(sorted_flights_100k)


class TestPlanning:
    @pytest.mark.parametrize("source_fixture", ["in_memory_network", "snapshot_network"])
    def test_distance_planner(self, benchmark, request, source_fixture):
        source = request.getfixturevalue(source_fixture)
        planner = DistancePlanner(source)

        path = benchmark(planner.find_shortest_path, ORIGIN, DESTINATION)

        if path:
            assert path[0].origin_code == ORIGIN.code
            assert path[-1].destination_code == DESTINATION.code

    @pytest.mark.parametrize("criterion", ["cheapest", "shortest"])
    def test_fare_planner_on_snapshot(self, benchmark, snapshot_network, criterion):
        planner = FarePlanner(snapshot_network)

        flights = benchmark(planner.plan_trip, ORIGIN, DESTINATION, criterion)

        for leg, next_leg in zip(flights, flights[1:]):
            assert leg.destination_code == next_leg.origin_code

    def test_snapshot_cold_start(self, benchmark, in_memory_network):
        snapshot = benchmark(NetworkSnapshot.load, in_memory_network)
        assert snapshot.stats().total_routes == len(
            [r for a in in_memory_network.all_airports() for r in in_memory_network.routes_from(a.code)]
        )
