"""Tests for InMemoryGraphDataSource and the GraphDataSource default lookups."""

import pandas as pd

from src.trip_planner.adapters.data_sources.in_memory_source import InMemoryGraphDataSource
from src.trip_planner.ports.network_writer import NetworkExporter, NetworkWriter
from src.trip_planner.schemas.airport import Airport
from src.trip_planner.schemas.flight import Flight
from src.trip_planner.schemas.route import Route
from src.trip_planner.schemas.stats import NetworkStats


class TestWrites:
    def test_duplicate_airport_code_is_skipped(self, lhr):
        source = InMemoryGraphDataSource(airports=[lhr])
        assert source.add_airport(Airport("LHR", "Another name")) is False
        assert source.get_airport("LHR").name == "London Heathrow"

    def test_exact_duplicate_route_is_skipped(self):
        source = InMemoryGraphDataSource()
        assert source.add_route(Route("LHR", "CDG", 460)) is True
        assert source.add_route(Route("LHR", "CDG", 460)) is False
        assert source.add_route(Route("LHR", "CDG", 470)) is True

    def test_write_frames(self):
        source = InMemoryGraphDataSource()
        written = source.write_flights(
            pd.DataFrame(
                {
                    "origin_code": ["LHR", "LHR"],
                    "destination_code": ["CDG", "CDG"],
                    "airline": ["BA", "BA"],
                    "cost_in_euros": [95.0, 95.0],
                }
            )
        )
        assert written == 1
        assert source.flights_from("LHR") == [Flight("LHR", "CDG", "BA", 95)]

    def test_clear(self, network):
        network.clear()
        assert network.stats() == NetworkStats(0, 0, 0)

    def test_is_a_writer_but_not_an_exporter(self, network):
        assert isinstance(network, NetworkWriter)
        assert not isinstance(network, NetworkExporter)


class TestReads:
    def test_returned_lists_are_copies(self, network):
        network.routes_from("LHR").clear()
        assert len(network.routes_from("LHR")) == 2

    def test_default_lookups(self, network):
        assert network.get_route("LHR", "CDG") == Route("LHR", "CDG", 460)
        assert network.get_route("CDG", "LHR") is None
        assert network.flights_between("LHR", "MUC") == [Flight("LHR", "MUC", "Lufthansa", 120)]
        assert network.has_direct_flight("MUC", "BGY") is True
        assert network.has_direct_flight("BGY", "MUC") is False

    def test_default_stats(self, network):
        assert network.stats() == NetworkStats(total_airports=4, total_routes=5, total_flights=4)

    def test_name_and_availability(self, network):
        assert network.name == "In-Memory"
        assert network.is_available is True
