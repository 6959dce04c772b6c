"""
Shared fixtures: a small European network used across the test suite.

Routes (km):  LHR→MUC 950, MUC→BGY 380, LHR→CDG 460, CDG→BGY 650, MUC→CDG 830
Flights (€):  LHR→CDG 80, CDG→BGY 110, LHR→MUC 120, MUC→BGY 90
"""

import pytest

from src.trip_planner.adapters.data_sources.in_memory_source import InMemoryGraphDataSource
from src.trip_planner.schemas.airport import Airport
from src.trip_planner.schemas.flight import Flight
from src.trip_planner.schemas.route import Route


@pytest.fixture
def lhr() -> Airport:
    return Airport("LHR", "London Heathrow", "London", "United Kingdom")


@pytest.fixture
def cdg() -> Airport:
    return Airport("CDG", "Paris Charles de Gaulle", "Paris", "France")


@pytest.fixture
def muc() -> Airport:
    return Airport("MUC", "Munich Airport", "Munich", "Germany")


@pytest.fixture
def bgy() -> Airport:
    return Airport("BGY", "Milan Bergamo", "Bergamo", "Italy")


@pytest.fixture
def airports(lhr, cdg, muc, bgy) -> list:
    return [lhr, cdg, muc, bgy]


@pytest.fixture
def routes() -> list:
    return [
        Route("LHR", "MUC", 950),
        Route("MUC", "BGY", 380),
        Route("LHR", "CDG", 460),
        Route("CDG", "BGY", 650),
        Route("MUC", "CDG", 830),
    ]


@pytest.fixture
def flights() -> list:
    return [
        Flight("LHR", "CDG", "Air France", 80),
        Flight("CDG", "BGY", "easyJet", 110),
        Flight("LHR", "MUC", "Lufthansa", 120),
        Flight("MUC", "BGY", "Ryanair", 90),
    ]


@pytest.fixture
def network(airports, routes, flights) -> InMemoryGraphDataSource:
    """In-memory source holding the full sample network."""
    return InMemoryGraphDataSource(airports=airports, routes=routes, flights=flights)


@pytest.fixture
def csv_files(tmp_path):
    """Write the sample network as the three CSV input files."""
    airports_csv = tmp_path / "airports.csv"
    airports_csv.write_text(
        "name,code,city,country\n"
        "London Heathrow,LHR,London,United Kingdom\n"
        "Paris Charles de Gaulle,CDG,Paris,France\n"
        "Munich Airport,MUC,Munich,Germany\n"
        "Milan Bergamo,BGY,Bergamo,Italy\n",
        encoding="utf-8",
    )

    routes_csv = tmp_path / "routes.csv"
    routes_csv.write_text(
        "origin,destination,distance\n"
        "LHR,MUC,950\n"
        "MUC,BGY,380\n"
        "LHR,CDG,460\n"
        "CDG,BGY,650\n"
        "MUC,CDG,830\n",
        encoding="utf-8",
    )

    flights_csv = tmp_path / "flights.csv"
    flights_csv.write_text(
        "origin,destination,airline,cost\n"
        "LHR,CDG,Air France,80\n"
        "CDG,BGY,easyJet,110\n"
        "LHR,MUC,Lufthansa,120\n"
        "MUC,BGY,Ryanair,90\n",
        encoding="utf-8",
    )

    return airports_csv, routes_csv, flights_csv
