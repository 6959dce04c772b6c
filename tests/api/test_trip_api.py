"""
Tests for the Trip Planner HTTP API.

Tests cover:
- Welcome and stats endpoints
- Direct route and flights-on-route lookups
- Route and flight planning, including totals and summaries
- 404 responses for unknown airports, routes and empty plans
- 500 JSON responses for data access failures and unexpected errors
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.trip_api import ENDPOINTS, create_app
from src.dijkstra.exceptions import PredecessorCycleError
from src.trip_planner.adapters.data_sources.in_memory_source import InMemoryGraphDataSource
from src.trip_planner.application import TripPlanner
from src.trip_planner.ports.graph_data_source import DataAccessError, GraphDataSource
from src.trip_planner.schemas.route import Route


@pytest.fixture
def client(network) -> TestClient:
    return TestClient(create_app(TripPlanner(data_source=network)))


def error_of(response):
    return response.json()["detail"]["error"]


# =============================================================================
# INFO ENDPOINTS
# =============================================================================


class TestInfo:
    def test_welcome_lists_endpoints(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["endpoints"] == ENDPOINTS

    def test_stats(self, client):
        response = client.get("/stats")
        assert response.status_code == 200
        assert response.json() == {"total_airports": 4, "total_routes": 5, "total_flights": 4}


# =============================================================================
# LOOKUPS
# =============================================================================


class TestHasDirectRoute:
    def test_connected(self, client):
        response = client.get("/task/hasDirectRoute/LHR/CDG")
        assert response.status_code == 200
        assert response.json() == {"origin": "LHR", "destination": "CDG", "has_direct_route": True}

    def test_not_connected(self, client):
        response = client.get("/task/hasDirectRoute/CDG/LHR")
        assert response.status_code == 200
        assert response.json()["has_direct_route"] is False

    def test_lowercase_codes(self, client):
        assert client.get("/task/hasDirectRoute/lhr/cdg").json()["has_direct_route"] is True

    def test_unknown_origin(self, client):
        response = client.get("/task/hasDirectRoute/XXX/CDG")
        assert response.status_code == 404
        assert error_of(response) == "Origin Airport not found"

    def test_unknown_destination(self, client):
        response = client.get("/task/hasDirectRoute/LHR/XXX")
        assert response.status_code == 404
        assert error_of(response) == "Destination Airport not found"


class TestGetFlight:
    def test_flights_on_route(self, client):
        response = client.get("/task/getFlight/LHR/CDG")
        body = response.json()

        assert response.status_code == 200
        assert body["route"] == {
            "origin_code": "LHR",
            "destination_code": "CDG",
            "distance_in_kilometers": 460,
        }
        assert body["flights"] == [
            {
                "origin_code": "LHR",
                "destination_code": "CDG",
                "airline": "Air France",
                "cost_in_euros": 80,
            }
        ]
        assert body["num_flights"] == 1

    def test_unknown_route(self, client):
        response = client.get("/task/getFlight/BGY/LHR")
        assert response.status_code == 404
        assert error_of(response) == "Route not found"

    def test_route_without_flights(self, client):
        response = client.get("/task/getFlight/MUC/CDG")
        assert response.status_code == 404
        assert error_of(response) == "Route not found"


# =============================================================================
# PLANNING
# =============================================================================


class TestPlanTripRoute:
    def test_shortest_route(self, client):
        response = client.get("/task/planTripRoute/LHR/BGY")
        body = response.json()

        assert response.status_code == 200
        assert [(r["origin_code"], r["destination_code"]) for r in body["routes"]] == [
            ("LHR", "CDG"),
            ("CDG", "BGY"),
        ]
        assert body["total_distance_km"] == 1110
        assert body["num_legs"] == 2
        assert body["summary"] == "LHR → CDG to BGY (Total: 1110 km)"

    def test_no_route(self, client):
        response = client.get("/task/planTripRoute/BGY/LHR")
        assert response.status_code == 404
        assert error_of(response) == "No Route found"

    def test_same_airport_is_no_route(self, client):
        assert client.get("/task/planTripRoute/LHR/LHR").status_code == 404

    def test_unknown_origin(self, client):
        response = client.get("/task/planTripRoute/XXX/BGY")
        assert response.status_code == 404
        assert error_of(response) == "Origin Airport not found"


class TestPlanTripFlight:
    @pytest.mark.parametrize("criteria", ["cheapest", "shortest", "CHEAPEST"])
    def test_plans(self, client, criteria):
        response = client.get(f"/task/planTripFlight/LHR/BGY/{criteria}")
        body = response.json()

        assert response.status_code == 200
        assert body["criteria"] == criteria.lower()
        assert body["total_cost_eur"] == 190
        assert body["num_legs"] == 2
        assert body["summary"] == "LHR (Air France) → CDG (easyJet) → BGY (Total Cost: 190 €)"

    def test_unknown_criteria(self, client):
        response = client.get("/task/planTripFlight/LHR/BGY/bogus")
        assert response.status_code == 404
        assert error_of(response) == "Criteria not found"

    def test_no_trip(self, client):
        response = client.get("/task/planTripFlight/BGY/LHR/cheapest")
        assert response.status_code == 404
        assert error_of(response) == "Route not found"

    def test_unknown_destination(self, client):
        response = client.get("/task/planTripFlight/LHR/XXX/cheapest")
        assert response.status_code == 404
        assert error_of(response) == "Destination Airport not found"


# =============================================================================
# ERRORS
# =============================================================================


class TestDataAccessErrors:
    @pytest.fixture
    def failing_client(self) -> TestClient:
        source = MagicMock(spec=GraphDataSource)
        source.get_airport.side_effect = DataAccessError("read airport failed: disk I/O error")
        source.stats.side_effect = DataAccessError("count network failed: locked")
        return TestClient(create_app(TripPlanner(data_source=source)))

    @pytest.mark.parametrize(
        "path",
        [
            "/task/hasDirectRoute/LHR/CDG",
            "/task/planTripRoute/LHR/BGY",
            "/task/planTripFlight/LHR/BGY/cheapest",
            "/stats",
        ],
    )
    def test_returns_500_json(self, failing_client, path):
        response = failing_client.get(path)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Data access failed"
        assert "failed" in body["message"]


class TestUnexpectedErrors:
    @pytest.fixture
    def planner(self, lhr, bgy) -> MagicMock:
        planner = MagicMock(spec=TripPlanner)
        planner.resolve_airport.side_effect = {"LHR": lhr, "BGY": bgy}.get
        return planner

    def test_search_error_returns_500_json(self, planner):
        planner.find_shortest_path.side_effect = PredecessorCycleError("CDG")
        client = TestClient(create_app(planner))

        response = client.get("/task/planTripRoute/LHR/BGY")

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {
            "error": "Internal Server Error",
            "message": "Predecessor chain loops back to 'CDG'",
        }

    def test_any_other_error_returns_500_json(self, planner):
        planner.plan_trip.side_effect = RuntimeError("snapshot rejected")
        client = TestClient(create_app(planner), raise_server_exceptions=False)

        response = client.get("/task/planTripFlight/LHR/BGY/cheapest")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal Server Error",
            "message": "snapshot rejected",
        }

    def test_negative_distance_is_planned(self, lhr, cdg):
        source = InMemoryGraphDataSource(airports=[lhr, cdg], routes=[Route("LHR", "CDG", -5)])
        client = TestClient(create_app(TripPlanner(data_source=source)))

        response = client.get("/task/planTripRoute/LHR/CDG")

        assert response.status_code == 200
        assert response.json()["total_distance_km"] == -5
