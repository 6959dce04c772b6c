import logging
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from src.dijkstra.exceptions import DijkstraError
from src.trip_planner.application import TripPlanner
from src.trip_planner.config import Settings
from src.trip_planner.logging_config import setup_logging
from src.trip_planner.ports.graph_data_source import DataAccessError, TripPlannerError
from src.trip_planner.services.fare_planner import Criterion
from src.trip_planner.services.path_formatter import (
    format_flight_trip,
    format_route,
    total_cost,
    total_distance,
)

logger = logging.getLogger(__name__)


# --- Pydantic Schemas (The JSON Contract) ---
# Built from the frozen dataclasses via from_attributes.


class AirportSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    city: str
    country: str


class RouteSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    origin_code: str
    destination_code: str
    distance_in_kilometers: int


class FlightSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    origin_code: str
    destination_code: str
    airline: str
    cost_in_euros: Optional[int] = None


class DirectRouteResponse(BaseModel):
    origin: str
    destination: str
    has_direct_route: bool


class RouteFlightsResponse(BaseModel):
    route: RouteSchema
    flights: List[FlightSchema]
    num_flights: int


class RoutePlanResponse(BaseModel):
    origin: str
    destination: str
    routes: List[RouteSchema]
    total_distance_km: int
    num_legs: int
    summary: str


class FlightPlanResponse(BaseModel):
    origin: str
    destination: str
    criteria: str
    flights: List[FlightSchema]
    total_cost_eur: int
    num_legs: int
    summary: str


class StatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_airports: int
    total_routes: int
    total_flights: int


ENDPOINTS = {
    "hasDirectRoute": "/task/hasDirectRoute/{from}/{to}",
    "getFlight": "/task/getFlight/{routeOrigin}/{routeDestination}",
    "planTripRoute": "/task/planTripRoute/{from}/{to}",
    "planTripFlight": "/task/planTripFlight/{from}/{to}/{criteria}",
    "stats": "/stats",
}


def _not_found(error: str, **context: str) -> HTTPException:
    return HTTPException(status_code=404, detail={"error": error, **context})


def create_app(planner: Optional[TripPlanner] = None) -> FastAPI:
    """
    Build the HTTP API around a TripPlanner.

    Args:
        planner: Planner to serve. If None, one is built from the
            TRIP_PLANNER_* environment.
    """
    if planner is None:
        planner = TripPlanner(Settings.from_env())

    app = FastAPI(title="Trip Planner API")
    app.state.planner = planner

    # Exception (the catch-all) is served by Starlette's outermost middleware,
    # which also re-raises to the server after replying
    @app.exception_handler(TripPlannerError)
    @app.exception_handler(DijkstraError)
    @app.exception_handler(Exception)
    async def handle_server_error(request: Request, exc: Exception):
        if isinstance(exc, DataAccessError):
            logger.error("Error serving %s: %s", request.url.path, exc)
            error = "Data access failed"
        else:
            logger.error("Unexpected error serving %s", request.url.path, exc_info=exc)
            error = "Internal Server Error"
        return JSONResponse(status_code=500, content={"error": error, "message": str(exc)})

    def resolve_pair(origin: str, destination: str):
        from_airport = planner.resolve_airport(origin)
        if from_airport is None:
            raise _not_found("Origin Airport not found", origin=origin, destination=destination)
        to_airport = planner.resolve_airport(destination)
        if to_airport is None:
            raise _not_found("Destination Airport not found", origin=origin, destination=destination)
        return from_airport, to_airport

    # --- API Endpoints ---

    @app.get("/")
    def welcome():
        return {
            "message": "Welcome to the Trip Planner API",
            "endpoints": ENDPOINTS,
        }

    @app.get("/task/hasDirectRoute/{origin}/{destination}", response_model=DirectRouteResponse)
    def has_direct_route(origin: str, destination: str):
        from_airport, to_airport = resolve_pair(origin, destination)
        return DirectRouteResponse(
            origin=from_airport.code,
            destination=to_airport.code,
            has_direct_route=planner.has_direct_route(from_airport, to_airport),
        )

    @app.get(
        "/task/getFlight/{route_origin}/{route_destination}",
        response_model=RouteFlightsResponse,
    )
    def get_flight(route_origin: str, route_destination: str):
        route = planner.get_route(route_origin, route_destination)
        if route is None:
            raise _not_found("Route not found", origin=route_origin, destination=route_destination)

        flights = planner.get_flights(route)
        if not flights:
            raise _not_found("Route not found", origin=route_origin, destination=route_destination)

        return RouteFlightsResponse(
            route=RouteSchema.model_validate(route),
            flights=[FlightSchema.model_validate(f) for f in flights],
            num_flights=len(flights),
        )

    @app.get("/task/planTripRoute/{origin}/{destination}", response_model=RoutePlanResponse)
    def plan_trip_route(origin: str, destination: str):
        from_airport, to_airport = resolve_pair(origin, destination)

        routes = planner.find_shortest_path(from_airport, to_airport)
        if not routes:
            raise _not_found("No Route found", origin=origin, destination=destination)

        return RoutePlanResponse(
            origin=from_airport.code,
            destination=to_airport.code,
            routes=[RouteSchema.model_validate(r) for r in routes],
            total_distance_km=total_distance(routes),
            num_legs=len(routes),
            summary=format_route(routes),
        )

    @app.get(
        "/task/planTripFlight/{origin}/{destination}/{criteria}",
        response_model=FlightPlanResponse,
    )
    def plan_trip_flight(origin: str, destination: str, criteria: str):
        from_airport, to_airport = resolve_pair(origin, destination)

        if Criterion.parse(criteria) is None:
            raise _not_found("Criteria not found", criteria=criteria)

        flights = planner.plan_trip(from_airport, to_airport, criteria)
        if not flights:
            raise _not_found(
                "Route not found", origin=origin, destination=destination, criteria=criteria
            )

        return FlightPlanResponse(
            origin=from_airport.code,
            destination=to_airport.code,
            criteria=criteria.lower(),
            flights=[FlightSchema.model_validate(f) for f in flights],
            total_cost_eur=total_cost(flights),
            num_legs=len(flights),
            summary=format_flight_trip(flights),
        )

    @app.get("/stats", response_model=StatsResponse)
    def stats():
        return StatsResponse.model_validate(planner.stats())

    return app


def main() -> None:
    """Run the API server configured from the environment."""
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    planner = TripPlanner(settings)
    if settings.load_csv_on_startup:
        report = planner.ingest_csv(clear=True)
        logger.info(
            "Startup load: %d airports, %d routes, %d flights",
            report.airports,
            report.routes,
            report.flights,
        )

    uvicorn.run(create_app(planner), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
