"""
Route schemas.

A route is a directed, distance-weighted edge of the route graph used by
the distance planner. At most one route per ordered airport pair is
expected, but nothing here forbids more.
"""

from dataclasses import dataclass
from typing import List

import pandas as pd
import pandera as pa
from pandera.typing import Series


class RouteSchema(pa.DataFrameModel):
    """
    Tabular contract for route data.

    Distances are whole kilometers. Sign is not checked; the planners relax
    whatever weight is stored.
    """

    origin_code: Series[str] = pa.Field(
        nullable=False,
        description="Origin airport IATA code",
    )
    destination_code: Series[str] = pa.Field(
        nullable=False,
        description="Destination airport IATA code",
    )
    distance_in_kilometers: Series[int] = pa.Field(
        nullable=False,
        description="Great-circle distance in kilometers",
    )

    class Config:
        strict = False
        coerce = True
        name = "RouteSchema"


@dataclass(frozen=True)
class Route:
    """Immutable directed edge between two airports, weighted by distance."""

    origin_code: str
    destination_code: str
    distance_in_kilometers: int

    def __str__(self) -> str:
        return (
            f"{self.origin_code} -> {self.destination_code} "
            f"({self.distance_in_kilometers} km)"
        )


def routes_from_df(df: pd.DataFrame) -> List[Route]:
    """Convert a RouteSchema-compliant DataFrame to Route objects."""
    return [
        Route(
            origin_code=str(origin),
            destination_code=str(destination),
            distance_in_kilometers=int(distance),
        )
        for origin, destination, distance in zip(
            df["origin_code"],
            df["destination_code"],
            df["distance_in_kilometers"],
        )
    ]
