"""
Flight schemas.

Flights form a multigraph: several airlines may serve the same ordered
airport pair at different prices, and each flight is its own edge for the
cheapest-fare search.
"""

from dataclasses import dataclass
from typing import List, Optional

import pandas as pd
import pandera as pa
from pandera.typing import Series


class FlightSchema(pa.DataFrameModel):
    """
    Tabular contract for flight data.

    `cost_in_euros` is nullable: a flight without a known fare is kept in
    the network but is never used as an edge by the fare searches.
    """

    origin_code: Series[str] = pa.Field(
        nullable=False,
        description="Origin airport IATA code",
    )
    destination_code: Series[str] = pa.Field(
        nullable=False,
        description="Destination airport IATA code",
    )
    airline: Series[str] = pa.Field(
        nullable=False,
        description="Operating airline name",
    )
    cost_in_euros: Series[float] = pa.Field(
        nullable=True,
        description="Ticket price in euros (whole units)",
    )

    class Config:
        strict = False
        coerce = True
        name = "FlightSchema"


@dataclass(frozen=True)
class Flight:
    """Immutable directed edge between two airports, weighted by fare."""

    origin_code: str
    destination_code: str
    airline: str
    cost_in_euros: Optional[int]

    def __str__(self) -> str:
        cost = "n/a" if self.cost_in_euros is None else f"{self.cost_in_euros} €"
        return (
            f"{self.origin_code} -> {self.destination_code} "
            f"{self.airline} ({cost})"
        )


def _optional_cost(value: object) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    return int(value)


def flights_from_df(df: pd.DataFrame) -> List[Flight]:
    """Convert a FlightSchema-compliant DataFrame to Flight objects."""
    return [
        Flight(
            origin_code=str(origin),
            destination_code=str(destination),
            airline=str(airline),
            cost_in_euros=_optional_cost(cost),
        )
        for origin, destination, airline, cost in zip(
            df["origin_code"],
            df["destination_code"],
            df["airline"],
            df["cost_in_euros"],
        )
    ]
