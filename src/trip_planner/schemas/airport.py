"""
Airport schemas.

`Airport` is the vertex type of both planning graphs. Identity is the IATA
code alone, so two airports loaded from different sources (or built from a
bare code in tests) compare and hash equal.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd
import pandera as pa
from pandera.typing import Series


class AirportSchema(pa.DataFrameModel):
    """
    Tabular contract for airport data (CSV ingestion and SQL reads).

    One row per airport; `code` must be unique.
    """

    name: Series[str] = pa.Field(
        nullable=False,
        description="Full airport name (e.g., 'London Heathrow')",
    )
    code: Series[str] = pa.Field(
        nullable=False,
        unique=True,
        str_length={"min_value": 1},
        description="IATA airport code (e.g., 'LHR')",
    )
    city: Series[str] = pa.Field(
        nullable=True,
        description="City served by the airport",
    )
    country: Series[str] = pa.Field(
        nullable=True,
        description="Country of the airport",
    )

    class Config:
        strict = False
        coerce = True
        name = "AirportSchema"


@dataclass(frozen=True)
class Airport:
    """
    Immutable airport value object.

    Attributes:
        code: IATA code, the only identifying field.
        name: Full airport name.
        city: City where the airport is located.
        country: Country of the airport. Follows the airline organisation,
            e.g. London Heathrow is in the United Kingdom, not England.
    """

    code: str
    name: str = field(default="", compare=False)
    city: str = field(default="", compare=False)
    country: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.code


def _optional_str(value: object) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value)


def airports_from_df(df: pd.DataFrame) -> List[Airport]:
    """Convert an AirportSchema-compliant DataFrame to Airport objects."""
    return [
        Airport(
            code=str(row.code),
            name=_optional_str(row.name),
            city=_optional_str(row.city),
            country=_optional_str(row.country),
        )
        for row in df.itertuples(index=False)
    ]


def airport_from_row(row: Optional[tuple]) -> Optional[Airport]:
    """Build an Airport from a (code, name, city, country) tuple, or None."""
    if row is None:
        return None
    code, name, city, country = row
    return Airport(
        code=code,
        name=_optional_str(name),
        city=_optional_str(city),
        country=_optional_str(country),
    )
