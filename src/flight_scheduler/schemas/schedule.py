"""
Schedule frame schema using Pandera.

Tabular view of a whole flight schedule, used for store-wide audits.
Schema validation happens once when the frame is built.
"""

from typing import Iterable

import pandas as pd
import pandera as pa
from pandera.typing import DataFrame, Series

from src.flight_scheduler.schemas.flight import Flight

SCHEDULE_COLUMNS = ["flight_id", "date", "source_id", "destination_id"]


class FlightScheduleSchema(pa.DataFrameModel):
    """
    One row per persisted flight.

    Only persisted flights belong in a schedule frame, so flight_id is
    required and unique.
    """

    flight_id: Series[str] = pa.Field(
        nullable=False,
        unique=True,
        description="Store-assigned flight identifier",
    )
    date: Series[pd.Timestamp] = pa.Field(
        nullable=False,
        description="Scheduled departure on the reference wall clock",
    )
    source_id: Series[str] = pa.Field(
        nullable=False,
        description="Departure location identifier",
    )
    destination_id: Series[str] = pa.Field(
        nullable=False,
        description="Arrival location identifier",
    )

    class Config:
        strict = False
        coerce = True
        name = "FlightScheduleSchema"


FlightScheduleFrame = DataFrame[FlightScheduleSchema]


def flights_to_frame(flights: Iterable[Flight]) -> FlightScheduleFrame:
    """
    Build a validated schedule frame sorted by departure date.

    Args:
        flights: Persisted flights (each must have an id).

    Returns:
        DataFrame validated against FlightScheduleSchema, index reset.

    Raises:
        ValueError: If a flight has not been persisted yet.
        pandera.errors.SchemaError: If flight ids repeat.
    """
    flights = list(flights)
    unsaved = [flight for flight in flights if flight.id is None]
    if unsaved:
        raise ValueError(f"{len(unsaved)} flight(s) have no id; persist them first")

    rows = [
        {
            "flight_id": flight.id,
            "date": flight.date,
            "source_id": flight.source_id,
            "destination_id": flight.destination_id,
        }
        for flight in flights
    ]
    df = pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
    if df.empty:
        df = df.astype({"flight_id": str, "source_id": str, "destination_id": str})
        df["date"] = pd.to_datetime(df["date"])

    df = df.sort_values("date", kind="stable").reset_index(drop=True)
    return FlightScheduleSchema.validate(df)
