"""
Schema definitions for the flight scheduler.

Frozen dataclasses for records, Pandera models for tabular schedules.
"""

from .flight import Flight, Location, day_window
from .schedule import (
    FlightScheduleFrame,
    FlightScheduleSchema,
    flights_to_frame,
)

__all__ = [
    # Records
    "Flight",
    "Location",
    "day_window",
    # Schedule frames
    "FlightScheduleFrame",
    "FlightScheduleSchema",
    "flights_to_frame",
]
