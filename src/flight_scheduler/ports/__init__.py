"""
Port interfaces for the flight scheduler.

Ports define the abstract interfaces the domain layer uses to talk to
storage and to pluggable schedule checks (Ports and Adapters pattern).
"""

from src.flight_scheduler.ports.flight_store import FlightFilter, FlightStore
from src.flight_scheduler.ports.schedule_validator import (
    ScheduleCheck,
    ScheduleCheckStatus,
    ScheduleValidator,
)

__all__ = [
    "FlightFilter",
    "FlightStore",
    "ScheduleCheck",
    "ScheduleCheckStatus",
    "ScheduleValidator",
]
