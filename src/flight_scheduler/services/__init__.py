"""
Domain services for the flight scheduler.

Services orchestrate the interaction between ports (store, validators)
and domain rules (location check, schedule audits).
"""

from src.flight_scheduler.services.consistency_sweep_service import (
    ConsistencySweepService,
    ScheduleAudit,
)
from src.flight_scheduler.services.flight_query_service import FlightQueryService

__all__ = ["ConsistencySweepService", "FlightQueryService", "ScheduleAudit"]
