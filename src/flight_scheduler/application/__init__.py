"""
Application layer for the flight scheduler.

This layer provides the public API for scheduling flights. It acts as a
facade, handling dependency initialization and providing a simple
interface for consumers.
"""

from src.flight_scheduler.application.schedule_flights import ScheduleFlights

__all__ = ["ScheduleFlights"]
