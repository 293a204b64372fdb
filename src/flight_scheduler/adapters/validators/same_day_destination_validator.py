"""
Same-Day-Destination Validator - one arrival per destination per day.

Rejects a candidate flight when its destination already receives a
flight on the same calendar day.
"""

import logging
from dataclasses import replace

from src.flight_scheduler.ports.flight_store import FlightFilter, FlightStore
from src.flight_scheduler.ports.schedule_validator import (
    ScheduleCheck,
    ScheduleCheckStatus,
    ScheduleValidator,
)
from src.flight_scheduler.schemas.flight import Flight, day_window

logger = logging.getLogger(__name__)


class SameDayDestinationValidator(ScheduleValidator):
    """
    Enforces at most one flight per destination per calendar day.

    Days run midnight to midnight on the wall clock of the flight's date,
    never as a rolling 24 hours.
    """

    def __init__(self, store: FlightStore) -> None:
        self._store = store

    @property
    def name(self) -> str:
        return "same_day_destination"

    async def check(self, flight: Flight) -> ScheduleCheck:
        start, end = day_window(flight.date)
        same_day = replace(
            FlightFilter.between_dates(start, end, exclude_id=flight.id),
            destination_id=flight.destination_id,
        )
        conflicts = await self._store.find(same_day)

        if not conflicts:
            return ScheduleCheck.accepted(self.name)

        logger.debug(
            "Destination %s already has %d flight(s) on %s",
            flight.destination_id,
            len(conflicts),
            flight.calendar_day,
        )
        return ScheduleCheck(
            validator=self.name,
            status=ScheduleCheckStatus.DUPLICATE_DESTINATION,
            conflicting_ids=tuple(f.id for f in conflicts),
            message=(
                "There cannot be more than one flight to the same "
                "destination on the same day"
            ),
        )
