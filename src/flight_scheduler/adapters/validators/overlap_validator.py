"""
Overlap Validator - minimum separation between flights.

Rejects a candidate flight when any stored flight departs within the
separation window around it, regardless of route.
"""

import logging
from datetime import timedelta
from typing import Optional

from src.flight_scheduler.ports.flight_store import FlightFilter, FlightStore
from src.flight_scheduler.ports.schedule_validator import (
    ScheduleCheck,
    ScheduleCheckStatus,
    ScheduleValidator,
)
from src.flight_scheduler.schemas.flight import Flight

logger = logging.getLogger(__name__)

DEFAULT_MIN_SEPARATION = timedelta(minutes=30)


class OverlapValidator(ScheduleValidator):
    """
    Enforces a minimum distance between any two flights.

    The window [date - separation, date + separation] is inclusive at
    both ends: a flight exactly one separation away is a conflict.

    Attributes:
        _store: Flight store to query.
        _separation: Half-width of the overlap window.
    """

    def __init__(
        self,
        store: FlightStore,
        min_separation: Optional[timedelta] = None,
    ) -> None:
        """
        Initialize the validator.

        Args:
            store: Flight store holding the existing schedule.
            min_separation: Window half-width. Defaults to 30 minutes.
        """
        self._store = store
        self._separation = (
            DEFAULT_MIN_SEPARATION if min_separation is None else min_separation
        )

    @property
    def name(self) -> str:
        return "overlap"

    @property
    def min_separation(self) -> timedelta:
        return self._separation

    async def check(self, flight: Flight) -> ScheduleCheck:
        window = FlightFilter.between_dates(
            flight.date - self._separation,
            flight.date + self._separation,
            exclude_id=flight.id,
        )
        conflicts = await self._store.find(window)

        if not conflicts:
            return ScheduleCheck.accepted(self.name)

        minutes = int(self._separation.total_seconds() // 60)
        logger.debug(
            "Flight at %s overlaps %d existing flight(s)", flight.date, len(conflicts)
        )
        return ScheduleCheck(
            validator=self.name,
            status=ScheduleCheckStatus.SCHEDULING_CONFLICT,
            conflicting_ids=tuple(f.id for f in conflicts),
            message=(
                f"Each flight must be at least {minutes} minutes "
                f"from every other flight"
            ),
        )
