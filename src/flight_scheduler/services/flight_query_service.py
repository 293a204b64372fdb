"""
Flight Query Service - Orchestrates scheduling rules and persistence.

Runs the location check and the schedule validators for new flights,
persists the accepted ones and serves read/delete operations on the
store.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from src.flight_scheduler.adapters.validators.overlap_validator import OverlapValidator
from src.flight_scheduler.adapters.validators.same_day_destination_validator import (
    SameDayDestinationValidator,
)
from src.flight_scheduler.config import SchedulerConfig
from src.flight_scheduler.exceptions import (
    DuplicateDestinationError,
    FlightNotFoundError,
    SchedulingConflictError,
    ScheduleValidationError,
)
from src.flight_scheduler.ports.flight_store import FlightFilter
from src.flight_scheduler.ports.schedule_validator import (
    ScheduleCheck,
    ScheduleCheckStatus,
)

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from src.flight_scheduler.ports.flight_store import FlightStore
    from src.flight_scheduler.ports.schedule_validator import ScheduleValidator
    from src.flight_scheduler.schemas.flight import Flight

logger = logging.getLogger(__name__)


def to_reference_time(moment: datetime, tz: ZoneInfo) -> datetime:
    """
    Express a datetime on the reference wall clock.

    Naive datetimes are assumed to already be reference time and are
    returned unchanged. Aware datetimes are converted and made naive.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


class FlightQueryService:
    """
    Domain service for scheduling flights.

    Orchestrates the create process:
    1. Rejects flights whose source equals their destination
    2. Runs every schedule validator concurrently against the store
    3. Raises the first rejection (in validator order), or
    4. Persists the flight and returns it with its generated id

    Creates are serialized through an asyncio.Lock so that two creates
    in the same process never validate against the same snapshot.

    Attributes:
        _store: Flight store.
        _validators: Schedule validators run for every create.
        _config: Scheduler configuration.
    """

    def __init__(
        self,
        store: FlightStore,
        validators: Optional[Sequence[ScheduleValidator]] = None,
        config: Optional[SchedulerConfig] = None,
    ) -> None:
        """
        Initialize the query service.

        Args:
            store: Flight store implementation.
            validators: Schedule validators. If None, uses the overlap and
                same-day-destination validators built from config.
            config: Scheduler configuration. If None, uses defaults.
        """
        self._store = store
        self._config = config or SchedulerConfig()
        self._tz = self._config.tzinfo
        if validators is None:
            validators = (
                OverlapValidator(store, self._config.min_separation),
                SameDayDestinationValidator(store),
            )
        self._validators: Tuple[ScheduleValidator, ...] = tuple(validators)
        self._create_lock = asyncio.Lock()

    @property
    def store(self) -> FlightStore:
        return self._store

    @property
    def validators(self) -> Tuple[ScheduleValidator, ...]:
        return self._validators

    async def list_all(self) -> List[Flight]:
        """Return every stored flight, ordered by departure date."""
        return await self._store.find()

    async def get_by_id(self, flight_id: str) -> Flight:
        """
        Return a single flight.

        Raises:
            FlightNotFoundError: If no flight has this id.
        """
        flight = await self._store.find_by_id(flight_id)
        if flight is None:
            raise FlightNotFoundError(flight_id)
        return flight

    async def find_between_dates(
        self,
        start: datetime,
        end: datetime,
        exclude_id: Optional[str] = None,
    ) -> List[Flight]:
        """
        Return flights departing in [start, end], both ends inclusive.

        Args:
            start: Earliest departure.
            end: Latest departure.
            exclude_id: Flight id to leave out even if it falls in range.
        """
        flight_filter = FlightFilter.between_dates(
            to_reference_time(start, self._tz),
            to_reference_time(end, self._tz),
            exclude_id=exclude_id,
        )
        return await self._store.find(flight_filter)

    async def check(self, flight: Flight) -> Tuple[ScheduleCheck, ...]:
        """
        Validate a flight without persisting it.

        Raises:
            InvalidLocationError: If source and destination are the same.

        Returns:
            One ScheduleCheck per validator, in validator order.
        """
        flight.validate_locations()
        return await self._run_checks(self._normalize(flight))

    async def create(self, flight: Flight) -> Flight:
        """
        Validate and persist a new flight.

        Raises:
            InvalidLocationError: If source and destination are the same.
                Raised before the store is read.
            SchedulingConflictError: If another flight is too close in time.
            DuplicateDestinationError: If the destination already has a
                flight on the same day.

        Returns:
            The persisted flight, carrying its generated id.
        """
        flight.validate_locations()
        flight = self._normalize(flight)

        async with self._create_lock:
            checks = await self._run_checks(flight)
            self._raise_for_rejection(flight, checks)
            saved = await self._store.save(flight)

        logger.info(
            "Scheduled flight %s: %s -> %s at %s",
            saved.id,
            saved.source_id,
            saved.destination_id,
            saved.date,
        )
        return saved

    async def remove(self, flight_id: str) -> None:
        """
        Delete a flight permanently.

        Raises:
            FlightNotFoundError: If no flight has this id. The store is
                left unchanged.
        """
        flight = await self.get_by_id(flight_id)
        await self._store.delete(flight.id)
        logger.info("Removed flight %s", flight.id)

    def _normalize(self, flight: Flight) -> Flight:
        moment = to_reference_time(flight.date, self._tz)
        if moment is flight.date:
            return flight
        return replace(flight, date=moment)

    async def _run_checks(self, flight: Flight) -> Tuple[ScheduleCheck, ...]:
        # Fan out; gather waits for every validator before returning.
        results = await asyncio.gather(
            *(validator.check(flight) for validator in self._validators)
        )
        return tuple(results)

    def _raise_for_rejection(
        self,
        flight: Flight,
        checks: Sequence[ScheduleCheck],
    ) -> None:
        """
        Raise the exception matching the first rejected check.

        Args:
            flight: Candidate flight (reference time).
            checks: Validator results, in validator order.
        """
        for check in checks:
            if check.is_accepted:
                continue

            logger.warning(
                "Rejected flight %s -> %s at %s (%s): conflicts with %s",
                flight.source_id,
                flight.destination_id,
                flight.date,
                check.status.value,
                ", ".join(check.conflicting_ids),
            )

            if check.status is ScheduleCheckStatus.SCHEDULING_CONFLICT:
                raise SchedulingConflictError(
                    flight.date, check.conflicting_ids, check.message or None
                )
            if check.status is ScheduleCheckStatus.DUPLICATE_DESTINATION:
                raise DuplicateDestinationError(
                    flight.destination_id,
                    flight.calendar_day,
                    check.conflicting_ids,
                    check.message or None,
                )
            raise ScheduleValidationError(check.message or check.status.value)
