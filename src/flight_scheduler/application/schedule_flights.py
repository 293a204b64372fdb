"""
ScheduleFlights Use Case - Public API for the flight scheduler.

This module provides the main entry point for scheduling flights.
It acts as a Facade/Factory, wiring configuration, store, validators
and services behind a small interface.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from src.flight_scheduler.adapters.repositories.sqlite_store import SqliteFlightStore
from src.flight_scheduler.config import SchedulerConfig, configure_logging
from src.flight_scheduler.ports.flight_store import FlightStore
from src.flight_scheduler.ports.schedule_validator import ScheduleCheck
from src.flight_scheduler.schemas.flight import Flight, Location
from src.flight_scheduler.services.consistency_sweep_service import (
    ConsistencySweepService,
    ScheduleAudit,
)
from src.flight_scheduler.services.flight_query_service import FlightQueryService

logger = logging.getLogger(__name__)


class ScheduleFlights:
    """
    Public API for scheduling flights.

    Example usage:
        >>> scheduler = ScheduleFlights()
        >>> flight = await scheduler.schedule(
        ...     date=datetime(2024, 1, 1, 10, 0),
        ...     source=Location("A", "01000-000", "Sao Paulo", "SP"),
        ...     destination=Location("B", "20000-000", "Rio de Janeiro", "RJ"),
        ... )
        >>> await scheduler.close()

    Attributes:
        _config: Scheduler configuration.
        _store: Flight store (closed on close()).
        _service: Underlying FlightQueryService.
        _sweeper: ConsistencySweepService over the same store.
    """

    def __init__(
        self,
        config: Optional[SchedulerConfig] = None,
        store: Optional[FlightStore] = None,
    ) -> None:
        """
        Initialize the scheduler with optional custom dependencies.

        Args:
            config: Scheduler configuration. If None, read from environment.
                Its log_level is applied through configure_logging().
            store: Custom flight store. If None, uses SqliteFlightStore at
                config.db_path.
        """
        self._config = config if config is not None else SchedulerConfig.from_env()
        configure_logging(self._config.log_level)
        self._store = store if store is not None else SqliteFlightStore(self._config.db_path)
        self._service = FlightQueryService(self._store, config=self._config)
        self._sweeper = ConsistencySweepService(
            self._store, min_separation=self._config.min_separation
        )

        logger.info(
            "ScheduleFlights initialized with %s store (min separation %d min, tz %s)",
            self._store.name,
            self._config.min_separation_minutes,
            self._config.reference_timezone,
        )

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    @property
    def service(self) -> FlightQueryService:
        return self._service

    async def schedule(
        self,
        date: datetime,
        source: Location,
        destination: Location,
    ) -> Flight:
        """
        Build and create a new flight.

        Raises:
            InvalidLocationError, SchedulingConflictError,
            DuplicateDestinationError: If the flight breaks a rule.
        """
        return await self._service.create(
            Flight(date=date, source=source, destination=destination)
        )

    async def check(self, flight: Flight) -> Tuple[ScheduleCheck, ...]:
        """Dry-run the schedule validators for a flight."""
        return await self._service.check(flight)

    async def list_flights(self) -> List[Flight]:
        return await self._service.list_all()

    async def get_flight(self, flight_id: str) -> Flight:
        return await self._service.get_by_id(flight_id)

    async def cancel(self, flight_id: str) -> None:
        """Remove a flight; raises FlightNotFoundError if absent."""
        await self._service.remove(flight_id)

    async def flights_between(
        self,
        start: datetime,
        end: datetime,
        exclude_id: Optional[str] = None,
    ) -> List[Flight]:
        return await self._service.find_between_dates(start, end, exclude_id)

    async def audit(self) -> ScheduleAudit:
        """Sweep the store for rule violations."""
        return await self._sweeper.sweep()

    async def close(self) -> None:
        """Release store resources."""
        await self._store.close()
