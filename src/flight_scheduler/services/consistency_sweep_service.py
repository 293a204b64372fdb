"""
Consistency Sweep Service - Store-wide audit of the scheduling rules.

The create path validates each new flight against a snapshot of the
store. Writers in other processes, bulk imports or manual edits can
still leave the schedule in a state that breaks the rules; the sweep
finds every such violation in one vectorized pass over the schedule.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING, List, Optional

import numpy as np
import pandas as pd

from src.flight_scheduler.adapters.validators.overlap_validator import (
    DEFAULT_MIN_SEPARATION,
)
from src.flight_scheduler.schemas.schedule import FlightScheduleFrame, flights_to_frame

if TYPE_CHECKING:
    from src.flight_scheduler.ports.flight_store import FlightStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlapViolation:
    """Two stored flights closer together than the minimum separation."""

    earlier_id: str
    later_id: str
    gap: timedelta


@dataclass(frozen=True)
class DuplicateDestinationDay:
    """A destination receiving more than one stored flight on one day."""

    destination_id: str
    day: date
    flight_ids: tuple[str, ...]


@dataclass(frozen=True)
class ScheduleAudit:
    """
    Result of a sweep over the whole store.

    Attributes:
        flights_checked: Number of flights in the audited schedule.
        overlaps: Every pair of flights violating the separation rule.
        duplicate_days: Every (destination, day) with more than one flight.
        elapsed_ms: Time taken by the sweep.
    """

    flights_checked: int
    overlaps: tuple[OverlapViolation, ...]
    duplicate_days: tuple[DuplicateDestinationDay, ...]
    elapsed_ms: float = 0.0

    @property
    def is_consistent(self) -> bool:
        return not self.overlaps and not self.duplicate_days


def find_overlaps(
    schedule: FlightScheduleFrame,
    min_separation: timedelta = DEFAULT_MIN_SEPARATION,
) -> List[OverlapViolation]:
    """
    Find all flight pairs departing within min_separation of each other.

    The frame must be sorted by date (flights_to_frame guarantees this).
    For each flight, np.searchsorted locates the last flight still inside
    its window, so only real violations are visited.

    Args:
        schedule: Validated schedule frame sorted by date.
        min_separation: Inclusive separation limit.

    Returns:
        Violations ordered by the earlier flight's departure.
    """
    if len(schedule) < 2:
        return []

    dates = schedule["date"].to_numpy(dtype="datetime64[ns]")
    ids = schedule["flight_id"].to_numpy()
    window = np.timedelta64(pd.Timedelta(min_separation).value, "ns")

    # side="right" keeps flights exactly min_separation away in the window
    upper = np.searchsorted(dates, dates + window, side="right")

    violations: List[OverlapViolation] = []
    for i in np.nonzero(upper > np.arange(len(dates)) + 1)[0]:
        for j in range(i + 1, upper[i]):
            violations.append(
                OverlapViolation(
                    earlier_id=str(ids[i]),
                    later_id=str(ids[j]),
                    gap=pd.Timedelta(dates[j] - dates[i]).to_pytimedelta(),
                )
            )
    return violations


def find_duplicate_destination_days(
    schedule: FlightScheduleFrame,
) -> List[DuplicateDestinationDay]:
    """
    Find every destination that receives several flights on one day.

    Args:
        schedule: Validated schedule frame.

    Returns:
        One entry per offending (destination, day), sorted by day then
        destination.
    """
    if schedule.empty:
        return []

    grouped = (
        schedule.assign(day=schedule["date"].dt.date)
        .groupby(["destination_id", "day"], sort=False)["flight_id"]
        .agg(tuple)
    )
    duplicates = grouped[grouped.map(len) > 1]

    result = [
        DuplicateDestinationDay(
            destination_id=destination_id,
            day=day,
            flight_ids=flight_ids,
        )
        for (destination_id, day), flight_ids in duplicates.items()
    ]
    result.sort(key=lambda d: (d.day, d.destination_id))
    return result


class ConsistencySweepService:
    """
    Audits a flight store for scheduling rule violations.

    Loads the full schedule once, builds a validated pandas frame and
    runs both rule checks on it. Read-only: violations are reported,
    never repaired.
    """

    def __init__(
        self,
        store: FlightStore,
        min_separation: Optional[timedelta] = None,
    ) -> None:
        self._store = store
        self._separation = (
            DEFAULT_MIN_SEPARATION if min_separation is None else min_separation
        )

    async def sweep(self) -> ScheduleAudit:
        """Audit the whole store."""
        start_time = time.perf_counter()

        flights = await self._store.find()
        schedule = flights_to_frame(flights)

        overlaps = find_overlaps(schedule, self._separation)
        duplicate_days = find_duplicate_destination_days(schedule)

        audit = ScheduleAudit(
            flights_checked=len(schedule),
            overlaps=tuple(overlaps),
            duplicate_days=tuple(duplicate_days),
            elapsed_ms=(time.perf_counter() - start_time) * 1000,
        )

        if audit.is_consistent:
            logger.info(
                "Swept %d flights in %.0fms: schedule consistent",
                audit.flights_checked,
                audit.elapsed_ms,
            )
        else:
            logger.warning(
                "Swept %d flights: %d overlapping pair(s), %d duplicate destination day(s)",
                audit.flights_checked,
                len(audit.overlaps),
                len(audit.duplicate_days),
            )
        return audit
