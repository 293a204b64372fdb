"""
Schedule Validator port interface.

Defines the contract for checks that decide whether a candidate flight
fits into the existing schedule. Validators report their outcome as a
value so that concurrent checks can be collected and compared before
anything is raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.flight_scheduler.schemas.flight import Flight


class ScheduleCheckStatus(Enum):
    """Outcome of checking one candidate flight against the schedule."""

    ACCEPTED = "accepted"
    """No existing flight collides with the candidate."""

    SCHEDULING_CONFLICT = "scheduling_conflict"
    """Another flight lies inside the candidate's overlap window."""

    DUPLICATE_DESTINATION = "duplicate_destination"
    """The destination already has a flight on the candidate's day."""


@dataclass(frozen=True)
class ScheduleCheck:
    """
    Immutable result of a single validator run.

    Attributes:
        validator: Name of the validator that produced the result.
        status: Outcome of the check.
        conflicting_ids: Ids of the existing flights that caused a rejection.
        message: Human-readable explanation of a rejection.
    """

    validator: str
    status: ScheduleCheckStatus
    conflicting_ids: tuple[str, ...] = ()
    message: str = ""

    @property
    def is_accepted(self) -> bool:
        return self.status is ScheduleCheckStatus.ACCEPTED

    @classmethod
    def accepted(cls, validator: str) -> ScheduleCheck:
        return cls(validator=validator, status=ScheduleCheckStatus.ACCEPTED)


class ScheduleValidator(ABC):
    """
    Abstract interface for schedule checks.

    Implementations only read from the store; they never write.

    Implementations:
    - OverlapValidator: minimum separation between any two flights
    - SameDayDestinationValidator: one flight per destination per day
    """

    @abstractmethod
    async def check(self, flight: Flight) -> ScheduleCheck:
        """
        Check a candidate flight against the flights already stored.

        Args:
            flight: Candidate flight. Its own id (if any) is ignored in
                the lookup so re-checking a stored flight is possible.

        Returns:
            ScheduleCheck describing acceptance or the reason for rejection.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Validator identifier."""
        ...
