"""
Custom exceptions for the flight scheduler.

Provides a hierarchy of exceptions so callers can tell business-rule
rejections apart from missing records and configuration problems.
"""

from datetime import date, datetime
from typing import Optional, Sequence


class FlightSchedulerError(Exception):
    """Base exception for all flight scheduler errors."""

    pass


class ScheduleValidationError(FlightSchedulerError):
    """Base exception for business-rule rejections of a flight."""

    pass


class InvalidLocationError(ScheduleValidationError):
    """Raised when a flight's source and destination are the same location."""

    def __init__(self, location_id: str) -> None:
        self.location_id = location_id
        message = (
            f"Source and destination must be different locations "
            f"(both are '{location_id}')"
        )
        super().__init__(message)


class SchedulingConflictError(ScheduleValidationError):
    """Raised when a flight falls inside another flight's overlap window."""

    def __init__(
        self,
        flight_date: datetime,
        conflicting_ids: Sequence[str] = (),
        message: Optional[str] = None,
    ) -> None:
        self.flight_date = flight_date
        self.conflicting_ids = tuple(conflicting_ids)
        super().__init__(
            message
            or "Each flight must be at least 30 minutes from every other flight"
        )


class DuplicateDestinationError(ScheduleValidationError):
    """Raised when a destination already has a flight on the same day."""

    def __init__(
        self,
        destination_id: str,
        day: date,
        conflicting_ids: Sequence[str] = (),
        message: Optional[str] = None,
    ) -> None:
        self.destination_id = destination_id
        self.day = day
        self.conflicting_ids = tuple(conflicting_ids)
        super().__init__(
            message
            or "There cannot be more than one flight to the same destination per day"
        )


class NotFoundError(FlightSchedulerError):
    """Raised when a record looked up by identifier does not exist."""

    pass


class FlightNotFoundError(NotFoundError):
    """Raised when no flight exists with the given identifier."""

    def __init__(self, flight_id: str) -> None:
        self.flight_id = flight_id
        super().__init__(f"Flight with ID {flight_id} not found")


class ConfigurationError(FlightSchedulerError):
    """Raised when an environment setting cannot be parsed."""

    def __init__(self, setting: str, value: str, reason: str = "") -> None:
        self.setting = setting
        self.value = value
        message = f"Invalid value for {setting}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
