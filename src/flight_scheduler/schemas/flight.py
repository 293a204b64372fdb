"""
Flight record schemas.

Defines the immutable Flight and Location values that flow between the
store, the validators and the query service.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

from src.flight_scheduler.exceptions import InvalidLocationError


@dataclass(frozen=True)
class Location:
    """
    Immutable reference to an airport location.

    Locations are managed elsewhere; flights only point at them by id
    and carry the resolved record for display.
    """

    id: str
    postal_code: str
    city: str
    state: str


@dataclass(frozen=True)
class Flight:
    """
    Immutable representation of a scheduled flight.

    The id is None until the store persists the flight for the first
    time. Updates produce new instances via dataclasses.replace().
    """

    date: datetime
    source: Location
    destination: Location
    id: Optional[str] = None

    @property
    def source_id(self) -> str:
        return self.source.id

    @property
    def destination_id(self) -> str:
        return self.destination.id

    @property
    def calendar_day(self) -> date:
        """Wall-clock date of the scheduled departure."""
        return self.date.date()

    def validate_locations(self) -> None:
        """
        Check that the flight goes somewhere.

        Raises:
            InvalidLocationError: If source and destination are the same.
        """
        if self.source.id == self.destination.id:
            raise InvalidLocationError(self.source.id)


def day_window(moment: datetime) -> Tuple[datetime, datetime]:
    """
    Return the calendar day containing ``moment`` as an inclusive range.

    The range runs from midnight to the last microsecond of the same day
    on the wall clock of ``moment`` (tzinfo is preserved).

    Example:
        >>> day_window(datetime(2024, 1, 1, 14, 0))
        (datetime.datetime(2024, 1, 1, 0, 0), datetime.datetime(2024, 1, 1, 23, 59, 59, 999999))
    """
    start = datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)
    end = datetime.combine(moment.date(), time.max, tzinfo=moment.tzinfo)
    return start, end
