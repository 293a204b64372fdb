"""
Flight Store port interface.

Defines the abstract contract for the persistence backend holding
scheduled flights. Implementations handle the specifics of the storage
engine (in-memory, SQLite, ...).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from src.flight_scheduler.schemas.flight import Flight


@dataclass(frozen=True)
class FlightFilter:
    """
    Predicate set for flight queries.

    Every attribute left as None is ignored; the remaining predicates are
    combined with AND. Date bounds are inclusive on both ends.

    Attributes:
        date_from: Earliest departure to include.
        date_to: Latest departure to include.
        destination_id: Only flights to this location.
        source_id: Only flights from this location.
        exclude_id: Leave out the flight with this id.
    """

    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    destination_id: Optional[str] = None
    source_id: Optional[str] = None
    exclude_id: Optional[str] = None

    @classmethod
    def between_dates(
        cls,
        start: datetime,
        end: datetime,
        exclude_id: Optional[str] = None,
    ) -> "FlightFilter":
        """
        Filter for flights departing in [start, end], minus exclude_id.

        An inverted range (end before start) matches no flight.
        """
        return cls(date_from=start, date_to=end, exclude_id=exclude_id)

    def matches(self, flight: Flight) -> bool:
        """Evaluate the predicates against a single flight."""
        if self.date_from is not None and flight.date < self.date_from:
            return False
        if self.date_to is not None and flight.date > self.date_to:
            return False
        if self.destination_id is not None and flight.destination_id != self.destination_id:
            return False
        if self.source_id is not None and flight.source_id != self.source_id:
            return False
        if self.exclude_id is not None and flight.id == self.exclude_id:
            return False
        return True


class FlightStore(ABC):
    """
    Abstract interface for flight persistence.

    Reads always return flights with source and destination resolved
    to full Location records.

    Implementations:
    - InMemoryFlightStore: dict-backed store for tests and embedding
    - SqliteFlightStore: SQLite tables joined on read
    """

    @abstractmethod
    async def find(self, flight_filter: Optional[FlightFilter] = None) -> List[Flight]:
        """
        Return flights matching every predicate of the filter.

        Args:
            flight_filter: Predicates to apply. None returns all flights.

        Returns:
            Matching flights ordered by departure date.
        """
        ...

    @abstractmethod
    async def find_by_id(self, flight_id: str) -> Optional[Flight]:
        """
        Return the flight with the given id, or None if absent.
        """
        ...

    @abstractmethod
    async def save(self, flight: Flight) -> Flight:
        """
        Insert a flight.

        Args:
            flight: Flight to persist. A flight without id gets a new one.

        Returns:
            The persisted flight, carrying its id.
        """
        ...

    @abstractmethod
    async def delete(self, flight_id: str) -> None:
        """
        Delete the flight with the given id.

        Callers check existence first; deleting an unknown id is a no-op.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this store (e.g., "SQLite", "In-Memory").
        """
        ...

    async def close(self) -> None:
        """Release any held resources. Default implementation does nothing."""
        return None
