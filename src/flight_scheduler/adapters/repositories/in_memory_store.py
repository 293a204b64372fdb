"""
In-memory flight store.

Dict-backed FlightStore used by tests and by callers that embed the
scheduler without a database.
"""

import logging
import uuid
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from src.flight_scheduler.ports.flight_store import FlightFilter, FlightStore
from src.flight_scheduler.schemas.flight import Flight

logger = logging.getLogger(__name__)


class InMemoryFlightStore(FlightStore):
    """
    FlightStore keeping flights in a dict keyed by id.

    Flights are immutable, so stored values are returned as-is without
    copying. Locations are stored resolved alongside each flight.
    """

    def __init__(self, flights: Optional[Iterable[Flight]] = None) -> None:
        """
        Initialize the store.

        Args:
            flights: Optional flights to preload. They are inserted without
                any schedule validation.
        """
        self._flights: Dict[str, Flight] = {}
        for flight in flights or ():
            self._insert(flight)

    def _insert(self, flight: Flight) -> Flight:
        if flight.id is None:
            flight = replace(flight, id=str(uuid.uuid4()))
        self._flights[flight.id] = flight
        return flight

    async def find(self, flight_filter: Optional[FlightFilter] = None) -> List[Flight]:
        flight_filter = flight_filter or FlightFilter()
        matches = [f for f in self._flights.values() if flight_filter.matches(f)]
        matches.sort(key=lambda f: f.date)
        logger.debug("In-memory find %s -> %d flights", flight_filter, len(matches))
        return matches

    async def find_by_id(self, flight_id: str) -> Optional[Flight]:
        return self._flights.get(flight_id)

    async def save(self, flight: Flight) -> Flight:
        return self._insert(flight)

    async def delete(self, flight_id: str) -> None:
        self._flights.pop(flight_id, None)

    @property
    def name(self) -> str:
        return "In-Memory"

    def __len__(self) -> int:
        return len(self._flights)
