"""
Shared fixtures for flight scheduler tests.

Provides locations, a flight factory and the asyncio backend for
anyio-marked tests.
"""

from datetime import datetime
from typing import Callable, Optional

import pytest

from src.flight_scheduler.schemas.flight import Flight, Location


@pytest.fixture
def anyio_backend():
    """Use only asyncio backend (trio not installed)."""
    return "asyncio"


@pytest.fixture
def location_a() -> Location:
    return Location(id="A", postal_code="01000-000", city="Sao Paulo", state="SP")


@pytest.fixture
def location_b() -> Location:
    return Location(id="B", postal_code="20000-000", city="Rio de Janeiro", state="RJ")


@pytest.fixture
def location_c() -> Location:
    return Location(id="C", postal_code="30100-000", city="Belo Horizonte", state="MG")


@pytest.fixture
def make_flight(location_a: Location, location_b: Location) -> Callable[..., Flight]:
    """Factory for flights from A to B unless told otherwise."""

    def _make(
        date: datetime,
        source: Optional[Location] = None,
        destination: Optional[Location] = None,
        flight_id: Optional[str] = None,
    ) -> Flight:
        return Flight(
            date=date,
            source=source or location_a,
            destination=destination or location_b,
            id=flight_id,
        )

    return _make
