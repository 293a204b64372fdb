"""
Repository adapters for flight persistence.
"""

from src.flight_scheduler.adapters.repositories.in_memory_store import (
    InMemoryFlightStore,
)
from src.flight_scheduler.adapters.repositories.sqlite_store import (
    SqliteFlightStore,
    format_date,
)

__all__ = [
    "InMemoryFlightStore",
    "SqliteFlightStore",
    "format_date",
]
