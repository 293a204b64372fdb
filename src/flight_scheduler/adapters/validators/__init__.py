"""
Schedule validator adapters.
"""

from src.flight_scheduler.adapters.validators.overlap_validator import (
    DEFAULT_MIN_SEPARATION,
    OverlapValidator,
)
from src.flight_scheduler.adapters.validators.same_day_destination_validator import (
    SameDayDestinationValidator,
)

__all__ = [
    "DEFAULT_MIN_SEPARATION",
    "OverlapValidator",
    "SameDayDestinationValidator",
]
