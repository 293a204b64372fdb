"""
Configuration module for the flight scheduler.

Loads settings from the environment (and a local .env file) and
provides a single immutable configuration object for the application.
"""

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from src.flight_scheduler.exceptions import ConfigurationError

ENV_PREFIX = "FLIGHT_SCHEDULER_"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Configuration for flight scheduling rules and infrastructure.

    Attributes:
        min_separation_minutes: Minimum distance between any two flights.
            A flight exactly this far from another one still conflicts.
        reference_timezone: IANA timezone whose wall clock defines
            calendar days. Timezone-aware dates are converted to it.
        db_path: Path to the SQLite schedule database.
        log_level: Logging level name for configure_logging().
    """

    min_separation_minutes: int = 30
    reference_timezone: str = "UTC"
    db_path: str = "flight_schedule.db"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.min_separation_minutes < 0:
            raise ConfigurationError(
                "min_separation_minutes",
                str(self.min_separation_minutes),
                "must be >= 0",
            )
        try:
            ZoneInfo(self.reference_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(
                "reference_timezone", self.reference_timezone, "unknown timezone"
            ) from e

    @property
    def min_separation(self) -> timedelta:
        """Overlap window half-width as a timedelta."""
        return timedelta(minutes=self.min_separation_minutes)

    @property
    def tzinfo(self) -> ZoneInfo:
        """Reference timezone object."""
        return ZoneInfo(self.reference_timezone)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "SchedulerConfig":
        """
        Build configuration from FLIGHT_SCHEDULER_* environment variables.

        Values missing from the environment fall back to the dataclass
        defaults.

        Args:
            env_file: Optional path to a .env file. If None, python-dotenv
                searches for one starting from the working directory.

        Raises:
            ConfigurationError: If a variable holds an unusable value.
        """
        load_dotenv(env_file)

        defaults = cls()
        raw_separation = os.getenv(f"{ENV_PREFIX}MIN_SEPARATION_MINUTES")
        if raw_separation is None:
            min_separation = defaults.min_separation_minutes
        else:
            try:
                min_separation = int(raw_separation)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_PREFIX}MIN_SEPARATION_MINUTES",
                    raw_separation,
                    "expected an integer",
                ) from e

        log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(
                f"{ENV_PREFIX}LOG_LEVEL", log_level, "unknown logging level"
            )

        return cls(
            min_separation_minutes=min_separation,
            reference_timezone=os.getenv(
                f"{ENV_PREFIX}TIMEZONE", defaults.reference_timezone
            ),
            db_path=os.getenv(f"{ENV_PREFIX}DB_PATH", defaults.db_path),
            log_level=log_level,
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure console logging for the application."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
