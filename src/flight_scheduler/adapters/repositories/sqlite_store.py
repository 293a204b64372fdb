"""
SQLite flight store.

Persists flights and the locations they reference in a SQLite database.
Location references are resolved with an explicit JOIN on every read.
"""

import asyncio
import functools
import logging
import sqlite3
import threading
import uuid
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, TypeVar, Union

from src.flight_scheduler.ports.flight_store import FlightFilter, FlightStore
from src.flight_scheduler.schemas.flight import Flight, Location

logger = logging.getLogger(__name__)

T = TypeVar("T")

IN_MEMORY_DB = ":memory:"

_SELECT_FLIGHTS = """
    SELECT
        f.id, f.date,
        s.id, s.postal_code, s.city, s.state,
        d.id, d.postal_code, d.city, d.state
    FROM flights f
    JOIN locations s ON s.id = f.source_id
    JOIN locations d ON d.id = f.destination_id
"""


def format_date(moment: datetime) -> str:
    """
    Serialize a naive datetime so that text order equals time order.

    Raises:
        ValueError: If the datetime is timezone-aware.
    """
    if moment.tzinfo is not None:
        raise ValueError(
            f"SQLite store expects naive wall-clock datetimes, got {moment!r}"
        )
    return moment.isoformat(sep=" ", timespec="microseconds")


def _row_to_flight(row: Tuple[Any, ...]) -> Flight:
    return Flight(
        id=row[0],
        date=datetime.fromisoformat(row[1]),
        source=Location(id=row[2], postal_code=row[3], city=row[4], state=row[5]),
        destination=Location(id=row[6], postal_code=row[7], city=row[8], state=row[9]),
    )


class SqliteFlightStore(FlightStore):
    """
    FlightStore backed by a SQLite database file.

    sqlite3 calls are blocking, so every operation runs in the default
    executor. The single connection is shared between executor threads
    and guarded by a lock.

    Attributes:
        _db_path: Path to the database file (or ":memory:").
        _conn: SQLite connection (lazy initialized).
        _lock: Serializes access to the connection.
    """

    def __init__(self, db_path: Union[str, Path] = "flight_schedule.db") -> None:
        """
        Initialize the SQLite store.

        Args:
            db_path: Path to the SQLite database file. Tables are created
                on first use. ":memory:" keeps everything in RAM.
        """
        self._db_path = str(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection, creating tables once."""
        if self._conn is None:
            logger.debug("Connecting to database: %s", self._db_path)
            self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._create_tables(self._conn)
        return self._conn

    @staticmethod
    def _create_tables(conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS locations (
                id TEXT PRIMARY KEY,
                postal_code TEXT NOT NULL,
                city TEXT NOT NULL,
                state TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS flights (
                id TEXT PRIMARY KEY,
                date TEXT NOT NULL,
                source_id TEXT NOT NULL REFERENCES locations(id),
                destination_id TEXT NOT NULL REFERENCES locations(id)
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_flights_date ON flights (date)")
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_flights_destination_date "
            "ON flights (destination_id, date)"
        )
        conn.commit()
        logger.debug("Database tables created/verified")

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(self._locked, func, *args))

    def _locked(self, func: Callable[..., T], *args: Any) -> T:
        with self._lock:
            return func(self._get_connection(), *args)

    # ------------------------------------------------------------------
    # Blocking implementations (run inside the executor)
    # ------------------------------------------------------------------

    @staticmethod
    def _find_sync(conn: sqlite3.Connection, flight_filter: FlightFilter) -> List[Flight]:
        clauses: List[str] = []
        params: List[Any] = []

        if flight_filter.date_from is not None:
            clauses.append("f.date >= ?")
            params.append(format_date(flight_filter.date_from))
        if flight_filter.date_to is not None:
            clauses.append("f.date <= ?")
            params.append(format_date(flight_filter.date_to))
        if flight_filter.destination_id is not None:
            clauses.append("f.destination_id = ?")
            params.append(flight_filter.destination_id)
        if flight_filter.source_id is not None:
            clauses.append("f.source_id = ?")
            params.append(flight_filter.source_id)
        if flight_filter.exclude_id is not None:
            clauses.append("f.id != ?")
            params.append(flight_filter.exclude_id)

        query = _SELECT_FLIGHTS
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY f.date"

        rows = conn.execute(query, params).fetchall()
        return [_row_to_flight(row) for row in rows]

    @staticmethod
    def _find_by_id_sync(conn: sqlite3.Connection, flight_id: str) -> Optional[Flight]:
        row = conn.execute(_SELECT_FLIGHTS + " WHERE f.id = ?", (flight_id,)).fetchone()
        return _row_to_flight(row) if row else None

    @classmethod
    def _save_sync(cls, conn: sqlite3.Connection, flight: Flight) -> Flight:
        # Locations are reference data owned elsewhere; make sure the
        # referenced rows exist without overwriting them.
        with conn:
            for location in (flight.source, flight.destination):
                conn.execute(
                    "INSERT OR IGNORE INTO locations (id, postal_code, city, state) "
                    "VALUES (?, ?, ?, ?)",
                    (location.id, location.postal_code, location.city, location.state),
                )
            conn.execute(
                "INSERT INTO flights (id, date, source_id, destination_id) VALUES (?, ?, ?, ?)",
                (flight.id, format_date(flight.date), flight.source_id, flight.destination_id),
            )
        # Read back so the returned locations are the stored rows
        return cls._find_by_id_sync(conn, flight.id)

    @staticmethod
    def _delete_sync(conn: sqlite3.Connection, flight_id: str) -> None:
        with conn:
            conn.execute("DELETE FROM flights WHERE id = ?", (flight_id,))

    # ------------------------------------------------------------------
    # FlightStore interface
    # ------------------------------------------------------------------

    async def find(self, flight_filter: Optional[FlightFilter] = None) -> List[Flight]:
        flight_filter = flight_filter or FlightFilter()
        flights = await self._run(self._find_sync, flight_filter)
        logger.debug("SQLite find %s -> %d flights", flight_filter, len(flights))
        return flights

    async def find_by_id(self, flight_id: str) -> Optional[Flight]:
        return await self._run(self._find_by_id_sync, flight_id)

    async def save(self, flight: Flight) -> Flight:
        if flight.id is None:
            flight = replace(flight, id=str(uuid.uuid4()))
        return await self._run(self._save_sync, flight)

    async def delete(self, flight_id: str) -> None:
        await self._run(self._delete_sync, flight_id)

    @property
    def name(self) -> str:
        return "SQLite"

    async def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
