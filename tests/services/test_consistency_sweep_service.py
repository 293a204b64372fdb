"""
Tests for ConsistencySweepService.

Tests cover:
- Overlap detection on sorted schedule frames (inclusive boundary)
- Duplicate destination days grouped by calendar day
- Full-store sweeps over flights inserted without validation
"""

from datetime import date, datetime, timedelta

import pytest

from src.flight_scheduler.adapters.repositories import InMemoryFlightStore
from src.flight_scheduler.schemas.schedule import flights_to_frame
from src.flight_scheduler.services.consistency_sweep_service import (
    ConsistencySweepService,
    DuplicateDestinationDay,
    OverlapViolation,
    ScheduleAudit,
    find_duplicate_destination_days,
    find_overlaps,
)


# =============================================================================
# OVERLAPS
# =============================================================================


class TestFindOverlaps:
    def test_empty_and_single_schedule(self, make_flight):
        assert find_overlaps(flights_to_frame([])) == []
        single = flights_to_frame([make_flight(datetime(2024, 1, 1), flight_id="f1")])
        assert find_overlaps(single) == []

    def test_exact_separation_is_violation(self, make_flight, location_c):
        schedule = flights_to_frame(
            [
                make_flight(datetime(2024, 1, 1, 10, 0), flight_id="f1"),
                make_flight(datetime(2024, 1, 1, 10, 30), destination=location_c, flight_id="f2"),
            ]
        )

        violations = find_overlaps(schedule)

        assert violations == [
            OverlapViolation(earlier_id="f1", later_id="f2", gap=timedelta(minutes=30))
        ]

    def test_just_past_separation_is_fine(self, make_flight, location_c):
        schedule = flights_to_frame(
            [
                make_flight(datetime(2024, 1, 1, 10, 0), flight_id="f1"),
                make_flight(
                    datetime(2024, 1, 1, 10, 30, 0, 1000), destination=location_c, flight_id="f2"
                ),
            ]
        )
        assert find_overlaps(schedule) == []

    def test_reports_every_pair_in_cluster(self, make_flight):
        schedule = flights_to_frame(
            [
                make_flight(datetime(2024, 1, 1, 10, 0), flight_id="f1"),
                make_flight(datetime(2024, 1, 1, 10, 10), flight_id="f2"),
                make_flight(datetime(2024, 1, 1, 10, 20), flight_id="f3"),
                make_flight(datetime(2024, 1, 1, 12, 0), flight_id="f4"),
            ]
        )

        pairs = {(v.earlier_id, v.later_id) for v in find_overlaps(schedule)}

        assert pairs == {("f1", "f2"), ("f1", "f3"), ("f2", "f3")}

    def test_custom_separation(self, make_flight):
        schedule = flights_to_frame(
            [
                make_flight(datetime(2024, 1, 1, 10, 0), flight_id="f1"),
                make_flight(datetime(2024, 1, 1, 10, 10), flight_id="f2"),
            ]
        )
        assert find_overlaps(schedule, timedelta(minutes=5)) == []


# =============================================================================
# DUPLICATE DESTINATION DAYS
# =============================================================================


class TestFindDuplicateDestinationDays:
    def test_empty_schedule(self):
        assert find_duplicate_destination_days(flights_to_frame([])) == []

    def test_same_destination_same_day(self, make_flight, location_c):
        schedule = flights_to_frame(
            [
                make_flight(datetime(2024, 1, 1, 8, 0), flight_id="f1"),
                make_flight(datetime(2024, 1, 1, 20, 0), flight_id="f2"),
                make_flight(datetime(2024, 1, 1, 12, 0), destination=location_c, flight_id="f3"),
            ]
        )

        duplicates = find_duplicate_destination_days(schedule)

        assert duplicates == [
            DuplicateDestinationDay(
                destination_id="B", day=date(2024, 1, 1), flight_ids=("f1", "f2")
            )
        ]

    def test_midnight_splits_days(self, make_flight):
        schedule = flights_to_frame(
            [
                make_flight(datetime(2024, 1, 1, 23, 59, 59, 999000), flight_id="f1"),
                make_flight(datetime(2024, 1, 2, 0, 0), flight_id="f2"),
            ]
        )
        assert find_duplicate_destination_days(schedule) == []

    def test_sorted_by_day_then_destination(self, make_flight, location_a, location_c):
        schedule = flights_to_frame(
            [
                make_flight(datetime(2024, 1, 2, 8, 0), destination=location_c, flight_id="c1"),
                make_flight(datetime(2024, 1, 2, 9, 0), destination=location_c, flight_id="c2"),
                make_flight(datetime(2024, 1, 2, 10, 0), flight_id="b1"),
                make_flight(datetime(2024, 1, 2, 11, 0), flight_id="b2"),
                make_flight(
                    datetime(2024, 1, 1, 8, 0), source=location_c, destination=location_a,
                    flight_id="a1",
                ),
                make_flight(
                    datetime(2024, 1, 1, 9, 0), source=location_c, destination=location_a,
                    flight_id="a2",
                ),
            ]
        )

        keys = [(d.day, d.destination_id) for d in find_duplicate_destination_days(schedule)]

        assert keys == [
            (date(2024, 1, 1), "A"),
            (date(2024, 1, 2), "B"),
            (date(2024, 1, 2), "C"),
        ]


# =============================================================================
# SERVICE
# =============================================================================


class TestConsistencySweepService:
    @pytest.mark.anyio
    async def test_consistent_store(self, make_flight, location_c):
        store = InMemoryFlightStore(
            [
                make_flight(datetime(2024, 1, 1, 10, 0)),
                make_flight(datetime(2024, 1, 1, 14, 0), destination=location_c),
                make_flight(datetime(2024, 1, 2, 10, 0)),
            ]
        )

        audit = await ConsistencySweepService(store).sweep()

        assert isinstance(audit, ScheduleAudit)
        assert audit.is_consistent
        assert audit.flights_checked == 3

    @pytest.mark.anyio
    async def test_empty_store_is_consistent(self):
        audit = await ConsistencySweepService(InMemoryFlightStore()).sweep()
        assert audit.is_consistent
        assert audit.flights_checked == 0

    @pytest.mark.anyio
    async def test_reports_violations_inserted_behind_service(self, make_flight):
        store = InMemoryFlightStore(
            [
                make_flight(datetime(2024, 1, 1, 10, 0), flight_id="f1"),
                make_flight(datetime(2024, 1, 1, 10, 15), flight_id="f2"),
            ]
        )

        audit = await ConsistencySweepService(store).sweep()

        assert not audit.is_consistent
        assert [(v.earlier_id, v.later_id) for v in audit.overlaps] == [("f1", "f2")]
        assert audit.duplicate_days[0].flight_ids == ("f1", "f2")

    @pytest.mark.anyio
    async def test_uses_given_separation(self, make_flight, location_c):
        store = InMemoryFlightStore(
            [
                make_flight(datetime(2024, 1, 1, 10, 0)),
                make_flight(datetime(2024, 1, 1, 10, 45), destination=location_c),
            ]
        )

        audit = await ConsistencySweepService(store, timedelta(hours=1)).sweep()

        assert len(audit.overlaps) == 1
