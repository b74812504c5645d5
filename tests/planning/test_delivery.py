"""
Tests for the delivery scheduler (pure business logic).

Calendar reference: 2024-01-01 is a Monday, 2024-01-06 a Saturday.
"""
import pytest
from dataclasses import replace
from datetime import date, datetime

from sprayline.planning.config import DEFAULT_CONFIG
from sprayline.planning.delivery import (
    DeliveryScheduler,
    DeliverySchedule,
    HORIZON_EXCEEDED,
    NO_CAPACITY,
    NO_TEAM,
    build_team,
    compute_delivery_date,
    schedule_delivery,
    weekly_capacity,
)
from sprayline.planning.records import Assignment, Employee

WEEKDAYS = frozenset({1, 2, 3, 4, 5})
SENTINEL = date(2099, 12, 31)
MONDAY = date(2024, 1, 1)
SATURDAY = date(2024, 1, 6)


@pytest.fixture
def employees():
    return [
        Employee(id="e1", name="Ana", hours_per_day=8, working_days=WEEKDAYS),
        Employee(id="e2", name="Bruno", hours_per_day=4, working_days=frozenset({6})),
        Employee(id="e3", name="Carla", hours_per_day=8, working_days=frozenset()),
    ]


class TestImmediateCompletion:
    """Tests for zero or negative durations."""

    def test_zero_hours_returns_start(self, employees):
        result = compute_delivery_date(MONDAY, 0, [Assignment("e1", 10)], employees)
        assert result == MONDAY

    def test_negative_hours_returns_start(self, employees):
        result = compute_delivery_date(MONDAY, -3, [Assignment("e1", 10)], employees)
        assert result == MONDAY

    def test_zero_hours_needs_no_team(self, employees):
        """Test that zero-duration work completes even without a team."""
        assert compute_delivery_date(MONDAY, 0, [], employees) == MONDAY

    def test_zero_hours_normalises_start(self, employees):
        """Test that a string or datetime start comes back as a plain date."""
        from_string = compute_delivery_date("2024-01-01", 0, [], employees)
        from_datetime = compute_delivery_date(datetime(2024, 1, 1, 15, 30), 0, [], employees)

        assert from_string == MONDAY
        assert type(from_datetime) is date
        assert from_datetime == MONDAY


class TestUnschedulable:
    """Tests for teams that cannot complete the work."""

    def test_no_assignments_returns_sentinel(self, employees):
        assert compute_delivery_date(MONDAY, 10, [], employees) == SENTINEL

    def test_no_assignments_reason(self, employees):
        schedule = schedule_delivery(MONDAY, 10, [], employees)

        assert schedule.is_scheduled is False
        assert schedule.delivery_date is None
        assert schedule.reason == NO_TEAM

    def test_team_without_working_days_returns_sentinel(self, employees):
        assignments = [Assignment("e3", 10)]

        assert compute_delivery_date(MONDAY, 10, assignments, employees) == SENTINEL
        assert schedule_delivery(MONDAY, 10, assignments, employees).reason == NO_CAPACITY

    def test_unknown_employee_is_excluded(self, employees):
        """Test that an assignment to a missing employee does not crash."""
        assignments = [Assignment("ghost", 10)]

        assert compute_delivery_date(MONDAY, 10, assignments, employees) == SENTINEL
        assert schedule_delivery(MONDAY, 10, assignments, employees).reason == NO_TEAM

    def test_unknown_employee_alongside_known_one(self, employees):
        assignments = [Assignment("ghost", 10), Assignment("e1", 10)]
        assert compute_delivery_date(MONDAY, 20, assignments, employees) == date(2024, 1, 3)

    def test_horizon_exceeded_returns_sentinel(self, employees):
        config = replace(DEFAULT_CONFIG, scheduling_horizon_days=3)
        schedule = DeliveryScheduler(config).schedule(MONDAY, 100, [Assignment("e1", 1)], employees)

        assert schedule.reason == HORIZON_EXCEEDED
        assert compute_delivery_date(MONDAY, 100, [Assignment("e1", 1)], employees, config) == SENTINEL

    def test_default_horizon_is_five_years(self):
        """One hour every Sunday cannot cover 1000 hours within 1825 days."""
        sunday_only = [Employee("e9", "Dora", 1, frozenset({0}))]
        result = compute_delivery_date(MONDAY, 1000, [Assignment("e9", 1)], sunday_only)
        assert result == SENTINEL

    def test_custom_sentinel(self, employees):
        config = replace(DEFAULT_CONFIG, unschedulable_date=date(2030, 1, 1))
        assert compute_delivery_date(MONDAY, 10, [], employees, config) == date(2030, 1, 1)


class TestDeliveryDates:
    """Tests for the day-by-day capacity simulation."""

    def test_twenty_hours_from_monday_is_wednesday(self, employees):
        """Mon 8 + Tue 8 leaves 4, covered on Wednesday."""
        result = compute_delivery_date(MONDAY, 20, [Assignment("e1", 10)], employees)
        assert result == date(2024, 1, 3)

    def test_start_on_saturday_skips_to_monday(self, employees):
        """Saturday and Sunday give nothing; Mon, Tue, Wed cover 20 hours."""
        result = compute_delivery_date(SATURDAY, 20, [Assignment("e1", 10)], employees)
        assert result == date(2024, 1, 10)

    def test_exact_capacity_finishes_same_day(self, employees):
        result = compute_delivery_date(MONDAY, 8, [Assignment("e1", 10)], employees)
        assert result == MONDAY

    def test_fractional_hours_round_up_to_day(self, employees):
        result = compute_delivery_date(MONDAY, 8.5, [Assignment("e1", 10)], employees)
        assert result == date(2024, 1, 2)

    def test_mixed_team_uses_weekend_capacity(self, employees):
        """Weekdays give 40 hours, the Saturday worker covers the last 4."""
        assignments = [Assignment("e1", 10), Assignment("e2", 10)]
        result = compute_delivery_date(MONDAY, 44, assignments, employees)
        assert result == SATURDAY

    def test_duplicate_assignments_count_employee_once(self, employees):
        assignments = [Assignment("e1", 10), Assignment("e1", 30)]
        result = compute_delivery_date(MONDAY, 20, assignments, employees)
        assert result == date(2024, 1, 3)

    def test_datetime_start_is_normalized(self, employees):
        start = datetime(2024, 1, 1, 15, 30)
        result = compute_delivery_date(start, 20, [Assignment("e1", 10)], employees)
        assert result == date(2024, 1, 3)

    def test_iso_string_start(self, employees):
        result = compute_delivery_date("2024-01-01", 20, [Assignment("e1", 10)], employees)
        assert result == date(2024, 1, 3)

    def test_spans_multiple_weeks(self, employees):
        """80 hours is two full working weeks, ending on the second Friday."""
        result = compute_delivery_date(MONDAY, 80, [Assignment("e1", 10)], employees)
        assert result == date(2024, 1, 12)

    def test_employee_catalog_as_mapping(self, employees):
        catalog = {e.id: e for e in employees}
        result = compute_delivery_date(MONDAY, 20, [Assignment("e1", 10)], catalog)
        assert result == date(2024, 1, 3)


class TestTeamAndCapacity:
    """Tests for team building and weekly capacity aggregation."""

    def test_build_team_deduplicates_and_drops_unknown(self, employees):
        assignments = [Assignment("e2", 1), Assignment("e1", 1), Assignment("e2", 5), Assignment("x", 1)]
        team = build_team(assignments, employees)
        assert [e.id for e in team] == ["e2", "e1"]

    def test_weekly_capacity(self, employees):
        capacity = weekly_capacity(employees)

        assert capacity == {0: 0.0, 1: 8.0, 2: 8.0, 3: 8.0, 4: 8.0, 5: 8.0, 6: 4.0}

    def test_weekly_capacity_sums_overlapping_days(self):
        team = [
            Employee("a", "A", 6, frozenset({1, 2})),
            Employee("b", "B", 3, frozenset({2, 3})),
        ]
        capacity = weekly_capacity(team)

        assert capacity[1] == 6
        assert capacity[2] == 9
        assert capacity[3] == 3
        assert sum(capacity.values()) == 18

    def test_empty_team_has_no_capacity(self):
        assert sum(weekly_capacity([]).values()) == 0


class TestDeliverySchedule:
    """Tests for the schedule result type."""

    def test_scheduled_as_date(self):
        schedule = DeliverySchedule.scheduled(MONDAY)
        assert schedule.is_scheduled is True
        assert schedule.as_date(SENTINEL) == MONDAY

    def test_unschedulable_as_date(self):
        schedule = DeliverySchedule.unschedulable(NO_TEAM)
        assert schedule.is_scheduled is False
        assert schedule.as_date(SENTINEL) == SENTINEL
