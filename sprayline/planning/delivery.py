"""
Delivery date scheduling module.

Projects the day a batch is finished by walking the calendar from the start
date and consuming the team's capacity for each weekday until the required
hours are covered.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from sprayline.datetime_utils import to_day, weekday_index, WEEKDAY_INDICES
from sprayline.logging_config import get_logger
from sprayline.planning.config import PlanningConfig, DEFAULT_CONFIG
from sprayline.planning.records import Assignment, Employee, index_by_id

logger = get_logger(__name__)

# Reasons reported for unschedulable batches
NO_TEAM = 'no_team'
NO_CAPACITY = 'no_capacity'
HORIZON_EXCEEDED = 'horizon_exceeded'


@dataclass(frozen=True)
class DeliverySchedule:
    """
    Outcome of a delivery projection.

    Either scheduled on delivery_date, or unschedulable with a reason and no
    date. Use as_date() where a plain date is required.
    """
    delivery_date: Optional[date] = None
    reason: Optional[str] = None

    @classmethod
    def scheduled(cls, delivery_date) -> "DeliverySchedule":
        return cls(delivery_date=delivery_date)

    @classmethod
    def unschedulable(cls, reason: str) -> "DeliverySchedule":
        return cls(reason=reason)

    @property
    def is_scheduled(self) -> bool:
        return self.delivery_date is not None

    def as_date(self, sentinel: date):
        """Return the delivery date, or sentinel when unschedulable."""
        return self.delivery_date if self.is_scheduled else sentinel


def build_team(assignments: Iterable[Assignment], employees) -> List[Employee]:
    """
    Employees referenced by the assignments, deduplicated, in assignment order.

    Ids missing from the employee catalog are left out.
    """
    catalog = index_by_id(employees)
    team = []
    seen = set()
    for assignment in assignments:
        employee_id = assignment.employee_id
        if employee_id in seen:
            continue
        seen.add(employee_id)
        employee = catalog.get(employee_id)
        if employee is None:
            logger.debug("Assigned employee not in catalog, excluded from team", employee_id=employee_id)
            continue
        team.append(employee)
    return team


def weekly_capacity(team: Iterable[Employee]) -> Dict[int, float]:
    """Hours available on each weekday index (0=Sunday) summed over the team."""
    capacity = {day: 0.0 for day in WEEKDAY_INDICES}
    for employee in team:
        for day in employee.working_days:
            if day in capacity:
                capacity[day] += employee.hours_per_day
    return capacity


class DeliveryScheduler:
    """Day-by-day capacity simulation bound to one PlanningConfig."""

    def __init__(self, config: Optional[PlanningConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def schedule(
        self,
        start_date,
        required_hours: float,
        assignments: Iterable[Assignment],
        employees,
    ) -> DeliverySchedule:
        """
        Project the delivery date of a batch.

        Args:
            start_date: First production day (date, datetime or ISO string)
            required_hours: Total labor hours to cover
            assignments: Batch assignments; their employees form the team
            employees: Employee catalog, mapping by id or iterable of Employee

        Returns:
            DeliverySchedule: the first day on which cumulative capacity covers
            required_hours, or an unschedulable outcome
        """
        if required_hours <= 0:
            return DeliverySchedule.scheduled(to_day(start_date))

        team = build_team(assignments, employees)
        if not team:
            logger.debug("No team for batch, cannot schedule")
            return DeliverySchedule.unschedulable(NO_TEAM)

        capacity = weekly_capacity(team)
        if sum(capacity.values()) <= 0:
            logger.debug("Team has no weekly capacity, cannot schedule", team_size=len(team))
            return DeliverySchedule.unschedulable(NO_CAPACITY)

        remaining = required_hours
        current = to_day(start_date)

        for _ in range(self.config.scheduling_horizon_days):
            remaining -= capacity[weekday_index(current)]
            if remaining <= 0:
                return DeliverySchedule.scheduled(current)
            current += timedelta(days=1)

        logger.warning(
            "Delivery simulation exceeded horizon",
            required_hours=required_hours,
            horizon_days=self.config.scheduling_horizon_days,
        )
        return DeliverySchedule.unschedulable(HORIZON_EXCEEDED)


def schedule_delivery(start_date, required_hours, assignments, employees,
                      config: Optional[PlanningConfig] = None) -> DeliverySchedule:
    """Project a delivery with the default (or given) config."""
    return DeliveryScheduler(config).schedule(start_date, required_hours, assignments, employees)


def compute_delivery_date(start_date, required_hours, assignments, employees,
                          config: Optional[PlanningConfig] = None):
    """
    Project a delivery date.

    Returns the configured far-future date (2099-12-31 by default) when the
    batch cannot be scheduled.
    """
    config = config or DEFAULT_CONFIG
    schedule = DeliveryScheduler(config).schedule(start_date, required_hours, assignments, employees)
    return schedule.as_date(config.unschedulable_date)
