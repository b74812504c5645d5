"""
Planning service for batches submitted from the dashboard forms.

Combines the estimate and the delivery projection the way the batch and
adjustment forms do on save: the estimated (or planned) hours of the batch
drive the delivery simulation for the team formed by all its assignments.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from sprayline.datetime_utils import to_day
from sprayline.logging_config import get_logger
from sprayline.planning.config import PlanningConfig, DEFAULT_CONFIG
from sprayline.planning.delivery import DeliveryScheduler, DeliverySchedule
from sprayline.planning.estimates import EstimateCalculator, EstimateResult
from sprayline.planning.records import AdjustmentBatch, Catalog, SprayBatch

logger = get_logger(__name__)

SPRAY = 'spray'
ADJUSTMENT = 'adjustment'


@dataclass(frozen=True)
class BatchPlan:
    batch_id: str
    kind: str
    start_date: Any
    planned_hours: float
    schedule: DeliverySchedule
    unschedulable_date: Any
    estimate: Optional[EstimateResult] = None

    @property
    def delivery_date(self):
        return self.schedule.as_date(self.unschedulable_date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'batch_id': self.batch_id,
            'kind': self.kind,
            'start_date': to_day(self.start_date).isoformat(),
            'planned_hours': self.planned_hours,
            'delivery_date': to_day(self.delivery_date).isoformat(),
            'scheduled': self.schedule.is_scheduled,
            'reason': self.schedule.reason,
            'estimate': self.estimate.to_dict() if self.estimate else None,
        }


def plan_spray_batch(batch: SprayBatch, catalog: Catalog,
                     config: Optional[PlanningConfig] = None) -> BatchPlan:
    """
    Estimate a spray batch and project its delivery date.

    Args:
        batch: The spray batch as submitted
        catalog: Products, nozzles and employees snapshot
        config: Planning constants (defaults apply when None)

    Returns:
        BatchPlan with the estimate and delivery schedule
    """
    config = config or DEFAULT_CONFIG
    estimate = EstimateCalculator(config).estimate(
        batch.products, batch.nozzle_id, catalog.products, catalog.nozzles
    )
    schedule = DeliveryScheduler(config).schedule(
        batch.start_date, estimate.estimated_time_hours, batch.all_assignments(), catalog.employees
    )

    if not schedule.is_scheduled:
        logger.info(f"Spray batch {batch.id} could not be scheduled ({schedule.reason})")

    return BatchPlan(
        batch_id=batch.id,
        kind=SPRAY,
        start_date=batch.start_date,
        planned_hours=estimate.estimated_time_hours,
        schedule=schedule,
        unschedulable_date=config.unschedulable_date,
        estimate=estimate,
    )


def plan_adjustment_batch(batch: AdjustmentBatch, catalog: Catalog,
                          config: Optional[PlanningConfig] = None) -> BatchPlan:
    """Compute planned hours of an adjustment batch and project its delivery date."""
    config = config or DEFAULT_CONFIG
    planned_hours = EstimateCalculator.adjustment_planned_hours(
        catalog.product(batch.product_id), batch.assignments
    )
    schedule = DeliveryScheduler(config).schedule(
        batch.start_date, planned_hours, batch.assignments, catalog.employees
    )

    if not schedule.is_scheduled:
        logger.info(f"Adjustment batch {batch.id} could not be scheduled ({schedule.reason})")

    return BatchPlan(
        batch_id=batch.id,
        kind=ADJUSTMENT,
        start_date=batch.start_date,
        planned_hours=planned_hours,
        schedule=schedule,
        unschedulable_date=config.unschedulable_date,
    )
