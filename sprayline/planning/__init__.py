"""
Production planning module.

Estimates labor hours, material and gas consumption for spray batches and
projects delivery dates from the assigned team's weekly capacity. Works on
plain records only; storage and presentation live elsewhere.
"""

from sprayline.planning.config import PlanningConfig, DEFAULT_CONFIG
from sprayline.planning.records import (
    RecordError,
    ProductType,
    Product,
    Nozzle,
    Employee,
    Assignment,
    ProductGroup,
    SprayBatch,
    AdjustmentBatch,
    Catalog,
)
from sprayline.planning.estimates import (
    EstimateCalculator,
    EstimateResult,
    GasConsumption,
    cylinders_needed,
    compute_estimate,
    compute_real_gas_consumption,
)
from sprayline.planning.delivery import (
    DeliveryScheduler,
    DeliverySchedule,
    build_team,
    weekly_capacity,
    schedule_delivery,
    compute_delivery_date,
)
from sprayline.planning.metrics import (
    ProductionReport,
    clamp_real_quantity,
    total_planned,
    total_produced,
    real_production_report,
    format_time,
)
from sprayline.planning.service import BatchPlan, plan_spray_batch, plan_adjustment_batch

__all__ = [
    'PlanningConfig',
    'DEFAULT_CONFIG',
    'RecordError',
    'ProductType',
    'Product',
    'Nozzle',
    'Employee',
    'Assignment',
    'ProductGroup',
    'SprayBatch',
    'AdjustmentBatch',
    'Catalog',
    'EstimateCalculator',
    'EstimateResult',
    'GasConsumption',
    'cylinders_needed',
    'compute_estimate',
    'compute_real_gas_consumption',
    'DeliveryScheduler',
    'DeliverySchedule',
    'build_team',
    'weekly_capacity',
    'schedule_delivery',
    'compute_delivery_date',
    'ProductionReport',
    'clamp_real_quantity',
    'total_planned',
    'total_produced',
    'real_production_report',
    'format_time',
    'BatchPlan',
    'plan_spray_batch',
    'plan_adjustment_batch',
]
