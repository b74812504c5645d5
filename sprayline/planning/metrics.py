"""
Real production metrics for finished or in-progress batches.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Optional

from sprayline.planning.config import PlanningConfig
from sprayline.planning.estimates import EstimateCalculator, EstimateResult, GasConsumption
from sprayline.planning.records import Assignment, Catalog, SprayBatch

# produced / kg * 5 reads as items per 5 kg of material
EFFICIENCY_SCALE = 5


def clamp_real_quantity(value, planned):
    """Keep a produced quantity between 0 and the planned quantity."""
    return max(0, min(value, planned))


def total_planned(assignments: Iterable[Assignment]):
    return sum(a.quantity for a in assignments)


def total_produced(assignments: Iterable[Assignment]):
    """Sum of produced units, each clamped to its planned quantity."""
    return sum(clamp_real_quantity(a.real_quantity or 0, a.quantity) for a in assignments)


def progress_percent(assignments: Iterable[Assignment]) -> float:
    assignments = list(assignments)
    planned = total_planned(assignments)
    if planned <= 0:
        return 0.0
    return total_produced(assignments) / planned * 100


@dataclass(frozen=True)
class ProductionReport:
    """Estimated vs. real figures for a spray batch."""
    batch_id: str
    estimate: EstimateResult
    real_gas: GasConsumption
    total_produced: float
    real_time_hours: float
    real_input_kg: float
    real_productivity: float
    real_efficiency: float
    progress_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def real_production_report(batch: SprayBatch, catalog: Catalog,
                           config: Optional[PlanningConfig] = None) -> ProductionReport:
    """
    Compare a spray batch's estimate with its recorded production.

    Productivity is items per real hour, efficiency items per 5 kg of
    material; both are 0 when the corresponding real figure is missing.
    """
    calculator = EstimateCalculator(config)
    estimate = calculator.estimate(batch.products, batch.nozzle_id, catalog.products, catalog.nozzles)

    assignments = batch.all_assignments()
    produced = total_produced(assignments)
    real_hours = batch.real_production_time or 0.0
    real_kg = batch.real_input_kg or 0.0

    return ProductionReport(
        batch_id=batch.id,
        estimate=estimate,
        real_gas=calculator.real_gas_consumption(real_hours),
        total_produced=produced,
        real_time_hours=real_hours,
        real_input_kg=real_kg,
        real_productivity=produced / real_hours if real_hours > 0 else 0.0,
        real_efficiency=(produced / real_kg) * EFFICIENCY_SCALE if real_kg > 0 else 0.0,
        progress_percent=progress_percent(assignments),
    )


def format_time(hours) -> str:
    """
    Format a duration in hours for display.

    Examples: 0.5 -> "30 min", 2.25 -> "2h 15min", 3 -> "3h".
    """
    if hours is None or math.isnan(hours) or hours < 0:
        return '0 min'
    if hours < 1:
        return f"{math.floor(hours * 60 + 0.5)} min"
    whole = math.floor(hours)
    minutes = math.floor((hours - whole) * 60 + 0.5)
    return f"{whole}h {f'{minutes}min' if minutes > 0 else ''}".strip()
