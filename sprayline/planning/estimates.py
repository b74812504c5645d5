"""
Estimate calculation module.

Derives item counts, labor hours, material and gas consumption for a spray
batch from its assignments, the product catalog and the nozzle flow rate.

Estimated gas draw is a function of estimated spray time. Real gas draw is
derived from elapsed real hours alone, without any nozzle data; the two
models are intentionally kept apart.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Optional

from sprayline.logging_config import get_logger
from sprayline.planning.config import PlanningConfig, DEFAULT_CONFIG
from sprayline.planning.records import Assignment, Product, ProductGroup, index_by_id

logger = get_logger(__name__)

MINUTES_PER_HOUR = 60
SECONDS_PER_MINUTE = 60
GRAMS_PER_KG = 1000


def cylinders_needed(liters: float, capacity: float) -> int:
    """
    Number of cylinders needed to supply a gas volume.

    Formula: ceil(liters / capacity), 0 when liters is zero or negative.

    Args:
        liters: Gas volume in liters
        capacity: Liters per cylinder

    Returns:
        int: Cylinder count
    """
    if liters is None or math.isnan(liters) or liters <= 0 or capacity <= 0:
        return 0
    return math.ceil(liters / capacity)


@dataclass(frozen=True)
class GasConsumption:
    oxygen_liters: float = 0.0
    acetylene_liters: float = 0.0
    oxygen_cylinders: int = 0
    acetylene_cylinders: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EstimateResult:
    """Estimated totals for a spray batch."""
    total_items: float = 0
    estimated_time_hours: float = 0.0
    estimated_input_kg: float = 0.0
    estimated_oxygen_liters: float = 0.0
    estimated_acetylene_liters: float = 0.0
    oxygen_cylinders: int = 0
    acetylene_cylinders: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class EstimateCalculator:
    """
    Estimate calculator bound to one PlanningConfig.

    All methods are total: missing references and empty input produce zero
    values, never exceptions.
    """

    def __init__(self, config: Optional[PlanningConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def gas_for_hours(self, hours: float) -> GasConsumption:
        """Gas volumes and cylinder counts for a number of spray hours."""
        oxygen = hours * self.config.oxygen_flow_lph
        acetylene = hours * self.config.acetylene_flow_lph
        return GasConsumption(
            oxygen_liters=oxygen,
            acetylene_liters=acetylene,
            oxygen_cylinders=cylinders_needed(oxygen, self.config.oxygen_cylinder_liters),
            acetylene_cylinders=cylinders_needed(acetylene, self.config.acetylene_cylinder_liters),
        )

    def estimate(
        self,
        product_groups: Iterable[ProductGroup],
        nozzle_id: Optional[str],
        products,
        nozzles,
    ) -> EstimateResult:
        """
        Estimate a spray batch.

        Args:
            product_groups: Product groups of the batch, each with assignments
            nozzle_id: Id of the nozzle used for the batch
            products: Product catalog, mapping by id or iterable of Product
            nozzles: Nozzle catalog, mapping by id or iterable of Nozzle

        Returns:
            EstimateResult: zero-valued when the nozzle is unknown or there are no groups
        """
        groups = list(product_groups or ())
        nozzle = index_by_id(nozzles).get(nozzle_id)
        if nozzle is None or not groups:
            if nozzle is None and groups:
                logger.debug("Nozzle not found, returning empty estimate", nozzle_id=nozzle_id)
            return EstimateResult()

        product_index = index_by_id(products)

        total_items = 0
        estimated_minutes = 0.0
        estimated_grams = 0.0

        for group in groups:
            product = product_index.get(group.product_id)
            if product is None:
                logger.debug("Product not found, skipping its assignments", product_id=group.product_id)
                continue
            for assignment in group.assignments:
                quantity = assignment.quantity
                total_items += quantity
                estimated_minutes += product.production_time * quantity
                estimated_grams += (
                    product.production_time * SECONDS_PER_MINUTE * nozzle.flow_rate * quantity
                )

        estimated_hours = estimated_minutes / MINUTES_PER_HOUR
        gas = self.gas_for_hours(estimated_hours)

        return EstimateResult(
            total_items=total_items,
            estimated_time_hours=estimated_hours,
            estimated_input_kg=estimated_grams / GRAMS_PER_KG,
            estimated_oxygen_liters=gas.oxygen_liters,
            estimated_acetylene_liters=gas.acetylene_liters,
            oxygen_cylinders=gas.oxygen_cylinders,
            acetylene_cylinders=gas.acetylene_cylinders,
        )

    def real_gas_consumption(self, real_time_hours: float) -> GasConsumption:
        """
        Gas consumed during real production.

        Uses the flat time-based flow rates only; nozzle flow rate plays no part.
        """
        if real_time_hours is None or math.isnan(real_time_hours):
            return GasConsumption()
        return self.gas_for_hours(real_time_hours)

    @staticmethod
    def adjustment_planned_hours(
        product: Optional[Product],
        assignments: Iterable[Assignment],
    ) -> float:
        """
        Planned hours for an adjustment batch.

        Formula: production_time (minutes) x total planned quantity / 60.
        Returns 0 when the product is unknown.
        """
        if product is None:
            return 0.0
        total_planned = sum(a.quantity for a in assignments)
        return (product.production_time * total_planned) / MINUTES_PER_HOUR


def compute_estimate(product_groups, nozzle_id, products, nozzles,
                     config: Optional[PlanningConfig] = None) -> EstimateResult:
    """Estimate a spray batch with the default (or given) config."""
    return EstimateCalculator(config).estimate(product_groups, nozzle_id, products, nozzles)


def compute_real_gas_consumption(real_time_hours: float,
                                 config: Optional[PlanningConfig] = None) -> GasConsumption:
    """Gas consumed over real_time_hours of production."""
    return EstimateCalculator(config).real_gas_consumption(real_time_hours)
