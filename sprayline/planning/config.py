"""
Planning configuration module.

Physical constants and simulation limits used by the estimate and delivery
calculations. Defaults match the values the dashboard has always used and
must not change without sign-off from production.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping


@dataclass(frozen=True)
class PlanningConfig:
    """
    Configuration for planning calculations.

    Instances are immutable; build a variant with ``dataclasses.replace``.
    """

    # Gas draw per hour of spraying (liters per hour)
    oxygen_flow_lph: float = 1.0
    acetylene_flow_lph: float = 1.15

    # Liters per cylinder
    oxygen_cylinder_liters: float = 50.0
    acetylene_cylinder_liters: float = 55.0

    # Maximum number of calendar days the delivery simulation walks
    scheduling_horizon_days: int = 365 * 5

    # Date reported when a batch cannot be scheduled
    unschedulable_date: date = date(2099, 12, 31)

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "PlanningConfig":
        """
        Build a config from Flask-style upper-case settings.

        Args:
            settings: Mapping such as ``app.config``. Missing keys keep defaults.

        Returns:
            PlanningConfig
        """
        defaults = cls()
        return cls(
            oxygen_flow_lph=float(settings.get('OXYGEN_FLOW_LPH', defaults.oxygen_flow_lph)),
            acetylene_flow_lph=float(settings.get('ACETYLENE_FLOW_LPH', defaults.acetylene_flow_lph)),
            oxygen_cylinder_liters=float(settings.get('OXYGEN_CYLINDER_L', defaults.oxygen_cylinder_liters)),
            acetylene_cylinder_liters=float(
                settings.get('ACETYLENE_CYLINDER_L', defaults.acetylene_cylinder_liters)
            ),
            scheduling_horizon_days=int(
                settings.get('SCHEDULING_HORIZON_DAYS', defaults.scheduling_horizon_days)
            ),
        )


DEFAULT_CONFIG = PlanningConfig()
