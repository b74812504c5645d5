"""
Preview of batch plans for a data snapshot.

Computes the plan of every spray and adjustment batch found in a snapshot
(the same shape the API accepts: products, nozzles, employees, batches,
adjustments) and shows stored delivery dates that differ from the
computed ones, without writing anything back.
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from sprayline.datetime_utils import format_date, to_day
from sprayline.logging_config import get_logger, PlanningContext
from sprayline.planning.config import PlanningConfig
from sprayline.planning.metrics import format_time
from sprayline.planning.records import AdjustmentBatch, Catalog, SprayBatch
from sprayline.planning.service import plan_adjustment_batch, plan_spray_batch

logger = get_logger(__name__)


def _stored_delivery(row: Mapping[str, Any]):
    value = row.get('delivery_date') or row.get('deliveryDate')
    if not value:
        return None
    try:
        return to_day(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable stored delivery date {value!r}")
        return None


def preview_snapshot(snapshot: Mapping[str, Any],
                     config: Optional[PlanningConfig] = None) -> Dict[str, Any]:
    """
    Plan every batch of a snapshot.

    Args:
        snapshot: Dict with catalog rows plus 'batches' and 'adjustments'
        config: Planning constants (defaults apply when None)

    Returns:
        dict: Preview results with plans list and summary
    """
    with PlanningContext("preview_snapshot"):
        catalog = Catalog.from_dict(snapshot)

        plans = []
        for row in snapshot.get('batches') or ():
            plans.append((row, plan_spray_batch(SprayBatch.from_row(row), catalog, config)))
        for row in snapshot.get('adjustments') or ():
            plans.append((row, plan_adjustment_batch(AdjustmentBatch.from_row(row), catalog, config)))

        results = []
        changed = 0
        unschedulable = 0

        for row, plan in plans:
            stored = _stored_delivery(row)
            computed = to_day(plan.delivery_date)
            has_change = stored is not None and stored != computed
            if has_change:
                changed += 1
            if not plan.schedule.is_scheduled:
                unschedulable += 1

            entry = plan.to_dict()
            entry['name'] = row.get('name', '')
            entry['stored_delivery_date'] = format_date(stored) if stored else None
            entry['delivery_changed'] = has_change
            results.append(entry)

        summary = {
            'total_batches': len(results),
            'spray_batches': sum(1 for r in results if r['kind'] == 'spray'),
            'adjustment_batches': sum(1 for r in results if r['kind'] == 'adjustment'),
            'delivery_changes': changed,
            'unschedulable': unschedulable,
        }

    return {'plans': results, 'summary': summary}


def print_preview(preview_results: Dict[str, Any], detailed: bool = True):
    """
    Print a formatted preview of batch plans.

    Args:
        preview_results: Results from preview_snapshot()
        detailed: If True, show every batch. If False, only show summary.
    """
    summary = preview_results.get('summary', {})
    plans = preview_results.get('plans', [])

    print("\n" + "=" * 80)
    print("PLANNING PREVIEW - Summary")
    print("=" * 80)

    print(f"\nTotal Batches: {summary.get('total_batches', 0)}")
    print(f"Spray Batches: {summary.get('spray_batches', 0)}")
    print(f"Adjustment Batches: {summary.get('adjustment_batches', 0)}")
    print(f"Delivery Date Changes: {summary.get('delivery_changes', 0)}")
    print(f"Unschedulable: {summary.get('unschedulable', 0)}")

    if not detailed or not plans:
        print("\n" + "=" * 80)
        return

    print("\n" + "=" * 80)
    print("BATCHES")
    print("=" * 80)

    for plan in plans:
        print(f"\nBatch: {plan['batch_id']} - {plan.get('name') or 'N/A'} ({plan['kind']})")
        print(f"  Start: {plan['start_date']}")
        print(f"  Planned Time: {format_time(plan['planned_hours'])}")

        estimate = plan.get('estimate')
        if estimate:
            print(f"  Items: {estimate['total_items']}")
            print(f"  Input: {estimate['estimated_input_kg']:.2f} kg")
            print(
                f"  Oxygen: {estimate['estimated_oxygen_liters']:.2f} L "
                f"({estimate['oxygen_cylinders']} cyl)"
            )
            print(
                f"  Acetylene: {estimate['estimated_acetylene_liters']:.2f} L "
                f"({estimate['acetylene_cylinders']} cyl)"
            )

        if not plan['scheduled']:
            print(f"  ✗  Delivery: unschedulable ({plan['reason']})")
        elif plan['delivery_changed']:
            print(f"  ⚠️  Delivery: {plan['stored_delivery_date']} → {plan['delivery_date']}")
        else:
            print(f"  ✓  Delivery: {plan['delivery_date']}")

    print("\n" + "=" * 80)


def load_snapshot(path) -> Dict[str, Any]:
    with open(Path(path), encoding='utf-8') as handle:
        return json.load(handle)


def run_preview_script(snapshot_path, detailed: bool = True,
                       config: Optional[PlanningConfig] = None):
    """
    Run the preview from the command line.

    Args:
        snapshot_path: Path to a JSON snapshot
        detailed: Show every batch, not just the summary
        config: Planning constants (defaults apply when None)
    """
    try:
        preview_results = preview_snapshot(load_snapshot(snapshot_path), config)
        print_preview(preview_results, detailed=detailed)
        return preview_results
    except Exception as e:
        logger.error(f"Error in preview script: {e}", exc_info=True)
        print(f"\nError: {e}")
        raise
