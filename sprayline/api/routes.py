"""
Planning route handlers for the api Blueprint.

Every endpoint takes the reference data it needs in the request body
(``catalog``: products, nozzles, employees rows); nothing is read from or
written to storage here.
"""
from flask import current_app, jsonify, request

from sprayline.api import api_bp
from sprayline.datetime_utils import to_day
from sprayline.logging_config import get_logger, PlanningContext
from sprayline.planning import (
    AdjustmentBatch,
    Assignment,
    Catalog,
    DeliveryScheduler,
    EstimateCalculator,
    ProductGroup,
    RecordError,
    SprayBatch,
    plan_adjustment_batch,
    plan_spray_batch,
    real_production_report,
)

logger = get_logger(__name__)

# ==============================================================================
# Helper Functions
# ==============================================================================

def get_planning_config():
    return current_app.config["PLANNING_CONFIG"]


def get_json_body():
    """Return the JSON object body, or raise RecordError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RecordError("Request body must be a JSON object")
    return data


def get_field(data, *keys, default=None):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def get_number(data, *keys):
    value = get_field(data, *keys)
    if value is None:
        raise RecordError(f"{keys[0]} is required")
    if isinstance(value, bool):
        raise RecordError(f"{keys[0]} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RecordError(f"{keys[0]} must be a number")


def get_catalog(data):
    catalog = data.get("catalog") or {}
    if not isinstance(catalog, dict):
        raise RecordError("catalog must be an object")
    return Catalog.from_dict(catalog)


def get_batch_row(data):
    batch = data.get("batch")
    if not isinstance(batch, dict):
        raise RecordError("batch is required")
    return batch


def bad_request(exc):
    logger.info("Rejected planning request", error=str(exc), path=request.path)
    return jsonify({"error": str(exc)}), 400


def server_error(message, exc):
    logger.error(message, error=str(exc), exc_info=True)
    return jsonify({
        "error": message,
        "details": str(exc)
    }), 500

# ==============================================================================
# Routes
# ==============================================================================

@api_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"}), 200


@api_bp.route("/estimates", methods=["POST"])
def estimate_batch():
    """Estimate items, hours, material and gas for a spray batch."""
    try:
        data = get_json_body()
        groups = [ProductGroup.from_row(row) for row in data.get("products") or ()]
        nozzle_id = get_field(data, "nozzleId", "nozzle_id")
        if nozzle_id is not None:
            nozzle_id = str(nozzle_id)
        catalog = get_catalog(data)

        estimate = EstimateCalculator(get_planning_config()).estimate(
            groups, nozzle_id, catalog.products, catalog.nozzles
        )
        return jsonify(estimate.to_dict()), 200

    except RecordError as exc:
        return bad_request(exc)
    except Exception as exc:
        return server_error("Failed to compute estimate", exc)


@api_bp.route("/gas/real", methods=["POST"])
def real_gas_consumption():
    """Gas consumed over the real production hours of a batch."""
    try:
        data = get_json_body()
        real_time_hours = get_number(data, "realTimeHours", "real_time_hours")

        gas = EstimateCalculator(get_planning_config()).real_gas_consumption(real_time_hours)
        return jsonify(gas.to_dict()), 200

    except RecordError as exc:
        return bad_request(exc)
    except Exception as exc:
        return server_error("Failed to compute gas consumption", exc)


@api_bp.route("/delivery-date", methods=["POST"])
def delivery_date():
    """Project the delivery date for a required number of labor hours."""
    try:
        data = get_json_body()
        start_value = get_field(data, "startDate", "start_date")
        if start_value is None:
            raise RecordError("startDate is required")
        try:
            start_date = to_day(start_value)
        except (TypeError, ValueError):
            raise RecordError("startDate must be an ISO date")
        required_hours = get_number(data, "requiredHours", "required_hours")
        assignments = [Assignment.from_row(row) for row in data.get("assignments") or ()]
        catalog = get_catalog(data)

        config = get_planning_config()
        schedule = DeliveryScheduler(config).schedule(
            start_date, required_hours, assignments, catalog.employees
        )
        return jsonify({
            "delivery_date": schedule.as_date(config.unschedulable_date).isoformat(),
            "scheduled": schedule.is_scheduled,
            "reason": schedule.reason,
        }), 200

    except RecordError as exc:
        return bad_request(exc)
    except Exception as exc:
        return server_error("Failed to compute delivery date", exc)


@api_bp.route("/batches/plan", methods=["POST"])
def plan_batch():
    """Estimate and schedule a spray batch as submitted by the batch form."""
    try:
        data = get_json_body()
        batch = SprayBatch.from_row(get_batch_row(data))
        with PlanningContext("plan_batch", batch_id=batch.id):
            plan = plan_spray_batch(batch, get_catalog(data), get_planning_config())
        return jsonify(plan.to_dict()), 200

    except RecordError as exc:
        return bad_request(exc)
    except Exception as exc:
        return server_error("Failed to plan batch", exc)


@api_bp.route("/adjustments/plan", methods=["POST"])
def plan_adjustment():
    """Compute planned time and schedule an adjustment batch."""
    try:
        data = get_json_body()
        batch = AdjustmentBatch.from_row(get_batch_row(data))
        with PlanningContext("plan_adjustment", batch_id=batch.id):
            plan = plan_adjustment_batch(batch, get_catalog(data), get_planning_config())
        return jsonify(plan.to_dict()), 200

    except RecordError as exc:
        return bad_request(exc)
    except Exception as exc:
        return server_error("Failed to plan adjustment", exc)


@api_bp.route("/batches/report", methods=["POST"])
def batch_report():
    """Compare a spray batch's estimate with its recorded production."""
    try:
        data = get_json_body()
        batch = SprayBatch.from_row(get_batch_row(data))
        report = real_production_report(batch, get_catalog(data), get_planning_config())
        return jsonify(report.to_dict()), 200

    except RecordError as exc:
        return bad_request(exc)
    except Exception as exc:
        return server_error("Failed to build production report", exc)
