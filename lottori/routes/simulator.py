"""Purchase simulator route."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from lottori.errors import ValidationError
from lottori.schemas.simulation import SimulationRequestSchema, SimulationResultSchema
from lottori.services.simulation_service import SimulationService
from lottori.utils.responses import ok

simulator_bp = Blueprint("simulator", __name__)

_request_schema = SimulationRequestSchema()
_result_schema = SimulationResultSchema()
_service = SimulationService()


@simulator_bp.post("/simulate")
def simulate():
    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    max_trials = int(current_app.config.get("SIMULATION_MAX_TRIALS", 100_000))
    trials = int(data["trials"])
    if trials > max_trials:
        raise ValidationError(
            message="Too many trials",
            details={"trials": [f"Must be <= {max_trials}"]},
        )

    result = _service.run(data["numbers"], trials)
    return ok(_result_schema.dump(result))
