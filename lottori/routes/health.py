"""Health check routes."""

from __future__ import annotations

from flask import Blueprint, current_app

from lottori.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Liveness check."""

    return ok({"status": "ok"})


@health_bp.get("/health/pipeline")
def pipeline_health():
    """Data pipeline report; 503 when any check fails."""

    report = current_app.extensions["health_service"].run()
    return ok(report.to_dict(), status_code=200 if report.healthy else 503)
