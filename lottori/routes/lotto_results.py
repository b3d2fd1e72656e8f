"""Lotto results API."""

from __future__ import annotations

from flask import Blueprint, request

from lottori.cache import draw_dataset
from lottori.constants import DEFAULT_RECENT_RESULTS
from lottori.errors import NotFoundError, ValidationError
from lottori.schemas.lotto_result import DrawSchema
from lottori.utils import kst
from lottori.utils.responses import ok

lotto_results_bp = Blueprint("lotto_results", __name__)

_schema = DrawSchema()
_many_schema = DrawSchema(many=True)

CACHE_SECONDS = 300


@lotto_results_bp.get("/results")
def list_results():
    raw_limit = (request.args.get("limit") or "").strip()
    limit = DEFAULT_RECENT_RESULTS
    if raw_limit:
        try:
            limit = int(raw_limit)
        except ValueError as e:
            raise ValidationError("limit must be an integer") from e
        if limit <= 0:
            raise ValidationError("limit must be positive")

    dataset = draw_dataset()
    return ok(
        {
            "latest_round": dataset.latest_round,
            "total": len(dataset.draws),
            "draws": _many_schema.dump(dataset.draws[:limit]),
        },
        cache_seconds=CACHE_SECONDS,
    )


@lotto_results_bp.get("/results/latest")
def latest_result():
    dataset = draw_dataset()
    if not dataset.draws:
        raise NotFoundError(message="No draws available")

    next_draw = kst.next_draw_at()
    return ok(
        {
            "draw": _schema.dump(dataset.draws[0]),
            "next_round": dataset.draws[0].round + 1,
            "next_draw_at": next_draw.isoformat(),
            "seconds_until_next_draw": kst.seconds_until(next_draw),
        }
    )


@lotto_results_bp.get("/results/<int:round_no>")
def get_result(round_no: int):
    draw = draw_dataset().find(round_no)
    if draw is None:
        raise NotFoundError(message=f"Round {round_no} not found")
    return ok(_schema.dump(draw), cache_seconds=CACHE_SECONDS)
