"""Number recommendation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottori.cache import draw_dataset
from lottori.schemas.recommend import RecommendRequestSchema, RecommendResponseSchema
from lottori.services.recommend_service import LuckyNumberService, RecommendService
from lottori.utils import kst
from lottori.utils.responses import ok

recommend_bp = Blueprint("recommend", __name__)

_request_schema = RecommendRequestSchema()
_response_schema = RecommendResponseSchema()
_service = RecommendService()
_lucky_service = LuckyNumberService()


@recommend_bp.post("/recommend")
def recommend_numbers():
    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    sets = _service.recommend(
        data["method"],
        draw_dataset().draws,
        count=int(data["count"]),
        fixed_numbers=data.get("fixed_numbers"),
        exclude_numbers=data.get("exclude_numbers"),
        exclude_winning=bool(data.get("exclude_winning")),
    )
    return ok(
        _response_schema.dump(
            {"method": data["method"], "numbers": sets[0], "sets": sets, "count": len(sets)}
        )
    )


@recommend_bp.get("/lucky")
def lucky_numbers():
    today = kst.now_kst().date()
    return ok(
        {
            "date": today.isoformat(),
            "numbers": _lucky_service.for_date(today),
            "seconds_until_reset": kst.seconds_until(kst.next_midnight()),
        }
    )
