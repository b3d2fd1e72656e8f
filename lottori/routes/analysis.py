"""Statistics routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottori.cache import draw_dataset
from lottori.schemas.analysis import FrequencyQuerySchema, LottoStatsSchema
from lottori.services.frequency_analysis_service import FrequencyAnalysisService
from lottori.services.statistics_service import StatisticsService
from lottori.utils.responses import ok

analysis_bp = Blueprint("analysis", __name__)

_frequency_service = FrequencyAnalysisService()
_statistics_service = StatisticsService(_frequency_service)
_frequency_query = FrequencyQuerySchema()
_stats_schema = LottoStatsSchema()


@analysis_bp.get("/stats")
def get_stats():
    stats = _statistics_service.summarize(draw_dataset().draws)
    return ok(_stats_schema.dump(stats))


@analysis_bp.get("/stats/frequency")
def get_frequency_analysis():
    """Return number frequency counts for 1..45.

    Query params:
    - n: optional recent N draws (e.g., 10/30/50/100)
    - percent: optional percentile for hot/cold buckets (default 0.2)
    """

    args = {k: v for k, v in request.args.items() if k in ("n", "percent") and v.strip()}
    query = _frequency_query.load(args)

    dataset = draw_dataset()
    table = _frequency_service.analyze(dataset.draws, recent_n=query["n"])
    percent = float(query["percent"])

    return ok(
        {
            "total_draws": len(dataset.draws),
            "draws_used": table.draws_used,
            "recent_n": table.recent_n,
            "percent": percent,
            "counts": {str(n): c for n, c in table.counts.items()},
            "min_count": table.min_count,
            "max_count": table.max_count,
            "hot_numbers": table.hot_numbers(percent),
            "cold_numbers": table.cold_numbers(percent),
        }
    )
