"""Lotto 6/45 results, statistics, simulator and tax calculator service."""

from __future__ import annotations

import pathlib
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied after the environment config
            (used by tests).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from lottori.cache import LazyCache
    from lottori.config import PROJECT_ROOT, get_config
    from lottori.db import init_db
    from lottori.error_handlers import register_error_handlers
    from lottori.logging_config import configure_logging
    from lottori.repositories.blog_repository import BlogRepository
    from lottori.repositories.lotto_result_repository import LottoResultRepository
    from lottori.routes.analysis import analysis_bp
    from lottori.routes.blog import blog_bp
    from lottori.routes.health import health_bp
    from lottori.routes.lotto_results import lotto_results_bp
    from lottori.routes.recommend import recommend_bp
    from lottori.routes.simulator import simulator_bp
    from lottori.routes.tax import tax_bp
    from lottori.services.health_service import HealthService

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    draw_repo = LottoResultRepository(
        pathlib.Path(app.config["LOTTO_DATA_PATH"]),
        session_factory=app.extensions.get("session_factory"),
    )
    blog_repo = BlogRepository(pathlib.Path(app.config["BLOG_DIR"]))

    app.extensions["draw_repository"] = draw_repo
    app.extensions["draw_cache"] = LazyCache(draw_repo.load)
    app.extensions["blog_cache"] = LazyCache(blog_repo.load_all)
    app.extensions["health_service"] = HealthService(
        draw_repo,
        blog_repo,
        project_root=app.config.get("PROJECT_ROOT", PROJECT_ROOT),
    )

    app.register_blueprint(health_bp)
    app.register_blueprint(lotto_results_bp, url_prefix="/api")
    app.register_blueprint(analysis_bp, url_prefix="/api")
    app.register_blueprint(simulator_bp, url_prefix="/api")
    app.register_blueprint(tax_bp, url_prefix="/api")
    app.register_blueprint(recommend_bp, url_prefix="/api")
    app.register_blueprint(blog_bp, url_prefix="/api")

    return app
