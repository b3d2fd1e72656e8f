"""Helpers for the JSON response envelope."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def ok(data: Any, status_code: int = 200, *, cache_seconds: int | None = None) -> tuple[Response, int]:
    """Success response.

    Draw data only changes between data updates, so read-only endpoints may
    pass ``cache_seconds`` to allow public caching.
    """

    resp = jsonify({"success": True, "data": data, "error": None})
    if cache_seconds:
        resp.headers["Cache-Control"] = f"public, max-age={int(cache_seconds)}"
    return resp, status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> tuple[Response, int]:
    """Error response."""

    return (
        jsonify(
            {
                "success": False,
                "data": None,
                "error": {"code": code, "message": message, "details": details},
            }
        ),
        status_code,
    )
