"""JSON envelopes shared by every route."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify

from .errors import AppError


def ok(data: Any, *, status: int = 200) -> Response:
    response = jsonify({"success": True, "data": data})
    response.status_code = status
    return response


def fail(error: AppError) -> Response:
    """Render ``error`` with its own status code."""

    response = jsonify({"success": False, "error": error.to_dict()})
    response.status_code = error.status_code
    return response


__all__ = ["ok", "fail"]
