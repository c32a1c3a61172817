"""API routes for the Calculator plugin."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Mapping

from flask import Blueprint, Response, current_app, request
from pydantic import Field

from common.errors import NotFoundAppError, ValidationAppError
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, coerce_int, parse_model

from ..core import (
    CalculatorConfigError,
    CalculatorSettings,
    EvaluationContext,
    SessionLimitError,
    SessionNotFoundError,
    SessionStore,
    evaluate_expression,
    infix_to_postfix,
    tokenize,
)
from ..core.session import DEFAULT_MAX_SESSIONS, DEFAULT_SESSION_TTL

_MAX_EXPR_LENGTH = 1024
_EXTENSION_KEY = "calculator_sessions"


class SessionPayload(SchemaModel):
    precision: int | None = Field(default=None, ge=-1, le=15)
    result_precision: int | None = Field(default=None, ge=-1, le=15)
    degree: bool | None = None


class EvaluatePayload(SchemaModel):
    expression: str = Field(min_length=1, max_length=_MAX_EXPR_LENGTH)
    session_id: str | None = None


class PostfixPayload(SchemaModel):
    expression: str = Field(min_length=1, max_length=_MAX_EXPR_LENGTH)


api_bp = Blueprint("calculator_api", __name__, url_prefix="/api/calculator")


def _plugin_settings() -> Mapping[str, Any]:
    return current_app.config.get("PLUGIN_SETTINGS", {}).get("calculator", {}) or {}


def _default_settings() -> CalculatorSettings:
    return CalculatorSettings.from_settings(_plugin_settings())


def _session_store() -> SessionStore:
    store = current_app.extensions.get(_EXTENSION_KEY)
    if store is None:
        settings = _plugin_settings()
        ttl_minutes = coerce_int(
            settings.get("session_ttl_minutes"),
            int(DEFAULT_SESSION_TTL.total_seconds() // 60),
            minimum=1,
        )
        store = SessionStore(
            ttl=timedelta(minutes=ttl_minutes),
            max_sessions=coerce_int(settings.get("max_sessions"), DEFAULT_MAX_SESSIONS, minimum=1),
        )
        current_app.extensions[_EXTENSION_KEY] = store
    return store


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="calculator.invalid_request",
            details=getattr(exc, "details", None),
        )
    )


def _session_not_found(exc: SessionNotFoundError) -> Response:
    return fail(NotFoundAppError(message=str(exc), code="calculator.session_not_found"))


@api_bp.post("/sessions")
def create_session() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(SessionPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        settings = _default_settings().with_overrides(
            precision=payload.precision,
            result_precision=payload.result_precision,
            degree=payload.degree,
        )
        session_id, calculator = _session_store().create(settings)
    except CalculatorConfigError as exc:
        return fail(ValidationAppError(message=str(exc), code="calculator.invalid_settings"))
    except SessionLimitError as exc:
        return fail(ValidationAppError(message=str(exc), code="calculator.session_limit"))
    return ok({"session_id": session_id, "settings": calculator.settings.to_dict()}, status=201)


@api_bp.delete("/sessions/<session_id>")
def delete_session(session_id: str) -> Response:
    try:
        _session_store().delete(session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    return ok({"session_id": session_id, "deleted": True})


@api_bp.get("/sessions/<session_id>/variables")
def session_variables(session_id: str) -> Response:
    try:
        calculator = _session_store().get(session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    return ok({"session_id": session_id, "variables": calculator.variables.as_dict()})


@api_bp.post("/evaluate")
def evaluate() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(EvaluatePayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)

    if not payload.session_id:
        # One-off evaluation; nothing is registered, so variables do not persist.
        result = evaluate_expression(payload.expression, settings=_default_settings())
        return ok({"session_id": None, **result.to_dict()})

    try:
        calculator = _session_store().get(payload.session_id)
    except SessionNotFoundError as exc:
        return _session_not_found(exc)
    result = calculator.evaluate(payload.expression)
    return ok({"session_id": payload.session_id, **result.to_dict()})


@api_bp.post("/postfix")
def postfix() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(PostfixPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    infix = tokenize(payload.expression)
    output = infix_to_postfix(infix, EvaluationContext(settings=_default_settings()))
    return ok({"expression": payload.expression, "infix": infix.texts(), "postfix": output.texts()})


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "create_session",
    "delete_session",
    "session_variables",
    "evaluate",
    "postfix",
]
