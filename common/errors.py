"""Errors rendered into the ``{"success": false, "error": ...}`` envelope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    """An API failure with a stable machine-readable ``code``.

    Plugin codes are namespaced by plugin (``calculator.session_limit``);
    ``details`` carries structured context such as pydantic error lists.
    """

    message: str
    code: str = "error"
    status_code: int = 400
    details: Any | None = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": {} if self.details is None else self.details,
        }


@dataclass(slots=True)
class ValidationAppError(AppError):
    code: str = "validation_error"
    status_code: int = 400


@dataclass(slots=True)
class NotFoundAppError(AppError):
    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class PayloadTooLargeAppError(AppError):
    """Request body above ``MAX_CONTENT_LENGTH``."""

    code: str = "payload_too_large"
    status_code: int = 413


__all__ = ["AppError", "ValidationAppError", "NotFoundAppError", "PayloadTooLargeAppError"]
