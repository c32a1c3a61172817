"""Calculator sessions: the public evaluation entry point and their registry."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from common.logging import get_logger

from .context import CalculatorError, CalculatorSettings, EvaluationContext, RandomSource, time_seeded_random
from .diagnostics import EvaluationWarnings, collect_warnings
from .evaluator import PostfixEvaluator
from .lexer import tokenize
from .numeric import format_number, trim_number
from .shunting_yard import infix_to_postfix
from .tokens import TokenList
from .variables import VariableStore

logger = get_logger("calc_server.calculator")

DEFAULT_SESSION_TTL = timedelta(minutes=30)
DEFAULT_MAX_SESSIONS = 64


class SessionNotFoundError(CalculatorError):
    """Raised when a session id is unknown or expired."""


class SessionLimitError(CalculatorError):
    """Raised when creating a session would exceed the configured cap."""


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Outcome of one top-level evaluation.

    ``output`` is the fixed-format number, or ``None`` when the expression
    defined a variable.
    """

    expression: str
    value: float
    output: str | None
    defines_variable: bool
    infix: tuple[str, ...]
    postfix: tuple[str, ...]
    warnings: EvaluationWarnings

    @property
    def display(self) -> str | None:
        return trim_number(self.output) if self.output is not None else None

    def to_dict(self) -> dict[str, object]:
        return {
            "expression": self.expression,
            "result": self.output,
            "display": self.display,
            "value": self.value if self.output is not None else None,
            "defines_variable": self.defines_variable,
            "infix": list(self.infix),
            "postfix": list(self.postfix),
            "warnings": self.warnings.to_dict(),
        }


class Calculator:
    """Evaluate expressions against one set of variables and settings.

    Calls are serialized per instance: an HTTP session may receive concurrent
    requests, and one evaluation owns the context flags until its warnings
    are collected.
    """

    def __init__(
        self,
        settings: CalculatorSettings | None = None,
        *,
        variables: VariableStore | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        self.context = EvaluationContext(
            settings=settings or CalculatorSettings(),
            variables=variables if variables is not None else VariableStore(),
            random_source=random_source or time_seeded_random,
        )
        self._evaluator = PostfixEvaluator(self.context)
        self._lock = threading.Lock()

    @property
    def settings(self) -> CalculatorSettings:
        return self.context.settings

    @property
    def variables(self) -> VariableStore:
        return self.context.variables

    def _convert(self, expression: str) -> tuple[TokenList, TokenList]:
        infix = tokenize(expression)
        return infix, infix_to_postfix(infix, self.context)

    def convert(self, expression: str) -> tuple[TokenList, TokenList]:
        with self._lock:
            return self._convert(expression)

    def postfix(self, expression: str) -> list[str]:
        _, postfix = self.convert(expression)
        return postfix.texts()

    def evaluate(self, expression: str) -> EvaluationResult:
        with self._lock:
            infix, postfix = self._convert(expression)
            value = self._evaluator.evaluate(postfix)
            warnings = collect_warnings(infix, self.context)
            defines_variable = self.context.defines_variable

        logger.debug("evaluated %r as %s -> %s", expression, " ".join(postfix.texts()), value)
        if warnings.inaccurate:
            logger.warning("%r: %s", expression, "; ".join(warnings.messages))

        return EvaluationResult(
            expression=expression,
            value=value,
            output=None if defines_variable else format_number(value),
            defines_variable=defines_variable,
            infix=tuple(infix.texts()),
            postfix=tuple(postfix.texts()),
            warnings=warnings,
        )

    def close(self) -> None:
        """Release every variable of the session."""

        with self._lock:
            self.context.variables.clear()


def evaluate_expression(
    expression: str,
    *,
    settings: CalculatorSettings | None = None,
    variables: VariableStore | None = None,
) -> EvaluationResult:
    """Evaluate ``expression`` once, optionally against an existing variable store."""

    return Calculator(settings, variables=variables).evaluate(expression)


@dataclass(slots=True)
class _SessionEntry:
    calculator: Calculator
    last_accessed: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        self.last_accessed = datetime.now(timezone.utc)


class SessionStore:
    """Thread-safe in-memory calculator registry with TTL purging."""

    def __init__(
        self,
        *,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ) -> None:
        self.ttl = ttl
        self.max_sessions = max_sessions
        self._items: dict[str, _SessionEntry] = {}
        self._lock = threading.Lock()

    def _purge_locked(self) -> None:
        now = datetime.now(timezone.utc)
        expired = [
            session_id
            for session_id, entry in self._items.items()
            if now - entry.last_accessed > self.ttl
        ]
        for session_id in expired:
            self._items.pop(session_id).calculator.close()
            logger.info("expired calculator session %s", session_id)

    def create(self, settings: CalculatorSettings | None = None) -> tuple[str, Calculator]:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._purge_locked()
            if len(self._items) >= self.max_sessions:
                raise SessionLimitError("Too many active calculator sessions")
            calculator = Calculator(settings)
            self._items[session_id] = _SessionEntry(calculator=calculator)
        return session_id, calculator

    def get(self, session_id: str) -> Calculator:
        with self._lock:
            self._purge_locked()
            try:
                entry = self._items[session_id]
            except KeyError as exc:
                raise SessionNotFoundError("Session expired or not found") from exc
            entry.touch()
            return entry.calculator

    def delete(self, session_id: str) -> None:
        with self._lock:
            entry = self._items.pop(session_id, None)
        if entry is None:
            raise SessionNotFoundError("Session expired or not found")
        entry.calculator.close()

    def clear(self) -> None:
        with self._lock:
            for entry in self._items.values():
                entry.calculator.close()
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


__all__ = [
    "DEFAULT_SESSION_TTL",
    "DEFAULT_MAX_SESSIONS",
    "SessionNotFoundError",
    "SessionLimitError",
    "EvaluationResult",
    "Calculator",
    "SessionStore",
    "evaluate_expression",
]
