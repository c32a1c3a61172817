"""Settings, warning flags and the per-session evaluation context."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from common.validation import coerce_bool, coerce_int

from .variables import VariableStore

UNSET_PRECISION = -1

RandomSource = Callable[[], float]


class CalculatorError(ValueError):
    """Base exception for calculator failures outside expression evaluation."""


class CalculatorConfigError(CalculatorError):
    """Raised when calculator settings are out of range."""


def time_seeded_random() -> float:
    """Return a value in ``[0, 1)`` from a generator reseeded with the current time."""

    return random.Random(time.time()).random()


@dataclass(frozen=True, slots=True)
class CalculatorSettings:
    """Numeric settings applied to every evaluation of a session.

    ``precision`` rounds each operand and each intermediate result,
    ``result_precision`` rounds the final value. ``-1`` leaves values
    unrounded.
    """

    precision: int = UNSET_PRECISION
    result_precision: int = UNSET_PRECISION
    degree: bool = False

    def __post_init__(self) -> None:
        for name in ("precision", "result_precision"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise CalculatorConfigError(f"{name} must be an integer")
            if value < UNSET_PRECISION:
                raise CalculatorConfigError(f"{name} must be -1 (unset) or a non-negative integer")

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any] | None) -> "CalculatorSettings":
        """Build settings from ``config.yml`` values.

        Missing or malformed entries fall back to the defaults so that a bad
        config file never breaks application start-up.
        """

        settings = settings or {}
        return cls(
            precision=coerce_int(settings.get("precision"), UNSET_PRECISION, minimum=UNSET_PRECISION),
            result_precision=coerce_int(
                settings.get("result_precision"), UNSET_PRECISION, minimum=UNSET_PRECISION
            ),
            degree=coerce_bool(settings.get("degree"), False),
        )

    def with_overrides(self, **overrides: Any) -> "CalculatorSettings":
        values = {
            "precision": self.precision,
            "result_precision": self.result_precision,
            "degree": self.degree,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return CalculatorSettings(**values)

    def to_dict(self) -> dict[str, object]:
        return {
            "precision": self.precision,
            "result_precision": self.result_precision,
            "degree": self.degree,
        }


@dataclass(slots=True)
class EvaluationFlags:
    division_by_zero: bool = False
    trigonometric_domain: bool = False

    def reset(self) -> None:
        self.division_by_zero = False
        self.trigonometric_domain = False


@dataclass(slots=True)
class EvaluationContext:
    """State threaded through one calculator session."""

    settings: CalculatorSettings = field(default_factory=CalculatorSettings)
    flags: EvaluationFlags = field(default_factory=EvaluationFlags)
    variables: VariableStore = field(default_factory=VariableStore)
    random_source: RandomSource = time_seeded_random
    defines_variable: bool = False


__all__ = [
    "UNSET_PRECISION",
    "RandomSource",
    "CalculatorError",
    "CalculatorConfigError",
    "CalculatorSettings",
    "EvaluationFlags",
    "EvaluationContext",
    "time_seeded_random",
]
