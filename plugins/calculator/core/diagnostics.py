"""End-of-evaluation warning aggregation."""

from __future__ import annotations

from dataclasses import dataclass

from .context import EvaluationContext
from .lexer import is_valid
from .tokens import TokenList

TOKEN_WARNING_MSG = "Warning: Invalid token '{}'"
ZERO_DIVISION_WARNING_MSG = "Warning: Division by zero"
TRIGONOMETRIC_WARNING_MSG = "Warning: Invalid value for trigonometric function"
INACCURATE_RESULT_MSG = "Result may be inaccurate"


@dataclass(frozen=True, slots=True)
class EvaluationWarnings:
    invalid_tokens: tuple[str, ...] = ()
    division_by_zero: bool = False
    trigonometric_domain: bool = False

    @property
    def count(self) -> int:
        return len(self.invalid_tokens) + int(self.division_by_zero) + int(self.trigonometric_domain)

    @property
    def inaccurate(self) -> bool:
        return self.count > 0

    @property
    def messages(self) -> list[str]:
        messages = [TOKEN_WARNING_MSG.format(text) for text in self.invalid_tokens]
        if self.division_by_zero:
            messages.append(ZERO_DIVISION_WARNING_MSG)
        if self.trigonometric_domain:
            messages.append(TRIGONOMETRIC_WARNING_MSG)
        if messages:
            messages.append(INACCURATE_RESULT_MSG)
        return messages

    def to_dict(self) -> dict[str, object]:
        return {
            "invalid_tokens": list(self.invalid_tokens),
            "division_by_zero": self.division_by_zero,
            "trigonometric_domain": self.trigonometric_domain,
            "inaccurate": self.inaccurate,
            "messages": self.messages,
        }


def collect_warnings(infix: TokenList, context: EvaluationContext) -> EvaluationWarnings:
    """Combine per-token validity failures with the evaluation flags.

    Runs after evaluation so that names assigned by the expression itself
    count as defined.
    """

    invalid = tuple(token.text for token in infix if not is_valid(token, context.variables))
    return EvaluationWarnings(
        invalid_tokens=invalid,
        division_by_zero=context.flags.division_by_zero,
        trigonometric_domain=context.flags.trigonometric_domain,
    )


__all__ = [
    "TOKEN_WARNING_MSG",
    "ZERO_DIVISION_WARNING_MSG",
    "TRIGONOMETRIC_WARNING_MSG",
    "INACCURATE_RESULT_MSG",
    "EvaluationWarnings",
    "collect_warnings",
]
