"""Exports for the calculator core."""

from .context import (
    UNSET_PRECISION,
    CalculatorConfigError,
    CalculatorError,
    CalculatorSettings,
    EvaluationContext,
    EvaluationFlags,
)
from .diagnostics import EvaluationWarnings, collect_warnings
from .evaluator import PostfixEvaluator
from .lexer import get_precedence, tokenize
from .numeric import format_number, parse_number, round_half_away
from .session import (
    Calculator,
    EvaluationResult,
    SessionLimitError,
    SessionNotFoundError,
    SessionStore,
    evaluate_expression,
)
from .shunting_yard import infix_to_postfix
from .tokens import Token, TokenKind, TokenList
from .variables import VariableStore

__all__ = [
    "UNSET_PRECISION",
    "CalculatorConfigError",
    "CalculatorError",
    "CalculatorSettings",
    "EvaluationContext",
    "EvaluationFlags",
    "EvaluationWarnings",
    "collect_warnings",
    "PostfixEvaluator",
    "get_precedence",
    "tokenize",
    "format_number",
    "parse_number",
    "round_half_away",
    "Calculator",
    "EvaluationResult",
    "SessionLimitError",
    "SessionNotFoundError",
    "SessionStore",
    "evaluate_expression",
    "infix_to_postfix",
    "Token",
    "TokenKind",
    "TokenList",
    "VariableStore",
]
