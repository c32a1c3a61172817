"""Postfix evaluation and operator dispatch."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from common.logging import get_logger

from .context import EvaluationContext
from .numeric import factorial, parse_number, round_half_away
from .tokens import Token, TokenKind, TokenList
from .units import byte_multipliers, to_bytes

logger = get_logger("calc_server.calculator.evaluator")

ASSIGNMENT = "="
# Evaluated even on an empty stack; an operand, when present, is consumed and ignored.
OPTIONAL_OPERAND = frozenset({"rand"})
UNARY_OPERATORS = frozenset({"!"})
_INVERSE_TRIG = frozenset({"asin", "acos", "atan"})
_TRIG = frozenset({"sin", "cos", "tan"}) | _INVERSE_TRIG

_BINARY: dict[str, Callable[[np.float64, np.float64], np.float64]] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "^": np.power,
}

_UNARY: dict[str, Callable[[np.float64], np.float64]] = {
    "sqrt": np.sqrt,
    "abs": np.fabs,
    "log": np.log,
    "floor": np.floor,
    "ceil": np.ceil,
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "asin": np.arcsin,
    "acos": np.arccos,
    "atan": np.arctan,
}


def operand_count(token: Token) -> int:
    """Number of operands ``token`` pops from the evaluation stack."""

    if token.kind in (TokenKind.FUNCTION, TokenKind.UNIT) or token.text in UNARY_OPERATORS:
        return 1
    return 2


class PostfixEvaluator:
    """Evaluate postfix token lists against an :class:`EvaluationContext`."""

    def __init__(self, context: EvaluationContext) -> None:
        self.context = context

    # ---- Public API -------------------------------------------------------
    def evaluate(self, postfix: TokenList, stack: TokenList | None = None) -> float:
        stack = stack if stack is not None else TokenList()
        self.context.defines_variable = False

        for token in postfix:
            if token.is_callable:
                self._apply(token, stack)
            else:
                stack.append(token)

        result = self.resolve(stack.last) if stack else 0.0
        stack.clear()
        result_precision = self.context.settings.result_precision
        if result_precision >= 0:
            result = round_half_away(result, result_precision)
        return result

    def resolve(self, token: Token | None) -> float:
        """Numeric value of an operand token; a missing operand is ``0.0``."""

        if token is None:
            return 0.0
        if token.kind is TokenKind.NAME:
            return self.context.variables.lookup(token.text)
        if token.value is not None:
            return token.value
        return parse_number(token.text)

    # ---- Dispatch ---------------------------------------------------------
    def _apply(self, token: Token, stack: TokenList) -> None:
        arity = operand_count(token)
        if not stack and token.text not in OPTIONAL_OPERAND:
            logger.debug("skipping %r: no operand on the stack", token.text)
            return

        right = stack.pop()
        left = stack.pop() if arity == 2 else None

        if token.text == ASSIGNMENT:
            stack.append(self._assign(left, right))
            return

        self.context.defines_variable = False
        precision = self.context.settings.precision
        x = self.resolve(left)
        y = self.resolve(right)
        if precision >= 0:
            x = round_half_away(x, precision)
            y = round_half_away(y, precision)

        result = self._compute(token.text, x, y)
        if precision >= 0:
            result = round_half_away(result, precision)
        stack.append(Token.number(result))

    def _assign(self, target: Token | None, source: Token | None) -> Token:
        self.context.defines_variable = True
        value = self.resolve(source)
        if target is None:
            logger.debug("assignment without a target, value %s discarded", value)
        else:
            self.context.variables.define(target.text, value)
        return Token.number(value)

    def _compute(self, symbol: str, x: float, y: float) -> float:
        flags = self.context.flags
        with np.errstate(all="ignore"):
            if symbol in _BINARY:
                return float(_BINARY[symbol](np.float64(x), np.float64(y)))
            if symbol == "/":
                if y == 0:
                    flags.division_by_zero = True
                    return 0.0
                return float(np.divide(np.float64(x), np.float64(y)))
            if symbol == "!":
                return factorial(int(y)) if math.isfinite(y) else math.nan
            if symbol == "round":
                return round_half_away(y, 0)
            if symbol == "rand":
                return float(self.context.random_source())
            if symbol in byte_multipliers():
                return to_bytes(y, symbol)

            if symbol in _TRIG and self.context.settings.degree:
                y = y / 180 * math.pi
            if symbol in _INVERSE_TRIG and (y < -1 or y > 1):
                flags.trigonometric_domain = True
                return 0.0

            function = _UNARY.get(symbol)
            if function is None:
                logger.debug("unknown operator %r evaluates to 0", symbol)
                return 0.0
            return float(function(np.float64(y)))


__all__ = ["ASSIGNMENT", "PostfixEvaluator", "operand_count"]
