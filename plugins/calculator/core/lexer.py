"""Tokenizer, token classification and precedence lookup."""

from __future__ import annotations

import re

from .tokens import Token, TokenKind, TokenList
from .units import data_unit_suffixes
from .variables import VariableStore

OPERATORS = frozenset({"+", "-", "*", "/", "^", "!", "="})
TRIGONOMETRIC_FUNCTIONS = frozenset({"sin", "cos", "tan", "asin", "acos", "atan"})
FUNCTIONS = frozenset({"sqrt", "abs", "log", "floor", "ceil", "round", "rand"}) | TRIGONOMETRIC_FUNCTIONS
DATA_UNITS = data_unit_suffixes()

# Higher binds tighter. "(" must rank below every operator so it is never
# moved to the output by an incoming operator.
_PRECEDENCE: dict[str, int] = {
    "(": 0,
    "=": 1,
    "+": 2,
    "-": 2,
    "*": 3,
    "/": 3,
    "^": 4,
    "!": 5,
}
_CALLABLE_PRECEDENCE = 6

_NUMBER = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _classify_identifier(text: str) -> Token:
    lowered = text.lower()
    if lowered in FUNCTIONS:
        return Token(lowered, TokenKind.FUNCTION)
    if lowered in DATA_UNITS:
        return Token(lowered, TokenKind.UNIT)
    return Token(text, TokenKind.NAME)


def _in_unary_position(previous: Token | None) -> bool:
    if previous is None:
        return True
    if previous.kind in (TokenKind.LEFT_PAREN, TokenKind.FUNCTION):
        return True
    return previous.kind is TokenKind.OPERATOR and previous.text != "!"


def tokenize(text: str) -> TokenList:
    """Split ``text`` into classified tokens in source order.

    Signs in unary position are folded into a following numeric literal; in
    front of anything else a unary minus becomes ``-1 *`` and a unary plus is
    dropped. Characters the calculator does not know become one-character
    :attr:`TokenKind.UNKNOWN` tokens and are reported by the warning pass. An
    empty pair of parentheses holds an implicit ``0``, so ``rand()`` has its own
    argument to consume.
    """

    tokens = TokenList()
    index = 0
    length = len(text or "")
    while index < length:
        char = text[index]
        if char.isspace():
            index += 1
            continue

        previous = tokens.last
        if char in "+-" and _in_unary_position(previous):
            literal = _NUMBER.match(text, index + 1)
            if literal is not None:
                lexeme = text[index : literal.end()]
                tokens.append(Token(lexeme, TokenKind.NUMBER, float(lexeme)))
                index = literal.end()
                continue
            if char == "-":
                tokens.append(Token("-1", TokenKind.NUMBER, -1.0))
                tokens.append(Token("*", TokenKind.OPERATOR))
            index += 1
            continue

        literal = _NUMBER.match(text, index)
        if literal is not None:
            lexeme = literal.group(0)
            tokens.append(Token(lexeme, TokenKind.NUMBER, float(lexeme)))
            index = literal.end()
            continue

        identifier = _IDENTIFIER.match(text, index)
        if identifier is not None:
            tokens.append(_classify_identifier(identifier.group(0)))
            index = identifier.end()
            continue

        if char in OPERATORS:
            tokens.append(Token(char, TokenKind.OPERATOR))
        elif char == "(":
            tokens.append(Token(char, TokenKind.LEFT_PAREN))
        elif char == ")":
            if previous is not None and previous.kind is TokenKind.LEFT_PAREN:
                tokens.append(Token("0", TokenKind.NUMBER, 0.0))
            tokens.append(Token(char, TokenKind.RIGHT_PAREN))
        else:
            tokens.append(Token(char, TokenKind.UNKNOWN))
        index += 1
    return tokens


def is_operator(token: Token) -> bool:
    return token.kind is TokenKind.OPERATOR


def is_function(token: Token) -> bool:
    return token.kind is TokenKind.FUNCTION


def is_data_unit(token: Token) -> bool:
    return token.kind is TokenKind.UNIT


def is_trigonometric(token: Token) -> bool:
    return token.kind is TokenKind.FUNCTION and token.text in TRIGONOMETRIC_FUNCTIONS


def is_variable(token: Token, variables: VariableStore) -> bool:
    """True when ``token`` names a variable that is currently defined."""

    return token.kind is TokenKind.NAME and token.text in variables


def is_valid(token: Token, variables: VariableStore) -> bool:
    if token.kind is TokenKind.UNKNOWN:
        return False
    if token.kind is TokenKind.NAME:
        return token.text in variables
    return True


def get_precedence(token: Token | None) -> int:
    if token is None:
        return 0
    if token.kind in (TokenKind.FUNCTION, TokenKind.UNIT):
        return _CALLABLE_PRECEDENCE
    return _PRECEDENCE.get(token.text, 0)


__all__ = [
    "OPERATORS",
    "FUNCTIONS",
    "TRIGONOMETRIC_FUNCTIONS",
    "DATA_UNITS",
    "tokenize",
    "is_operator",
    "is_function",
    "is_data_unit",
    "is_trigonometric",
    "is_variable",
    "is_valid",
    "get_precedence",
]
