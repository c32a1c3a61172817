"""Tagged tokens and the owned token sequence used by the calculator core.

A :class:`TokenList` plays three roles during an evaluation: the infix stream
produced by the lexer, the operator stack and output queue of the
shunting-yard pass, and the operand stack of the postfix evaluator. Tokens are
immutable, and a token moved with :meth:`TokenList.move_last_to` leaves its
source list, so no two lists ever hold the same node.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from .numeric import format_number


class TokenKind(Enum):
    NUMBER = "number"
    NAME = "name"
    OPERATOR = "operator"
    FUNCTION = "function"
    UNIT = "unit"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    UNKNOWN = "unknown"


OPERAND_KINDS = frozenset({TokenKind.NUMBER, TokenKind.NAME, TokenKind.UNKNOWN})
CALLABLE_KINDS = frozenset({TokenKind.OPERATOR, TokenKind.FUNCTION, TokenKind.UNIT})


@dataclass(frozen=True, slots=True)
class Token:
    """A lexeme plus its classification.

    ``value`` is only set for :attr:`TokenKind.NUMBER` tokens and carries the
    parsed float, so results never round-trip through their text.
    """

    text: str
    kind: TokenKind
    value: float | None = None

    @classmethod
    def number(cls, value: float, text: str | None = None) -> "Token":
        return cls(text=text if text is not None else format_number(value), kind=TokenKind.NUMBER, value=float(value))

    @property
    def is_operand(self) -> bool:
        return self.kind in OPERAND_KINDS

    @property
    def is_callable(self) -> bool:
        return self.kind in CALLABLE_KINDS

    def __str__(self) -> str:
        return self.text


class TokenList:
    """Ordered token sequence with tail access, usable as queue or stack."""

    __slots__ = ("_items",)

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        self._items: deque[Token] = deque(tokens)

    @property
    def first(self) -> Token | None:
        return self._items[0] if self._items else None

    @property
    def last(self) -> Token | None:
        return self._items[-1] if self._items else None

    def append(self, token: Token) -> None:
        """Append ``token`` at the tail. Empty lexemes are ignored."""

        if not token.text:
            return
        self._items.append(token)

    def pop(self) -> Token | None:
        """Remove and return the tail token, or ``None`` when empty."""

        if not self._items:
            return None
        return self._items.pop()

    def move_last_to(self, other: "TokenList") -> Token | None:
        """Transfer the tail token of this list to the tail of ``other``."""

        token = self.pop()
        if token is not None:
            other._items.append(token)
        return token

    def clear(self) -> None:
        self._items.clear()

    def texts(self) -> list[str]:
        return [token.text for token in self._items]

    def __iter__(self) -> Iterator[Token]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"TokenList({' '.join(self.texts())!r})"


__all__ = ["OPERAND_KINDS", "CALLABLE_KINDS", "Token", "TokenKind", "TokenList"]
