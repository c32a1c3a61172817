"""Infix to postfix conversion (shunting-yard)."""

from __future__ import annotations

from .context import EvaluationContext
from .lexer import get_precedence
from .tokens import TokenKind, TokenList


def _drain_until_left_paren(output: TokenList, operators: TokenList) -> None:
    while operators and operators.last.kind is not TokenKind.LEFT_PAREN:
        operators.move_last_to(output)
    # Matching "(" is dropped; an exhausted stack means an unmatched ")".
    if operators:
        operators.pop()


def infix_to_postfix(
    infix: TokenList,
    context: EvaluationContext,
    operators: TokenList | None = None,
) -> TokenList:
    """Convert ``infix`` into a postfix token list.

    Operators of equal precedence leave the stack before the incoming one, so
    every operator is left-associative (``2^3^2`` is ``(2^3)^2``). Unbalanced
    parentheses are not reported: a stray ``)`` stops draining at the bottom
    of the stack and a stray ``(`` is discarded at the end.
    """

    context.flags.reset()
    operators = operators if operators is not None else TokenList()
    output = TokenList()

    for token in infix:
        if token.kind is TokenKind.LEFT_PAREN:
            operators.append(token)
        elif token.kind is TokenKind.RIGHT_PAREN:
            _drain_until_left_paren(output, operators)
        elif token.kind is TokenKind.FUNCTION:
            operators.append(token)
        elif token.kind is TokenKind.OPERATOR:
            precedence = get_precedence(token)
            while operators and get_precedence(operators.last) >= precedence:
                operators.move_last_to(output)
            operators.append(token)
        else:
            output.append(token)

    while operators:
        if operators.last.kind is TokenKind.LEFT_PAREN:
            operators.pop()
            continue
        operators.move_last_to(output)
    return output


__all__ = ["infix_to_postfix"]
