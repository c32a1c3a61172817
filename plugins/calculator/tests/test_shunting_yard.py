import pytest

from plugins.calculator.core import EvaluationContext, TokenList, infix_to_postfix, tokenize


def _postfix(expression: str) -> list[str]:
    return infix_to_postfix(tokenize(expression), EvaluationContext()).texts()


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("2+3*4", ["2", "3", "4", "*", "+"]),
        ("8-3-2", ["8", "3", "-", "2", "-"]),
        ("2^3^2", ["2", "3", "^", "2", "^"]),
        ("(1+2)*3", ["1", "2", "+", "3", "*"]),
        ("sin(30)+1", ["30", "sin", "1", "+"]),
        ("x=2+3", ["x", "2", "3", "+", "="]),
        ("5mb*2", ["5", "mb", "2", "*"]),
        ("3!+1", ["3", "!", "1", "+"]),
        ("sqrt(16)*2", ["16", "sqrt", "2", "*"]),
    ],
)
def test_infix_to_postfix(expression, expected):
    assert _postfix(expression) == expected


def test_unmatched_right_parenthesis_is_ignored():
    assert _postfix("1+2)") == ["1", "2", "+"]


def test_unmatched_left_parenthesis_is_dropped():
    assert _postfix("(1+2") == ["1", "2", "+"]
    assert _postfix("((4") == ["4"]


def test_conversion_resets_warning_flags():
    context = EvaluationContext()
    context.flags.division_by_zero = True
    context.flags.trigonometric_domain = True
    infix_to_postfix(tokenize("1+1"), context)
    assert not context.flags.division_by_zero
    assert not context.flags.trigonometric_domain


def test_operator_stack_is_drained_and_infix_untouched():
    infix = tokenize("(1+2)*3")
    operators = TokenList()
    infix_to_postfix(infix, EvaluationContext(), operators)
    assert len(operators) == 0
    assert infix.texts() == ["(", "1", "+", "2", ")", "*", "3"]
