"""Command line interface for the Calculator plugin."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Iterable, TextIO

from .core import Calculator, CalculatorConfigError, CalculatorSettings, EvaluationResult

_EXIT_WORDS = frozenset({"exit", "quit"})


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _report(result: EvaluationResult, args: argparse.Namespace, stderr: TextIO) -> None:
    if args.json:
        _print(result.to_dict())
    else:
        if args.verbose:
            print(f"postfix: {' '.join(result.postfix)}")
        if result.display is not None:
            print(result.display)
    for message in result.warnings.messages:
        print(message, file=stderr)


def _read_expressions(args: argparse.Namespace, stdin: TextIO) -> Iterable[str]:
    if args.expressions:
        yield from args.expressions
        return
    for line in stdin:
        text = line.strip()
        if not text:
            continue
        if text.lower() in _EXIT_WORDS:
            break
        yield text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate arithmetic expressions. Reads one expression per line from stdin when none are given."
    )
    parser.add_argument("expressions", nargs="*", help="Expressions evaluated in order against shared variables")
    parser.add_argument("--precision", type=int, default=-1, help="Decimals each operand is rounded to (-1 disables)")
    parser.add_argument(
        "--result-precision",
        dest="result_precision",
        type=int,
        default=-1,
        help="Decimals the final result is rounded to (-1 disables)",
    )
    parser.add_argument("--degree", action="store_true", help="Interpret trigonometric angles in degrees")
    parser.add_argument("--verbose", action="store_true", help="Print the postfix form of every expression")
    parser.add_argument("--json", action="store_true", help="Print a JSON payload per expression")
    return parser


def main(argv: list[str] | None = None, *, stdin: TextIO | None = None, stderr: TextIO | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    stdin = stdin or sys.stdin
    stderr = stderr or sys.stderr

    try:
        settings = CalculatorSettings(
            precision=args.precision,
            result_precision=args.result_precision,
            degree=args.degree,
        )
    except CalculatorConfigError as exc:
        parser.error(str(exc))

    calculator = Calculator(settings)
    try:
        for expression in _read_expressions(args, stdin):
            _report(calculator.evaluate(expression), args, stderr)
    finally:
        calculator.close()


if __name__ == "__main__":
    main()
