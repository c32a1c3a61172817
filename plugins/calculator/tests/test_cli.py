import io
import json
from contextlib import redirect_stdout

import pytest

from plugins.calculator.cli import build_parser, main


def _run(argv, stdin_text=""):
    stdout = io.StringIO()
    stderr = io.StringIO()
    with redirect_stdout(stdout):
        main(argv, stdin=io.StringIO(stdin_text), stderr=stderr)
    return stdout.getvalue().splitlines(), stderr.getvalue().splitlines()


def test_expressions_share_variables():
    out, err = _run(["x=4", "x^2", "sqrt(x)"])
    assert out == ["16", "2"]
    assert err == []


def test_reads_stdin_until_exit():
    out, _ = _run([], "1+1\n\n2*3\nexit\n4*4\n")
    assert out == ["2", "6"]


def test_warnings_go_to_stderr():
    out, err = _run(["5/0"])
    assert out == ["0"]
    assert err == ["Warning: Division by zero", "Result may be inaccurate"]


def test_verbose_prints_postfix():
    out, _ = _run(["--verbose", "2+3*4"])
    assert out == ["postfix: 2 3 4 * +", "14"]


def test_settings_flags():
    out, _ = _run(["--precision", "2", "--result-precision", "1", "--degree", "1.005+1.005", "cos(0)"])
    assert out == ["2", "1"]


def test_json_output():
    stdout = io.StringIO()
    with redirect_stdout(stdout):
        main(["--json", "1/4"], stdin=io.StringIO(), stderr=io.StringIO())
    payload = json.loads(stdout.getvalue())
    assert payload["display"] == "0.25"
    assert payload["postfix"] == ["1", "4", "/"]


def test_invalid_precision_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["--precision", "-3", "1"], stdin=io.StringIO(), stderr=io.StringIO())
    assert excinfo.value.code == 2


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.expressions == []
    assert args.precision == -1
    assert args.result_precision == -1
    assert not args.degree
