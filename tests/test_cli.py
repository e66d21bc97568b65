from __future__ import annotations

import io
import json

import pytest

from arithpy import EvalError, LexError, ParseError, evaluate_source, parse_source, tokenize
from arithpy.cli import main
from arithpy.diagnostics import caret_line, diagnostic_span, format_trace, render_diagnostic
from arithpy.errors import EvalErrorKind, LexErrorKind
from arithpy.spans import Span


def _error(src: str) -> ParseError | LexError:
    with pytest.raises((ParseError, LexError)) as e:
        parse_source(src)
    return e.value


def test_render_invalid_char() -> None:
    line = "1 & 2"
    assert render_diagnostic(line, _error(line)) == "2-3: invalid char '&'\n1 & 2\n  ^"


def test_redundant_expression_extends_to_end_of_line() -> None:
    line = "1 + 2 3 4"
    err = _error(line)
    assert diagnostic_span(err, line) == Span(6, 9)
    assert render_diagnostic(line, err).splitlines()[-1] == "      ^^^"


def test_end_of_input_points_past_the_line() -> None:
    line = "1 +"
    err = _error(line)
    assert diagnostic_span(err, line) == Span(3, 4)
    assert render_diagnostic(line, err).splitlines() == ["End of file", "1 +", "   ^"]


def test_eval_error_underlines_whole_division() -> None:
    line = "2 + 1 / 0"
    with pytest.raises(EvalError) as e:
        evaluate_source(line)
    assert render_diagnostic(line, e.value).splitlines()[-1] == "    ^^^^^"


def test_caret_columns_count_characters() -> None:
    line = "é + ü"
    err = _error(line)
    # é is two bytes; the caret still sits under the first column.
    assert err.span == Span(0, 2)
    assert caret_line(line, err.span) == "^"
    assert caret_line(line, Span(5, 7)) == "    ^"


def test_format_trace_follows_causes() -> None:
    inner = LexError(LexErrorKind.INVALID_CHAR, Span(0, 1), text="?")
    try:
        raise EvalError(EvalErrorKind.OVERFLOW, Span(0, 3)) from inner
    except EvalError as e:
        assert format_trace(e) == "0-3: integer overflow\ncaused by 0-1: invalid char '?'"


def test_main_evaluates(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1", "+", "2", "*", "3"]) == 0
    assert capsys.readouterr().out == "7\n"


def test_main_rpn(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--rpn", "1 + 2 * 3 - -10"]) == 0
    assert capsys.readouterr().out == "1 2 3 * + -10 -\n"


def test_main_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--tokens", "12*(3"]) == 0
    assert capsys.readouterr().out.splitlines() == [repr(t) for t in tokenize("12*(3")]


def test_main_ast_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--ast", "-1 * 2"]) == 0
    tree = json.loads(capsys.readouterr().out)
    assert tree["node"] == "BinaryOp"
    assert tree["operator"] == {"value": "MUL", "span": {"start": 3, "end": 4}}
    assert tree["left"]["node"] == "UnaryOp"
    assert tree["left"]["operand"] == {"node": "Number", "value": 1, "span": {"start": 1, "end": 2}}


def test_main_reports_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1 / 0"]) == 1
    cap = capsys.readouterr()
    assert cap.out == ""
    assert cap.err.splitlines() == ["0-5: division by zero", "1 / 0", "^^^^^"]


def test_repl_continues_after_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1 + 2\n\n(1\n2 * 3\r\n"))
    assert main([]) == 0
    cap = capsys.readouterr()
    assert cap.out == "3\n6\n"
    assert "0-1: '(' is not closed" in cap.err


def test_repl_continues_after_deeply_nested_line(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("(" * 200 + "1" + ")" * 200 + "\n2 + 2\n"))
    assert main([]) == 0
    cap = capsys.readouterr()
    assert cap.out == "4\n"
    assert "50-51: '(' is nested too deeply" in cap.err
