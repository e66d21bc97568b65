from __future__ import annotations

from .errors import ArithError, ParseError, ParseErrorKind
from .spans import Span


def diagnostic_span(error: ArithError, line: str) -> Span:
    """Span to highlight in ``line`` for ``error``.

    Redundant input is highlighted up to the end of the line; errors without a
    position point just past the end.
    """
    end = len(line.encode("utf-8"))
    span = error.span
    if span is None:
        return Span(end, end + 1)
    if isinstance(error, ParseError) and error.kind is ParseErrorKind.REDUNDANT_EXPRESSION:
        return Span(span.start, max(end, span.end))
    return span


def _column(line: str, offset: int) -> int:
    # Byte offset -> character column; offsets past the end count as ASCII.
    raw = line.encode("utf-8")
    if offset <= len(raw):
        return len(raw[:offset].decode("utf-8", errors="ignore"))
    return len(line) + (offset - len(raw))


def caret_line(line: str, span: Span) -> str:
    start = _column(line, span.start)
    width = max(1, _column(line, span.end) - start)
    return " " * start + "^" * width


def render_diagnostic(line: str, error: ArithError) -> str:
    span = diagnostic_span(error, line)
    return "\n".join([format_trace(error), line, caret_line(line, span)])


def format_trace(error: BaseException) -> str:
    out = [str(error)]
    cause = error.__cause__
    while cause is not None:
        out.append(f"caused by {cause}")
        cause = cause.__cause__
    return "\n".join(out)
