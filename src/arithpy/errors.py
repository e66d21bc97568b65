from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span
from .tokens import Token


class ArithError(Exception):
    """Base class for every failure raised by the pipeline.

    Subclasses expose ``span`` (``None`` when the error has no source position,
    e.g. input ended early) and ``message``.
    """

    span: Span | None

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


class LexErrorKind(str, Enum):
    INVALID_CHAR = "invalid char"
    NUMBER_TOO_LARGE = "number too large"
    EOF = "eof"


@dataclass(slots=True)
class LexError(ArithError):
    kind: LexErrorKind
    span: Span
    text: str = ""  # offending character or digit run

    @property
    def message(self) -> str:
        if self.kind is LexErrorKind.INVALID_CHAR:
            return f"{self.span}: invalid char '{self.text}'"
        if self.kind is LexErrorKind.NUMBER_TOO_LARGE:
            return f"{self.span}: number '{self.text}' is too large"
        return "End of file"


class ParseErrorKind(str, Enum):
    UNEXPECTED_TOKEN = "unexpected token"
    NOT_EXPRESSION = "not expression"
    NOT_OPERATOR = "not operator"
    UNCLOSED_OPEN_PAREN = "unclosed open paren"
    REDUNDANT_EXPRESSION = "redundant expression"
    NESTING_TOO_DEEP = "nesting too deep"
    EOF = "eof"


@dataclass(slots=True)
class ParseError(ArithError):
    kind: ParseErrorKind
    token: Token | None = None

    @property
    def span(self) -> Span | None:
        return self.token.span if self.token is not None else None

    @property
    def message(self) -> str:
        tok = self.token
        if tok is None:
            return "End of file"
        k = self.kind
        if k is ParseErrorKind.UNEXPECTED_TOKEN:
            return f"{tok.span}: {tok} is not expected"
        if k is ParseErrorKind.NOT_EXPRESSION:
            return f"{tok.span}: {tok} is not a start of expression"
        if k is ParseErrorKind.NOT_OPERATOR:
            return f"{tok.span}: '{tok}' is not an operator"
        if k is ParseErrorKind.UNCLOSED_OPEN_PAREN:
            return f"{tok.span}: '{tok}' is not closed"
        if k is ParseErrorKind.REDUNDANT_EXPRESSION:
            return f"{tok.span}: expression after '{tok}' is redundant"
        if k is ParseErrorKind.NESTING_TOO_DEEP:
            return f"{tok.span}: '{tok}' is nested too deeply"
        return "End of file"


class EvalErrorKind(str, Enum):
    DIVISION_BY_ZERO = "division by zero"
    OVERFLOW = "integer overflow"


@dataclass(slots=True)
class EvalError(ArithError):
    kind: EvalErrorKind
    span: Span

    @property
    def message(self) -> str:
        return f"{self.span}: {self.kind.value}"


@dataclass(slots=True)
class RpnError(ArithError):
    """Malformed postfix input."""

    span: Span
    reason: str

    @property
    def message(self) -> str:
        return f"{self.span}: {self.reason}"
