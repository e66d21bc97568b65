from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import LexError, LexErrorKind
from .spans import Span
from .tokens import Token, TokenKind


_NUMBER_RE = re.compile(r"[0-9]+")

MAX_NUMBER = 2**64 - 1
MAX_DIGITS = len(str(MAX_NUMBER))

_WHITESPACE = " \t\n"

_SINGLE = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


@dataclass(slots=True)
class _Cursor:
    src: str
    i: int = 0
    # Byte offset of src[i] in the UTF-8 encoding.
    offset: int = 0

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self) -> str:
        if self.eof():
            return ""
        return self.src[self.i]

    def advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self.eof():
                return
            self.offset += len(self.src[self.i].encode("utf-8"))
            self.i += 1

    def consume(self, expected: str) -> Span:
        """Consume exactly ``expected`` and return its span."""
        start = self.offset
        if self.eof():
            raise LexError(LexErrorKind.EOF, Span(start, start))
        ch = self.peek()
        if ch != expected:
            raise _invalid_char(ch, start)
        self.advance()
        return Span(start, self.offset)


def _invalid_char(ch: str, offset: int) -> LexError:
    return LexError(
        LexErrorKind.INVALID_CHAR,
        Span(offset, offset + len(ch.encode("utf-8"))),
        text=ch,
    )


def tokenize(src: str) -> list[Token]:
    cur = _Cursor(src=src)
    tokens: list[Token] = []

    while not cur.eof():
        ch = cur.peek()

        if ch in _WHITESPACE:
            cur.advance()
            continue

        m = _NUMBER_RE.match(src, cur.i)
        if m:
            run = m.group(0)
            start = cur.offset
            cur.advance(len(run))
            span = Span(start, cur.offset)
            # int() refuses very long digit strings, so check the length first.
            digits = run.lstrip("0") or "0"
            if len(digits) > MAX_DIGITS or int(digits) > MAX_NUMBER:
                raise LexError(LexErrorKind.NUMBER_TOO_LARGE, span, text=run)
            tokens.append(Token(TokenKind.NUMBER, span, int(digits)))
            continue

        k = _SINGLE.get(ch)
        if k is not None:
            tokens.append(Token(k, cur.consume(ch)))
            continue

        raise _invalid_char(ch, cur.offset)

    return tokens


lex = tokenize
