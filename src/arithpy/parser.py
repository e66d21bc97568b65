from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from . import ast as A
from .errors import ParseError, ParseErrorKind
from .spans import Annotated, Span
from .tokens import Token, TokenKind


def join_span(*vals: object) -> Span:
    """Smallest span covering every token/node/operator given."""
    real = [v for v in vals if v is not None]
    if not real:
        raise ValueError("join_span() requires at least one value")
    span: Span = real[0].span  # type: ignore[attr-defined]
    for v in real[1:]:
        span = span.merge(v.span)  # type: ignore[attr-defined]
    return span


# Open parens plus unary signs around any point of the input. Each paren level
# costs several parser frames, so this stays far below the recursion limit.
MAX_NESTING = 50
# Height of the finished tree; evaluation and compilation recurse once per level.
MAX_DEPTH = 200

_ADDITIVE = {
    TokenKind.PLUS: A.BinaryOperatorKind.ADD,
    TokenKind.MINUS: A.BinaryOperatorKind.SUB,
}
_MULTIPLICATIVE = {
    TokenKind.ASTERISK: A.BinaryOperatorKind.MUL,
    TokenKind.SLASH: A.BinaryOperatorKind.DIV,
}
_UNARY = {
    TokenKind.PLUS: A.UnaryOperatorKind.PLUS,
    TokenKind.MINUS: A.UnaryOperatorKind.MINUS,
}

# A subtree together with its height.
_Parsed = tuple[A.Expr, int]


@dataclass(slots=True)
class Parser:
    """Recursive-descent parser over a token list.

    Grammar, lowest precedence first::

        expr   := expr3
        expr3  := expr2 (('+'|'-') expr2)*
        expr2  := expr1 (('*'|'/') expr1)*
        expr1  := ('+'|'-') expr1 | atom
        atom   := NUMBER | '(' expr ')'

    Input nested deeper than ``MAX_NESTING`` or producing a tree taller than
    ``MAX_DEPTH`` is rejected with ``NESTING_TOO_DEEP``.
    """

    tokens: Sequence[Token]
    i: int = 0
    nesting: int = 0

    def peek(self) -> Token | None:
        if self.i >= len(self.tokens):
            return None
        return self.tokens[self.i]

    def next(self) -> Token | None:
        tok = self.peek()
        if tok is not None:
            self.i += 1
        return tok

    def parse(self) -> A.Expr:
        expr = self.parse_expr()
        tok = self.next()
        if tok is not None:
            raise ParseError(ParseErrorKind.REDUNDANT_EXPRESSION, tok)
        return expr

    def parse_expr(self) -> A.Expr:
        return self._parse_expr3()[0]

    def _parse_expr3(self) -> _Parsed:
        return self._parse_left_binop(self._parse_expr2, _ADDITIVE)

    def _parse_expr2(self) -> _Parsed:
        return self._parse_left_binop(self._parse_expr1, _MULTIPLICATIVE)

    def _parse_left_binop(
        self,
        operand: Callable[[], _Parsed],
        ops: dict[TokenKind, A.BinaryOperatorKind],
    ) -> _Parsed:
        left, height = operand()
        while True:
            tok = self.peek()
            if tok is None:
                break
            try:
                op = self._parse_binop(tok, ops)
            except ParseError as e:
                if e.kind is not ParseErrorKind.NOT_OPERATOR:
                    raise
                break
            right, rheight = operand()
            height = max(height, rheight) + 1
            if height > MAX_DEPTH:
                raise ParseError(ParseErrorKind.NESTING_TOO_DEEP, tok)
            left = A.BinaryOp(span=join_span(left, right), operator=op, left=left, right=right)
        return left, height

    def _parse_binop(self, tok: Token, ops: dict[TokenKind, A.BinaryOperatorKind]) -> A.BinaryOperator:
        kind = ops.get(tok.kind)
        if kind is None:
            raise ParseError(ParseErrorKind.NOT_OPERATOR, tok)
        self.next()
        return Annotated(kind, tok.span)

    def _enter(self, tok: Token) -> None:
        self.nesting += 1
        if self.nesting > MAX_NESTING:
            raise ParseError(ParseErrorKind.NESTING_TOO_DEEP, tok)

    def _parse_expr1(self) -> _Parsed:
        tok = self.peek()
        if tok is None or tok.kind not in _UNARY:
            return self._parse_atom()
        self.next()
        op: A.UnaryOperator = Annotated(_UNARY[tok.kind], tok.span)
        self._enter(tok)
        try:
            operand, height = self._parse_expr1()
        finally:
            self.nesting -= 1
        if height + 1 > MAX_DEPTH:
            raise ParseError(ParseErrorKind.NESTING_TOO_DEEP, tok)
        return A.UnaryOp(span=join_span(op, operand), operator=op, operand=operand), height + 1

    def _parse_atom(self) -> _Parsed:
        tok = self.next()
        if tok is None:
            raise ParseError(ParseErrorKind.EOF)
        if tok.kind is TokenKind.NUMBER:
            return A.Number(span=tok.span, value=tok.number), 1
        if tok.kind is TokenKind.LPAREN:
            self._enter(tok)
            try:
                inner = self._parse_expr3()
            finally:
                self.nesting -= 1
            close = self.next()
            if close is None:
                raise ParseError(ParseErrorKind.UNCLOSED_OPEN_PAREN, tok)
            if close.kind is not TokenKind.RPAREN:
                raise ParseError(ParseErrorKind.UNEXPECTED_TOKEN, close)
            return inner
        raise ParseError(ParseErrorKind.NOT_EXPRESSION, tok)


def parse(tokens: Sequence[Token]) -> A.Expr:
    return Parser(tokens).parse()
