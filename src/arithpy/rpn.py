from __future__ import annotations

import re

from . import ast as A
from .errors import EvalError, EvalErrorKind, RpnError
from .evaluator import apply_binop, checked
from .lexer import MAX_DIGITS
from .spans import Span


_WORD_RE = re.compile(r"\S+")
_LITERAL_RE = re.compile(r"([+-]*)([0-9]+)")

_BINOPS = {k.value: k for k in A.BinaryOperatorKind}


def compile_to_rpn(node: A.Expr) -> str:
    """Compile a tree to a space-separated postfix string.

    Unary signs are glued to the first word of their operand, so ``-10``
    reads as a signed literal.
    """
    out: list[str] = []
    _compile(node, out)
    return "".join(out)


def _compile(node: A.Expr, out: list[str]) -> None:
    if isinstance(node, A.Number):
        out.append(str(node.value))
    elif isinstance(node, A.UnaryOp):
        out.append(node.operator.value.value)
        _compile(node.operand, out)
    elif isinstance(node, A.BinaryOp):
        _compile(node.left, out)
        out.append(" ")
        _compile(node.right, out)
        out.append(" ")
        out.append(node.operator.value.value)
    else:
        raise TypeError(f"not an expression node: {type(node)!r}")


def evaluate_rpn(text: str) -> int:
    """Evaluate a postfix string with a value stack.

    Words are signed literals (``12``, ``-3``, ``--4``) or one of ``+ - * /``.
    Arithmetic follows the tree evaluator: 64-bit signed, truncating division.
    """
    stack: list[tuple[int, Span]] = []
    pos = offset = 0
    for m in _WORD_RE.finditer(text):
        word = m.group(0)
        start = offset + len(text[pos : m.start()].encode("utf-8"))
        span = Span(start, start + len(word.encode("utf-8")))
        pos, offset = m.end(), span.end

        kind = _BINOPS.get(word)
        if kind is not None:
            if len(stack) < 2:
                raise RpnError(span, f"'{word}' needs two operands")
            right, _ = stack.pop()
            left, lspan = stack.pop()
            joined = lspan.merge(span)
            stack.append((apply_binop(kind, left, right, joined), joined))
            continue

        lit = _LITERAL_RE.fullmatch(word)
        if lit is None:
            raise RpnError(span, f"unknown word '{word}'")
        stack.append((_literal(lit.group(1), lit.group(2), span), span))

    if len(stack) != 1:
        whole = Span(0, len(text.encode("utf-8")))
        raise RpnError(whole, f"expected one value, found {len(stack)}")
    return stack[0][0]


def _literal(signs: str, digits: str, span: Span) -> int:
    digits = digits.lstrip("0") or "0"
    if len(digits) > MAX_DIGITS:
        raise EvalError(EvalErrorKind.OVERFLOW, span)
    # Same as the tree: the magnitude must fit before any sign is applied.
    n = checked(int(digits), span)
    if signs.count("-") % 2:
        n = -n
    return n
