from __future__ import annotations

from . import ast as A
from .errors import EvalError, EvalErrorKind
from .spans import Span


I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


def checked(value: int, span: Span) -> int:
    """Return ``value`` if it fits in a signed 64-bit integer."""
    if value < I64_MIN or value > I64_MAX:
        raise EvalError(EvalErrorKind.OVERFLOW, span)
    return value


def apply_binop(kind: A.BinaryOperatorKind, left: int, right: int, span: Span) -> int:
    """Apply a binary operator with 64-bit signed semantics.

    Division truncates toward zero. Shared with the postfix evaluator.
    """
    if kind is A.BinaryOperatorKind.ADD:
        out = left + right
    elif kind is A.BinaryOperatorKind.SUB:
        out = left - right
    elif kind is A.BinaryOperatorKind.MUL:
        out = left * right
    elif kind is A.BinaryOperatorKind.DIV:
        if right == 0:
            raise EvalError(EvalErrorKind.DIVISION_BY_ZERO, span)
        out = abs(left) // abs(right)
        if (left < 0) != (right < 0):
            out = -out
    else:
        raise TypeError(f"unknown binary operator: {kind!r}")
    return checked(out, span)


def evaluate(node: A.Expr) -> int:
    if isinstance(node, A.Number):
        return checked(node.value, node.span)
    if isinstance(node, A.UnaryOp):
        v = evaluate(node.operand)
        if node.operator.value is A.UnaryOperatorKind.MINUS:
            return checked(-v, node.span)
        return v
    if isinstance(node, A.BinaryOp):
        left = evaluate(node.left)
        right = evaluate(node.right)
        return apply_binop(node.operator.value, left, right, node.span)
    raise TypeError(f"not an expression node: {type(node)!r}")
