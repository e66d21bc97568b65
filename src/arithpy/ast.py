from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Annotated, Span


class UnaryOperatorKind(str, Enum):
    PLUS = "+"
    MINUS = "-"


class BinaryOperatorKind(str, Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


UnaryOperator = Annotated[UnaryOperatorKind]
BinaryOperator = Annotated[BinaryOperatorKind]


@dataclass(frozen=True, slots=True)
class Node:
    span: Span


@dataclass(frozen=True, slots=True)
class Number(Node):
    value: int  # unsigned magnitude, never negative


@dataclass(frozen=True, slots=True)
class UnaryOp(Node):
    operator: UnaryOperator
    operand: Expr


@dataclass(frozen=True, slots=True)
class BinaryOp(Node):
    """Binary operation; span covers both operands."""

    operator: BinaryOperator
    left: Expr
    right: Expr


Expr = Number | UnaryOp | BinaryOp
