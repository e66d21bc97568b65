from __future__ import annotations

import logging
from enum import Enum

from .ast import Expr
from .evaluator import evaluate
from .lexer import tokenize
from .parser import parse
from .rpn import compile_to_rpn


logger = logging.getLogger(__name__)


class Mode(str, Enum):
    EVAL = "eval"
    RPN = "rpn"


def parse_source(src: str) -> Expr:
    toks = tokenize(src)
    logger.debug("lexed %d tokens from %r", len(toks), src)
    tree = parse(toks)
    logger.debug("parsed %r", tree)
    return tree


def evaluate_source(src: str) -> int:
    return evaluate(parse_source(src))


def compile_source(src: str) -> str:
    return compile_to_rpn(parse_source(src))


def process_line(src: str, *, mode: Mode = Mode.EVAL) -> int | str:
    """Run one line through the pipeline in the given mode."""
    tree = parse_source(src)
    if mode is Mode.RPN:
        out: int | str = compile_to_rpn(tree)
    else:
        out = evaluate(tree)
    logger.debug("%s -> %r", mode.value, out)
    return out
