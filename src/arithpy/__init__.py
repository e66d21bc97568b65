from __future__ import annotations

from .api import Mode, compile_source, evaluate_source, parse_source, process_line
from .errors import ArithError, EvalError, LexError, ParseError, RpnError
from .evaluator import evaluate
from .lexer import lex, tokenize
from .parser import parse
from .rpn import compile_to_rpn, evaluate_rpn

__all__ = [
    "ArithError",
    "EvalError",
    "LexError",
    "Mode",
    "ParseError",
    "RpnError",
    "compile_source",
    "compile_to_rpn",
    "evaluate",
    "evaluate_rpn",
    "evaluate_source",
    "lex",
    "parse",
    "parse_source",
    "process_line",
    "tokenize",
]
