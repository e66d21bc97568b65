from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import TextIO

from .api import Mode, parse_source, process_line
from .ast import Node
from .diagnostics import render_diagnostic
from .errors import ArithError
from .lexer import tokenize


logger = logging.getLogger(__name__)

PROMPT = "> "


def _to_jsonable(obj):
    if isinstance(obj, Enum):
        return obj.name
    if is_dataclass(obj):
        out = {f.name: _to_jsonable(getattr(obj, f.name)) for f in fields(obj)}
        if isinstance(obj, Node):
            out["node"] = type(obj).__name__
        return out
    if isinstance(obj, (tuple, list)):
        return [_to_jsonable(x) for x in obj]
    return obj


def _run_line(line: str, args: argparse.Namespace, out: TextIO) -> None:
    if args.tokens:
        for tok in tokenize(line):
            print(repr(tok), file=out)
        return
    if args.ast:
        print(json.dumps(_to_jsonable(parse_source(line)), indent=2, sort_keys=True), file=out)
        return
    mode = Mode.RPN if args.rpn else Mode.EVAL
    print(process_line(line, mode=mode), file=out)


def _report(line: str, e: ArithError, err: TextIO) -> None:
    logger.debug("line failed: %r", e)
    print(render_diagnostic(line, e), file=err)


def repl(args: argparse.Namespace, stdin: TextIO, out: TextIO, err: TextIO) -> int:
    interactive = stdin.isatty()
    while True:
        if interactive:
            out.write(PROMPT)
            out.flush()
        raw = stdin.readline()
        if not raw:
            break
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            _run_line(line, args, out)
        except ArithError as e:
            _report(line, e, err)
    if interactive:
        out.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="arithpy", description="Evaluate integer arithmetic expressions")
    ap.add_argument(
        "expression",
        nargs="*",
        help="Expression to process (words are joined with spaces); reads stdin when omitted",
    )
    out_group = ap.add_mutually_exclusive_group()
    out_group.add_argument("-r", "--rpn", action="store_true", help="Print reverse-Polish notation")
    out_group.add_argument("-t", "--tokens", action="store_true", help="Print the token list")
    out_group.add_argument("--ast", action="store_true", help="Print the syntax tree as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log pipeline stages to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.expression:
        return repl(args, sys.stdin, sys.stdout, sys.stderr)

    line = " ".join(args.expression)
    try:
        _run_line(line, args, sys.stdout)
    except ArithError as e:
        _report(line, e, sys.stderr)
        return 1
    return 0
