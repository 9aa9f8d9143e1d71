from __future__ import annotations

import argparse
import logging
import sys
from enum import IntEnum
from pathlib import Path

from .api import RunResult, Stage, parse_tokens, run_source, scan_source
from .errors import ErrorLog, InternalError, runtime_error
from .format import stmt_to_ast_string
from .interpreter import Interpreter
from .parser import DEFAULT_MAX_DEPTH
from .tokens import TokenKind


logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    # sysexits.h
    OK = 0
    USAGE = 64
    DATAERR = 65
    NOINPUT = 66
    SOFTWARE = 70
    INTERNAL = 71


_STAGE_EXIT = {
    Stage.SCAN: ExitCode.DATAERR,
    Stage.PARSE: ExitCode.DATAERR,
    Stage.RUNTIME: ExitCode.SOFTWARE,
}


def _report(errors: ErrorLog) -> None:
    for e in errors:
        print(str(e), file=sys.stderr)


def _exit_code(result: RunResult) -> ExitCode:
    if result.stage is None:
        return ExitCode.OK
    _report(result.errors)
    return _STAGE_EXIT[result.stage]


def _dump_tokens(src: str) -> ExitCode:
    tokens, errors = scan_source(src)
    for tok in tokens:
        print(f"{tok.token!r} @ {tok.span.format()}")
    _report(errors)
    return ExitCode.DATAERR if errors else ExitCode.OK


def _dump_ast(src: str, max_depth: int) -> ExitCode:
    tokens, errors = scan_source(src)
    if errors:
        _report(errors)
        return ExitCode.DATAERR
    tokens = [t for t in tokens if t.kind is not TokenKind.COMMENT]
    statements, errors = parse_tokens(tokens, max_depth=max_depth)
    for stmt in statements:
        try:
            print(stmt_to_ast_string(stmt))
        except RecursionError:
            errors.push(runtime_error("Expression too deeply nested to display", stmt.span))
    _report(errors)
    return ExitCode.DATAERR if errors else ExitCode.OK


def _handle(src: str, args: argparse.Namespace, interpreter: Interpreter) -> ExitCode:
    if args.tokens:
        return _dump_tokens(src)
    if args.ast:
        return _dump_ast(src, args.max_depth)
    return _exit_code(run_source(src, interpreter=interpreter, max_depth=args.max_depth))


def run_prompt(args: argparse.Namespace) -> ExitCode:
    """Read-eval-print loop; an empty line or end of input ends the session."""
    interpreter = Interpreter()
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            break
        if line == "":
            break
        # Errors are reported but do not end the session.
        _handle(line, args, interpreter)
    return ExitCode.OK


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="loxpy", description="Run Lox scripts or start a REPL")
    ap.add_argument("script", nargs="*", help="Script to run (omit for an interactive prompt)")
    ap.add_argument("--tokens", action="store_true", help="Print the token stream instead of running")
    ap.add_argument("--ast", action="store_true", help="Print parsed statements instead of running")
    ap.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum expression nesting depth accepted by the parser",
    )
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (repeatable)")
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    if len(args.script) > 1:
        print("Usage: loxpy [script]", file=sys.stderr)
        return ExitCode.USAGE

    try:
        if not args.script:
            return run_prompt(args)
        path = Path(args.script[0])
        try:
            src = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: cannot read {path}: {e}", file=sys.stderr)
            return ExitCode.NOINPUT
        logger.info("running %s", path)
        return _handle(src, args, Interpreter())
    except InternalError as e:
        print(f"Internal error: {e}", file=sys.stderr)
        return ExitCode.INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
