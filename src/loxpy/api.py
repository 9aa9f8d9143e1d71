from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from . import ast as A
from .errors import ErrorLog, ErrorKind, LoxError
from .interpreter import Interpreter
from .lexer import scan
from .parser import DEFAULT_MAX_DEPTH, parse
from .tokens import SourceToken, TokenKind


logger = logging.getLogger(__name__)


class Stage(str, Enum):
    SCAN = "scan"
    PARSE = "parse"
    RUNTIME = "runtime"


@dataclass(frozen=True, slots=True)
class RunResult:
    stage: Stage | None = None  # stage that reported errors, None on success
    errors: ErrorLog = field(default_factory=ErrorLog)

    @property
    def ok(self) -> bool:
        return self.stage is None


def scan_source(src: str) -> tuple[list[SourceToken], ErrorLog]:
    tokens, errors = scan(src)
    logger.debug("scanned %d tokens, %d errors", len(tokens), len(errors))
    return tokens, errors


def parse_tokens(
    tokens: Iterable[SourceToken],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[list[A.Stmt], ErrorLog]:
    statements, errors = parse(tokens, max_depth=max_depth)
    logger.debug("parsed %d statements, %d errors", len(statements), len(errors))
    return statements, errors


def interpret_statements(
    statements: Iterable[A.Stmt],
    *,
    interpreter: Interpreter | None = None,
    write_line: Callable[[str], None] = print,
) -> ErrorLog:
    """Execute statements, turning the first runtime error into a one-entry log."""
    interp = interpreter if interpreter is not None else Interpreter(write_line=write_line)
    errors = ErrorLog()
    try:
        interp.interpret(statements)
    except LoxError as e:
        if e.kind is not ErrorKind.RUNTIME:
            raise
        logger.debug("runtime error: %s", e)
        errors.push(e)
    return errors


def run_source(
    src: str,
    *,
    interpreter: Interpreter | None = None,
    write_line: Callable[[str], None] = print,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> RunResult:
    tokens, errors = scan_source(src)
    if errors:
        return RunResult(stage=Stage.SCAN, errors=errors)

    # Comments stay in the scanner output but never reach the parser.
    tokens = [t for t in tokens if t.kind is not TokenKind.COMMENT]
    statements, errors = parse_tokens(tokens, max_depth=max_depth)
    if errors:
        return RunResult(stage=Stage.PARSE, errors=errors)

    errors = interpret_statements(statements, interpreter=interpreter, write_line=write_line)
    if errors:
        return RunResult(stage=Stage.RUNTIME, errors=errors)
    return RunResult()


def run_file(
    path: str | Path,
    *,
    interpreter: Interpreter | None = None,
    write_line: Callable[[str], None] = print,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> RunResult:
    p = Path(path).expanduser().resolve()
    logger.info("running %s", p)
    src = p.read_text(encoding="utf-8")
    return run_source(src, interpreter=interpreter, write_line=write_line, max_depth=max_depth)
