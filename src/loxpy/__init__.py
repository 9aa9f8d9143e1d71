from __future__ import annotations

from .api import RunResult, Stage, interpret_statements, parse_tokens, run_file, run_source, scan_source
from .errors import ErrorKind, ErrorLog, InternalError, LoxError
from .interpreter import Interpreter
from .lexer import scan
from .parser import parse

__all__ = [
    "ErrorKind",
    "ErrorLog",
    "InternalError",
    "Interpreter",
    "LoxError",
    "RunResult",
    "Stage",
    "interpret_statements",
    "parse",
    "parse_tokens",
    "run_file",
    "run_source",
    "scan",
    "scan_source",
]
