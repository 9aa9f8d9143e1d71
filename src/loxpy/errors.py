from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from .spans import SourceSpan


class ErrorKind(str, Enum):
    SCANNING = "Scanning"
    PARSING = "Parsing"
    RUNTIME = "Runtime"


@dataclass(slots=True)
class LoxError(Exception):
    """A user-facing diagnostic produced by one of the pipeline stages."""

    kind: ErrorKind
    message: str
    subject: str | None = None
    span: SourceSpan | None = None

    def __str__(self) -> str:
        base = f"{self.kind.value} Error ({self.message})"
        if self.subject is not None:
            base = f"{base}: {self.subject}"
        if self.span is None:
            return base
        return f"[line: {self.span.start.line}, col: {self.span.start.column}] {base}"


def scanning_error(message: str, span: SourceSpan | None = None, subject: str | None = None) -> LoxError:
    return LoxError(ErrorKind.SCANNING, message, subject=subject, span=span)


def parsing_error(message: str, span: SourceSpan | None = None, subject: str | None = None) -> LoxError:
    return LoxError(ErrorKind.PARSING, message, subject=subject, span=span)


def runtime_error(message: str, span: SourceSpan | None = None, subject: str | None = None) -> LoxError:
    return LoxError(ErrorKind.RUNTIME, message, subject=subject, span=span)


class InternalError(RuntimeError):
    """A broken invariant between stages (not a problem with user input)."""


@dataclass(slots=True)
class ErrorLog:
    """Append-only, ordered collection of diagnostics."""

    errors: list[LoxError] = field(default_factory=list)

    def push(self, error: LoxError) -> None:
        self.errors.append(error)

    def extend(self, errors: Iterable[LoxError]) -> None:
        self.errors.extend(errors)

    def kinds(self) -> list[ErrorKind]:
        return [e.kind for e in self.errors]

    def render(self) -> str:
        return "\n".join(str(e) for e in self.errors)

    def __iter__(self) -> Iterator[LoxError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __getitem__(self, index: int) -> LoxError:
        return self.errors[index]
