from __future__ import annotations

from dataclasses import dataclass

import regex


_GRAPHEME_RE = regex.compile(r"\X")

NEWLINES = frozenset({"\n", "\r\n"})


def split_graphemes(text: str) -> tuple[str, ...]:
    return tuple(_GRAPHEME_RE.findall(text))


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """A single point in source.

    Line/column are 1-based for user-facing messages; index is the 0-based
    offset in grapheme clusters, regardless of line or column.
    """

    line: int = 1
    column: int = 1
    index: int = 0

    def advance(self, grapheme: str) -> SourceLocation:
        if grapheme in NEWLINES:
            return SourceLocation(line=self.line + 1, column=1, index=self.index + 1)
        return SourceLocation(line=self.line, column=self.column + 1, index=self.index + 1)


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Half-open span [start, end)."""

    start: SourceLocation = SourceLocation()
    end: SourceLocation = SourceLocation()

    def extend(self, grapheme: str) -> SourceSpan:
        return SourceSpan(start=self.start, end=self.end.advance(grapheme))

    def close(self) -> SourceSpan:
        return SourceSpan(start=self.end, end=self.end)

    def join(self, other: SourceSpan) -> SourceSpan:
        return SourceSpan(start=self.start, end=other.end)

    @property
    def width(self) -> int:
        return self.end.index - self.start.index

    def format(self) -> str:
        return f"{self.start.line}:{self.start.column}"


class SourceText:
    """Source pre-split into grapheme clusters."""

    __slots__ = ("text", "graphemes")

    def __init__(self, text: str) -> None:
        self.text = text
        self.graphemes = split_graphemes(text)

    def __len__(self) -> int:
        return len(self.graphemes)

    def __getitem__(self, index: int) -> str:
        return self.graphemes[index]

    def text_of(self, span: SourceSpan) -> str:
        return "".join(self.graphemes[span.start.index : span.end.index])
