from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from .spans import SourceSpan


class TokenKind(str, Enum):
    # Single-character punctuation / operators
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"
    QUESTION = "?"
    COLON = ":"

    # One or two character operators
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    # Literals
    IDENTIFIER = "Identifier"
    STRING = "String"
    NUMBER = "Number"

    # Keywords
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FALSE = "false"
    FUN = "fun"
    FOR = "for"
    IF = "if"
    NIL = "nil"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    # Meta
    COMMENT = "Comment"
    WHITESPACE = "Whitespace"
    EOF = "EOF"


class WhitespaceKind(str, Enum):
    SPACE = " "
    TAB = "\t"
    CARRIAGE_RETURN = "\r"
    NEWLINE = "\n"
    CRLF = "\r\n"


KEYWORDS: dict[str, TokenKind] = {
    kind.value: kind
    for kind in (
        TokenKind.AND,
        TokenKind.CLASS,
        TokenKind.ELSE,
        TokenKind.FALSE,
        TokenKind.FUN,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.NIL,
        TokenKind.OR,
        TokenKind.PRINT,
        TokenKind.RETURN,
        TokenKind.SUPER,
        TokenKind.THIS,
        TokenKind.TRUE,
        TokenKind.VAR,
        TokenKind.WHILE,
    )
}

WHITESPACE: dict[str, WhitespaceKind] = {kind.value: kind for kind in WhitespaceKind}


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token; `value` holds the payload of literal and meta kinds."""

    kind: TokenKind
    value: str | float | WhitespaceKind | None = None

    def __str__(self) -> str:
        if self.kind is TokenKind.IDENTIFIER or self.kind is TokenKind.COMMENT:
            return str(self.value)
        if self.kind is TokenKind.STRING:
            return f'"{self.value}"'
        if self.kind is TokenKind.NUMBER:
            return format_number(self.value)
        if self.kind is TokenKind.WHITESPACE:
            return f"Whitespace({self.value.name})"
        return self.kind.value

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.kind.name})"
        if isinstance(self.value, WhitespaceKind):
            return f"Token({self.kind.name}, {self.value.name})"
        return f"Token({self.kind.name}, {self.value!r})"


@dataclass(frozen=True, slots=True)
class SourceToken:
    token: Token
    span: SourceSpan

    @property
    def kind(self) -> TokenKind:
        return self.token.kind

    def __repr__(self) -> str:
        return f"SourceToken({self.token!r}, {self.span.format()})"


def format_number(value: float) -> str:
    """Render a number the way Lox source would spell it (`1`, `2.5`, `0.0000001`).

    Finite values never use exponent notation, which the scanner does not accept.
    """
    if value != value:
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
