from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ErrorLog, InternalError, scanning_error
from .spans import NEWLINES, SourceSpan, SourceText
from .tokens import KEYWORDS, WHITESPACE, SourceToken, Token, TokenKind


_SINGLE: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
    "?": TokenKind.QUESTION,
    ":": TokenKind.COLON,
}

# lead symbol -> (kind alone, kind when followed by "=")
_WITH_EQUAL: dict[str, tuple[TokenKind, TokenKind]] = {
    "!": (TokenKind.BANG, TokenKind.BANG_EQUAL),
    "=": (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
    "<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
    ">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
}


def is_digit(symbol: str) -> bool:
    return len(symbol) == 1 and "0" <= symbol <= "9"


def is_alpha(symbol: str) -> bool:
    return symbol == "_" or symbol[:1].isalpha()


def is_alphanumeric(symbol: str) -> bool:
    return is_alpha(symbol) or symbol[:1].isalnum()


@dataclass(slots=True)
class _Cursor:
    source: SourceText
    i: int = 0
    span: SourceSpan = field(default_factory=SourceSpan)

    def eof(self) -> bool:
        return self.i >= len(self.source)

    def peek(self, n: int = 0) -> str:
        j = self.i + n
        if j >= len(self.source):
            return ""
        return self.source[j]

    def advance(self) -> str:
        if self.eof():
            return ""
        symbol = self.source[self.i]
        self.i += 1
        self.span = self.span.extend(symbol)
        return symbol

    def advance_if(self, expected: str) -> bool:
        if self.peek() != expected:
            return False
        self.advance()
        return True

    def lexeme(self) -> str:
        return self.source.text_of(self.span)

    def close(self) -> SourceSpan:
        """Snapshot the current span and start a fresh one at the cursor."""
        span = self.span
        self.span = span.close()
        return span


def scan(source: str | SourceText) -> tuple[list[SourceToken], ErrorLog]:
    """Tokenize `source`, collecting lexical errors instead of stopping.

    The returned token list always ends with an `EOF` token.
    """
    text = source if isinstance(source, SourceText) else SourceText(source)
    cur = _Cursor(source=text)
    tokens: list[SourceToken] = []
    log = ErrorLog()

    while not cur.eof():
        lead = cur.advance()
        token: Token | None = None

        if lead in _SINGLE:
            token = Token(_SINGLE[lead])

        elif lead in _WITH_EQUAL:
            alone, with_equal = _WITH_EQUAL[lead]
            token = Token(with_equal if cur.advance_if("=") else alone)

        elif lead == "/":
            if cur.advance_if("/"):
                while not cur.eof() and cur.peek() not in NEWLINES:
                    cur.advance()
                token = Token(TokenKind.COMMENT, cur.lexeme())
            else:
                token = Token(TokenKind.SLASH)

        elif lead in WHITESPACE:
            token = Token(TokenKind.WHITESPACE, WHITESPACE[lead])

        elif lead == '"':
            token = _string(cur, log)

        elif is_digit(lead):
            token = _number(cur)

        elif is_alpha(lead):
            while is_alphanumeric(cur.peek()):
                cur.advance()
            lexeme = cur.lexeme()
            kind = KEYWORDS.get(lexeme)
            token = Token(kind) if kind is not None else Token(TokenKind.IDENTIFIER, lexeme)

        else:
            log.push(scanning_error("Unexpected character", cur.span, subject=lead))

        span = cur.close()
        if token is not None:
            tokens.append(SourceToken(token, span))

    tokens.append(SourceToken(Token(TokenKind.EOF), cur.close()))
    return tokens, log


def _string(cur: _Cursor, log: ErrorLog) -> Token | None:
    while not cur.eof():
        if cur.advance() == '"':
            return Token(TokenKind.STRING, cur.lexeme()[1:-1])
    log.push(scanning_error("Unterminated String", cur.span))
    return None


def _number(cur: _Cursor) -> Token:
    while is_digit(cur.peek()):
        cur.advance()
    if cur.peek() == "." and is_digit(cur.peek(1)):
        cur.advance()
        while is_digit(cur.peek()):
            cur.advance()
    lexeme = cur.lexeme()
    try:
        value = float(lexeme)
    except ValueError as e:
        raise InternalError(f"scanned numeric lexeme {lexeme!r} is not a valid float") from e
    return Token(TokenKind.NUMBER, value)
