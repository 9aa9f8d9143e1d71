"""Recursive-descent parser.

Grammar, lowest to highest precedence::

    program     -> declaration* EOF
    declaration -> "var" IDENTIFIER ( "=" expression )? ";" | statement
    statement   -> "print" expression ";" | expression ";"
    expression  -> ternary
    ternary     -> equality ( "?" equality ":" equality )*
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | "(" expression ")" | IDENTIFIER
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from . import ast as A
from .errors import ErrorLog, InternalError, LoxError, parsing_error
from .spans import SourceSpan
from .tokens import SourceToken, TokenKind
from .values import FALSE, NIL, TRUE, Number, String


DEFAULT_MAX_DEPTH = 48

EQUALITY_TOKENS = frozenset({TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL})
COMPARISON_TOKENS = frozenset(
    {TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL}
)
TERM_TOKENS = frozenset({TokenKind.MINUS, TokenKind.PLUS})
FACTOR_TOKENS = frozenset({TokenKind.SLASH, TokenKind.STAR})
UNARY_TOKENS = frozenset({TokenKind.BANG, TokenKind.MINUS})

# Synchronization stops in front of these.
STATEMENT_START_TOKENS = frozenset(
    {
        TokenKind.CLASS,
        TokenKind.FOR,
        TokenKind.FUN,
        TokenKind.IF,
        TokenKind.PRINT,
        TokenKind.RETURN,
        TokenKind.VAR,
        TokenKind.WHILE,
    }
)


def _span_of(node: A.Node) -> SourceSpan:
    if node.span is None:
        raise InternalError(f"parsed node has no span: {node!r}")
    return node.span


class Parser:
    def __init__(self, tokens: Iterable[SourceToken], *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.tokens: list[SourceToken] = [t for t in tokens if t.kind is not TokenKind.WHITESPACE]
        self.index = 0
        self.depth = 0
        self.max_depth = max_depth
        self.errors = ErrorLog()

    # --- Driver ---

    def parse(self) -> list[A.Stmt]:
        statements: list[A.Stmt] = []
        while self.peek() is not None:
            start = self.index
            try:
                statements.append(self.declaration())
            except LoxError as e:
                self.errors.push(e)
                self.synchronize()
                if self.index == start:
                    self.advance()
        return statements

    def synchronize(self) -> None:
        """Discard tokens up to the next statement boundary."""
        while True:
            if self.index > 0 and self.previous().kind is TokenKind.SEMICOLON:
                return
            tok = self.peek()
            if tok is None or tok.kind in STATEMENT_START_TOKENS:
                return
            self.advance()

    # --- Token reading ---

    def _at(self, index: int) -> SourceToken:
        if index >= len(self.tokens):
            raise InternalError("consumed all tokens without encountering EOF")
        return self.tokens[index]

    def peek(self) -> SourceToken | None:
        tok = self._at(self.index)
        if tok.kind is TokenKind.EOF:
            return None
        return tok

    def advance(self) -> SourceToken | None:
        tok = self._at(self.index)
        if tok.kind is TokenKind.EOF:
            return None
        self.index += 1
        return tok

    def previous(self) -> SourceToken:
        if self.index == 0:
            raise InternalError("attempted to read previous token at index 0")
        return self.tokens[self.index - 1]

    def check(self, kinds: frozenset[TokenKind] | TokenKind) -> SourceToken | None:
        tok = self.peek()
        if tok is None:
            return None
        if isinstance(kinds, TokenKind):
            return tok if tok.kind is kinds else None
        return tok if tok.kind in kinds else None

    def consume(self, expected: TokenKind) -> SourceToken:
        tok = self.advance()
        if tok is None:
            raise parsing_error(
                f"Reached end of file while expecting '{expected.value}'",
                self._at(self.index).span,
            )
        if tok.kind is not expected:
            raise parsing_error(
                f"Expected '{expected.value}', instead found '{tok.token}'",
                tok.span,
            )
        return tok

    # --- Statement rules ---

    def declaration(self) -> A.Stmt:
        if self.check(TokenKind.VAR):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self) -> A.VarStmt:
        keyword = self.advance()
        name = self.consume(TokenKind.IDENTIFIER)
        initializer: A.Expr | None = None
        if self.check(TokenKind.EQUAL):
            self.advance()
            initializer = self.expression()
        end = self.consume(TokenKind.SEMICOLON)
        return A.VarStmt(str(name.token.value), initializer, span=keyword.span.join(end.span))

    def statement(self) -> A.Stmt:
        keyword = self.check(TokenKind.PRINT)
        if keyword is not None:
            self.advance()
            expression = self.expression()
            end = self.consume(TokenKind.SEMICOLON)
            return A.PrintStmt(expression, span=keyword.span.join(end.span))
        expression = self.expression()
        end = self.consume(TokenKind.SEMICOLON)
        return A.ExpressionStmt(expression, span=_span_of(expression).join(end.span))

    # --- Expression rules ---

    def expression(self) -> A.Expr:
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise parsing_error(
                    f"Expression nesting exceeds maximum depth of {self.max_depth}",
                    self.previous().span if self.index else None,
                )
            return self.ternary()
        finally:
            self.depth -= 1

    def ternary(self) -> A.Expr:
        expr = self.equality()
        while self.check(TokenKind.QUESTION):
            self.advance()
            left_result = self.equality()
            self.consume(TokenKind.COLON)
            right_result = self.equality()
            expr = A.Ternary(
                expr,
                left_result,
                right_result,
                span=_span_of(expr).join(_span_of(right_result)),
            )
        return expr

    def _binary(self, operators: frozenset[TokenKind], operand: Callable[[], A.Expr]) -> A.Expr:
        expr = operand()
        while (tok := self.check(operators)) is not None:
            self.advance()
            right = operand()
            expr = A.Binary(expr, tok.token, right, span=_span_of(expr).join(_span_of(right)))
        return expr

    def equality(self) -> A.Expr:
        return self._binary(EQUALITY_TOKENS, self.comparison)

    def comparison(self) -> A.Expr:
        return self._binary(COMPARISON_TOKENS, self.term)

    def term(self) -> A.Expr:
        return self._binary(TERM_TOKENS, self.factor)

    def factor(self) -> A.Expr:
        return self._binary(FACTOR_TOKENS, self.unary)

    def unary(self) -> A.Expr:
        tok = self.check(UNARY_TOKENS)
        if tok is None:
            return self.primary()
        self.advance()
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise parsing_error(
                    f"Expression nesting exceeds maximum depth of {self.max_depth}",
                    tok.span,
                )
            right = self.unary()
        finally:
            self.depth -= 1
        return A.Unary(tok.token, right, span=tok.span.join(_span_of(right)))

    def primary(self) -> A.Expr:
        tok = self.advance()
        if tok is None:
            span = self.previous().span if self.index else self._at(self.index).span
            raise parsing_error("Ran out of tokens while satisfying expression rule", span)

        kind = tok.kind
        if kind is TokenKind.FALSE:
            return A.Literal(FALSE, span=tok.span)
        if kind is TokenKind.TRUE:
            return A.Literal(TRUE, span=tok.span)
        if kind is TokenKind.NIL:
            return A.Literal(NIL, span=tok.span)
        if kind is TokenKind.NUMBER:
            return A.Literal(Number(float(tok.token.value)), span=tok.span)
        if kind is TokenKind.STRING:
            return A.Literal(String(str(tok.token.value)), span=tok.span)
        if kind is TokenKind.IDENTIFIER:
            return A.Variable(tok.token, span=tok.span)
        if kind is TokenKind.LEFT_PAREN:
            expr = self.expression()
            end = self.consume(TokenKind.RIGHT_PAREN)
            return A.Grouping(expr, span=tok.span.join(end.span))

        raise parsing_error(f"Expected value or expression, found '{tok.token}'", tok.span)


def parse(tokens: Iterable[SourceToken], *, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[list[A.Stmt], ErrorLog]:
    """Parse a scanned token stream into statements, collecting syntax errors."""
    parser = Parser(tokens, max_depth=max_depth)
    statements = parser.parse()
    return statements, parser.errors
