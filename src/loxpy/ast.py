from __future__ import annotations

from dataclasses import dataclass, field

from .spans import SourceSpan
from .tokens import Token
from .values import LiteralKind


@dataclass(frozen=True, slots=True)
class Node:
    # Excluded from equality so trees can be compared structurally.
    span: SourceSpan | None = field(default=None, compare=False, repr=False, kw_only=True)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Literal(Node):
    value: LiteralKind


@dataclass(frozen=True, slots=True)
class Grouping(Node):
    expression: Expr


@dataclass(frozen=True, slots=True)
class Unary(Node):
    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Binary(Node):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, slots=True)
class Ternary(Node):
    condition: Expr
    left_result: Expr
    right_result: Expr


@dataclass(frozen=True, slots=True)
class Variable(Node):
    name: Token

    @property
    def identifier(self) -> str:
        return str(self.name.value)


Expr = Literal | Grouping | Unary | Binary | Ternary | Variable


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ExpressionStmt(Node):
    expression: Expr


@dataclass(frozen=True, slots=True)
class PrintStmt(Node):
    expression: Expr


@dataclass(frozen=True, slots=True)
class VarStmt(Node):
    name: str
    initializer: Expr | None = None


Stmt = ExpressionStmt | PrintStmt | VarStmt
