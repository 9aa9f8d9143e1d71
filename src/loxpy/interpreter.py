from __future__ import annotations

import math
import operator
from collections.abc import Callable, Iterable

from . import ast as A
from .environment import Environment
from .errors import InternalError, runtime_error
from .tokens import TokenKind
from .values import NIL, Boolean, LiteralKind, Number, is_equal, truth_value


_ARITHMETIC: dict[TokenKind, Callable[[float, float], float]] = {
    TokenKind.MINUS: operator.sub,
    TokenKind.PLUS: operator.add,
    TokenKind.STAR: operator.mul,
}

_COMPARISON: dict[TokenKind, Callable[[float, float], bool]] = {
    TokenKind.GREATER: operator.gt,
    TokenKind.GREATER_EQUAL: operator.ge,
    TokenKind.LESS: operator.lt,
    TokenKind.LESS_EQUAL: operator.le,
}


def _divide(a: float, b: float) -> float:
    # IEEE-754 semantics instead of ZeroDivisionError.
    try:
        return a / b
    except ZeroDivisionError:
        if a != a or a == 0.0:
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


class Interpreter:
    """Tree-walking evaluator.

    Evaluation stops at the first runtime error, which is raised as a
    `LoxError` of kind `RUNTIME`.
    """

    def __init__(self, write_line: Callable[[str], None] = print) -> None:
        self.write_line = write_line
        self.globals = Environment()
        self.environment = self.globals

    # --- Statements ---

    def interpret(self, statements: Iterable[A.Stmt]) -> None:
        for stmt in statements:
            try:
                self.execute(stmt)
            except RecursionError:
                # Long flat operator chains fold into left-deep trees the parser never counts.
                raise runtime_error("Expression too deeply nested to evaluate", stmt.span) from None

    def execute(self, stmt: A.Stmt) -> None:
        if isinstance(stmt, A.ExpressionStmt):
            self.evaluate(stmt.expression)
        elif isinstance(stmt, A.PrintStmt):
            value = self.evaluate(stmt.expression)
            self.write_line(repr(value))
        elif isinstance(stmt, A.VarStmt):
            value = NIL if stmt.initializer is None else self.evaluate(stmt.initializer)
            self.environment.define(stmt.name, value)
        else:
            raise InternalError(f"unknown statement node: {type(stmt).__name__}")

    # --- Expressions ---

    def evaluate(self, expr: A.Expr) -> LiteralKind:
        if isinstance(expr, A.Literal):
            return expr.value
        if isinstance(expr, A.Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, A.Unary):
            return self._unary(expr)
        if isinstance(expr, A.Binary):
            return self._binary(expr)
        if isinstance(expr, A.Ternary):
            return self._ternary(expr)
        if isinstance(expr, A.Variable):
            return self.environment.get(expr.identifier, expr.span)
        raise InternalError(f"unknown expression node: {type(expr).__name__}")

    def _unary(self, expr: A.Unary) -> LiteralKind:
        right = self.evaluate(expr.right)
        kind = expr.operator.kind
        if kind is TokenKind.MINUS:
            if isinstance(right, Number):
                return Number(-right.value)
        elif kind is TokenKind.BANG:
            truth = truth_value(right)
            if truth is not None:
                return Boolean(not truth)
        else:
            raise InternalError(f"illegal operator for unary expression: {expr.operator}")
        raise runtime_error(
            f"Illegal operand for unary '{expr.operator}' expression",
            expr.span,
            subject=repr(right),
        )

    def _binary(self, expr: A.Binary) -> LiteralKind:
        # Both operands are always evaluated, left to right.
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        kind = expr.operator.kind

        if kind is TokenKind.EQUAL_EQUAL:
            return Boolean(is_equal(left, right))
        if kind is TokenKind.BANG_EQUAL:
            return Boolean(not is_equal(left, right))

        if kind in _ARITHMETIC:
            fn: Callable[[float, float], float | bool] = _ARITHMETIC[kind]
        elif kind is TokenKind.SLASH:
            fn = _divide
        elif kind in _COMPARISON:
            fn = _COMPARISON[kind]
        else:
            raise InternalError(f"illegal operator for binary expression: {expr.operator}")

        if not isinstance(left, Number) or not isinstance(right, Number):
            raise runtime_error(
                f"Illegal operand for binary '{expr.operator}' expression",
                expr.span,
                subject=f"{left!r} {expr.operator} {right!r}",
            )
        result = fn(left.value, right.value)
        if isinstance(result, bool):
            return Boolean(result)
        return Number(result)

    def _ternary(self, expr: A.Ternary) -> LiteralKind:
        condition = self.evaluate(expr.condition)
        if not isinstance(condition, Boolean):
            raise runtime_error(
                "Non boolean type used as condition in ternary",
                expr.condition.span,
                subject=repr(condition),
            )
        # Only the selected branch is evaluated.
        if condition.value:
            return self.evaluate(expr.left_result)
        return self.evaluate(expr.right_result)
