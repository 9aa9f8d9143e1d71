from __future__ import annotations

from . import ast as A
from .values import String


# ---------------------------------------------------------------------------
# S-expression dump (debugging)
# ---------------------------------------------------------------------------


def expr_to_ast_string(expr: A.Expr) -> str:
    if isinstance(expr, A.Binary):
        return f"({expr.operator} {expr_to_ast_string(expr.left)} {expr_to_ast_string(expr.right)})"
    if isinstance(expr, A.Ternary):
        return (
            f"({expr_to_ast_string(expr.condition)} ? {expr_to_ast_string(expr.left_result)}"
            f" : {expr_to_ast_string(expr.right_result)})"
        )
    if isinstance(expr, A.Grouping):
        return f"(group {expr_to_ast_string(expr.expression)})"
    if isinstance(expr, A.Literal):
        return expr.value.display()
    if isinstance(expr, A.Unary):
        return f"({expr.operator} {expr_to_ast_string(expr.right)})"
    if isinstance(expr, A.Variable):
        return expr.identifier
    raise TypeError(f"not an expression: {type(expr).__name__}")


def stmt_to_ast_string(stmt: A.Stmt) -> str:
    if isinstance(stmt, A.ExpressionStmt):
        return f"Expression Statement: {expr_to_ast_string(stmt.expression)}"
    if isinstance(stmt, A.PrintStmt):
        return f"Print Statement: {expr_to_ast_string(stmt.expression)}"
    if isinstance(stmt, A.VarStmt):
        init = "" if stmt.initializer is None else f" = {expr_to_ast_string(stmt.initializer)}"
        return f"Variable Statement: {stmt.name}{init}"
    raise TypeError(f"not a statement: {type(stmt).__name__}")


# ---------------------------------------------------------------------------
# Canonical source
# ---------------------------------------------------------------------------


def format_program(statements: list[A.Stmt]) -> str:
    """Render statements back to Lox source, one per line.

    Parentheses are only emitted for `Grouping` nodes, so the output is only
    guaranteed to re-parse to the same tree when the tree came from the parser.
    """
    out = [_format_stmt(stmt) for stmt in statements]
    return "\n".join(out) + "\n" if out else ""


def _format_stmt(stmt: A.Stmt) -> str:
    if isinstance(stmt, A.ExpressionStmt):
        return f"{format_expr(stmt.expression)};"
    if isinstance(stmt, A.PrintStmt):
        return f"print {format_expr(stmt.expression)};"
    if isinstance(stmt, A.VarStmt):
        if stmt.initializer is None:
            return f"var {stmt.name};"
        return f"var {stmt.name} = {format_expr(stmt.initializer)};"
    raise TypeError(f"not a statement: {type(stmt).__name__}")


def format_expr(expr: A.Expr) -> str:
    if isinstance(expr, A.Literal):
        if isinstance(expr.value, String):
            return f'"{expr.value.value}"'
        return expr.value.display()
    if isinstance(expr, A.Grouping):
        return f"({format_expr(expr.expression)})"
    if isinstance(expr, A.Unary):
        return f"{expr.operator}{format_expr(expr.right)}"
    if isinstance(expr, A.Binary):
        return f"{format_expr(expr.left)} {expr.operator} {format_expr(expr.right)}"
    if isinstance(expr, A.Ternary):
        return (
            f"{format_expr(expr.condition)} ? {format_expr(expr.left_result)}"
            f" : {format_expr(expr.right_result)}"
        )
    if isinstance(expr, A.Variable):
        return expr.identifier
    raise TypeError(f"not an expression: {type(expr).__name__}")
