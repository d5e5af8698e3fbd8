"""
Lox AST printer
Renders trees in a fully parenthesized prefix form for debugging
"""

from typing import List, Sequence, Union

from utilities import stringify
import syntax as ast


def print_expr(expr: ast.Expr) -> str:
    """Render an expression, e.g. ``(+ 1 (* 2 3))``"""
    if isinstance(expr, ast.Literal):
        if isinstance(expr.value, str):
            return f'"{expr.value}"'
        return stringify(expr.value)
    elif isinstance(expr, ast.Grouping):
        return _parenthesize("group", expr.expression)
    elif isinstance(expr, ast.Unary):
        return _parenthesize(expr.operator.lexeme, expr.right)
    elif isinstance(expr, (ast.Binary, ast.Logical)):
        return _parenthesize(expr.operator.lexeme, expr.left, expr.right)
    elif isinstance(expr, ast.Variable):
        return expr.name.lexeme
    elif isinstance(expr, ast.Assign):
        return f"(= {expr.name.lexeme} {print_expr(expr.value)})"
    raise TypeError(f"Unknown expression node: {expr!r}")


def print_stmt(stmt: ast.Stmt, indent: int = 0) -> str:
    """Render a statement, one line per statement, nested blocks indented"""
    prefix = "  " * indent

    if isinstance(stmt, ast.Expression):
        return f"{prefix}(; {print_expr(stmt.expression)})"
    elif isinstance(stmt, ast.Print):
        return f"{prefix}(print {print_expr(stmt.expression)})"
    elif isinstance(stmt, ast.Var):
        if stmt.initializer is None:
            return f"{prefix}(var {stmt.name.lexeme})"
        return f"{prefix}(var {stmt.name.lexeme} = {print_expr(stmt.initializer)})"
    elif isinstance(stmt, ast.Block):
        lines = [f"{prefix}(block"]
        lines.extend(print_stmt(inner, indent + 1) for inner in stmt.statements)
        return "\n".join(lines) + ")"
    elif isinstance(stmt, ast.If):
        lines = [f"{prefix}(if {print_expr(stmt.condition)}",
                 print_stmt(stmt.then_branch, indent + 1)]
        if stmt.else_branch is not None:
            lines.append(print_stmt(stmt.else_branch, indent + 1))
        return "\n".join(lines) + ")"
    elif isinstance(stmt, ast.While):
        return "\n".join([
            f"{prefix}(while {print_expr(stmt.condition)}",
            print_stmt(stmt.body, indent + 1),
        ]) + ")"
    raise TypeError(f"Unknown statement node: {stmt!r}")


def print_program(statements: Sequence[ast.Stmt]) -> str:
    """Render a whole parsed program"""
    return "\n".join(print_stmt(stmt) for stmt in statements)


def pretty_print(node: Union[ast.Expr, ast.Stmt, List[ast.Stmt]]) -> str:
    """Render any tree the parser produces"""
    if isinstance(node, list):
        return print_program(node)
    if isinstance(node, ast.STATEMENT_TYPES):
        return print_stmt(node)
    return print_expr(node)


def _parenthesize(name: str, *exprs: ast.Expr) -> str:
    parts = " ".join(print_expr(expr) for expr in exprs)
    return f"({name} {parts})"
