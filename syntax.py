"""
Lox Abstract Syntax Tree
Closed sets of expression and statement nodes, immutable once built
"""

from typing import Any, Optional, Tuple, Union
from dataclasses import dataclass

from scanning import Token


# ============================================================================
# EXPRESSIONS
# ============================================================================

@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Grouping:
    expression: 'Expr'


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Logical:
    """Short-circuiting 'and' / 'or'"""
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Variable:
    name: Token


@dataclass(frozen=True)
class Assign:
    name: Token
    value: 'Expr'


Expr = Union[Literal, Grouping, Unary, Binary, Logical, Variable, Assign]


# ============================================================================
# STATEMENTS
# ============================================================================

@dataclass(frozen=True)
class Expression:
    expression: Expr


@dataclass(frozen=True)
class Print:
    expression: Expr


@dataclass(frozen=True)
class Var:
    name: Token
    initializer: Optional[Expr] = None


@dataclass(frozen=True)
class Block:
    statements: Tuple['Stmt', ...]


@dataclass(frozen=True)
class If:
    condition: Expr
    then_branch: 'Stmt'
    else_branch: Optional['Stmt'] = None


@dataclass(frozen=True)
class While:
    condition: Expr
    body: 'Stmt'


Stmt = Union[Expression, Print, Var, Block, If, While]

EXPRESSION_TYPES = (Literal, Grouping, Unary, Binary, Logical, Variable, Assign)
STATEMENT_TYPES = (Expression, Print, Var, Block, If, While)


def node_name(node: Union[Expr, Stmt]) -> str:
    """Name of a node's variant, used in traces and error messages"""
    return type(node).__name__
