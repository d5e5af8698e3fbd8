"""
Lox Interpreter
Tree-walking evaluator running statements against a chain of environments
"""

from typing import Any, Iterator, List, Optional, Sequence, TextIO
from contextlib import contextmanager
import sys

from environment import Environment
from scanning import TokenType
from error_handling import ErrorReporter, LoxRuntimeError
from operations import BINARY_OPERATORS, UNARY_OPERATORS
from utilities import is_truthy, stringify
import syntax as ast


class Interpreter:
  """Executes statements, keeping the global scope between runs"""

  def __init__(self, out: Optional[TextIO] = None, debug: bool = False):
    self.out = out
    self.debug = debug
    self.globals = Environment()
    self.environment = self.globals

  # ============================================================================
  # PROGRAM EVALUATION
  # ============================================================================

  def interpret(self, statements: List[ast.Stmt], reporter: Optional[ErrorReporter] = None) -> bool:
    """
    Execute statements in order, stopping at the first runtime error.
    The error is reported and the remaining statements are skipped.
    Returns True if every statement completed.
    """
    try:
      for statement in statements:
        self.execute(statement)
    except LoxRuntimeError as e:
      if self.debug:
        print(f"Runtime error: {e}", file=sys.stderr)
      if reporter is not None:
        reporter.runtime_error(e)
      return False
    return True

  # ============================================================================
  # STATEMENTS
  # ============================================================================

  def execute(self, stmt: ast.Stmt) -> None:
    """Execute a single statement"""
    if self.debug:
      print(f"Executing: {ast.node_name(stmt)}", file=sys.stderr)

    if isinstance(stmt, ast.Expression):
      self.evaluate(stmt.expression)
    elif isinstance(stmt, ast.Print):
      value = self.evaluate(stmt.expression)
      print(stringify(value), file=self.out or sys.stdout)
    elif isinstance(stmt, ast.Var):
      value = None
      if stmt.initializer is not None:
        value = self.evaluate(stmt.initializer)
      self.environment.define(stmt.name.lexeme, value)
    elif isinstance(stmt, ast.Block):
      self.execute_block(stmt.statements)
    elif isinstance(stmt, ast.If):
      if is_truthy(self.evaluate(stmt.condition)):
        self.execute(stmt.then_branch)
      elif stmt.else_branch is not None:
        self.execute(stmt.else_branch)
    elif isinstance(stmt, ast.While):
      while is_truthy(self.evaluate(stmt.condition)):
        self.execute(stmt.body)
    else:
      raise TypeError(f"Unknown statement node: {stmt!r}")

  def execute_block(self, statements: Sequence[ast.Stmt]) -> None:
    """Run statements in a fresh child scope"""
    with self.scope():
      for statement in statements:
        self.execute(statement)

  @contextmanager
  def scope(self) -> Iterator[Environment]:
    """Enter a child scope, restoring the previous one on exit, even on error"""
    previous = self.environment
    self.environment = previous.child()
    try:
      yield self.environment
    finally:
      self.environment = previous

  # ============================================================================
  # EXPRESSIONS
  # ============================================================================

  def evaluate(self, expr: ast.Expr) -> Any:
    """Evaluate an expression to a runtime value"""
    if isinstance(expr, ast.Literal):
      return expr.value
    elif isinstance(expr, ast.Grouping):
      return self.evaluate(expr.expression)
    elif isinstance(expr, ast.Unary):
      right = self.evaluate(expr.right)
      return UNARY_OPERATORS[expr.operator.type](expr.operator, right)
    elif isinstance(expr, ast.Binary):
      left = self.evaluate(expr.left)
      right = self.evaluate(expr.right)
      return BINARY_OPERATORS[expr.operator.type](expr.operator, left, right)
    elif isinstance(expr, ast.Logical):
      return self.evaluate_logical(expr)
    elif isinstance(expr, ast.Variable):
      return self.environment.get(expr.name)
    elif isinstance(expr, ast.Assign):
      value = self.evaluate(expr.value)
      self.environment.assign(expr.name, value)
      return value
    else:
      raise TypeError(f"Unknown expression node: {expr!r}")

  def evaluate_logical(self, expr: ast.Logical) -> Any:
    """Short-circuit and/or, yielding one of the operand values"""
    left = self.evaluate(expr.left)

    if expr.operator.type == TokenType.OR:
      if is_truthy(left):
        return left
    elif not is_truthy(left):
      return left

    return self.evaluate(expr.right)

