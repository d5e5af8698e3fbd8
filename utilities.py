"""
Utilities module for the Lox interpreter
Value rules shared by the evaluator: truthiness, equality, printing and operand checks
"""

from typing import Any, Callable
import math

from scanning import Token
from error_handling import LoxTypeError


# ==================== VALUE RULES ====================

def is_number(value: Any) -> bool:
  """Lox numbers are floats; bools are not numbers"""
  return type(value) is float


def is_string(value: Any) -> bool:
  return type(value) is str


def is_truthy(value: Any) -> bool:
  """nil and false are falsy, everything else (including 0 and "") is truthy"""
  if value is None:
    return False
  if type(value) is bool:
    return value
  return True


def is_equal(left: Any, right: Any) -> bool:
  """
  Total equality over Lox values

  Values of different Lox types are never equal, so Python's
  ``True == 1.0`` does not leak through. nil equals only nil.
  """
  if left is None or right is None:
    return left is None and right is None
  if type(left) is not type(right):
    return False
  return left == right


def stringify(value: Any) -> str:
  """
  Render a runtime value the way print shows it

  Examples:
    stringify(None) -> "nil"
    stringify(3.0) -> "3"
    stringify(2.5) -> "2.5"
    stringify(float("inf")) -> "Infinity"
  """
  if value is None:
    return "nil"
  if type(value) is bool:
    return "true" if value else "false"
  if is_number(value):
    if math.isnan(value):
      return "NaN"
    if math.isinf(value):
      return "Infinity" if value > 0 else "-Infinity"
    text = repr(value)
    if text.endswith(".0"):
      text = text[:-2]
    return text
  return str(value)


def type_name(value: Any) -> str:
  """Lox-facing name of a runtime value's type"""
  if value is None:
    return "nil"
  if type(value) is bool:
    return "boolean"
  if is_number(value):
    return "number"
  if is_string(value):
    return "string"
  return type(value).__name__


# ==================== OPERAND CHECKS ====================

def check_number_operand(operator: Token, operand: Any) -> None:
  """
  Ensure a unary operand is a number

  Raises:
    LoxTypeError at the operator token otherwise
  """
  if not is_number(operand):
    raise LoxTypeError(operator, "Operand must be a number.")


def check_number_operands(operator: Token, left: Any, right: Any) -> None:
  """
  Ensure both binary operands are numbers

  Raises:
    LoxTypeError at the operator token otherwise
  """
  if not (is_number(left) and is_number(right)):
    raise LoxTypeError(operator, "Operands must be numbers.")


# ==================== BINARY OPERATION FACTORIES ====================

def binary_arithmetic_op(
  op: Callable[[float, float], float]
) -> Callable[[Token, Any, Any], float]:
  """
  Factory for numeric binary operations

  Args:
    op: Python operator function (e.g., operator.sub)

  Returns:
    Function taking (operator token, left, right) that checks its
    operands before applying op

  Examples:
    lox_sub = binary_arithmetic_op(operator.sub)
    lox_sub(minus_token, 3.0, 1.0) -> 2.0
  """
  def arithmetic(operator: Token, left: Any, right: Any) -> float:
    check_number_operands(operator, left, right)
    return op(left, right)

  return arithmetic


def binary_comparison_op(
  op: Callable[[float, float], bool]
) -> Callable[[Token, Any, Any], bool]:
  """
  Factory for numeric comparison operations

  Args:
    op: Python operator function (e.g., operator.lt)

  Returns:
    Function taking (operator token, left, right) returning a bool
  """
  def comparison(operator: Token, left: Any, right: Any) -> bool:
    check_number_operands(operator, left, right)
    return op(left, right)

  return comparison
