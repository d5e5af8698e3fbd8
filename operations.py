"""
Lox operator semantics
Built-in unary and binary operators, keyed by the token type that spells them
"""

from typing import Any, Callable, Dict
import math
import operator

from scanning import Token, TokenType
from error_handling import LoxTypeError
from utilities import (
  binary_arithmetic_op,
  binary_comparison_op,
  check_number_operand,
  check_number_operands,
  is_equal,
  is_number,
  is_string,
  is_truthy,
)


# ============================================================================
# ARITHMETIC
# ============================================================================

def lox_add(op: Token, left: Any, right: Any) -> Any:
  """Addition for two numbers, concatenation for two strings"""
  if is_number(left) and is_number(right):
    return left + right
  if is_string(left) and is_string(right):
    return left + right
  raise LoxTypeError(op, "Operands must be two numbers or two strings.")


def lox_div(op: Token, left: Any, right: Any) -> float:
  """Division with IEEE-754 results for a zero divisor"""
  check_number_operands(op, left, right)
  if right == 0:
    if left == 0 or math.isnan(left):
      return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)
  return left / right


lox_sub = binary_arithmetic_op(operator.sub)
lox_mul = binary_arithmetic_op(operator.mul)


# ============================================================================
# COMPARISON
# ============================================================================

lox_gt = binary_comparison_op(operator.gt)
lox_ge = binary_comparison_op(operator.ge)
lox_lt = binary_comparison_op(operator.lt)
lox_le = binary_comparison_op(operator.le)


def lox_eq(op: Token, left: Any, right: Any) -> bool:
  """Equality never fails, whatever the operand types"""
  return is_equal(left, right)


def lox_ne(op: Token, left: Any, right: Any) -> bool:
  return not is_equal(left, right)


# ============================================================================
# UNARY
# ============================================================================

def lox_negate(op: Token, operand: Any) -> float:
  check_number_operand(op, operand)
  return -operand


def lox_not(op: Token, operand: Any) -> bool:
  return not is_truthy(operand)


BINARY_OPERATORS: Dict[TokenType, Callable[[Token, Any, Any], Any]] = {
    TokenType.PLUS: lox_add,
    TokenType.MINUS: lox_sub,
    TokenType.STAR: lox_mul,
    TokenType.SLASH: lox_div,
    TokenType.GREATER: lox_gt,
    TokenType.GREATER_EQUAL: lox_ge,
    TokenType.LESS: lox_lt,
    TokenType.LESS_EQUAL: lox_le,
    TokenType.EQUAL_EQUAL: lox_eq,
    TokenType.BANG_EQUAL: lox_ne,
}

UNARY_OPERATORS: Dict[TokenType, Callable[[Token, Any], Any]] = {
    TokenType.MINUS: lox_negate,
    TokenType.BANG: lox_not,
}
