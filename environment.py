"""
Lox Environment
Variable scopes chained to their enclosing scope, rooted at the global scope
"""

from typing import Any, Dict, Iterator, Optional, Tuple

from scanning import Token
from error_handling import LoxNameError


class Environment:
  """One lexical scope: its own bindings plus a link to the enclosing scope"""

  def __init__(self, enclosing: Optional['Environment'] = None):
    self.enclosing = enclosing
    self.values: Dict[str, Any] = {}

  def define(self, name: str, value: Any) -> None:
    """Bind name in this scope; an existing binding is silently replaced"""
    self.values[name] = value

  def get(self, name: Token) -> Any:
    """Look up a variable, walking outward to the global scope"""
    scope = self.resolve(name.lexeme)
    if scope is None:
      raise undefined_variable(name)
    return scope.values[name.lexeme]

  def assign(self, name: Token, value: Any) -> None:
    """Overwrite the nearest existing binding; never creates a new one"""
    scope = self.resolve(name.lexeme)
    if scope is None:
      raise undefined_variable(name)
    scope.values[name.lexeme] = value

  def resolve(self, name: str) -> Optional['Environment']:
    """Find the innermost scope on the chain that defines name"""
    scope = self
    while scope is not None:
      if name in scope.values:
        return scope
      scope = scope.enclosing
    return None

  def child(self) -> 'Environment':
    """Create a new scope nested inside this one"""
    return Environment(self)

  @property
  def depth(self) -> int:
    """Number of enclosing scopes; the global scope has depth 0"""
    depth = 0
    scope = self.enclosing
    while scope is not None:
      depth += 1
      scope = scope.enclosing
    return depth

  def visible_bindings(self) -> Iterator[Tuple[str, Any]]:
    """Bindings visible from this scope, inner definitions shadowing outer ones"""
    seen = set()
    scope = self
    while scope is not None:
      for name, value in scope.values.items():
        if name not in seen:
          seen.add(name)
          yield name, value
      scope = scope.enclosing

  def __contains__(self, name: str) -> bool:
    return self.resolve(name) is not None

  def __repr__(self) -> str:
    return f"Environment(depth={self.depth}, names={sorted(self.values)})"


def undefined_variable(name: Token) -> LoxNameError:
  """Build the error for a name missing from the whole scope chain"""
  return LoxNameError(name, f"Undefined variable '{name.lexeme}'.")
