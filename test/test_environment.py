"""
Tests for the scope chain
"""

import pytest
from environment import Environment
from error_handling import LoxNameError
from scanning import Token, TokenType


def name(text, line=1):
  return Token(TokenType.IDENTIFIER, text, None, line)


class TestEnvironment:

  @pytest.fixture
  def globals_env(self):
    env = Environment()
    env.define("a", 1.0)
    return env

  def test_define_and_get(self, globals_env):
    assert globals_env.get(name("a")) == 1.0

  def test_redefine_replaces(self, globals_env):
    globals_env.define("a", "again")
    assert globals_env.get(name("a")) == "again"

  def test_nil_binding_is_defined(self):
    env = Environment()
    env.define("x", None)
    assert "x" in env
    assert env.get(name("x")) is None

  def test_child_sees_enclosing(self, globals_env):
    assert globals_env.child().get(name("a")) == 1.0

  def test_shadowing(self, globals_env):
    inner = globals_env.child()
    inner.define("a", 2.0)
    assert inner.get(name("a")) == 2.0
    assert globals_env.get(name("a")) == 1.0

  def test_assign_updates_nearest_binding(self, globals_env):
    inner = globals_env.child().child()
    inner.assign(name("a"), 5.0)
    assert globals_env.get(name("a")) == 5.0
    assert "a" not in inner.values

  def test_get_undefined_raises(self, globals_env):
    with pytest.raises(LoxNameError) as excinfo:
      globals_env.child().get(name("missing", line=3))
    assert excinfo.value.message == "Undefined variable 'missing'."
    assert excinfo.value.token.line == 3

  def test_assign_never_creates(self, globals_env):
    with pytest.raises(LoxNameError):
      globals_env.assign(name("b"), 1.0)
    assert "b" not in globals_env

  def test_resolve(self, globals_env):
    inner = globals_env.child()
    assert inner.resolve("a") is globals_env
    assert inner.resolve("nope") is None

  def test_depth(self, globals_env):
    assert globals_env.depth == 0
    assert globals_env.child().child().depth == 2

  def test_visible_bindings_respect_shadowing(self, globals_env):
    globals_env.define("b", 2.0)
    inner = globals_env.child()
    inner.define("a", "inner")
    assert dict(inner.visible_bindings()) == {"a": "inner", "b": 2.0}
