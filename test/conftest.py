"""
Test configuration for Lox interpreter tests
"""

import io
import sys
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from error_handling import ErrorReporter
from lox import LoxSession


class LoxRun:
  """Result of running a snippet: captured output plus the reporter"""

  def __init__(self, had_error, output, reporter):
    self.had_error = had_error
    self.output = output
    self.reporter = reporter

  @property
  def lines(self):
    return self.output.splitlines()

  @property
  def kinds(self):
    return [d.kind for d in self.reporter.diagnostics]

  @property
  def messages(self):
    return [d.message for d in self.reporter.diagnostics]


@pytest.fixture
def reporter():
  """A reporter that only collects diagnostics"""
  return ErrorReporter()


@pytest.fixture
def session(reporter):
  """A session writing program output to a StringIO"""
  return LoxSession(reporter, out=io.StringIO())


@pytest.fixture
def run_lox():
  """Run source in a fresh session and capture what it printed"""
  def run(source):
    out = io.StringIO()
    reporter = ErrorReporter()
    had_error = LoxSession(reporter, out=out).run(source)
    return LoxRun(had_error, out.getvalue(), reporter)

  return run


@pytest.fixture
def examples_dir():
  """Get the examples directory path"""
  return project_root / "examples"
