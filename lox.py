"""
Lox session control
Scan, parse and evaluate source text, reporting diagnostics through one collaborator
"""

from typing import List, Optional, TextIO
import sys

from error_handling import ConsoleErrorReporter, ErrorReporter
from interpreter import Interpreter
from parsing import Parser
from scanning import Scanner, Token
import syntax as ast


class LoxSession:
  """
  One interpreter session: a global scope chain plus an error reporter.

  The global scope survives between runs, so an interactive session can
  build on earlier lines; the error state is reset at the start of each run.
  """

  def __init__(self, reporter: Optional[ErrorReporter] = None, out: Optional[TextIO] = None,
               debug: bool = False):
    self.reporter = reporter if reporter is not None else ConsoleErrorReporter()
    self.debug = debug
    self.interpreter = Interpreter(out=out, debug=debug)

  def tokenize(self, source: str) -> List[Token]:
    """Scan source, reporting scan errors"""
    return Scanner(source, self.reporter.error, self.debug).scan_tokens()

  def parse(self, source: str) -> List[ast.Stmt]:
    """Scan and parse source, reporting syntax errors"""
    return Parser(self.tokenize(source), self.reporter, self.debug).parse()

  def run(self, source: str) -> bool:
    """
    Run source in this session.
    Returns True if any error occurred; nothing is evaluated after a syntax error.
    """
    self.reporter.begin(source)

    statements = self.parse(source)
    if self.reporter.had_error:
      return True

    self.interpreter.interpret(statements, self.reporter)
    return self.reporter.had_error

  @property
  def had_syntax_error(self) -> bool:
    return self.reporter.had_syntax_error

  @property
  def had_runtime_error(self) -> bool:
    return self.reporter.had_runtime_error


def run(source: str, reporter: Optional[ErrorReporter] = None,
        out: Optional[TextIO] = None) -> bool:
  """Run source in a fresh session; returns True if any error occurred"""
  return LoxSession(reporter, out).run(source)


def create_session(debug: bool = False, out: Optional[TextIO] = None,
                   stream: Optional[TextIO] = None) -> LoxSession:
  """Factory function returning a session that prints its diagnostics"""
  reporter = ConsoleErrorReporter(stream if stream is not None else sys.stderr)
  return LoxSession(reporter, out, debug)
