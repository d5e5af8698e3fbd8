"""
Error handling for the Lox interpreter
Exception classes, diagnostics and the reporting collaborator shared by every stage
"""

from typing import List, NamedTuple, Optional, TextIO
import sys

from scanning import Token, TokenType


SYNTAX_ERROR = "SyntaxError"
TYPE_ERROR = "TypeError"
NAME_ERROR = "NameError"


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class LoxError(Exception):
    """Base class for every error raised by the interpreter"""
    kind = "Error"

    def __init__(self, token: Token, message: str):
        self.token = token
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[line {self.token.line}] {self.kind}{describe_location(self.token)}: {self.message}"


class LoxParseError(LoxError):
    """Raised by the parser to unwind to the nearest declaration boundary"""
    kind = SYNTAX_ERROR


class LoxRuntimeError(LoxError):
    """Evaluation error, fatal to the current run only"""
    kind = "RuntimeError"


class LoxTypeError(LoxRuntimeError):
    """Operand type mismatch for an operator"""
    kind = TYPE_ERROR


class LoxNameError(LoxRuntimeError):
    """Read or assignment of a variable undefined on the whole scope chain"""
    kind = NAME_ERROR


# ============================================================================
# DIAGNOSTICS
# ============================================================================

class Diagnostic(NamedTuple):
    """One reported error"""
    kind: str
    line: int
    location: str
    message: str


def describe_location(token: Token) -> str:
    """Render where a token-level error happened"""
    if token.type == TokenType.EOF:
        return " at end"
    return f" at '{token.lexeme}'"


def get_source_line(source_text: str, line_num: int) -> Optional[str]:
    """Get the text of a 1-based source line, if it exists"""
    lines = source_text.split('\n')
    if 1 <= line_num <= len(lines):
        return lines[line_num - 1]
    return None


def format_diagnostic(diagnostic: Diagnostic, source_text: Optional[str] = None) -> str:
    """Format a diagnostic, followed by the offending source line when known"""
    error_msg = f"[line {diagnostic.line}] Error{diagnostic.location}: {diagnostic.message}"

    if source_text is not None:
        source_line = get_source_line(source_text, diagnostic.line)
        if source_line is not None and source_line.strip():
            error_msg += f"\n{diagnostic.line:4d} | {source_line}"

    return error_msg


# ============================================================================
# REPORTERS
# ============================================================================

class ErrorReporter:
    """Collects diagnostics for one session

    ``report`` is the single sink; the other entry points render a location
    and classify the error before delegating to it.
    """

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []
        self.source: Optional[str] = None

    def begin(self, source: str) -> None:
        """Reset transient error state before a new run"""
        self.diagnostics = []
        self.source = source

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    @property
    def had_syntax_error(self) -> bool:
        return any(d.kind == SYNTAX_ERROR for d in self.diagnostics)

    @property
    def had_runtime_error(self) -> bool:
        return any(d.kind != SYNTAX_ERROR for d in self.diagnostics)

    def report(self, line: int, location: str, message: str, kind: str = SYNTAX_ERROR) -> None:
        self.diagnostics.append(Diagnostic(kind, line, location, message))

    def error(self, line: int, message: str) -> None:
        """Scan-time error on a raw line"""
        self.report(line, "", message)

    def token_error(self, token: Token, message: str) -> None:
        """Parse-time error at a token"""
        self.report(token.line, describe_location(token), message)

    def runtime_error(self, error: LoxRuntimeError) -> None:
        """Evaluation-time error, classified by its exception type"""
        self.report(error.token.line, describe_location(error.token), error.message, error.kind)


class ConsoleErrorReporter(ErrorReporter):
    """Reporter that also prints each diagnostic as it arrives"""

    def __init__(self, stream: Optional[TextIO] = None, show_context: bool = True):
        super().__init__()
        self.stream = stream
        self.show_context = show_context

    def report(self, line: int, location: str, message: str, kind: str = SYNTAX_ERROR) -> None:
        super().report(line, location, message, kind)
        source = self.source if self.show_context else None
        print(format_diagnostic(self.diagnostics[-1], source), file=self.stream or sys.stderr)
