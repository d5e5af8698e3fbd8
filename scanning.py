"""
Lox Scanner
Turns source text into a flat token list terminated by a single EOF token
"""

from typing import Any, Callable, List, Optional
from dataclasses import dataclass
from enum import Enum, auto
import re
import sys

from pyparsing import MatchFirst, ParserElement, Regex


class TokenType(Enum):
    """Every terminal category of the Lox lexical grammar"""
    # Single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


@dataclass(frozen=True)
class Token:
    """Lox token with its decoded literal and source line"""
    type: TokenType
    lexeme: str
    literal: Any
    line: int

    def __str__(self) -> str:
        return f"{self.type.name} {self.lexeme!r} {self.literal!r} @{self.line}"


KEYWORDS = {
    'and': TokenType.AND,
    'class': TokenType.CLASS,
    'else': TokenType.ELSE,
    'false': TokenType.FALSE,
    'for': TokenType.FOR,
    'fun': TokenType.FUN,
    'if': TokenType.IF,
    'nil': TokenType.NIL,
    'or': TokenType.OR,
    'print': TokenType.PRINT,
    'return': TokenType.RETURN,
    'super': TokenType.SUPER,
    'this': TokenType.THIS,
    'true': TokenType.TRUE,
    'var': TokenType.VAR,
    'while': TokenType.WHILE,
}

OPERATORS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '/': TokenType.SLASH,
    '*': TokenType.STAR,
    '!': TokenType.BANG,
    '!=': TokenType.BANG_EQUAL,
    '=': TokenType.EQUAL,
    '==': TokenType.EQUAL_EQUAL,
    '>': TokenType.GREATER,
    '>=': TokenType.GREATER_EQUAL,
    '<': TokenType.LESS,
    '<=': TokenType.LESS_EQUAL,
}

# Characters skipped between tokens (pyparsing default whitespace);
# anything else left unmatched is an error
WHITESPACE = " \r\t\n"

# Reporting callback for scan-time errors: (line, message)
ScanErrorCallback = Callable[[int, str], None]


def _create_lexeme_pattern() -> ParserElement:
    """Build the combined lexeme matcher, tried in priority order"""
    # Operators sorted by length so two-character forms win (longest match)
    operators_sorted = sorted(OPERATORS, key=len, reverse=True)
    operator_alternatives = "|".join(re.escape(op) for op in operators_sorted)

    pattern = MatchFirst([
        # Comments must be tried before '/'
        Regex(r'//[^\n]*'),
        # Strings may span lines; a missing closing quote eats the rest of input
        Regex(r'"[^"]*"?'),
        # No leading-dot or trailing-dot forms
        Regex(r'[0-9]+(?:\.[0-9]+)?'),
        Regex(r'[A-Za-z_][A-Za-z0-9_]*'),
        Regex(operator_alternatives),
    ])
    # Offsets must index the original text, so tabs are never expanded
    return pattern.parse_with_tabs()


LEXEME_PATTERN = _create_lexeme_pattern()


class Scanner:
    """Single-pass, error-tolerant Lox scanner

    Errors are handed to ``on_error`` and never abort scanning.
    """

    def __init__(self, source: str, on_error: Optional[ScanErrorCallback] = None,
                 debug: bool = False):
        self.source = source
        self.on_error = on_error
        self.debug = debug
        self.tokens: List[Token] = []
        self._offset = 0
        self._line = 1

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source and return the token list ending in EOF"""
        if self.debug:
            print(f"Scanning {len(self.source)} characters...", file=sys.stderr)

        for _, start, end in LEXEME_PATTERN.scan_string(self.source):
            self._skip_gap(start)
            self._add_lexeme(start, end)

        self._skip_gap(len(self.source))
        self.tokens.append(Token(TokenType.EOF, "", None, self._line))

        if self.debug:
            print(f"Scanned {len(self.tokens)} tokens", file=sys.stderr)
        return self.tokens

    def _skip_gap(self, stop: int) -> None:
        """Consume the unmatched text before ``stop``: whitespace or unknown characters"""
        while self._offset < stop:
            char = self.source[self._offset]
            if char == '\n':
                self._line += 1
            elif char not in WHITESPACE:
                self._error("Unexpected character.")
            self._offset += 1

    def _add_lexeme(self, start: int, end: int) -> None:
        """Classify one matched lexeme and append its token"""
        text = self.source[start:end]
        self._line += text.count('\n')
        self._offset = end

        if text.startswith('//'):
            return

        if text.startswith('"'):
            if len(text) < 2 or not text.endswith('"'):
                self._error("Unterminated string.")
                return
            self._add_token(TokenType.STRING, text, text[1:-1])
        elif text[0].isdigit():
            self._add_token(TokenType.NUMBER, text, float(text))
        elif text[0].isalpha() or text[0] == '_':
            self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER), text)
        else:
            self._add_token(OPERATORS[text], text)

    def _add_token(self, token_type: TokenType, text: str, literal: Any = None) -> None:
        self.tokens.append(Token(token_type, text, literal, self._line))

    def _error(self, message: str) -> None:
        if self.on_error is not None:
            self.on_error(self._line, message)


def scan(source: str, on_error: Optional[ScanErrorCallback] = None) -> List[Token]:
    """Scan Lox source code into tokens"""
    return Scanner(source, on_error).scan_tokens()
