"""
Lox Parser
Recursive-descent parser with one method per precedence level and panic-mode recovery
"""

from typing import List, Optional, Tuple
import sys

from scanning import Token, TokenType
from error_handling import ErrorReporter, LoxParseError
import syntax as ast


# Tokens that start a new declaration; synchronization stops in front of them
STATEMENT_STARTERS = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})


class Parser:
    """Builds statements from a token list

    Syntax errors are reported to ``reporter`` as they are found. A failed
    declaration is skipped and left out of the result, so ``parse`` always
    returns whatever could be recovered.
    """

    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None,
                 debug: bool = False):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.debug = debug
        self.current = 0

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse(self) -> List[ast.Stmt]:
        """program → declaration* EOF"""
        statements = self._declarations_until(TokenType.EOF)

        if self.debug:
            print(f"Parsed {len(statements)} statements", file=sys.stderr)
        return statements

    def parse_expression(self) -> Optional[ast.Expr]:
        """Parse a single expression that must span the whole input"""
        try:
            expr = self._expression()
            self._consume(TokenType.EOF, "Expect end of expression.")
            return expr
        except LoxParseError:
            return None

    # ------------------------------------------------------------------
    # Declarations and statements
    # ------------------------------------------------------------------

    def _declarations_until(self, terminator: TokenType) -> List[ast.Stmt]:
        """Parse declarations until ``terminator`` (not consumed), recovering from errors"""
        statements = []
        while not self._check(terminator) and not self._is_at_end():
            stmt = self._declaration()
            if stmt is None:
                self._synchronize()
            else:
                statements.append(stmt)
        return statements

    def _declaration(self) -> Optional[ast.Stmt]:
        """Parse one declaration; None means it failed and was already reported"""
        try:
            if self._match(TokenType.VAR):
                return self._var_declaration()
            return self._statement()
        except LoxParseError as e:
            if self.debug:
                print(f"Recovering from: {e}", file=sys.stderr)
            return None

    def _var_declaration(self) -> ast.Stmt:
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self._expression()

        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return ast.Var(name, initializer)

    def _statement(self) -> ast.Stmt:
        if self._match(TokenType.FOR):
            return self._for_statement()
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.PRINT):
            return self._print_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.LEFT_BRACE):
            return ast.Block(self._block())
        return self._expression_statement()

    def _for_statement(self) -> ast.Stmt:
        """Desugar a for loop into an initializer block around a while loop"""
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()

        if increment is not None:
            body = ast.Block((body, ast.Expression(increment)))

        if condition is None:
            condition = ast.Literal(True)
        body = ast.While(condition, body)

        if initializer is not None:
            body = ast.Block((initializer, body))

        return body

    def _if_statement(self) -> ast.Stmt:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._statement()

        return ast.If(condition, then_branch, else_branch)

    def _print_statement(self) -> ast.Stmt:
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return ast.Print(value)

    def _while_statement(self) -> ast.Stmt:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self._statement()

        return ast.While(condition, body)

    def _block(self) -> Tuple[ast.Stmt, ...]:
        statements = self._declarations_until(TokenType.RIGHT_BRACE)
        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return tuple(statements)

    def _expression_statement(self) -> ast.Stmt:
        expr = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return ast.Expression(expr)

    # ------------------------------------------------------------------
    # Expressions, lowest precedence first
    # ------------------------------------------------------------------

    def _expression(self) -> ast.Expr:
        return self._assignment()

    def _assignment(self) -> ast.Expr:
        expr = self._or()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expr, ast.Variable):
                return ast.Assign(expr.name, value)

            # Reported but not raised: the parser is not confused
            self._error(equals, "Invalid assignment target.")

        return expr

    def _or(self) -> ast.Expr:
        expr = self._and()

        while self._match(TokenType.OR):
            operator = self._previous()
            right = self._and()
            expr = ast.Logical(expr, operator, right)

        return expr

    def _and(self) -> ast.Expr:
        expr = self._equality()

        while self._match(TokenType.AND):
            operator = self._previous()
            right = self._equality()
            expr = ast.Logical(expr, operator, right)

        return expr

    def _equality(self) -> ast.Expr:
        return self._left_associative(self._comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _comparison(self) -> ast.Expr:
        return self._left_associative(
            self._term,
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL
        )

    def _term(self) -> ast.Expr:
        return self._left_associative(self._factor, TokenType.MINUS, TokenType.PLUS)

    def _factor(self) -> ast.Expr:
        return self._left_associative(self._unary, TokenType.SLASH, TokenType.STAR)

    def _left_associative(self, operand, *operators: TokenType) -> ast.Expr:
        """Fold ``operand (op operand)*`` into a left-deep Binary tree"""
        expr = operand()

        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expr = ast.Binary(expr, operator, right)

        return expr

    def _unary(self) -> ast.Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            right = self._unary()
            return ast.Unary(operator, right)

        return self._primary()

    def _primary(self) -> ast.Expr:
        if self._match(TokenType.FALSE):
            return ast.Literal(False)
        if self._match(TokenType.TRUE):
            return ast.Literal(True)
        if self._match(TokenType.NIL):
            return ast.Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return ast.Literal(self._previous().literal)

        if self._match(TokenType.IDENTIFIER):
            return ast.Variable(self._previous())

        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return ast.Grouping(expr)

        raise self._error(self._peek(), "Expect expression.")

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _match(self, *types: TokenType) -> bool:
        """Consume the current token if it has any of ``types``"""
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, message: str) -> Token:
        if self._check(token_type):
            return self._advance()

        raise self._error(self._peek(), message)

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return token_type == TokenType.EOF
        return self._peek().type == token_type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _error(self, token: Token, message: str) -> LoxParseError:
        """Report a syntax error; the caller decides whether to raise it"""
        self.reporter.token_error(token, message)
        return LoxParseError(token, message)

    def _synchronize(self) -> None:
        """Discard tokens until a likely statement boundary"""
        self._advance()

        while not self._is_at_end():
            if self._previous().type == TokenType.SEMICOLON:
                return

            if self._peek().type in STATEMENT_STARTERS:
                return

            self._advance()

