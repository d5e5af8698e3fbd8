"""
Parser tests: precedence, statements, desugaring and panic-mode recovery
"""

import pytest
from error_handling import ErrorReporter, SYNTAX_ERROR
from parsing import Parser
from printer import print_expr
from scanning import TokenType, scan
import syntax as ast


def parse(source, reporter=None):
  return Parser(scan(source), reporter).parse()


def parse_expr(source):
  return Parser(scan(source)).parse_expression()


class TestExpressionParsing:
  """Precedence and associativity, checked through the printer"""

  @pytest.mark.parametrize("source,expected", [
    ("1 + 2 * 3", "(+ 1 (* 2 3))"),
    ("(1 + 2) * 3", "(* (group (+ 1 2)) 3)"),
    ("1 - 2 - 3", "(- (- 1 2) 3)"),
    ("8 / 4 / 2", "(/ (/ 8 4) 2)"),
    ("-a - b", "(- (- a) b)"),
    ("!!true", "(! (! true))"),
    ("!true == false", "(== (! true) false)"),
    ("1 < 2 == 3 >= 4", "(== (< 1 2) (>= 3 4))"),
    ("a or b and c", "(or a (and b c))"),
    ("a and b or c", "(or (and a b) c)"),
    ("a = b = c", "(= a (= b c))"),
    ("a = 1 + 2", "(= a (+ 1 2))"),
    ('"s" + nil', '(+ "s" nil)'),
  ])
  def test_precedence(self, source, expected):
    assert print_expr(parse_expr(source)) == expected

  def test_literal_values(self):
    assert parse_expr("12.5") == ast.Literal(12.5)
    assert parse_expr("true") == ast.Literal(True)
    assert parse_expr("false") == ast.Literal(False)
    assert parse_expr("nil") == ast.Literal(None)
    assert parse_expr('"hi"') == ast.Literal("hi")

  def test_binary_node_shape(self):
    expr = parse_expr("1 + 2")
    assert isinstance(expr, ast.Binary)
    assert expr.operator.type == TokenType.PLUS
    assert expr.left == ast.Literal(1.0)
    assert expr.right == ast.Literal(2.0)

  def test_logical_node_for_and_or(self):
    assert isinstance(parse_expr("a or b"), ast.Logical)
    assert isinstance(parse_expr("a and b"), ast.Logical)

  def test_assignment_node(self):
    expr = parse_expr("x = 3")
    assert isinstance(expr, ast.Assign)
    assert expr.name.lexeme == "x"
    assert expr.value == ast.Literal(3.0)

  def test_trailing_tokens_rejected(self):
    assert parse_expr("1 2") is None


class TestStatementParsing:
  """Declarations and statements"""

  def test_print_statement(self):
    assert parse("print 1;") == [ast.Print(ast.Literal(1.0))]

  def test_expression_statement(self):
    [stmt] = parse("1 + 2;")
    assert isinstance(stmt, ast.Expression)

  def test_var_with_and_without_initializer(self):
    first, second = parse("var a = 1; var b;")
    assert first.name.lexeme == "a"
    assert first.initializer == ast.Literal(1.0)
    assert second.name.lexeme == "b"
    assert second.initializer is None

  def test_block_holds_statements_in_order(self):
    [block] = parse("{ var a = 1; print a; }")
    assert isinstance(block, ast.Block)
    assert isinstance(block.statements, tuple)
    assert [type(s) for s in block.statements] == [ast.Var, ast.Print]

  def test_nested_blocks(self):
    [outer] = parse("{ { print 1; } }")
    [inner] = outer.statements
    assert inner == ast.Block((ast.Print(ast.Literal(1.0)),))

  def test_if_else(self):
    [stmt] = parse("if (a) print 1; else print 2;")
    assert isinstance(stmt, ast.If)
    assert stmt.then_branch == ast.Print(ast.Literal(1.0))
    assert stmt.else_branch == ast.Print(ast.Literal(2.0))

  def test_if_without_else(self):
    [stmt] = parse("if (a) print 1;")
    assert stmt.else_branch is None

  def test_dangling_else_binds_to_nearest_if(self):
    [stmt] = parse("if (a) if (b) print 1; else print 2;")
    assert stmt.else_branch is None
    assert stmt.then_branch.else_branch == ast.Print(ast.Literal(2.0))

  def test_while(self):
    [stmt] = parse("while (x) x = x - 1;")
    assert isinstance(stmt, ast.While)
    assert isinstance(stmt.body, ast.Expression)

  def test_empty_program(self):
    assert parse("") == []


class TestForDesugaring:
  """for loops become blocks around a while loop"""

  def test_matches_hand_written_loop(self):
    desugared = parse("for (var i = 0; i < 3; i = i + 1) print i;")
    hand_written = parse("{ var i = 0; while (i < 3) { print i; i = i + 1; } }")
    assert desugared == hand_written

  def test_no_clauses(self):
    [stmt] = parse("for (;;) print 1;")
    assert stmt == ast.While(ast.Literal(True), ast.Print(ast.Literal(1.0)))

  def test_expression_initializer(self):
    [stmt] = parse("for (i = 0; i < 1;) print i;")
    assert isinstance(stmt, ast.Block)
    initializer, loop = stmt.statements
    assert isinstance(initializer, ast.Expression)
    assert isinstance(loop, ast.While)
    assert isinstance(loop.body, ast.Print)

  def test_increment_only(self):
    [stmt] = parse("for (; x; x = nil) print x;")
    assert isinstance(stmt, ast.While)
    body, increment = stmt.body.statements
    assert isinstance(body, ast.Print)
    assert isinstance(increment.expression, ast.Assign)


class TestParseErrors:
  """Syntax errors and panic-mode recovery"""

  @pytest.fixture
  def reporter(self):
    return ErrorReporter()

  def test_missing_semicolon_at_end(self, reporter):
    parse("print 1", reporter)
    [diag] = reporter.diagnostics
    assert diag.kind == SYNTAX_ERROR
    assert diag.location == " at end"
    assert diag.message == "Expect ';' after value."

  def test_expect_expression(self, reporter):
    parse("print ;", reporter)
    [diag] = reporter.diagnostics
    assert diag.location == " at ';'"
    assert diag.message == "Expect expression."

  def test_missing_close_paren(self, reporter):
    parse("print (1 + 2;", reporter)
    assert reporter.diagnostics[0].message == "Expect ')' after expression."

  def test_missing_variable_name(self, reporter):
    parse("var = 1;", reporter)
    assert reporter.diagnostics[0].message == "Expect variable name."

  def test_unclosed_block(self, reporter):
    parse("{ print 1;", reporter)
    [diag] = reporter.diagnostics
    assert diag.message == "Expect '}' after block."
    assert diag.location == " at end"

  def test_if_messages(self, reporter):
    parse("if 1) print 1;", reporter)
    assert reporter.diagnostics[0].message == "Expect '(' after 'if'."

  def test_two_errors_keep_valid_statements_in_order(self, reporter):
    statements = parse("print 0;\nprint 1 +;\nvar = 3;\nprint 2;", reporter)
    assert len(reporter.diagnostics) == 2
    assert [d.line for d in reporter.diagnostics] == [2, 3]
    assert statements == [ast.Print(ast.Literal(0.0)), ast.Print(ast.Literal(2.0))]

  def test_failed_declaration_is_omitted(self, reporter):
    statements = parse("var 1; print 2;", reporter)
    assert None not in statements
    assert statements == [ast.Print(ast.Literal(2.0))]

  def test_synchronize_stops_before_statement_keyword(self, reporter):
    statements = parse("1 + ) print 5;", reporter)
    assert len(reporter.diagnostics) == 1
    assert statements == [ast.Print(ast.Literal(5.0))]

  def test_recovery_inside_block(self, reporter):
    [block] = parse("{ print ; print 1; }", reporter)
    assert len(reporter.diagnostics) == 1
    assert block.statements == (ast.Print(ast.Literal(1.0)),)

  def test_invalid_assignment_target_does_not_unwind(self, reporter):
    statements = parse("1 = 2; print 3;", reporter)
    [diag] = reporter.diagnostics
    assert diag.message == "Invalid assignment target."
    assert diag.location == " at '='"
    assert len(statements) == 2

  def test_grouped_target_is_invalid(self, reporter):
    parse("(a) = 1;", reporter)
    assert reporter.diagnostics[0].message == "Invalid assignment target."
