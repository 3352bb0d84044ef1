import unittest
from unittest import mock

from lox import syntax
from lox.diagnostics import Report
from lox.front_end import parse_text
from lox.ontology import END
from lox.scanner import scan_text

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()

def _kinds(tokens):
	return [t.kind for t in tokens]

class ScannerTests(unittest.TestCase):

	def setUp(self) -> None:
		self.report = Silence()

	def test_simple_declaration(self):
		tokens = scan_text("var x = 1.5; // ignore me", None, self.report)
		self.assertEqual(["VAR", "identifier", "=", "number", ";", END], _kinds(tokens))
		self.assertEqual(1.5, tokens[3].literal)
		self.assertEqual("x", tokens[1].lexeme)
		assert self.report.ok()

	def test_integers_are_floats(self):
		number = scan_text("42", None, self.report)[0]
		self.assertIsInstance(number.literal, float)
		self.assertEqual(42.0, number.literal)

	def test_two_character_operators(self):
		tokens = scan_text("! != = == > >= < <=", None, self.report)
		self.assertEqual(["!", "!=", "=", "==", ">", ">=", "<", "<=", END], _kinds(tokens))

	def test_reserved_words(self):
		tokens = scan_text("class fn static super this orchid", None, self.report)
		self.assertEqual(["CLASS", "FN", "STATIC", "SUPER", "THIS", "identifier", END], _kinds(tokens))

	def test_line_numbers(self):
		tokens = scan_text('a\n"two\nlines"\nb', None, self.report)
		self.assertEqual([1, 2, 4, 4], [t.line for t in tokens])
		self.assertEqual("two\nlines", tokens[1].literal)

	def test_unterminated_string(self):
		scan_text('print "oops', None, self.report)
		self.assertEqual(1, len(self.report.issues))
		self.assertIn("Unterminated string", self.report.issues[0].intro)

	def test_stray_character_does_not_stop_the_scan(self):
		tokens = scan_text("a @ b", None, self.report)
		self.assertEqual(["identifier", "identifier", END], _kinds(tokens))
		self.assertEqual(1, len(self.report.issues))

class ParserTests(unittest.TestCase):

	def setUp(self) -> None:
		self.report = Silence()

	def parse(self, text):
		statements = parse_text(text, None, self.report)
		assert self.report.ok(), [i.intro for i in self.report.issues]
		return statements

	def parse_expr(self, text) -> syntax.Expr:
		[stmt] = self.parse(text)
		assert isinstance(stmt, syntax.Expression)
		return stmt.expr

	def test_precedence(self):
		expr = self.parse_expr("1 + 2 * 3;")
		self.assertIsInstance(expr, syntax.Binary)
		self.assertEqual("+", expr.op.kind)
		self.assertIsInstance(expr.rhs, syntax.Binary)
		self.assertEqual("*", expr.rhs.op.kind)

	def test_left_associative(self):
		expr = self.parse_expr("1 - 2 - 3;")
		self.assertEqual("-", expr.op.kind)
		self.assertIsInstance(expr.lhs, syntax.Binary)
		self.assertIsInstance(expr.rhs, syntax.Literal)

	def test_logical_operators_are_their_own_node(self):
		expr = self.parse_expr("a or b and c;")
		self.assertIsInstance(expr, syntax.Logical)
		self.assertEqual("OR", expr.op.kind)
		self.assertIsInstance(expr.rhs, syntax.Logical)

	def test_assignment_is_right_associative(self):
		expr = self.parse_expr("a = b = 1;")
		self.assertIsInstance(expr, syntax.Assign)
		self.assertIsInstance(expr.value, syntax.Assign)

	def test_property_assignment_becomes_set(self):
		expr = self.parse_expr("point.x = 3;")
		self.assertIsInstance(expr, syntax.Set)
		self.assertEqual("x", expr.name.lexeme)

	def test_call_chain(self):
		expr = self.parse_expr("a.b(1, 2).c;")
		self.assertIsInstance(expr, syntax.Get)
		self.assertIsInstance(expr.obj, syntax.Call)
		self.assertEqual(2, len(expr.obj.args))

	def test_semicolons_are_optional_after_simple_statements(self):
		statements = self.parse("var a = 1 print a a = 2")
		self.assertEqual([syntax.Var, syntax.Print, syntax.Expression], [type(s) for s in statements])

	def test_for_loop_desugars(self):
		[outer] = self.parse("for (var i = 0; i < 3; i = i + 1) print i;")
		self.assertIsInstance(outer, syntax.Block)
		init, loop = outer.stmts
		self.assertIsInstance(init, syntax.Var)
		self.assertIsInstance(loop, syntax.While)
		self.assertIsInstance(loop.body, syntax.Block)
		body, increment = loop.body.stmts
		self.assertIsInstance(body, syntax.Print)
		self.assertIsInstance(increment.expr, syntax.Assign)

	def test_bare_for_loop_is_infinite(self):
		[loop] = self.parse("for (;;) {}")
		self.assertIsInstance(loop, syntax.While)
		self.assertIs(True, loop.cond.value)

	def test_class_declaration(self):
		[cls] = self.parse("class B : A { init(x) {} static make() { return B(1); } speak() {} }")
		self.assertIsInstance(cls, syntax.Class)
		self.assertEqual("A", cls.superclass.name.lexeme)
		self.assertEqual(["init", "speak"], [m.name.lexeme for m in cls.methods])
		self.assertEqual(["make"], [m.name.lexeme for m in cls.static_methods])

	def test_anonymous_function(self):
		expr = self.parse_expr("fn (a, b) { return a + b; };")
		self.assertIsInstance(expr, syntax.AnonymousFunction)
		self.assertEqual(["a", "b"], [p.lexeme for p in expr.params])
		self.assertIsInstance(expr.body[0], syntax.Return)

	def test_super_expression(self):
		expr = self.parse_expr("super.greet();")
		self.assertIsInstance(expr.callee, syntax.Super)
		self.assertEqual("greet", expr.callee.method.lexeme)

class ParseErrorTests(unittest.TestCase):

	def setUp(self) -> None:
		self.report = Silence()

	def intros(self):
		return [i.intro for i in self.report.issues]

	def test_failure_yields_none(self):
		self.assertIsNone(parse_text("print (1;", None, self.report))
		self.assertIn("Expect ')' after expression.", self.intros()[0])

	def test_recovery_finds_several_errors(self):
		parse_text("print (1;\nvar = 2;\nprint 3;", None, self.report)
		intros = self.intros()
		self.assertEqual(2, len(intros))
		self.assertIn("Expect variable name.", intros[1])

	def test_error_at_end(self):
		parse_text("print 1 +", None, self.report)
		self.assertIn("at end", self.intros()[0])

	def test_invalid_assignment_target(self):
		parse_text("a + b = 3;", None, self.report)
		self.assertEqual(1, len(self.report.issues))
		self.assertIn("Invalid assignment target.", self.intros()[0])

	def test_return_needs_semicolon(self):
		parse_text("fun f() { return 1 }", None, self.report)
		self.assertIn("Expect ';' after return value.", self.intros()[0])

	def test_unclosed_block(self):
		parse_text("{ print 1;", None, self.report)
		self.assertIn("Expect '}' after block.", self.intros()[0])

if __name__ == '__main__':
	unittest.main()
