"""
Recursive-descent parsing from a token list to the syntax tree.

Error recovery is panic-mode: A syntax error gets reported, the parser
throws away tokens until it reaches a plausible statement boundary,
and then carries on so that one run can turn up several problems.
"""
from pathlib import Path
from typing import Optional
from boozetools.parsing.interface import ParseError

from . import syntax
from .diagnostics import Report
from .ontology import Token, END
from .scanner import scan_text

MAX_ARGS = 255

class LoxParseError(ParseError):
	""" Signals a panic. The report already knows the details by the time this is raised. """
	pass

_STATEMENT_STARTERS = frozenset(["CLASS", "FUN", "VAR", "FOR", "IF", "WHILE", "PRINT", "RETURN"])
_EQUALITY = ("!=", "==")
_COMPARISON = (">", ">=", "<", "<=")

class LoxParser:
	def __init__(self, tokens:list[Token], report:Report):
		assert tokens and tokens[-1].kind == END
		self._tokens = tokens
		self._report = report
		self._current = 0

	def parse(self) -> list[syntax.Stmt]:
		statements = []
		while not self._is_at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		return statements

	# Declarations and statements:

	def _declaration(self) -> Optional[syntax.Stmt]:
		try:
			if self._match("CLASS"): return self._class_declaration()
			if self._match("FUN"): return self._function("function")
			if self._match("VAR"): return self._var_declaration()
			return self._statement()
		except LoxParseError:
			self._synchronize()
			return None

	def _class_declaration(self) -> syntax.Class:
		name = self._consume("identifier", "Expect class name.")
		superclass = None
		if self._match(":"):
			superclass = syntax.Variable(self._consume("identifier", "Expect superclass name."))
		self._consume("{", "Expect '{' before class body.")
		methods, static_methods = [], []
		while not self._check("}") and not self._is_at_end():
			if self._match("STATIC"): static_methods.append(self._function("static method"))
			else: methods.append(self._function("method"))
		self._consume("}", "Expect '}' after class body.")
		return syntax.Class(name, superclass, methods, static_methods)

	def _function(self, kind:str) -> syntax.Function:
		name = self._consume("identifier", "Expect %s name." % kind)
		self._consume("(", "Expect '(' after %s name." % kind)
		params = self._parameters()
		self._consume("{", "Expect '{' before %s body." % kind)
		return syntax.Function(name, params, self._block_statements())

	def _parameters(self) -> list[Token]:
		params = []
		if not self._check(")"):
			while True:
				if len(params) >= MAX_ARGS:
					self._report.parse_error(self._peek(), "Can't have more than %d parameters." % MAX_ARGS)
				params.append(self._consume("identifier", "Expect parameter name."))
				if not self._match(","): break
		self._consume(")", "Expect ')' after parameters.")
		return params

	def _var_declaration(self) -> syntax.Var:
		name = self._consume("identifier", "Expect variable name.")
		initializer = self._expression() if self._match("=") else None
		self._match(";")
		return syntax.Var(name, initializer)

	def _statement(self) -> syntax.Stmt:
		if self._match("IF"): return self._if_statement()
		if self._match("FOR"): return self._for_statement()
		if self._match("PRINT"): return self._print_statement()
		if self._match("RETURN"): return self._return_statement()
		if self._match("WHILE"): return self._while_statement()
		if self._match("{"): return syntax.Block(self._block_statements())
		return self._expression_statement()

	def _if_statement(self) -> syntax.If:
		self._consume("(", "Expect '(' after 'if'.")
		cond = self._expression()
		self._consume(")", "Expect ')' after if condition.")
		then_branch = self._statement()
		else_branch = self._statement() if self._match("ELSE") else None
		return syntax.If(cond, then_branch, else_branch)

	def _for_statement(self) -> syntax.Stmt:
		""" There is no For node: This desugars to a While inside a Block. """
		keyword = self._previous()
		self._consume("(", "Expect '(' after 'for'.")
		if self._match(";"): initializer = None
		elif self._match("VAR"): initializer = self._var_declaration()
		else: initializer = self._expression_statement()

		if self._check(";"): cond = syntax.Literal(True, keyword)
		else: cond = self._expression()
		self._consume(";", "Expect ';' after loop condition.")

		increment = None if self._check(")") else self._expression()
		self._consume(")", "Expect ')' after for clauses.")
		body = self._statement()

		if increment is not None:
			body = syntax.Block([body, syntax.Expression(increment)])
		body = syntax.While(cond, body)
		if initializer is not None:
			body = syntax.Block([initializer, body])
		return body

	def _print_statement(self) -> syntax.Print:
		keyword = self._previous()
		value = self._expression()
		self._match(";")
		return syntax.Print(keyword, value)

	def _return_statement(self) -> syntax.Return:
		keyword = self._previous()
		value = None if self._check(";") else self._expression()
		self._consume(";", "Expect ';' after return value.")
		return syntax.Return(keyword, value)

	def _while_statement(self) -> syntax.While:
		self._consume("(", "Expect '(' after 'while'.")
		cond = self._expression()
		self._consume(")", "Expect ')' after condition.")
		return syntax.While(cond, self._statement())

	def _expression_statement(self) -> syntax.Expression:
		expr = self._expression()
		self._match(";")
		return syntax.Expression(expr)

	def _block_statements(self) -> list[syntax.Stmt]:
		statements = []
		while not self._check("}") and not self._is_at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		self._consume("}", "Expect '}' after block.")
		return statements

	# Expressions, loosest binding first:

	def _expression(self) -> syntax.Expr:
		return self._assignment()

	def _assignment(self) -> syntax.Expr:
		expr = self._or()
		if self._match("="):
			equals = self._previous()
			value = self._assignment()
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			elif isinstance(expr, syntax.Get):
				return syntax.Set(expr.obj, expr.name, value)
			# Report, but no need to panic: The parser is not confused.
			self._report.parse_error(equals, "Invalid assignment target.")
		return expr

	def _or(self) -> syntax.Expr:
		expr = self._and()
		while self._match("OR"):
			op = self._previous()
			expr = syntax.Logical(expr, op, self._and())
		return expr

	def _and(self) -> syntax.Expr:
		expr = self._binary(_EQUALITY)
		while self._match("AND"):
			op = self._previous()
			expr = syntax.Logical(expr, op, self._binary(_EQUALITY))
		return expr

	_NEXT_TIER = {_EQUALITY: _COMPARISON, _COMPARISON: ("-", "+"), ("-", "+"): ("/", "*")}

	def _binary(self, operators) -> syntax.Expr:
		""" One method covers the four tiers of left-associative binary operators. """
		tighter = self._NEXT_TIER.get(operators)
		operand = (lambda: self._binary(tighter)) if tighter else self._unary
		expr = operand()
		while self._match(*operators):
			op = self._previous()
			expr = syntax.Binary(expr, op, operand())
		return expr

	def _unary(self) -> syntax.Expr:
		if self._match("!", "-"):
			op = self._previous()
			return syntax.Unary(op, self._unary())
		return self._call()

	def _call(self) -> syntax.Expr:
		expr = self._primary()
		while True:
			if self._match("("):
				expr = self._finish_call(expr)
			elif self._match("."):
				name = self._consume("identifier", "Expect property name after '.'.")
				expr = syntax.Get(expr, name)
			else:
				return expr

	def _finish_call(self, callee:syntax.Expr) -> syntax.Call:
		args = []
		if not self._check(")"):
			while True:
				if len(args) >= MAX_ARGS:
					self._report.parse_error(self._peek(), "Can't have more than %d arguments." % MAX_ARGS)
				args.append(self._expression())
				if not self._match(","): break
		paren = self._consume(")", "Expect ')' after arguments.")
		return syntax.Call(callee, paren, args)

	def _primary(self) -> syntax.Expr:
		token = self._peek()
		if self._match("FALSE"): return syntax.Literal(False, token)
		if self._match("TRUE"): return syntax.Literal(True, token)
		if self._match("NIL"): return syntax.Literal(None, token)
		if self._match("number", "string"): return syntax.Literal(token.literal, token)
		if self._match("THIS"): return syntax.This(token)
		if self._match("identifier"): return syntax.Variable(token)
		if self._match("SUPER"):
			self._consume(".", "Expect '.' after 'super'.")
			method = self._consume("identifier", "Expect superclass method name.")
			return syntax.Super(token, method)
		if self._match("FN"):
			self._consume("(", "Expect '(' after 'fn'.")
			params = self._parameters()
			self._consume("{", "Expect '{' before function body.")
			return syntax.AnonymousFunction(token, params, self._block_statements())
		if self._match("("):
			expr = self._expression()
			self._consume(")", "Expect ')' after expression.")
			return syntax.Grouping(expr)
		raise self._error(token, "Expect expression.")

	# Token-stream mechanics:

	def _match(self, *kinds) -> bool:
		if any(self._check(k) for k in kinds):
			self._advance()
			return True
		return False

	def _consume(self, kind:str, message:str) -> Token:
		if self._check(kind): return self._advance()
		raise self._error(self._peek(), message)

	def _check(self, kind:str) -> bool:
		return not self._is_at_end() and self._peek().kind == kind

	def _advance(self) -> Token:
		if not self._is_at_end(): self._current += 1
		return self._previous()

	def _is_at_end(self): return self._peek().kind == END
	def _peek(self) -> Token: return self._tokens[self._current]
	def _previous(self) -> Token: return self._tokens[self._current - 1]

	def _error(self, token:Token, message:str) -> LoxParseError:
		self._report.parse_error(token, message)
		return LoxParseError(token, message)

	def _synchronize(self):
		self._advance()
		while not self._is_at_end():
			if self._previous().kind == ";": return
			if self._peek().kind in _STATEMENT_STARTERS: return
			self._advance()

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[list[syntax.Stmt]]:
	""" Submit text to scanner and parser; hand back the statements, or None if anything went wrong. """
	assert isinstance(path, Path) or path is None
	tokens = scan_text(text, path, report)
	statements = LoxParser(tokens, report).parse()
	if report.ok():
		return statements
