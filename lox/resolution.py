"""
Static scope resolution goes here.
By the time this pass is finished, every local variable reference knows
how many frames out from the point of use its declaration lives.
References that resolve nowhere are left for the global scope at run-time.

This pass is also the sole place to detect several static errors.
Those get reported, not raised, so that one pass can find several.
"""
from enum import Enum
from typing import Iterable, Mapping, Union
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report
from .ontology import Token

class Yuck(Exception):
	"""
	The first argument will be the name of the phase fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class FunctionType(Enum):
	NONE = "none"
	FUNCTION = "function"
	METHOD = "method"
	INITIALIZER = "initializer"

class ClassType(Enum):
	NONE = "none"
	CLASS = "class"
	SUBCLASS = "subclass"

REFERENCE = Union[syntax.Variable, syntax.Assign, syntax.This, syntax.Super]
SideTable = Mapping[syntax.Expr, int]

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def tour(self, items:Iterable):
		for i in items:
			self.visit(i)

	def visit_Literal(self, expr:syntax.Literal): pass

	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.expr)

	def visit_Unary(self, expr:syntax.Unary):
		self.visit(expr.expr)

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.callee)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		# Property names are dynamic: Only the object gets resolved.
		self.visit(expr.obj)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.obj)

	def visit_Expression(self, stmt:syntax.Expression):
		self.visit(stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		self.visit(stmt.expr)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.cond)
		self.visit(stmt.then_branch)
		if stmt.else_branch is not None: self.visit(stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.cond)
		self.visit(stmt.body)

class Resolver(TopDown):
	"""
	A stack of scopes, innermost last. Each maps a name to whether
	its declaration is finished. The global scope is never on the stack.
	"""
	_scopes: list[dict[str, bool]]
	_locals: dict[syntax.Expr, int]

	def __init__(self, report:Report):
		self.report = report
		self._scopes = []
		self._locals = {}
		self._current_function = FunctionType.NONE
		self._current_class = ClassType.NONE

	def resolve(self, statements:Iterable[syntax.Stmt]) -> SideTable:
		self.tour(statements)
		return self._locals

	# Scope mechanics:

	def _begin_scope(self):
		self._scopes.append({})

	def _end_scope(self):
		self._scopes.pop()

	def _declare(self, name:Token):
		if not self._scopes: return
		scope = self._scopes[-1]
		if name.lexeme in scope:
			self.report.static_error(name, "Already a variable with this name in this scope.")
		scope[name.lexeme] = False

	def _define(self, name:Token):
		if not self._scopes: return
		self._scopes[-1][name.lexeme] = True

	def _resolve_local(self, expr:REFERENCE, name:Token):
		for depth, scope in enumerate(reversed(self._scopes)):
			if name.lexeme in scope:
				self._locals[expr] = depth
				return

	def _resolve_function(self, function:syntax.Function, kind:FunctionType):
		enclosing_function = self._current_function
		self._current_function = kind
		self._begin_scope()
		for param in function.params:
			self._declare(param)
			self._define(param)
		self.tour(function.body)
		self._end_scope()
		self._current_function = enclosing_function

	# Statements:

	def visit_Block(self, stmt:syntax.Block):
		self._begin_scope()
		self.tour(stmt.stmts)
		self._end_scope()

	def visit_Var(self, stmt:syntax.Var):
		self._declare(stmt.name)
		if stmt.initializer is not None:
			self.visit(stmt.initializer)
		self._define(stmt.name)

	def visit_Function(self, stmt:syntax.Function):
		# Defined before the body resolves, so the function may call itself.
		self._declare(stmt.name)
		self._define(stmt.name)
		self._resolve_function(stmt, FunctionType.FUNCTION)

	def visit_Return(self, stmt:syntax.Return):
		if self._current_function is FunctionType.NONE:
			self.report.static_error(stmt.keyword, "Can't return from top-level code.")
		if stmt.value is not None:
			if self._current_function is FunctionType.INITIALIZER:
				self.report.static_error(stmt.keyword, "Can't return a value from an initializer.")
			self.visit(stmt.value)

	def visit_Class(self, stmt:syntax.Class):
		enclosing_class = self._current_class
		self._current_class = ClassType.CLASS
		self._declare(stmt.name)
		self._define(stmt.name)

		superclass = stmt.superclass
		if superclass is not None:
			if superclass.name.lexeme == stmt.name.lexeme:
				self.report.static_error(superclass.name, "A class can't inherit from itself.")
			self._current_class = ClassType.SUBCLASS
			self.visit(superclass)
			self._begin_scope()
			self._scopes[-1]["super"] = True

		self._begin_scope()
		self._scopes[-1]["this"] = True
		for method in stmt.methods:
			kind = FunctionType.INITIALIZER if method.name.lexeme == "init" else FunctionType.METHOD
			self._resolve_function(method, kind)
		for method in stmt.static_methods:
			self._resolve_function(method, FunctionType.METHOD)
		self._end_scope()

		if superclass is not None: self._end_scope()
		self._current_class = enclosing_class

	# Expressions:

	def visit_Variable(self, expr:syntax.Variable):
		if self._scopes and self._scopes[-1].get(expr.name.lexeme) is False:
			self.report.static_error(expr.name, "Can't read local variable in its own initializer.")
		self._resolve_local(expr, expr.name)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name)

	def visit_This(self, expr:syntax.This):
		if self._current_class is ClassType.NONE:
			self.report.static_error(expr.keyword, "Can't use 'this' outside of a class.")
			return
		self._resolve_local(expr, expr.keyword)

	def visit_Super(self, expr:syntax.Super):
		if self._current_class is ClassType.NONE:
			self.report.static_error(expr.keyword, "Can't use 'super' outside of a class.")
		elif self._current_class is not ClassType.SUBCLASS:
			self.report.static_error(expr.keyword, "Can't use 'super' in a class with no superclass.")
		self._resolve_local(expr, expr.keyword)

	def visit_AnonymousFunction(self, expr:syntax.AnonymousFunction):
		self._resolve_function(expr, FunctionType.FUNCTION)

def resolve_words(statements:Iterable[syntax.Stmt], report:Report) -> SideTable:
	"""
	Resolve a whole program (or a whole REPL line) in one pass.
	The caller must check the report before doing anything with the result.
	"""
	return Resolver(report).resolve(statements)
