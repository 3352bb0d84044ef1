"""
The tree-walking evaluator proper.

Expressions evaluate to values. Statements execute to an outcome:
None for plain completion, or a Returning for a return on its way out
to the nearest call boundary. Anything that goes wrong raises a LoxRuntimeError,
which aborts the whole run.
"""
import sys
import operator
from typing import Iterable, Mapping, Optional, TextIO
from boozetools.support.foundation import Visitor
from .. import syntax
from ..environment import Environment
from ..ontology import Token
from .types import (
	VALUE, LoxCallable, Returning,
	LoxTypeError, ArityMismatch, DivisionByZero, UndefinedProperty, StackOverflow,
)
from .values import Function, LoxClass, Instance, is_truthy, is_equal, stringify

OUTCOME = Optional[Returning]

def _divide(a:float, b:float, op:Token) -> float:
	if b == 0.0: raise DivisionByZero(op, "Division by zero.")
	return a / b

ARITHMETIC = {
	"-" : operator.sub,
	"*" : operator.mul,
	">" : operator.gt,
	">=": operator.ge,
	"<" : operator.lt,
	"<=": operator.le,
}

def _check_number(op:Token, *operands):
	for operand in operands:
		if not isinstance(operand, float):
			plural = "s must be numbers" if len(operands) > 1 else " must be a number"
			raise LoxTypeError(op, "Operand%s." % plural)

class Interpreter(Visitor):
	"""
	The globals frame lives as long as the interpreter does,
	so a REPL session can keep one interpreter going across many lines.
	"""
	globals: Environment
	_environment: Environment
	_locals: dict[syntax.Expr, int]

	def __init__(self, natives:Mapping[str, LoxCallable]=(), *, stdout:TextIO=None, stdin:TextIO=None):
		self.globals = self._environment = Environment()
		self._locals = {}
		self.stdout = stdout or sys.stdout
		self.stdin = stdin or sys.stdin
		for name, native in dict(natives).items():
			self.globals.define(name, native)

	def install(self, side_table:Mapping[syntax.Expr, int]):
		""" Accept the resolver's depths for a freshly-resolved piece of program. """
		self._locals.update(side_table)

	def interpret(self, statements:Iterable[syntax.Stmt]):
		for stmt in statements:
			outcome = self.execute(stmt)
			assert outcome is None, "The resolver should have rejected a return at top level."

	def evaluate(self, expr:syntax.Expr) -> VALUE:
		return self.visit(expr)

	def execute(self, stmt:syntax.Stmt) -> OUTCOME:
		return self.visit(stmt)

	def execute_block(self, statements:Iterable[syntax.Stmt], environment:Environment) -> OUTCOME:
		previous = self._environment
		self._environment = environment
		try:
			for stmt in statements:
				outcome = self.execute(stmt)
				if outcome is not None: return outcome
		finally:
			self._environment = previous

	def _look_up(self, name:Token, expr:syntax.Expr) -> VALUE:
		depth = self._locals.get(expr)
		if depth is None: return self.globals.get(name)
		return self._environment.get_at(depth, name.lexeme)

	# Expressions:

	def visit_Literal(self, expr:syntax.Literal):
		return expr.value

	def visit_Grouping(self, expr:syntax.Grouping):
		return self.evaluate(expr.expr)

	def visit_Unary(self, expr:syntax.Unary):
		operand = self.evaluate(expr.expr)
		if expr.op.kind == "-":
			_check_number(expr.op, operand)
			return -operand
		assert expr.op.kind == "!", expr.op
		return not is_truthy(operand)

	def visit_Binary(self, expr:syntax.Binary):
		a = self.evaluate(expr.lhs)
		b = self.evaluate(expr.rhs)
		op = expr.op
		if op.kind == "==": return is_equal(a, b)
		if op.kind == "!=": return not is_equal(a, b)
		if op.kind == "+":
			if isinstance(a, float) and isinstance(b, float): return a + b
			if isinstance(a, str) or isinstance(b, str): return stringify(a) + stringify(b)
			raise LoxTypeError(op, "Operands must be two numbers or include a string.")
		_check_number(op, a, b)
		if op.kind == "/": return _divide(a, b, op)
		return ARITHMETIC[op.kind](a, b)

	def visit_Logical(self, expr:syntax.Logical):
		lhs = self.evaluate(expr.lhs)
		if expr.op.kind == "OR":
			if is_truthy(lhs): return lhs
		elif not is_truthy(lhs): return lhs
		return self.evaluate(expr.rhs)

	def visit_Variable(self, expr:syntax.Variable):
		return self._look_up(expr.name, expr)

	def visit_Assign(self, expr:syntax.Assign):
		value = self.evaluate(expr.value)
		depth = self._locals.get(expr)
		if depth is None: self.globals.assign(expr.name, value)
		else: self._environment.assign_at(depth, expr.name, value)
		return value

	def visit_This(self, expr:syntax.This):
		return self._look_up(expr.keyword, expr)

	def visit_Call(self, expr:syntax.Call):
		callee = self.evaluate(expr.callee)
		args = [self.evaluate(a) for a in expr.args]
		if not isinstance(callee, LoxCallable):
			raise LoxTypeError(expr.paren, "Can only call functions and classes.")
		if len(args) != callee.arity():
			raise ArityMismatch(expr.paren, callee.arity(), len(args))
		try: return callee.call(self, args)
		except RecursionError:
			# Only the innermost call sees this; the StackOverflow passes the rest untouched.
			raise StackOverflow(expr.paren, "Stack overflow.") from None

	def visit_Get(self, expr:syntax.Get):
		obj = self.evaluate(expr.obj)
		if isinstance(obj, (Instance, LoxClass)):
			return obj.get(expr.name)
		raise LoxTypeError(expr.name, "Only instances have properties.")

	def visit_Set(self, expr:syntax.Set):
		obj = self.evaluate(expr.obj)
		if not isinstance(obj, Instance):
			raise LoxTypeError(expr.name, "Only instances have fields.")
		value = self.evaluate(expr.value)
		obj.set(expr.name, value)
		return value

	def visit_Super(self, expr:syntax.Super):
		depth = self._locals[expr]
		superclass = self._environment.get_at(depth, "super")
		# The frame binding "this" is always just inside the one binding "super".
		instance = self._environment.get_at(depth - 1, "this")
		method = superclass.find_method(expr.method.lexeme)
		if method is None:
			raise UndefinedProperty(expr.method, "Undefined property '%s'." % expr.method.lexeme)
		return method.bind(instance)

	def visit_AnonymousFunction(self, expr:syntax.AnonymousFunction):
		return Function(expr, self._environment, False)

	# Statements:

	def visit_Expression(self, stmt:syntax.Expression):
		self.evaluate(stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		print(stringify(self.evaluate(stmt.expr)), file=self.stdout)

	def visit_Var(self, stmt:syntax.Var):
		value = None if stmt.initializer is None else self.evaluate(stmt.initializer)
		self._environment.define(stmt.name.lexeme, value)

	def visit_Block(self, stmt:syntax.Block):
		return self.execute_block(stmt.stmts, Environment(self._environment))

	def visit_If(self, stmt:syntax.If):
		if is_truthy(self.evaluate(stmt.cond)):
			return self.execute(stmt.then_branch)
		elif stmt.else_branch is not None:
			return self.execute(stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		while is_truthy(self.evaluate(stmt.cond)):
			outcome = self.execute(stmt.body)
			if outcome is not None: return outcome

	def visit_Function(self, stmt:syntax.Function):
		function = Function(stmt, self._environment, False)
		self._environment.define(stmt.name.lexeme, function)

	def visit_Return(self, stmt:syntax.Return):
		value = None if stmt.value is None else self.evaluate(stmt.value)
		return Returning(value)

	def visit_Class(self, stmt:syntax.Class):
		superclass = None
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass)
			if not isinstance(superclass, LoxClass):
				raise LoxTypeError(stmt.superclass.name, "Superclass must be a class.")

		self._environment.define(stmt.name.lexeme, None)
		outer = self._environment
		if superclass is not None:
			self._environment = Environment(outer)
			self._environment.define("super", superclass)

		methods = {
			m.name.lexeme: Function(m, self._environment, m.name.lexeme == "init")
			for m in stmt.methods
		}
		static_methods = {
			m.name.lexeme: Function(m, self._environment, False)
			for m in stmt.static_methods
		}
		klass = LoxClass(stmt.name.lexeme, superclass, methods, static_methods)

		self._environment = outer
		outer.assign(stmt.name, klass)
