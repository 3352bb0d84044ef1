"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate semantic-values as it descends.
Nodes are never mutated after construction, and they keep default (identity) hashing:
The resolver's side-table is keyed by the very node objects, so two identical-looking
expressions at different places in the source are different keys.
"""
from typing import Any, Optional, Sequence
from .ontology import Phrase, Token

class Expr(Phrase): pass

class Stmt(Phrase): pass

###############################################################################

class Literal(Expr):
	def __init__(self, value: Any, token: Token):
		self.value, self._token = value, token
	def __str__(self): return "<Literal %r>" % self.value
	def left(self): return self._token.left()
	def right(self): return self._token.right()

class Grouping(Expr):
	def __init__(self, expr: Expr):
		self.expr = expr
	def left(self): return self.expr.left()
	def right(self): return self.expr.right()

class Unary(Expr):
	def __init__(self, op: Token, expr: Expr):
		self.op, self.expr = op, expr
	def left(self): return self.op.left()
	def right(self): return self.expr.right()

class Binary(Expr):
	def __init__(self, lhs: Expr, op: Token, rhs: Expr):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op.lexeme, self.rhs)
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()

class Logical(Binary): pass

class Variable(Expr):
	def __init__(self, name: Token):
		self.name = name
	def __str__(self): return "<ref:%s>" % self.name.lexeme
	def left(self): return self.name.left()
	def right(self): return self.name.right()

class Assign(Expr):
	def __init__(self, name: Token, value: Expr):
		self.name, self.value = name, value
	def left(self): return self.name.left()
	def right(self): return self.value.right()

class Call(Expr):
	def __init__(self, callee: Expr, paren: Token, args: Sequence[Expr]):
		self.callee, self.paren, self.args = callee, paren, args
	def __str__(self):
		return "%s(%s)" % (self.callee, ', '.join(map(str, self.args)))
	def left(self): return self.callee.left()
	def right(self): return self.paren.right()

class Get(Expr):
	def __init__(self, obj: Expr, name: Token):
		self.obj, self.name = obj, name
	def __str__(self): return "(%s.%s)" % (self.obj, self.name.lexeme)
	def left(self): return self.obj.left()
	def right(self): return self.name.right()

class Set(Expr):
	def __init__(self, obj: Expr, name: Token, value: Expr):
		self.obj, self.name, self.value = obj, name, value
	def left(self): return self.obj.left()
	def right(self): return self.value.right()

class This(Expr):
	def __init__(self, keyword: Token):
		self.keyword = keyword
	def __str__(self): return "<this>"
	def left(self): return self.keyword.left()
	def right(self): return self.keyword.right()

class Super(Expr):
	def __init__(self, keyword: Token, method: Token):
		self.keyword, self.method = keyword, method
	def __str__(self): return "<super.%s>" % self.method.lexeme
	def left(self): return self.keyword.left()
	def right(self): return self.method.right()

class AnonymousFunction(Expr):
	# A function literal: Same parts as a function statement, minus the name.
	name = None
	def __init__(self, keyword: Token, params: Sequence[Token], body: Sequence[Stmt]):
		self._keyword = keyword
		self.params, self.body = params, body
	def left(self): return self._keyword.left()
	def right(self): return self._keyword.right()

###############################################################################

class Expression(Stmt):
	def __init__(self, expr: Expr):
		self.expr = expr
	def left(self): return self.expr.left()
	def right(self): return self.expr.right()

class Print(Stmt):
	def __init__(self, keyword: Token, expr: Expr):
		self._keyword, self.expr = keyword, expr
	def left(self): return self._keyword.left()
	def right(self): return self.expr.right()

class Var(Stmt):
	def __init__(self, name: Token, initializer: Optional[Expr]):
		self.name, self.initializer = name, initializer
	def __repr__(self): return "{var %s}" % self.name.lexeme
	def left(self): return self.name.left()
	def right(self): return (self.initializer or self.name).right()

class Block(Stmt):
	def __init__(self, stmts: Sequence[Stmt]):
		self.stmts = stmts
	def left(self): return self.stmts[0].left()
	def right(self): return self.stmts[-1].right()

class If(Stmt):
	def __init__(self, cond: Expr, then_branch: Stmt, else_branch: Optional[Stmt]):
		self.cond, self.then_branch, self.else_branch = cond, then_branch, else_branch
	def left(self): return self.cond.left()
	def right(self): return (self.else_branch or self.then_branch).right()

class While(Stmt):
	def __init__(self, cond: Expr, body: Stmt):
		self.cond, self.body = cond, body
	def left(self): return self.cond.left()
	def right(self): return self.body.right()

class Function(Stmt):
	def __init__(self, name: Token, params: Sequence[Token], body: Sequence[Stmt]):
		self.name, self.params, self.body = name, params, body
	def __repr__(self):
		p = ", ".join(t.lexeme for t in self.params)
		return "{fun %s(%s)}" % (self.name.lexeme, p)
	def left(self): return self.name.left()
	def right(self): return self.name.right()

class Return(Stmt):
	def __init__(self, keyword: Token, value: Optional[Expr]):
		self.keyword, self.value = keyword, value
	def left(self): return self.keyword.left()
	def right(self): return (self.value or self.keyword).right()

class Class(Stmt):
	def __init__(self, name: Token, superclass: Optional[Variable], methods: Sequence[Function], static_methods: Sequence[Function]):
		self.name, self.superclass = name, superclass
		self.methods, self.static_methods = methods, static_methods
	def __repr__(self): return "{class %s}" % self.name.lexeme
	def left(self): return self.name.left()
	def right(self): return (self.superclass or self.name).right()
