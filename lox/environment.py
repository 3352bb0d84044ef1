"""
The canonical list-structured search: A chain of mutable frames.

Blocks, calls, and bound methods each push a frame whose enclosing link
is whatever frame was current (or captured) when it came to be.
Names only ever get added or re-bound; never removed.
"""
from typing import Any, Optional
from .ontology import Token
from .tree_walker.types import UndefinedVariable

class Environment:
	enclosing: Optional["Environment"]
	_bindings: dict[str, Any]

	def __init__(self, enclosing:Optional["Environment"]=None):
		self.enclosing = enclosing
		self._bindings = {}

	def __repr__(self):
		return "<Environment %s>" % ", ".join(self._bindings)

	def __contains__(self, name:str) -> bool:
		return name in self._bindings

	def define(self, name:str, value:Any):
		self._bindings[name] = value

	def get(self, token:Token) -> Any:
		env = self._find(token)
		return env._bindings[token.lexeme]

	def assign(self, token:Token, value:Any):
		env = self._find(token)
		env._bindings[token.lexeme] = value

	def _find(self, token:Token) -> "Environment":
		env = self
		while env is not None:
			if token.lexeme in env._bindings: return env
			env = env.enclosing
		raise UndefinedVariable(token, "Undefined variable '%s'." % token.lexeme)

	# The resolver computed the depth, so these trust it completely.

	def get_at(self, depth:int, name:str) -> Any:
		return self.ancestor(depth)._bindings[name]

	def assign_at(self, depth:int, token:Token, value:Any):
		self.ancestor(depth)._bindings[token.lexeme] = value

	def ancestor(self, depth:int) -> "Environment":
		env = self
		for _ in range(depth):
			env = env.enclosing
		return env
