"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves: None is nil, and bool, float, and str mean what they say.
Special things like closures, classes, and instances need more help.
"""
from typing import Callable, Optional, Union
from .. import syntax
from ..environment import Environment
from ..ontology import Token
from .types import LoxCallable, ARGS, VALUE, UndefinedProperty

def is_truthy(value:VALUE) -> bool:
	""" Only nil and false are false. Zero and the empty string are true. """
	if value is None: return False
	if isinstance(value, bool): return value
	return True

def is_equal(a:VALUE, b:VALUE) -> bool:
	# Python thinks True == 1.0, but here different kinds of value never compare equal.
	if type(a) is not type(b): return False
	return a == b

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, float):
		text = repr(value)
		return text[:-2] if text.endswith(".0") else text
	return str(value)

###############################################################################

class NativeFunction(LoxCallable):
	""" A host-provided function. All it needs is a Python callable and an arity. """
	def __init__(self, arity:int, fn:Callable):
		self._arity = arity
		self._fn = fn

	def arity(self) -> int: return self._arity

	def call(self, interpreter, args: ARGS) -> VALUE:
		return self._fn(interpreter, *args)

	def __str__(self): return "<native fn>"

FUNCTION_SYNTAX = Union[syntax.Function, syntax.AnonymousFunction]

class Function(LoxCallable):
	""" The run-time manifestation of a function: a callable value tied to its natal environment. """
	def __init__(self, declaration:FUNCTION_SYNTAX, closure:Environment, is_initializer:bool):
		self._declaration = declaration
		self._closure = closure
		self.is_initializer = is_initializer

	def __str__(self):
		name = self._declaration.name
		return "<fn>" if name is None else "<fn %s>" % name.lexeme

	def arity(self) -> int: return len(self._declaration.params)

	def bind(self, instance:"Instance") -> "Function":
		""" Same declaration, but the closure gets one more frame: the one holding "this". """
		env = Environment(self._closure)
		env.define("this", instance)
		return Function(self._declaration, env, self.is_initializer)

	def call(self, interpreter, args: ARGS) -> VALUE:
		# The new frame links to the closure, not to the caller.
		env = Environment(self._closure)
		for param, arg in zip(self._declaration.params, args):
			env.define(param.lexeme, arg)
		outcome = interpreter.execute_block(self._declaration.body, env)
		if self.is_initializer:
			return self._closure.get_at(0, "this")
		if outcome is not None:
			return outcome.value

class LoxClass(LoxCallable):
	def __init__(self, name:str, superclass:Optional["LoxClass"], methods:dict[str, Function], static_methods:dict[str, Function]):
		self.name = name
		self.superclass = superclass
		self._methods = methods
		self._static_methods = static_methods
		# Static methods get bound to this, so within them "this" means the class-level state.
		self.meta_instance = Instance(self)

	def __str__(self): return self.name

	def find_method(self, name:str) -> Optional[Function]:
		klass = self
		while klass is not None:
			if name in klass._methods: return klass._methods[name]
			klass = klass.superclass

	def find_static_method(self, name:str) -> Optional[Function]:
		klass = self
		while klass is not None:
			if name in klass._static_methods: return klass._static_methods[name]
			klass = klass.superclass

	def arity(self) -> int:
		initializer = self.find_method("init")
		return 0 if initializer is None else initializer.arity()

	def call(self, interpreter, args: ARGS) -> "Instance":
		instance = Instance(self)
		initializer = self.find_method("init")
		if initializer is not None:
			initializer.bind(instance).call(interpreter, args)
		return instance

	def get(self, name:Token) -> VALUE:
		# Fields that static methods put on the meta-instance read like any others.
		if name.lexeme in self.meta_instance._fields:
			return self.meta_instance._fields[name.lexeme]
		method = self.find_static_method(name.lexeme)
		if method is None:
			raise UndefinedProperty(name, "Undefined property '%s'." % name.lexeme)
		return method.bind(self.meta_instance)

class Instance:
	def __init__(self, klass:LoxClass):
		self.klass = klass
		self._fields = {}

	def __str__(self): return "%s instance" % self.klass.name

	def get(self, name:Token) -> VALUE:
		if name.lexeme in self._fields:
			return self._fields[name.lexeme]
		method = self.klass.find_method(name.lexeme)
		if method is None:
			raise UndefinedProperty(name, "Undefined property '%s'." % name.lexeme)
		return method.bind(self)

	def set(self, name:Token, value:VALUE):
		self._fields[name.lexeme] = value
