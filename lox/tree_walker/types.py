"""
This module aims to express an interface agreement
between the evaluator and various kinds of data,
including the ways an evaluation can go wrong.
"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Sequence, Union
from ..ontology import Token

NATIVE_DATA = Union[None, bool, float, str]

class LoxCallable(ABC):
	""" Anything a call expression may call: Natives, user functions, and classes. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, interpreter, args: Sequence["VALUE"]) -> "VALUE": pass

VALUE = Union[NATIVE_DATA, LoxCallable, Any]
ARGS = Sequence[VALUE]

class Returning(NamedTuple):
	"""
	The outcome of executing a statement that hit a return.
	Plain completion is None. Blocks, ifs, and loops hand this straight up,
	and only the call boundary takes the value out.
	"""
	value: VALUE

###############################################################################

class LoxRuntimeError(Exception):
	""" Base of everything that can abort a run. Carries the guilty token for the report. """
	def __init__(self, token:Token, message:str):
		super().__init__(message)
		self.token = token
		self.message = message

class UndefinedVariable(LoxRuntimeError): pass

class UndefinedProperty(LoxRuntimeError): pass

class LoxTypeError(LoxRuntimeError): pass

class DivisionByZero(LoxRuntimeError): pass

class ArityMismatch(LoxRuntimeError):
	def __init__(self, token:Token, expected:int, got:int):
		super().__init__(token, "Expected %d arguments but got %d." % (expected, got))
		self.expected, self.got = expected, got

class StackOverflow(LoxRuntimeError): pass
