"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. The scanner makes tokens; everything downstream
treats them as read-only carriers of name and position.
"""
from typing import Any

END = "<END>"

class Phrase:
	def left(self) -> int:
		""" Return the index of the leftmost token of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the index of the rightmost token of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Token(Phrase):
	"""
	Representing one lexeme of source text.
	The kind is either a punctuation string, an upper-case reserved word,
	or one of "number", "string", "identifier", or END.
	"""
	spot: int  # zero-spot means synthesized or pre-defined.
	def __init__(self, kind:str, lexeme:str, literal:Any, line:int, spot:int=0):
		assert isinstance(lexeme, str)
		self.kind, self.lexeme, self.literal, self.line = kind, lexeme, literal, line
		self.spot = spot or 0
	def __repr__(self): return "<%s %r @%d>" % (self.kind, self.lexeme, self.line)
	def left(self): return self.spot
	def right(self): return self.spot

