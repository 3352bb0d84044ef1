"""
Turn source text into a list of tokens.

Each rule in the pattern table below is a named group; the scanner calls the
method of the same name (with a "scan_" prefix) whenever that rule matches.
"""
import re
import sys
from pathlib import Path
from typing import Optional

from .diagnostics import Report
from .location import start_segment, insert_token
from .ontology import Token, END

RESERVED = frozenset("""
	and class else false for fun fn if nil or print return static super this true var while
""".split())

_RULES = [
	("newline", r"\n"),
	("ignore", r"[ \t\r]+|//[^\n]*"),
	("real", r"\d+\.\d+"),
	("integer", r"\d+"),
	("string", r'"[^"]*"'),
	("unterminated", r'"[^"]*\Z'),
	("word", r"[A-Za-z_]\w*"),
	("punctuation", r"[!=<>]=?|[-(){},.;:+*/]"),
	("stray", r"."),
]
_PATTERN = re.compile("|".join("(?P<%s>%s)" % rule for rule in _RULES))

class Scanner:
	def __init__(self, text:str, path:Optional[Path], report:Report):
		self._text = text
		self._report = report
		self._line = 1
		self.tokens = []
		start_segment(path, text)

	def scan(self) -> list[Token]:
		for match in _PATTERN.finditer(self._text):
			self._match = match
			getattr(self, "scan_" + match.lastgroup)()
		self._emit(END, None, slice(len(self._text), len(self._text)))
		return self.tokens

	def _emit(self, kind, literal, where:slice=None):
		where = where or slice(*self._match.span())
		lexeme = self._text[where]
		self.tokens.append(Token(kind, lexeme, literal, self._line, insert_token(where)))

	def _complain(self, message):
		spot = insert_token(slice(*self._match.span()))
		self._report.lexical_error(spot, self._line, message)

	def scan_newline(self): self._line += 1

	def scan_ignore(self): pass

	def scan_real(self): self._emit("number", float(self._match.group()))

	def scan_integer(self): self._emit("number", float(self._match.group()))

	def scan_string(self):
		text = self._match.group()
		self._emit("string", text[1:-1])
		self._line += text.count("\n")

	def scan_unterminated(self):
		self._complain("Unterminated string.")
		self._line += self._match.group().count("\n")

	def scan_word(self):
		word = self._match.group()
		if word in RESERVED: self._emit(word.upper(), None)
		else: self._emit("identifier", None)

	def scan_punctuation(self):
		self._emit(sys.intern(self._match.group()), None)

	def scan_stray(self):
		self._complain("Unexpected character %r." % self._match.group())

def scan_text(text:str, path:Optional[Path], report:Report) -> list[Token]:
	return Scanner(text, path, report).scan()
