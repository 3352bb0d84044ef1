import sys
from pathlib import Path
from typing import Any, Optional
from boozetools.support.failureprone import illustration

from .location import lookup_span, lookup_token
from .ontology import Phrase, Token, END

class TooManyIssues(Exception):
	pass

class Report:
	"""
	The one error-reporting capability the whole pipeline shares.
	Nothing here decides policy: The host looks at ok() or sick() after each phase.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	@property
	def issues(self): return tuple(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)

	# Methods the scanner and parser call:
	def lexical_error(self, spot:int, line:int, msg:str):
		self.issue(Pic("Error on line %d: %s" % (line, msg), [Annotation.at(spot)]))

	def parse_error(self, token:Token, msg:str):
		where = "at end" if token.kind == END else "at '%s'" % token.lexeme
		intro = "Error on line %d %s: %s" % (token.line, where, msg)
		self.issue(Pic(intro, [Annotation(token)]))

	# Method the resolver calls:
	def static_error(self, token:Token, msg:str):
		intro = "Error on line %d at '%s': %s" % (token.line, token.lexeme, msg)
		self.issue(Pic(intro, [Annotation(token, msg)]))

	# Method the executive calls when evaluation fails:
	def runtime_error(self, error):
		token = error.token
		intro = "Runtime error on line %d: %s" % (token.line, error.message)
		self.issue(Pic(intro, [Annotation(token)], [type(error).__name__]))

class Annotation:
	path: Optional[Path]
	slice: slice
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		self._span = lookup_span(*node.span())
		self.path = self._span.path
		self.slice = self._span.slice
		self.caption = caption

	@classmethod
	def at(cls, spot:int, caption:str=""):
		ann = cls.__new__(cls)
		ann._span = lookup_token(spot)
		ann.path, ann.slice, ann.caption = ann._span.path, ann._span.slice, caption
		return ann

	def illustrate(self):
		source = self._span.source
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(1, self.slice.stop - self.slice.start)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues:list[Any]):
	""" Emit all the issues to the console. """
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
