"""
I decided to factor out the run-time from the executive.
This is the overall control for a run: scan and parse, resolve, evaluate.
Each phase leaves its verdict in an explicit result rather than a global flag.
"""
import sys
import threading
from enum import Enum
from pathlib import Path
from typing import Optional, TextIO
from .. import syntax
from ..adapters.teletype_adapter import NATIVES
from ..diagnostics import Report
from ..front_end import parse_text
from ..resolution import resolve_words, Yuck, SideTable
from .evaluator import Interpreter
from .types import LoxRuntimeError

RECURSION_LIMIT = 25_000
STACK_SIZE = 256 * 1024 * 1024

class Outcome(Enum):
	OK = "ok"
	STATIC_ERROR = "static error"
	RUNTIME_ERROR = "runtime error"

def fresh_interpreter(stdout:TextIO=None, stdin:TextIO=None) -> Interpreter:
	return Interpreter(NATIVES, stdout=stdout, stdin=stdin)

def prepare(text:str, path:Optional[Path], report:Report) -> tuple[list[syntax.Stmt], SideTable]:
	""" Everything short of running. Raises Yuck naming the phase that found trouble. """
	statements = parse_text(text, path, report)
	if statements is None:
		assert report.sick()
		raise Yuck("parse")
	report.info("Parsed %d statement(s) from %s" % (len(statements), path or "<stdin>"))
	side_table = resolve_words(statements, report)
	if report.sick(): raise Yuck("resolve")
	report.info("Resolved %d local reference(s)" % len(side_table))
	return statements, side_table

def _on_a_deep_stack(fn, *args):
	"""
	Each Lox call costs a dozen or so Python frames, so the default limits
	would stop honest recursion at a depth of well under a hundred.
	Run fn on a thread with a roomy stack, then re-raise whatever it raised.
	"""
	if sys.getrecursionlimit() < RECURSION_LIMIT:
		sys.setrecursionlimit(RECURSION_LIMIT)
	result = {}
	def body():
		try: result["value"] = fn(*args)
		except Exception as ex: result["error"] = ex
	previous = threading.stack_size(STACK_SIZE)
	try:
		worker = threading.Thread(target=body, daemon=True)
		worker.start()
	finally:
		threading.stack_size(previous)
	worker.join()
	if "error" in result: raise result["error"]
	return result.get("value")

def run_program(statements:list[syntax.Stmt], side_table:SideTable, interpreter:Interpreter, report:Report) -> Outcome:
	interpreter.install(side_table)
	try:
		_on_a_deep_stack(interpreter.interpret, statements)
	except LoxRuntimeError as ex:
		report.runtime_error(ex)
		return Outcome.RUNTIME_ERROR
	return Outcome.OK

def run_text(text:str, path:Optional[Path], report:Report, interpreter:Interpreter) -> Outcome:
	try: statements, side_table = prepare(text, path, report)
	except Yuck: return Outcome.STATIC_ERROR
	return run_program(statements, side_table, interpreter, report)
