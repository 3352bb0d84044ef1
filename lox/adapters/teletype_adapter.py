"""
The natives a host normally installs into the global scope:
a clock and some line-oriented console I/O.
Each reads and writes through the interpreter's own streams,
so a test can hand the interpreter a StringIO and see everything.
"""
import time
from ..tree_walker.values import NativeFunction, stringify

def _read_line(interpreter):
	line = interpreter.stdin.readline()
	if not line: return None  # End of input reads as nil.
	return line.rstrip("\n")

def clock(interpreter):
	return time.time()

def println(interpreter, value):
	print(stringify(value), file=interpreter.stdout)

def scan(interpreter):
	return _read_line(interpreter)

def prompt_for_input(interpreter, prompt):
	interpreter.stdout.write(stringify(prompt))
	interpreter.stdout.flush()
	return _read_line(interpreter)

NATIVES = {
	"clock": NativeFunction(0, clock),
	"println": NativeFunction(1, println),
	"scan": NativeFunction(0, scan),
	"input": NativeFunction(1, prompt_for_input),
}
