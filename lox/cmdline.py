"""
This is an interpreter for a small Lox-family scripting language.

For example:

    lox program.lox

will run program.lox if possible, or else try to explain why not.

    lox

with no script starts an interactive prompt.

    lox -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

EXIT_USAGE = 64
EXIT_STATIC = 65
EXIT_NO_INPUT = 66
EXIT_RUNTIME = 70

PROMPT = ">> "

parser = argparse.ArgumentParser(
	prog="lox",
	description="Interpreter for a small Lox-family scripting language.",
)
parser.add_argument("program", nargs="?", help="a script to run; omit it for the interactive prompt.")
parser.add_argument('-c', "--check", action="store_true", help="Check the program but do not actually execute it.")
parser.add_argument('-v', "--verbose", action="count", default=0, help="Say more about what each phase is doing.")

def run(args) -> int:
	from .diagnostics import Report, TooManyIssues
	from .resolution import Yuck
	from .tree_walker.executive import Outcome, fresh_interpreter, prepare, run_program
	report = Report(verbose=args.verbose)
	path = Path.cwd() / args.program
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except OSError as ex:
		print("Cannot read %s: %s" % (path, ex.strerror), file=sys.stderr)
		return EXIT_NO_INPUT
	try:
		try: statements, side_table = prepare(text, path, report)
		except Yuck as ex:
			report.info("Stopped in the %s phase." % ex.args[0])
			report.complain_to_console()
			return EXIT_STATIC
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return EXIT_STATIC
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	outcome = run_program(statements, side_table, fresh_interpreter(), report)
	if outcome is Outcome.RUNTIME_ERROR:
		report.complain_to_console()
		return EXIT_RUNTIME
	return 0

def repl(args, stdin=None) -> int:
	"""
	Each line gets a fresh verdict, but the interpreter (and so the global scope) carries on.
	A runtime error ends that line, not the session.
	"""
	from .diagnostics import Report, TooManyIssues
	from .tree_walker.executive import fresh_interpreter, run_text
	stdin = stdin or sys.stdin
	report = Report(verbose=args.verbose)
	interpreter = fresh_interpreter(stdin=stdin)
	while True:
		print(PROMPT, end="", flush=True)
		line = stdin.readline()
		if not line: break
		try: run_text(line, None, report, interpreter)
		except TooManyIssues: pass
		report.complain_to_console()
		report.reset()
	print()
	return 0

def main():
	args = parser.parse_args()
	if args.program is None:
		if args.check:
			parser.print_usage(sys.stderr)
			exit(EXIT_USAGE)
		exit(repl(args))
	else:
		exit(run(args))
