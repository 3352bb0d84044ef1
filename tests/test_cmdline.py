import argparse
import io
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
import unittest

from lox import cmdline

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"
zoo_fail = base_folder/"zoo/fail"

def _args(program=None, check=False, verbose=0):
	return argparse.Namespace(program=program, check=check, verbose=verbose)

class CommandLineTests(unittest.TestCase):

	def run_cli(self, args):
		stdout, stderr = io.StringIO(), io.StringIO()
		with redirect_stdout(stdout), redirect_stderr(stderr):
			status = cmdline.run(args)
		return status, stdout.getvalue(), stderr.getvalue()

	def test_good_program(self):
		status, out, err = self.run_cli(_args(str(examples/"hello_world.lox")))
		self.assertEqual(0, status)
		self.assertEqual("Hello, World!\n", out)
		self.assertEqual("", err)

	def test_static_error(self):
		status, out, err = self.run_cli(_args(str(zoo_fail/"resolve/top_level_return.lox")))
		self.assertEqual(cmdline.EXIT_STATIC, status)
		self.assertEqual("", out)
		self.assertIn("Can't return from top-level code.", err)

	def test_runtime_error(self):
		status, out, err = self.run_cli(_args(str(zoo_fail/"runtime/divide_by_zero.lox")))
		self.assertEqual(cmdline.EXIT_RUNTIME, status)
		self.assertIn("Runtime error on line 1: Division by zero.", err)

	def test_missing_file(self):
		status, out, err = self.run_cli(_args(str(base_folder/"no/such/file.lox")))
		self.assertEqual(cmdline.EXIT_NO_INPUT, status)
		self.assertIn("Cannot read", err)

	def test_check_only(self):
		status, out, err = self.run_cli(_args(str(examples/"hello_world.lox"), check=True))
		self.assertEqual(0, status)
		self.assertEqual("", out)
		self.assertIn("Looks plausible to me.", err)

	def test_argument_parsing(self):
		args = cmdline.parser.parse_args(["-c", "-vv", "thing.lox"])
		self.assertTrue(args.check)
		self.assertEqual(2, args.verbose)
		self.assertEqual("thing.lox", args.program)
		self.assertIsNone(cmdline.parser.parse_args([]).program)

class InteractiveTests(unittest.TestCase):

	def session(self, text):
		stdout, stderr = io.StringIO(), io.StringIO()
		with redirect_stdout(stdout), redirect_stderr(stderr):
			status = cmdline.repl(_args(), stdin=io.StringIO(text))
		self.assertEqual(0, status)
		return stdout.getvalue(), stderr.getvalue()

	def test_state_carries_across_lines(self):
		out, err = self.session("var a = 1;\nprint a + 2;\n")
		self.assertEqual(">> >> 3\n>> \n", out)
		self.assertEqual("", err)

	def test_errors_do_not_end_the_session(self):
		out, err = self.session("print 1 / 0;\nprint nope;\nprint \"still here\";\n")
		self.assertIn("still here", out)
		self.assertIn("Division by zero.", err)
		self.assertIn("Undefined variable 'nope'.", err)

	def test_static_errors_are_forgotten_after_each_line(self):
		out, err = self.session("return 1;\nprint 2;\n")
		self.assertIn("2\n", out)
		self.assertEqual(1, err.count("Can't return from top-level code."))

if __name__ == '__main__':
	unittest.main()
