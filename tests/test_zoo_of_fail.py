import io
from pathlib import Path
import unittest
from unittest import mock

from lox.diagnostics import Report
from lox.resolution import Yuck
from lox.tree_walker.executive import Outcome, fresh_interpreter, prepare, run_program

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(folder:Path, filename:str):
	specimen_path = folder / (filename + ".lox")
	assert specimen_path.exists(), specimen_path
	report = Silence()
	try:
		statements, side_table = prepare(specimen_path.read_text(encoding="utf-8"), specimen_path, report)
	except Yuck as ex:
		assert 0 == report.complain_to_console.call_count
		assert report.sick()
		return ex.args[0]
	else:
		report.assert_no_issues("Static checks complained without stopping.")
		outcome = run_program(statements, side_table, fresh_interpreter(stdout=io.StringIO()), report)
		if outcome is Outcome.RUNTIME_ERROR:
			return "runtime"
		else: return "failed to fail"

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, phase):
		folder = zoo_fail / phase
		cases = sorted(p.stem for p in folder.glob("*.lox"))
		assert cases, folder
		for name in cases:
			with self.subTest(name):
				self.assertEqual(phase, _identify_problem(folder, name))

	def test_parse_failures(self):
		self.expect("parse")

	def test_resolution_failures(self):
		self.expect("resolve")

	def test_runtime_failures(self):
		self.expect("runtime")

if __name__ == '__main__':
	unittest.main()
