import unittest

from lox.environment import Environment
from lox.ontology import Token
from lox.tree_walker.types import UndefinedVariable

def _name(text):
	return Token("identifier", text, None, 1)

class EnvironmentTests(unittest.TestCase):

	def setUp(self) -> None:
		self.outer = Environment()
		self.middle = Environment(self.outer)
		self.inner = Environment(self.middle)

	def test_get_searches_outward(self):
		self.outer.define("a", 1.0)
		self.assertEqual(1.0, self.inner.get(_name("a")))

	def test_define_shadows_only_this_frame(self):
		self.outer.define("a", "outer")
		self.inner.define("a", "inner")
		self.assertEqual("inner", self.inner.get(_name("a")))
		self.assertEqual("outer", self.middle.get(_name("a")))

	def test_define_overwrites_without_complaint(self):
		self.outer.define("a", 1.0)
		self.outer.define("a", 2.0)
		self.assertEqual(2.0, self.outer.get(_name("a")))

	def test_nil_is_a_perfectly_good_binding(self):
		self.middle.define("a", None)
		self.assertIsNone(self.inner.get(_name("a")))

	def test_get_undefined(self):
		with self.assertRaises(UndefinedVariable) as cm:
			self.inner.get(_name("nobody"))
		self.assertEqual("nobody", cm.exception.token.lexeme)
		self.assertIn("nobody", cm.exception.message)

	def test_assign_mutates_the_frame_where_found(self):
		self.outer.define("a", 1.0)
		self.inner.assign(_name("a"), 5.0)
		self.assertEqual(5.0, self.outer.get(_name("a")))
		self.assertNotIn("a", self.inner)

	def test_assign_undefined(self):
		with self.assertRaises(UndefinedVariable):
			self.inner.assign(_name("nobody"), 1.0)
		self.assertNotIn("nobody", self.outer)

	def test_get_at_uses_exactly_that_frame(self):
		self.outer.define("a", "outer")
		self.middle.define("a", "middle")
		self.assertEqual("outer", self.inner.get_at(2, "a"))
		self.assertEqual("middle", self.inner.get_at(1, "a"))

	def test_assign_at(self):
		self.outer.define("a", "outer")
		self.middle.define("a", "middle")
		self.inner.assign_at(2, _name("a"), "changed")
		self.assertEqual("changed", self.outer.get(_name("a")))
		self.assertEqual("middle", self.middle.get(_name("a")))

	def test_ancestor(self):
		self.assertIs(self.inner, self.inner.ancestor(0))
		self.assertIs(self.outer, self.inner.ancestor(2))

if __name__ == '__main__':
	unittest.main()
