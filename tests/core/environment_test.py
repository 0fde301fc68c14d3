import unittest

from yai.core.environment import Environment
from yai.core.tokens import Token, TokenType
from yai.lang.error import YaiRuntimeError


def name(lexeme, line=1):
    return Token(TokenType.IDENTIFIER, lexeme, None, line)


class EnvironmentTestCase(unittest.TestCase):

    def setUp(self):
        self.globals = Environment()
        self.globals.define("x", 1.0)
        self.local = Environment(self.globals)

    def test_get(self):
        self.assertEqual(1.0, self.globals.get(name("x")))
        self.assertEqual(1.0, self.local.get(name("x")))

    def test_define_shadows(self):
        self.local.define("x", "inner")
        self.assertEqual("inner", self.local.get(name("x")))
        self.assertEqual(1.0, self.globals.get(name("x")))

    def test_define_overwrites(self):
        self.globals.define("x", None)
        self.assertIsNone(self.globals.get(name("x")))
        self.assertEqual({"x": None}, self.globals.values)

    def test_assign_walks_chain(self):
        self.local.assign(name("x"), 2.0)
        self.assertEqual(2.0, self.globals.get(name("x")))
        self.assertNotIn("x", self.local.values)

    def test_assign_nearest(self):
        self.local.define("x", "inner")
        self.local.assign(name("x"), "changed")
        self.assertEqual("changed", self.local.values["x"])
        self.assertEqual(1.0, self.globals.values["x"])

    def test_undefined(self):
        should_fail = [
            lambda: self.local.get(name("y", 3)),
            lambda: self.local.assign(name("y", 3), 1.0),
            lambda: Environment().get(name("y", 3)),
        ]
        for case in should_fail:
            with self.assertRaises(YaiRuntimeError) as context:
                case()
            self.assertEqual("Undefined variable 'y'.", context.exception.msg)
            self.assertEqual(3, context.exception.line)

        self.assertNotIn("y", self.local.values)
        self.assertNotIn("y", self.globals.values)

    def test_contains(self):
        self.assertIn("x", self.local)
        self.assertNotIn("y", self.local)

    def test_deep_chain(self):
        environment = self.globals
        for __ in range(5000):
            environment = Environment(environment)
        self.assertEqual(1.0, environment.get(name("x")))


if __name__ == '__main__':
    unittest.main()
