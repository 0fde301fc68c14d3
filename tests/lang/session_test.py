import io
import os
import re
import tempfile
import unittest
from contextlib import redirect_stderr

from yai.lang.error import ErrorHandler, YaiException
from yai.lang.session import Session

ANSI = re.compile(r"\x1b\[[0-9;]*m")


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.stderr = io.StringIO()
        self.out = io.StringIO()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, source, name="main.yai"):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w") as file:
            file.write(source)
        return path

    def errors(self):
        return ANSI.sub("", self.stderr.getvalue())

    def test_file(self):
        path = self.write("var x = 10;\nprint x + 5;\n")
        sess = Session(ErrorHandler(), path, cmd_line=False, out=self.out)
        sess.run()
        self.assertEqual("15\n", self.out.getvalue())
        self.assertEqual([], sess.to_exec)

    def test_file_static_errors(self):
        path = self.write("print 1 +;\nprint @;\nvar = 2;\nprint \"never\";\n")

        with redirect_stderr(self.stderr), self.assertRaises(SystemExit) as context:
            Session(ErrorHandler(), path, cmd_line=False, out=self.out)

        self.assertEqual(1, context.exception.code)
        self.assertEqual("", self.out.getvalue())

        errors = self.errors()
        self.assertIn(f"{path}:1: error at ';': Expect expression.", errors)
        self.assertIn(f"{path}:2: error: Unexpected character.", errors)
        self.assertIn(f"{path}:3: error at '=': Expect variable name.", errors)

    def test_file_runtime_error(self):
        path = self.write("print 1;\nprint undefined;\nprint 2;\n")
        sess = Session(ErrorHandler(), path, cmd_line=False, out=self.out)

        with redirect_stderr(self.stderr), self.assertRaises(SystemExit):
            sess.run()

        self.assertEqual("1\n", self.out.getvalue())
        self.assertIn(f"{path}:2: runtime error: Undefined variable 'undefined'.", self.errors())

    def test_missing_file(self):
        path = os.path.join(self.tmp.name, "missing.yai")
        with self.assertRaises(YaiException) as context:
            Session(ErrorHandler(), path, cmd_line=False)
        self.assertIn("could not be opened", context.exception.msg)

    def test_reserved_filename(self):
        with self.assertRaises(YaiException):
            Session(ErrorHandler(), Session.SH_FILE, cmd_line=False)

    def test_cmd_line(self):
        handler = ErrorHandler()
        sess = Session(handler, Session.SH_FILE, cmd_line=True, out=self.out)
        self.assertFalse(handler.fatal)

        with redirect_stderr(self.stderr):
            self.assertTrue(sess.add("var x = 1;"))
            sess.run()
            self.assertFalse(sess.add("print x +;"))  # error, but the session carries on
            sess.run()
            self.assertTrue(sess.add("print y;"))
            sess.run()
            self.assertTrue(sess.add("print x;"))
            sess.run()

        self.assertEqual("1\n", self.out.getvalue())
        self.assertIn("<in>:1: error at ';': Expect expression.", self.errors())
        self.assertIn("<in>:1: runtime error: Undefined variable 'y'.", self.errors())

    def test_show_ast(self):
        path = self.write("print 1 + 2;")
        sess = Session(ErrorHandler(), path, cmd_line=False, show_ast=True, out=self.out)
        sess.run()
        self.assertEqual("(print (+ 1 2))\n3\n", self.out.getvalue())

    def test_preprocess_line(self):
        should_continue = ["fun f() {", "if (a", "{ { }", "print \"}\"; {", "{ // }"]
        for case in should_continue:
            __, add_to_prev = Session.preprocess_line(case)
            self.assertTrue(add_to_prev, case)

        should_stop = ["print 1;", "{ print 1; }", "print \"{\";", "var x; // {", ""]
        for case in should_stop:
            __, add_to_prev = Session.preprocess_line(case)
            self.assertFalse(add_to_prev, case)

        text, add_to_prev = Session.preprocess_line("}", "fun f() {\n")
        self.assertEqual("fun f() {\n}\n", text)
        self.assertFalse(add_to_prev)


if __name__ == '__main__':
    unittest.main()
