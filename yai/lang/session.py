"""Session control for the yai language. Glue between the core pipeline (scan, parse, interpret) and the
ErrorHandler, used to run the interpreter either in command-line mode or file interpretation mode.
"""

import re

from yai.core.interpreter import Interpreter
from yai.core.parser import parse
from yai.core.printer import show_all
from yai.core.scanner import scan
from yai.lang.error import YaiException


class Session:
    """Governs a yai session: one interpreter, whose global scope lives as long as the session does."""
    SH_FILE = "<in>"  # command-line interpreter filename
    OPENERS = {"(": ")", "{": "}"}

    def __init__(self, error_handler, path, cmd_line, show_ast=False, out=None):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.show_ast = show_ast  # whether or not to print parsed statements before running them

        self.interpreter = Interpreter(out)
        self.to_exec = []  # statements parsed but not yet run

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise YaiException(None, f"'{path}' could not be opened")

            self.add(source)

        elif not cmd_line:
            raise YaiException(None, f"'{Session.SH_FILE}' is a reserved filename")

    @property
    def out(self):
        return self.interpreter.out

    @staticmethod
    def preprocess_line(line, prev=""):
        """Preprocesses a line from the command-line. prev is the text of previous lines still waiting for their
        closing braces/parentheses. Returns the joined text and whether or not a line continuation is necessary.
        """
        text = prev + line + "\n"

        code = re.sub(r'"[^"]*"', "\"\"", text)  # brackets inside strings don't count
        code = "\n".join(code_line.split("//")[0] for code_line in code.split("\n"))

        add_to_prev = any(code.count(opener) > code.count(closer) for opener, closer in Session.OPENERS.items())
        return text, add_to_prev

    def add(self, source):
        """Scans and parses source. If there are static errors, they are all reported and nothing is queued; otherwise
        the parsed statements are queued for run. Returns whether or not source was queued.
        """
        self.error_handler.register_source(self.path, source)  # in case an error is reported

        tokens, scan_errors = scan(source)
        statements, parse_errors = parse(tokens)

        errors = scan_errors + parse_errors
        if errors:
            self.error_handler.throw_all(errors)
            return False

        if self.show_ast and statements:
            print(show_all(statements), file=self.out)

        self.to_exec.extend(statements)
        return True

    def run(self):
        """Runs the queued statements against the session's global scope. A runtime error stops the run and is
        thrown; statements after it are dropped.
        """
        statements, self.to_exec = self.to_exec, []

        error = self.interpreter.interpret(statements)
        if error is not None:
            self.error_handler.throw(error)
