"""Error handling for the yai language. Scanning, parsing and evaluation only ever raise (or collect) YaiExceptions:
if another type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue, except for
RecursionError, which is how the host reports a yai program that recursed too deeply.
"""

import sys

from termcolor import colored

from yai.core.tokens import TokenType


class YaiException(Exception):
    """Templates an error message that points at a line of yai source. where is the offending-token description
    (" at end", " at 'x'" or empty) and lexeme is the source text to highlight when the error is displayed.
    """
    kind = "error"

    def __init__(self, line, msg, where="", lexeme=""):
        super().__init__(msg)
        self.line = line
        self.msg = msg
        self.where = where
        self.lexeme = lexeme

    def __str__(self):
        return f"[line {self.line}] Error{self.where}: {self.msg}"


class ScanError(YaiException):
    """Lexical error: an unexpected character or an unterminated string."""


class ParseError(YaiException):
    """Syntax error. Raised inside the parser to unwind to the nearest statement boundary, where it is recorded."""

    @classmethod
    def at(cls, token, msg):
        """Builds a ParseError describing token, as "at end" or "at '<lexeme>'"."""
        if token.type is TokenType.EOF:
            return cls(token.line, msg, " at end")
        return cls(token.line, msg, f" at '{token.lexeme}'", token.lexeme)


class YaiRuntimeError(YaiException):
    """Error detected while evaluating: keeps the token that caused it for line and context."""
    kind = "runtime error"

    def __init__(self, token, msg):
        super().__init__(token.line, msg, lexeme=token.lexeme)
        self.token = token

    def __str__(self):
        return f"{self.msg}\n[line {self.line}]"


class ErrorHandler:
    """Context manager that reports yai errors on stderr instead of letting them propagate as Python tracebacks."""
    ERROR = "red"
    UNDERLINE = "~"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.sources = {}  # path: list of source lines, used to display the offending line
        self.path = None   # path of the source currently being run
        self.had_error = False

    def register_source(self, path, text):
        """Registers text as the source of path and makes path current. Should be called before scanning text."""
        self.sources[path] = text.splitlines()
        self.path = path

    def source_line(self, line_num):
        """Returns line line_num of the current source, or None if it is not known."""
        lines = self.sources.get(self.path, [])
        if 0 < line_num <= len(lines):
            return lines[line_num - 1]
        return None

    @staticmethod
    def diagnose(error, line):
        """Returns line with error.lexeme highlighted and underlined. Assumes error.lexeme is in line."""
        start = line.index(error.lexeme)
        end = start + len(error.lexeme)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + ErrorHandler.UNDERLINE * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def report(self, error, internal=False):
        """Prints error, a YaiException, to stderr without exiting."""
        self.had_error = True

        error_msg = ""
        if self.path is not None and error.line is not None:
            error_msg += colored(f"{self.path}:{error.line}: ", attrs=["bold"])
        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(error.kind, ErrorHandler.ERROR, attrs=["bold"]) + f"{error.where}: {error.msg}"
        print(error_msg, file=sys.stderr)

        line = self.source_line(error.line) if error.line is not None else None
        if not internal and line and error.lexeme and error.lexeme in line:
            print(ErrorHandler.diagnose(error, line), file=sys.stderr)

    def throw(self, error, internal=False):
        """Reports error, then exits if this handler is fatal. A non-fatal handler resets and carries on."""
        self.report(error, internal)

        if self.fatal:
            sys.exit(1)
        self.had_error = False  # if error occurred, reset state (no need if error is fatal)

    def throw_all(self, errors):
        """Reports every error in errors, then behaves like throw for the last one. Does nothing if errors is empty."""
        if not errors:
            return

        *others, last = errors
        for error in others:
            self.report(error)
        self.throw(last)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(YaiException(None, "keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(YaiException(None, "maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, YaiException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(YaiException(None, f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit
