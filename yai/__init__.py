"""yai: yet another interpreter, for a small dynamically-typed, C-like scripting language.

Basic program flow:
    1. Scanner: converts source text into tokens (see yai/core/scanner.py)
    2. Parser: builds a list of statements from the tokens by recursive descent (see yai/core/parser.py)
    3. Interpreter: walks the statements and evaluates them over a chain of scopes (see yai/core/interpreter.py)

Each stage returns its diagnostics instead of printing them: the command-line layer in yai/lang decides how to
report them.
"""

from yai.core.environment import Environment
from yai.core.interpreter import Interpreter, interpret
from yai.core.parser import parse
from yai.core.scanner import scan

__all__ = ["Environment", "Interpreter", "interpret", "parse", "scan"]
