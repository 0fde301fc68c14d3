"""Tree-walking evaluator for the yai language.

Expressions evaluate to exactly one runtime value, statements are executed for their effect. Runtime values are
plain Python objects:

```
null     -> None
boolean  -> bool
number   -> float (IEEE-754 double)
string   -> str
function -> YaiCallable
```

Executing a statement returns its outcome: None when it completed normally, or a ReturnValue when a `return`
statement was reached. Blocks, ifs and loops hand a ReturnValue straight back to their caller, which unwinds
execution up to the enclosing function call. Runtime errors are YaiRuntimeErrors, raised where they are detected
and caught once, in Interpreter.interpret.
"""

import math
import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from yai.core import nodes
from yai.core.environment import Environment
from yai.core.tokens import TokenType
from yai.lang.error import YaiRuntimeError


@dataclass(frozen=True)
class ReturnValue:
    """Outcome of a statement that reached `return`."""
    value: Any


class YaiCallable(ABC):
    """Any value that can be called from yai code."""

    @abstractmethod
    def arity(self):
        """Number of arguments this callable expects."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Calls this callable with a list of already evaluated arguments. Assumes len(arguments) == self.arity()."""


class YaiFunction(YaiCallable):
    """Function declared in yai code, closed over the environment active at its declaration."""

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure

    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        outcome = interpreter.execute_block(self.declaration.body, environment)
        if outcome is not None:
            return outcome.value
        return None

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self):
        return f"YaiFunction('{self.declaration.name.lexeme}', arity={self.arity()})"


def is_truthy(value):
    """null and false are falsy, every other value (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Value equality. Values of different runtime types are never equal, so `1 == true` is false even though
    Python's `1.0 == True` holds. Numbers follow IEEE equality.
    """
    if left is None or right is None:
        return left is None and right is None
    if type(left) is not type(right):
        return False
    return left == right


def is_number(value):
    return isinstance(value, float)


def divide(left, right):
    """IEEE-754 division: dividing by zero gives an infinity or NaN instead of raising."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def stringify(value):
    """Text printed for value. Numbers drop a trailing ".0", so 3.0 prints as 3."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return str(value)


class Interpreter:
    """Executes statement lists. Owns the global environment, which persists between calls to interpret, and the
    current environment, which changes as blocks and calls are entered and left.
    """

    def __init__(self, out=None):
        self.out = out if out is not None else sys.stdout
        self.globals = Environment()
        self.environment = self.globals

        self._expressions = {
            nodes.Literal: self.literal,
            nodes.Grouping: self.grouping,
            nodes.Unary: self.unary,
            nodes.Binary: self.binary,
            nodes.Logical: self.logical,
            nodes.Variable: self.variable,
            nodes.Assign: self.assign,
            nodes.Call: self.call,
        }
        self._statements = {
            nodes.Expression: self.expression_statement,
            nodes.Print: self.print_statement,
            nodes.Var: self.var_statement,
            nodes.Block: self.block_statement,
            nodes.If: self.if_statement,
            nodes.While: self.while_statement,
            nodes.Function: self.function_statement,
            nodes.Return: self.return_statement,
        }

    def interpret(self, statements, environment=None):
        """Executes statements in order against environment (the global scope if None). Stops at the first runtime
        error and returns it; returns None if every statement ran.
        """
        try:
            with self.scope(environment if environment is not None else self.globals):
                for statement in statements:
                    if self.execute(statement) is not None:
                        break  # return outside of any call stops the run
        except YaiRuntimeError as error:
            return error
        return None

    @contextmanager
    def scope(self, environment):
        """Makes environment current for the duration of the with block, restoring the previous one on every exit
        path (normal completion, return or error).
        """
        previous = self.environment
        self.environment = environment
        try:
            yield environment
        finally:
            self.environment = previous

    def execute(self, stmt):
        """Executes stmt. Returns None, or a ReturnValue if a return statement was reached."""
        return self._statements[type(stmt)](stmt)

    def execute_block(self, statements, environment):
        """Executes statements with environment as the current scope. Returns the first ReturnValue reached, if any."""
        with self.scope(environment):
            for statement in statements:
                outcome = self.execute(statement)
                if outcome is not None:
                    return outcome
        return None

    def evaluate(self, expr):
        return self._expressions[type(expr)](expr)

    # ==> statements

    def expression_statement(self, stmt):
        self.evaluate(stmt.expression)

    def print_statement(self, stmt):
        value = self.evaluate(stmt.expression)
        print(stringify(value), file=self.out)

    def var_statement(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def block_statement(self, stmt):
        return self.execute_block(stmt.statements, Environment(self.environment))

    def if_statement(self, stmt):
        if is_truthy(self.evaluate(stmt.condition)):
            return self.execute(stmt.then_branch)
        if stmt.else_branch is not None:
            return self.execute(stmt.else_branch)
        return None

    def while_statement(self, stmt):
        while is_truthy(self.evaluate(stmt.condition)):
            outcome = self.execute(stmt.body)
            if outcome is not None:
                return outcome
        return None

    def function_statement(self, stmt):
        self.environment.define(stmt.name.lexeme, YaiFunction(stmt, self.environment))

    def return_statement(self, stmt):
        value = None
        if stmt.value is not None:
            value = self.evaluate(stmt.value)
        return ReturnValue(value)

    # ==> expressions

    def literal(self, expr):
        return expr.value

    def grouping(self, expr):
        return self.evaluate(expr.expression)

    def unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type is TokenType.BANG:
            return not is_truthy(right)

        self.check_number_operands(expr.operator, right)
        return -right

    def binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        if operator.type is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if operator.type is TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if operator.type is TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise YaiRuntimeError(operator, "Operands must be two numbers or two strings.")

        self.check_number_operands(operator, left, right)

        if operator.type is TokenType.MINUS:
            return left - right
        if operator.type is TokenType.STAR:
            return left * right
        if operator.type is TokenType.SLASH:
            return divide(left, right)
        if operator.type is TokenType.GREATER:
            return left > right
        if operator.type is TokenType.GREATER_EQUAL:
            return left >= right
        if operator.type is TokenType.LESS:
            return left < right
        if operator.type is TokenType.LESS_EQUAL:
            return left <= right

        raise YaiRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")

    def logical(self, expr):
        left = self.evaluate(expr.left)

        if expr.operator.type is TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def variable(self, expr):
        return self.environment.get(expr.name)

    def assign(self, expr):
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def call(self, expr):
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, YaiCallable):
            raise YaiRuntimeError(expr.paren, "Can only call functions.")

        if len(arguments) != callee.arity():
            msg = f"Expected {callee.arity()} arguments but got {len(arguments)}."
            raise YaiRuntimeError(expr.paren, msg)

        return callee.call(self, arguments)

    @staticmethod
    def check_number_operands(operator, *operands):
        if all(is_number(operand) for operand in operands):
            return
        if len(operands) == 1:
            raise YaiRuntimeError(operator, "Operand must be a number.")
        raise YaiRuntimeError(operator, "Operands must be numbers.")


def interpret(statements, environment=None, out=None):
    """Runs statements with a new Interpreter. Returns the runtime error that stopped the run, or None."""
    return Interpreter(out).interpret(statements, environment)
