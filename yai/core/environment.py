"""Scope chain for the yai language. One Environment per scope: the global scope, each executed block and each
function call. Function values keep a reference to the Environment they were declared in (their closure).
"""

from yai.lang.error import YaiRuntimeError


class Environment:
    """Mapping of names to values with an optional link to the enclosing scope."""

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        """Binds name in this scope, never in an enclosing one. Rebinding a name in the same scope overwrites it."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to token name in the nearest scope that has it."""
        environment = self.resolve(name)
        return environment.values[name.lexeme]

    def assign(self, name, value):
        """Rebinds token name in the nearest scope that has it. Never creates a binding."""
        environment = self.resolve(name)
        environment.values[name.lexeme] = value

    def resolve(self, name):
        """Returns the nearest environment in the chain binding token name, raises a YaiRuntimeError if none does."""
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment
            environment = environment.enclosing

        raise YaiRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def __contains__(self, name):
        """Whether or not the string name is bound anywhere in the chain."""
        environment = self
        while environment is not None:
            if name in environment.values:
                return True
            environment = environment.enclosing
        return False

    def __repr__(self):
        depth = 0
        environment = self.enclosing
        while environment is not None:
            depth += 1
            environment = environment.enclosing
        return f"Environment(names={sorted(self.values)}, depth={depth})"
