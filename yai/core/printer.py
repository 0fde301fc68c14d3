"""Renders yai syntax trees in a fully parenthesized, prefix form, ex: `print 1 + 2 * 3;` is shown as
`(print (+ 1 (* 2 3)))`. Used by the `--ast` command-line flag and in parser tests, where comparing strings is much
more readable than comparing nested dataclasses.
"""

from yai.core import nodes


def show(node):
    """Returns the parenthesized form of node, which may be any Expr or Stmt."""
    return _RENDERERS[type(node)](node)


def show_all(statements):
    """Returns the parenthesized form of each statement, one per line."""
    return "\n".join(show(statement) for statement in statements)


def show_literal(value):
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    return f"\"{value}\""


def _parenthesize(name, *parts):
    return "(" + " ".join([name] + [part if isinstance(part, str) else show(part) for part in parts]) + ")"


def _block(stmt):
    return _parenthesize("block", *stmt.statements)


def _if(stmt):
    if stmt.else_branch is None:
        return _parenthesize("if", stmt.condition, stmt.then_branch)
    return _parenthesize("if", stmt.condition, stmt.then_branch, stmt.else_branch)


def _var(stmt):
    if stmt.initializer is None:
        return _parenthesize("var", stmt.name.lexeme)
    return _parenthesize("var", stmt.name.lexeme, "=", stmt.initializer)


def _function(stmt):
    params = "(" + " ".join(param.lexeme for param in stmt.params) + ")"
    return _parenthesize("fun", stmt.name.lexeme + params, *stmt.body)


def _return(stmt):
    if stmt.value is None:
        return "(return)"
    return _parenthesize("return", stmt.value)


_RENDERERS = {
    nodes.Literal: lambda expr: show_literal(expr.value),
    nodes.Grouping: lambda expr: _parenthesize("group", expr.expression),
    nodes.Unary: lambda expr: _parenthesize(expr.operator.lexeme, expr.right),
    nodes.Binary: lambda expr: _parenthesize(expr.operator.lexeme, expr.left, expr.right),
    nodes.Logical: lambda expr: _parenthesize(expr.operator.lexeme, expr.left, expr.right),
    nodes.Variable: lambda expr: expr.name.lexeme,
    nodes.Assign: lambda expr: _parenthesize("=", expr.name.lexeme, expr.value),
    nodes.Call: lambda expr: _parenthesize("call", expr.callee, *expr.arguments),

    nodes.Expression: lambda stmt: _parenthesize(";", stmt.expression),
    nodes.Print: lambda stmt: _parenthesize("print", stmt.expression),
    nodes.Var: _var,
    nodes.Block: _block,
    nodes.If: _if,
    nodes.While: lambda stmt: _parenthesize("while", stmt.condition, stmt.body),
    nodes.Function: _function,
    nodes.Return: _return,
}
