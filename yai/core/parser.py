"""Recursive-descent parser for the yai language, with one token of lookahead. Builds a list of statements from the
scanner's tokens.

Grammar, highest level first (precedence increases downward):

```
program     -> declaration* EOF
declaration -> varDecl | funDecl | statement
varDecl     -> "var" IDENTIFIER ("=" expression)? ";"
funDecl     -> "fun" IDENTIFIER "(" parameters? ")" block
statement   -> exprStmt | printStmt | block | ifStmt | whileStmt | forStmt | returnStmt
forStmt     -> "for" "(" (varDecl | exprStmt | ";") expression? ";" expression? ")" statement
expression  -> assignment
assignment  -> IDENTIFIER "=" assignment | logic_or
logic_or    -> logic_and ("or" logic_and)*
logic_and   -> equality ("and" equality)*
equality    -> comparison (("!=" | "==") comparison)*
comparison  -> term ((">" | ">=" | "<" | "<=") term)*
term        -> factor (("+" | "-") factor)*
factor      -> unary (("/" | "*") unary)*
unary       -> ("!" | "-") unary | call
call        -> primary ("(" arguments? ")")*
primary     -> NUMBER | STRING | IDENTIFIER | "false" | "true" | "null" | "(" expression ")"
```

Errors never stop the parse. A grammar violation raises ParseError, which is caught at the nearest declaration:
the error is recorded and tokens are discarded up to the next statement boundary (synchronization), so later
errors in the same source are reported too. Some errors (invalid assignment target, too many parameters/arguments,
return outside a function) leave the parser in a known state and are only recorded.
"""

from yai.core import nodes
from yai.core.tokens import TokenType
from yai.lang.error import ParseError


class Parser:
    """Parses one token list. Not reusable: create a new Parser per source."""
    MAX_PARAMETERS = 8
    MAX_ARGUMENTS = 255
    STATEMENT_START = {
        TokenType.FUN, TokenType.VAR, TokenType.FOR, TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN
    }

    def __init__(self, tokens):
        self.tokens = tokens
        self.current = 0
        self.errors = []
        self.function_depth = 0  # number of function bodies being parsed, used to check returns

    def parse(self):
        """Parses every declaration up to EOF. Declarations that failed to parse are left out."""
        statements = []
        while not self.is_at_end():
            statement = self.declaration()
            if statement is not None:
                statements.append(statement)
        return statements

    # ==> declarations and statements

    def declaration(self):
        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()
            if self.match(TokenType.FUN):
                return self.function()
            return self.statement()
        except ParseError as error:
            self.errors.append(error)
            self.synchronize()
            return None

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return nodes.Var(name, initializer)

    def function(self):
        name = self.consume(TokenType.IDENTIFIER, "Expect function name.")
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after function name.")

        params = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= Parser.MAX_PARAMETERS:
                    self.error(self.peek(), f"Can't have more than {Parser.MAX_PARAMETERS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break

        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(TokenType.LEFT_BRACE, "Expect '{' before function body.")

        self.function_depth += 1
        try:
            body = self.block()
        finally:
            self.function_depth -= 1

        return nodes.Function(name, params, body)

    def statement(self):
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.LEFT_BRACE):
            return nodes.Block(self.block())
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        return self.expression_statement()

    def print_statement(self):
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return nodes.Print(value)

    def block(self):
        """Parses declarations up to the closing brace. Assumes the opening brace has been consumed."""
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statement = self.declaration()
            if statement is not None:
                statements.append(statement)

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def if_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()

        return nodes.If(condition, then_branch, else_branch)

    def while_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return nodes.While(condition, self.statement())

    def for_statement(self):
        """Parses a for loop and rewrites it as `{ initializer; while (condition) { body; increment; } }`. A missing
        condition is `true`; a missing initializer or increment is left out.
        """
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = nodes.Block([body, nodes.Expression(increment)])
        if condition is None:
            condition = nodes.Literal(True)
        body = nodes.While(condition, body)
        if initializer is not None:
            body = nodes.Block([initializer, body])

        return body

    def return_statement(self):
        keyword = self.previous()
        if self.function_depth == 0:
            self.error(keyword, "Can't return from top-level code.")

        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return nodes.Return(keyword, value)

    def expression_statement(self):
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return nodes.Expression(expr)

    # ==> expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, nodes.Variable):
                return nodes.Assign(expr.name, value)

            self.error(equals, "Invalid assignment target.")  # no need to synchronize

        return expr

    def logic_or(self):
        return self._logical(self.logic_and, TokenType.OR)

    def logic_and(self):
        return self._logical(self.equality, TokenType.AND)

    def equality(self):
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        return self._binary(
            self.term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL
        )

    def term(self):
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            return nodes.Unary(operator, self.unary())
        return self.call()

    def call(self):
        expr = self.primary()
        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee):
        arguments = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= Parser.MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {Parser.MAX_ARGUMENTS} arguments.")
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break

        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return nodes.Call(callee, paren, arguments)

    def primary(self):
        if self.match(TokenType.FALSE):
            return nodes.Literal(False)
        if self.match(TokenType.TRUE):
            return nodes.Literal(True)
        if self.match(TokenType.NULL):
            return nodes.Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return nodes.Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return nodes.Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return nodes.Grouping(expr)

        raise ParseError.at(self.peek(), "Expect expression.")

    def _binary(self, operand, *operators):
        """Parses a left-associative chain of operand separated by any of operators."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            expr = nodes.Binary(expr, operator, operand())
        return expr

    def _logical(self, operand, operator_type):
        expr = operand()
        while self.match(operator_type):
            operator = self.previous()
            expr = nodes.Logical(expr, operator, operand())
        return expr

    # ==> helpers

    def consume(self, token_type, msg):
        """Consumes and returns the current token if it is of token_type, else raises a ParseError."""
        if self.check(token_type):
            return self.advance()
        raise ParseError.at(self.peek(), msg)

    def error(self, token, msg):
        """Records an error that does not need synchronization."""
        self.errors.append(ParseError.at(token, msg))

    def synchronize(self):
        """Discards tokens until the start of what is probably the next statement."""
        self.advance()

        while not self.is_at_end():
            if self.previous().type is TokenType.SEMICOLON:
                return
            if self.peek().type in Parser.STATEMENT_START:
                return
            self.advance()

    def match(self, *token_types):
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def check(self, token_type):
        if self.is_at_end():
            return False
        return self.peek().type is token_type

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().type is TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]


def parse(tokens):
    """Returns (statements, errors) for tokens, which must end with an EOF token. errors is a list of ParseErrors in
    the order they were found.
    """
    parser = Parser(tokens)
    statements = parser.parse()
    return statements, parser.errors
