"""Token model for the yai language. Tokens are produced by the scanner and consumed by the parser, and are never
modified once created.
"""

import enum
from dataclasses import dataclass
from typing import Any


class TokenType(enum.Enum):
    """Every kind of token the scanner can produce. Values are the source spelling where there is one."""
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"

    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    AND = "and"
    ELSE = "else"
    FALSE = "false"
    FOR = "for"
    FUN = "fun"
    IF = "if"
    NULL = "null"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    EOF = "EOF"


KEYWORDS = {token_type.value: token_type for token_type in [
    TokenType.AND, TokenType.ELSE, TokenType.FALSE, TokenType.FOR, TokenType.FUN, TokenType.IF, TokenType.NULL,
    TokenType.OR, TokenType.PRINT, TokenType.RETURN, TokenType.TRUE, TokenType.VAR, TokenType.WHILE
]}


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Any
    line: int

    def __str__(self):
        return f"{self.type.name} {self.lexeme} {self.literal}"
