import unittest

from yai.core.scanner import scan
from yai.core.tokens import TokenType


def types(tokens):
    return [token.type for token in tokens]


class ScannerTestCase(unittest.TestCase):

    def test_operators(self):
        cases = {
            "(){},-+;*/": [
                TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
                TokenType.COMMA, TokenType.MINUS, TokenType.PLUS, TokenType.SEMICOLON, TokenType.STAR,
                TokenType.SLASH
            ],
            "! != = == < <= > >=": [
                TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL, TokenType.LESS,
                TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL
            ],
            "!==": [TokenType.BANG_EQUAL, TokenType.EQUAL],
            "<==": [TokenType.LESS_EQUAL, TokenType.EQUAL],
        }
        for case, expected in cases.items():
            tokens, errors = scan(case)
            self.assertEqual(expected + [TokenType.EOF], types(tokens), case)
            self.assertEqual([], errors, case)

    def test_single_eof(self):
        for case in ["", "   ", "// only a comment", "var x;"]:
            tokens, __ = scan(case)
            self.assertEqual(1, types(tokens).count(TokenType.EOF), case)
            self.assertIs(TokenType.EOF, tokens[-1].type, case)

    def test_keywords_and_identifiers(self):
        tokens, errors = scan("and orchid _x var1 null nullable fun For")
        self.assertEqual([], errors)
        self.assertEqual([
            TokenType.AND, TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.NULL,
            TokenType.IDENTIFIER, TokenType.FUN, TokenType.IDENTIFIER, TokenType.EOF
        ], types(tokens))
        self.assertEqual("orchid", tokens[1].lexeme)
        self.assertIsNone(tokens[1].literal)

    def test_numbers(self):
        should_pass = {"123": 123.0, "12.5": 12.5, "0": 0.0, "007": 7.0}
        for case, expected in should_pass.items():
            tokens, errors = scan(case)
            self.assertEqual([], errors, case)
            self.assertIs(TokenType.NUMBER, tokens[0].type, case)
            self.assertIsInstance(tokens[0].literal, float, case)
            self.assertEqual(expected, tokens[0].literal, case)
            self.assertEqual(case, tokens[0].lexeme, case)

    def test_trailing_dot(self):
        tokens, errors = scan("1.")
        self.assertEqual([TokenType.NUMBER, TokenType.EOF], types(tokens))
        self.assertEqual(1.0, tokens[0].literal)
        self.assertEqual(1, len(errors))
        self.assertEqual("Unexpected character.", errors[0].msg)

    def test_strings(self):
        tokens, errors = scan("\"hello world\"")
        self.assertEqual([], errors)
        self.assertIs(TokenType.STRING, tokens[0].type)
        self.assertEqual("hello world", tokens[0].literal)
        self.assertEqual("\"hello world\"", tokens[0].lexeme)

    def test_no_escape_sequences(self):
        tokens, __ = scan(r'"a\nb"')
        self.assertEqual("a\\nb", tokens[0].literal)

    def test_multiline_string(self):
        tokens, errors = scan("\"a\nb\" x")
        self.assertEqual([], errors)
        self.assertEqual("a\nb", tokens[0].literal)
        self.assertEqual(2, tokens[0].line)
        self.assertEqual(2, tokens[1].line)

    def test_unterminated_string(self):
        should_fail = {"\"abc": 1, "\"a\nb\nc": 3, "print 1;\n\"oops": 2}
        for case, line in should_fail.items():
            tokens, errors = scan(case)
            self.assertEqual(1, len(errors), case)
            self.assertEqual("Unterminated string.", errors[0].msg, case)
            self.assertEqual(line, errors[0].line, case)
            self.assertNotIn(TokenType.STRING, types(tokens), case)

    def test_comments(self):
        tokens, errors = scan("// comment \"not a string\n print // another\n1")
        self.assertEqual([], errors)
        self.assertEqual([TokenType.PRINT, TokenType.NUMBER, TokenType.EOF], types(tokens))
        self.assertEqual(2, tokens[0].line)
        self.assertEqual(3, tokens[1].line)

    def test_line_numbers(self):
        tokens, __ = scan("var\n\nx\r\n\t=")
        self.assertEqual([1, 3, 4, 4], [token.line for token in tokens])

    def test_unexpected_characters_continue(self):
        tokens, errors = scan("@ print\n# 1 .")
        self.assertEqual([TokenType.PRINT, TokenType.NUMBER, TokenType.EOF], types(tokens))
        self.assertEqual([1, 2, 2], [error.line for error in errors])
        self.assertEqual(["@", "#", "."], [error.lexeme for error in errors])
        for error in errors:
            self.assertEqual("Unexpected character.", error.msg)
            self.assertEqual("[line {}] Error: Unexpected character.".format(error.line), str(error))


if __name__ == '__main__':
    unittest.main()
