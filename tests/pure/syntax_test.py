import unittest

from stackcalc.lang.error import InternalError, ParseError
from stackcalc.pure.expression import Difference, Number, Product, Sum
from stackcalc.pure.lexical import Token, TokenKind, lex
from stackcalc.pure.syntax import Parser, parse


class ParserTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "1": Number(1.0),
            "(1)": Number(1.0),
            "((2.5))": Number(2.5),
            "1+2": Sum(Number(1.0), Number(2.0)),
            "1-2": Difference(Number(1.0), Number(2.0)),
            "1*2": Product(Number(1.0), Number(2.0)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_precedence(self):
        cases = {
            "2+3*4": Sum(Number(2.0), Product(Number(3.0), Number(4.0))),
            "2*3+4": Sum(Product(Number(2.0), Number(3.0)), Number(4.0)),
            "(2+3)*4": Product(Sum(Number(2.0), Number(3.0)), Number(4.0)),
            "2*(3-4)": Product(Number(2.0), Difference(Number(3.0), Number(4.0))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_left_associative(self):
        cases = {
            "10-3-2": Difference(Difference(Number(10.0), Number(3.0)), Number(2.0)),
            "1+2-3": Difference(Sum(Number(1.0), Number(2.0)), Number(3.0)),
            "2*3*4": Product(Product(Number(2.0), Number(3.0)), Number(4.0)),
            "10-(3-2)": Difference(Number(10.0), Difference(Number(3.0), Number(2.0))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_whitespace_insensitive(self):
        expected = Sum(Number(1.0), Number(1.0))
        for case in ["1+1", "1 + 1", " 1 + 1 ", "1 +1"]:
            self.assertEqual(expected, parse(case), repr(case))

    def test_unexpected_end_of_input(self):
        should_raise = {
            "(1+2": 4,
            "": 0,
            "   ": 3,
            "1+": 2,
            "2*": 2,
            "(": 1,
            "((1)": 4,
        }
        for case, start in should_raise.items():
            with self.assertRaises(ParseError, msg=repr(case)) as context:
                parse(case)
            self.assertTrue(context.exception.unexpected_eof, repr(case))
            self.assertEqual(start, context.exception.token.start, repr(case))
            self.assertIn("unexpected end of input", context.exception.msg, repr(case))

    def test_unexpected_token(self):
        should_raise = {
            "+1": Token(TokenKind.PLUS, "+", 0),
            "1+*2": Token(TokenKind.STAR, "*", 2),
            "()": Token(TokenKind.RIGHT_PAREN, ")", 1),
            "(1 2)": Token(TokenKind.NUMBER, "2", 3, 2.0),
            "1 2": Token(TokenKind.NUMBER, "2", 2, 2.0),
            "1)": Token(TokenKind.RIGHT_PAREN, ")", 1),
            "(1))": Token(TokenKind.RIGHT_PAREN, ")", 3),
            "2(3)": Token(TokenKind.LEFT_PAREN, "(", 1),
        }
        for case, token in should_raise.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(case)
            self.assertFalse(context.exception.unexpected_eof, case)
            self.assertEqual(token, context.exception.token, case)
            self.assertIn("unexpected token", context.exception.msg, case)

    def test_token_list_must_end_with_eof(self):
        self.assertRaises(InternalError, Parser, [])
        self.assertRaises(InternalError, Parser, lex("1+1")[:-1])

    def test_eof_is_never_consumed(self):
        parser = Parser(lex(""))
        self.assertRaises(InternalError, parser.advance)

    def test_parser_is_independent_of_source(self):
        self.assertEqual(parse("3*4"), Parser(lex("3*4")).parse())


if __name__ == '__main__':
    unittest.main()
