"""Recursive-descent parser for the calculator language. Builds one Expression tree per line.

```
<term>          ::= <product> (("+" | "-") <product>)*   ; left-associative: a-b-c = ((a-b)-c)
<product>       ::= <parenthesized> ("*" <parenthesized>)*
<parenthesized> ::= "(" <term> ")" | <number>
<number>        ::= NUMBER
```

"*" binds tighter than "+" and "-" because products are parsed one level below terms. Each loop folds to the left:
the expression built so far becomes the left operand of the next node.

A line must be consumed completely: anything left after a complete term (e.g. the "2" in "1 2") is a ParseError.
"""

from stackcalc.lang.error import InternalError, ParseError
from stackcalc.pure.expression import Difference, Number, Product, Sum
from stackcalc.pure.lexical import TokenKind, lex


class Parser:
    """Parses a token list produced by Lexer. A Parser is single-use: create a new one per line."""
    TERM_OPERATORS = {TokenKind.PLUS: Sum, TokenKind.MINUS: Difference}
    PRODUCT_OPERATORS = {TokenKind.STAR: Product}

    def __init__(self, tokens, code=""):
        """code is the source line, only used for error messages."""
        if not tokens or not tokens[-1].is_eof:
            raise InternalError(f"token list must end with EOF, got {tokens!r}")

        self.tokens = tokens
        self.code = code
        self.current = 0

    def parse(self):
        """Returns the Expression for the whole token list, or raises ParseError."""
        expression = self.term()

        if not self.peek().is_eof:
            raise ParseError(self.peek(), self.code)
        return expression

    def term(self):
        expression = self.product()
        while self.peek().kind in Parser.TERM_OPERATORS:
            node = Parser.TERM_OPERATORS[self.advance().kind]
            expression = node(expression, self.product())
        return expression

    def product(self):
        expression = self.parenthesized()
        while self.peek().kind in Parser.PRODUCT_OPERATORS:
            node = Parser.PRODUCT_OPERATORS[self.advance().kind]
            expression = node(expression, self.parenthesized())
        return expression

    def parenthesized(self):
        if self.peek().kind is not TokenKind.LEFT_PAREN:
            return self.number()

        self.advance()
        inner = self.term()

        token = self.peek()
        if token.kind is not TokenKind.RIGHT_PAREN:
            raise ParseError(token, self.code)
        self.advance()
        return inner

    def number(self):
        token = self.peek()
        if token.kind is not TokenKind.NUMBER:
            raise ParseError(token, self.code)
        if token.literal is None:
            raise InternalError(f"number token without a value: {token!r}")

        self.advance()
        return Number(token.literal)

    def peek(self):
        return self.tokens[self.current]

    def advance(self):
        """Consumes and returns the current token. EOF can be looked at but never consumed."""
        token = self.tokens[self.current]
        if token.is_eof:
            raise InternalError("consumed the EOF token: a check for end of input is missing")

        self.current += 1
        return token


def parse(code):
    """Lexes and parses code. Raises LexError or ParseError on malformed input."""
    return Parser(lex(code), code).parse()
