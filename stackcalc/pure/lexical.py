"""Lexical analysis for the calculator language: turns one line of source text into tokens.

Formally, the accepted tokens can be defined as

```
<number>      ::= <digit>+ ("." <digit>*)?  ; "1." is accepted and reads as 1.0
<symbol>      ::= "(" | ")" | "+" | "-" | "*"
<separator>   ::= " "                       ; skipped, only single spaces (no tabs, no newlines)
```

Every token remembers the 0-based offset of its first character, and the token list always ends with exactly one EOF
token positioned at the end of the input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from stackcalc.lang.error import LexError


class TokenKind(Enum):
    NUMBER = "Number"
    PLUS = "Plus"
    MINUS = "Minus"
    STAR = "Star"
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"
    EOF = "Eof"


@dataclass(frozen=True)
class Token:
    """Minimal lexical unit. literal is only set for NUMBER tokens."""
    kind: TokenKind
    lexeme: str
    start: int
    literal: Optional[float] = None

    @classmethod
    def eof(cls, start):
        return cls(TokenKind.EOF, "", start)

    @property
    def is_eof(self):
        return self.kind is TokenKind.EOF

    def __repr__(self):
        if self.literal is not None:
            return f"{self.kind.value}('{self.lexeme}', {self.literal}, start={self.start})"
        return f"{self.kind.value}('{self.lexeme}', start={self.start})"


class Lexer:
    """Scans a line one token at a time. A Lexer is single-use: create a new one per line."""
    SYMBOLS = {
        "(": TokenKind.LEFT_PAREN,
        ")": TokenKind.RIGHT_PAREN,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
    }
    SEPARATOR = " "
    DECIMAL_POINT = "."

    def __init__(self, code):
        self.code = code
        self.start = 0    # offset of the first character of the token being scanned
        self.current = 0  # offset of the next character to read
        self.tokens: List[Token] = []

    def lex(self) -> List[Token]:
        """Scans the whole line and returns its tokens, terminated by EOF. Raises LexError on the first bad char."""
        while not self.reached_end():
            self.scan_token()
        self.add_token(Token.eof(len(self.code)))
        return self.tokens

    def scan_token(self):
        """Scans at most one token, skipping separators first. Trailing separators produce no token."""
        while self.peek() == Lexer.SEPARATOR:
            self.advance()
        if self.reached_end():
            return

        self.start = self.current
        char = self.advance()

        if char in Lexer.SYMBOLS:
            self.add_token(Token(Lexer.SYMBOLS[char], char, self.start))
        elif Lexer.is_digit(char):
            self.scan_number()
        else:
            raise LexError(char, self.start, self.code)

    def scan_number(self):
        """Scans the rest of a number whose first digit has already been consumed."""
        integer_digits = self.code[self.start] + self.scan_digits()

        fraction_digits = ""
        if self.peek() == Lexer.DECIMAL_POINT:
            self.advance()
            fraction_digits = self.scan_digits()

        literal = Lexer.create_number(integer_digits, fraction_digits)
        self.add_token(Token(TokenKind.NUMBER, self.code[self.start:self.current], self.start, literal))

    def scan_digits(self):
        digits = ""
        while Lexer.is_digit(self.peek()):
            digits += self.advance()
        return digits

    @staticmethod
    def create_number(integer_digits, fraction_digits):
        """Builds the value from its digit strings. The fraction is read as "0.<digits>", which keeps leading zeros
        ("05" -> 0.05) and, unlike int(), has no limit on the number of digits.
        """
        number = float(integer_digits)
        if fraction_digits:
            number += float("0." + fraction_digits)
        return number

    @staticmethod
    def is_digit(char):
        # str.isdigit also accepts non-ASCII digits such as "²"
        return char is not None and "0" <= char <= "9"

    def add_token(self, token):
        self.tokens.append(token)

    def reached_end(self):
        return self.current >= len(self.code)

    def advance(self):
        char = self.code[self.current]
        self.current += 1
        return char

    def peek(self):
        """Returns the next character without consuming it, or None at end of input."""
        if self.reached_end():
            return None
        return self.code[self.current]


def lex(code):
    """Returns the token list of code. Raises LexError on the first unexpected character."""
    return Lexer(code).lex()
