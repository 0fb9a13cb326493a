"""Session control for the calculator. Evaluates source lines with both backends, either in command-line mode or file
interpretation mode, and renders the results.
"""

from dataclasses import dataclass
from typing import List

from termcolor import colored

from stackcalc.backend.compiler import StackOp, compile_expression
from stackcalc.backend.interpreter import interpret
from stackcalc.backend.machine import only_element, run_stack, same_value
from stackcalc.lang.error import GenericException, InternalError
from stackcalc.pure.expression import Expression
from stackcalc.pure.lexical import Token, TokenKind, lex
from stackcalc.pure.syntax import Parser


@dataclass(frozen=True)
class Evaluation:
    """Everything produced for one line: the tokens, the tree, its program, and the result of each backend."""
    line: str
    tokens: List[Token]
    expression: Expression
    program: List[StackOp]
    interpreted: float
    stack: List[float]

    @property
    def result(self):
        return only_element(self.stack)


class Session:
    """Governs a calculator session. Every line is independent: no state is carried from one line to the next."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, tree=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.tree = tree          # whether or not to also render the syntax tree

        self.results: List[Evaluation] = []
        self.lines = []  # (line num, line) of the file, evaluated by run_lines

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    lines = file.read().splitlines()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.lines = [(line_num + 1, line) for line_num, line in enumerate(lines) if line.strip()]

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def evaluate(line):
        """Lexes, parses and evaluates line with both backends. Raises LexError/ParseError for malformed lines."""
        tokens = lex(line)
        expression = Parser(tokens, line).parse()
        program = compile_expression(expression)

        interpreted = interpret(expression)
        stack = run_stack(program)

        if not same_value(interpreted, only_element(stack)):
            raise InternalError(f"backends disagree on '{line}': {interpreted!r} != {stack!r}")
        return Evaluation(line, tokens, expression, program, interpreted, stack)

    def add(self, line, line_num):
        """Evaluates line and queues its Evaluation. Errors propagate to the error handler."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised
        evaluation = Session.evaluate(line)

        for token in evaluation.tokens:
            if token.kind is TokenKind.NUMBER and token.lexeme.endswith("."):
                point = token.start + len(token.lexeme) - 1
                msg = "'{}' has a decimal point without fractional digits"
                self.error_handler.warn(msg, line, start=point, end=point + 1)

        self.results.append(evaluation)
        self.error_handler.remove_line(self.path)  # error was not raised

    @staticmethod
    def render(evaluation, tree=False):
        """Returns the four artifacts of evaluation, one per line."""
        rendered = [
            ("Expression", repr(evaluation.expression)),
            ("Stack Representation", repr(evaluation.program)),
            ("Ast Interpreter Result", repr(evaluation.interpreted)),
            ("Stack Machine Result", repr(evaluation.stack)),
        ]
        result = "\n".join(colored(f"{label}: ", attrs=["bold"]) + value for label, value in rendered)
        if tree:
            result += "\n" + evaluation.expression.display()
        return result

    def pop(self):
        """Removes and returns the rendering of the oldest pending result."""
        return Session.render(self.results.pop(0), self.tree)

    def run(self):
        """Prints every pending result in order."""
        while self.results:
            print(self.pop())

    def run_lines(self, lines=None):
        """Evaluates and prints lines ((line num, line) pairs, by default the file's lines) one at a time. A bad line
        is reported and skipped without stopping the others. Returns the number of bad lines.
        """
        if lines is None:
            lines = self.lines

        fatal, self.error_handler.fatal = self.error_handler.fatal, False
        failed = 0
        try:
            for line_num, line in lines:
                evaluated = False
                with self.error_handler:
                    self.add(line, line_num)
                    self.run()
                    evaluated = True
                if not evaluated:
                    failed += 1
        finally:
            self.error_handler.fatal = fatal

        return failed
