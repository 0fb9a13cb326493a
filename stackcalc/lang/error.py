"""Error handling for the calculator. Only GenericExceptions (LexError, ParseError) should be encountered during
running: they end processing of the offending line only. If another type of error makes it all the way to ErrorHandler,
it is assumed to be an internal issue and the process aborts.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a calculator error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending line that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class LexError(GenericException):
    """Unexpected character in the source line."""

    def __init__(self, char, position, code):
        self.char = char
        self.position = position
        msg = "unexpected character '{1}' at position " + str(position)
        super().__init__(msg, (code, char), start=position, end=position + 1)

    def __repr__(self):
        return f"LexError(char={self.char!r}, position={self.position})"


class ParseError(GenericException):
    """Unexpected token or unexpected end of input while building the syntax tree."""

    def __init__(self, token, code):
        self.token = token
        if token.is_eof:
            msg = "unexpected end of input in '{}'"
            super().__init__(msg, code, start=token.start, end=token.start + 1)
        else:
            msg = "unexpected token {1} in '{0}'"
            super().__init__(msg, (code, repr(token)), start=token.start, end=token.start + len(token.lexeme))

    @property
    def unexpected_eof(self):
        return self.token.is_eof

    def __repr__(self):
        return f"ParseError(token={self.token!r})"


class InternalError(RuntimeError):
    """A broken lexer/parser/compiler contract. Never reported as a user error: ErrorHandler aborts on it."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom calculator errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded, with a caret line underneath."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def location(self, error):
        """Returns 'file:line:col: ' for the first registered line, or '' if no line is registered."""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                return f"{file}:{line_num}:{error.start}: "
        return ""

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        warning_msg = colored(self.location(error), attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(warning_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal or error.internal:
            sys.exit(1)
        for file in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(file)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            return False
        if exc_type is SystemExit:
            return False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("expression is nested too deeply", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            unknown = f"{exc_type.__name__}: {exc_val}".replace("{", "{{").replace("}", "}}")
            self.throw(GenericException(f"unknown error: '{unknown}'", internal=True))

        return True
