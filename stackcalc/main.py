"""Calculator front end: evaluates expressions from a file, from the command line, or in an interactive shell. Also
uses error handling context manager. Called from the stackcalc console script.

Basic program flow, per line:
    1. Lexer: produces tokens (see stackcalc/pure/lexical.py)
    2. Parser: produces an expression syntax tree (see stackcalc/pure/syntax.py)
    3. Evaluation, done twice on the same tree:
        - tree-walking interpreter (see stackcalc/backend/interpreter.py)
        - compiler to stack machine code, then stack machine (see stackcalc/backend/compiler.py, machine.py)
"""

import argparse

from stackcalc.lang.error import ErrorHandler, GenericException
from stackcalc.lang.session import Session
from stackcalc.lang.shell import Shell


def main(argv=None):
    """Runs the calculator. Called from the stackcalc console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="stackcalc")
        parser.add_argument("file", help="file to evaluate line by line (if empty, goes to command-line mode)",
                            nargs="?")
        parser.add_argument("-e", "--expression", help="expression to evaluate (may be repeated)", action="append",
                            default=[])
        parser.add_argument("--tree", help="also print the syntax tree of each expression", action="store_true")
        args = parser.parse_args(argv)

        if args.file is not None and args.expression:
            parser.error("a file and --expression cannot be combined")

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, tree=args.tree)
            failed = sess.run_lines()

        elif args.expression:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, tree=args.tree)
            failed = sess.run_lines(enumerate(args.expression, 1))

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, tree=args.tree)).cmdloop()
            return

        if failed:
            error_handler.fatal = True
            raise GenericException("{} line(s) could not be evaluated", str(failed), diagnosis=False)


if __name__ == "__main__":
    main()
