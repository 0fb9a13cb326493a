"""Handles interactive/command-line mode for the calculator. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Calculator shell: every line is one expression, evaluated by both backends."""
    intro = "Expression calculator :: tree interpreter + stack machine\nType '?' or 'help' for more information."
    prompt = "calc >> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0
        self._raw_line = ""  # cmd strips the line before default sees it

    def onecmd(self, line):
        self._raw_line = line
        return super().onecmd(line)

    def default(self, line):
        """Evaluates an arbitrary expression, exactly as typed."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.add(self._raw_line, self.line_num)
            self.sess.run()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the calculator!\n\n"
              "Type an arithmetic expression made of numbers (like 3 or 2.75), '+', '-', '*'\n"
              "and parentheses. '*' binds tighter than '+' and '-', and operators of equal\n"
              "precedence group left to right, so '10-3-2' is 5.0.\n\n"
              "Each line is parsed once, then evaluated twice: by walking the syntax tree and\n"
              "by compiling it to stack machine code. Both results are printed and always agree.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits calculator."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits calculator."""
        return True
