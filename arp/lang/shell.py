"""Handles interactive/command-line mode for the arp interpreter. Uses cmd as backend."""

import cmd

from arp.lang.session import Session


class Shell(cmd.Cmd):
    """arp interpreter shell."""
    intro = "arp interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary arp source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            try:
                self.sess.add(line)
            except ValueError:
                return  # if line is empty, terminate

            self.sess.run()

            result = self.sess.pop()
            if result:
                print(result)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the arp interpreter!\n\n"
              "arp programs are parenthesized forms. Try '(+ 1 2)', '(+ \"a\" \"b\")' or\n"
              "'(if 0 \"yes\" \"no\")'. Operators are + - * / and re (remainder).\n\n"
              "Define a function with '(defunc add (a b) (+ a b))' and call it with\n"
              "'(add 2 3)'. Functions stay defined for the rest of the session.")

    def do_functions(self, arg):
        """Lists the functions defined in this session."""
        for record in self.sess.functions.values():
            params = " ".join(record.parameters)
            print(f"{record.name} ({params})")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
