"""Uses the arp language implementation to interpret .arp files/run in command-line mode. Also uses the error handling
context manager. Called from the arp console script and `python -m arp`.
"""

import argparse
import os

from arp.lang.error import ErrorHandler
from arp.lang.evaluator import render
from arp.lang.session import Session
from arp.lang.shell import Shell


SAMPLE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "sample.arp")


def build_parser():
    parser = argparse.ArgumentParser(prog="arp", description="Interpreter for the arp S-expression language.")
    parser.add_argument("file", help="file to interpret and run (default: the bundled sample program)", nargs="?",
                        default=SAMPLE)
    parser.add_argument("-i", "--interactive", action="store_true", help="go to command-line mode")
    parser.add_argument("--no-color", action="store_true", help="do not colour error messages")
    parser.add_argument("--tokens", action="store_true", help="print the tokens before running")
    parser.add_argument("--tree", action="store_true", help="print the parsed program before running")
    return parser


def main(argv=None):
    """Runs arp interpreter. Called from the arp executable script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        error_handler.no_color = args.no_color

        if args.interactive:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return

        sess = Session(error_handler, args.file)

        if args.tokens:
            for token in sess.tokens():
                print(token)

        compiled = None
        if args.tree:
            compiled = sess.compile()
            for form in compiled[1].children:
                print(form.display())

        result = render(sess.run(compiled))
        if result:
            print(result)
