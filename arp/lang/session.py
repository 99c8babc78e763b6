"""Session control for the arp language: file interpretation mode or command-line mode, with control over the
functions defined so far.
"""

from arp.interpreter import compile_source
from arp.lang.error import ArpError
from arp.lang.evaluator import evaluate, render
from arp.lang.lexical import tokenize


class Session:
    """Governs an arp session. Functions defined by one run stay callable in the following ones."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line=False):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.source = ""
        self.functions = {}  # dict of name: FunctionRecord defined in the current session
        self.results = []    # values of the runs so far, most recent last

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    self.source = file.read()
            except OSError:
                raise ArpError("'{}' could not be opened", path) from None

        elif not cmd_line:
            raise ArpError("'{}' is a reserved filename", path)

        self.error_handler.register_file(path, self.source)

    @staticmethod
    def preprocess_line(line, pending=""):
        """Joins line to the pending (unfinished) input. Returns the joined input and whether or not more lines are
        needed: a parenthesis or a string is still open.
        """
        text = pending + "\n" + line if pending else line

        depth = 0
        in_string = in_comment = False
        for char in text:
            if in_string:
                in_string = char != '"'
            elif in_comment:
                in_comment = char != "\n"
            elif char == '"':
                in_string = True
            elif char == ";":
                in_comment = True
            elif char == "(":
                depth += 1
            elif char == ")":
                depth -= 1

        return text, in_string or depth > 0

    def add(self, source):
        """Replaces the source to run next. Used in command-line mode."""
        if not source.strip():
            raise ValueError("source cannot be empty")
        self.source = source
        self.error_handler.register_file(self.path, source)

    def tokens(self):
        return tokenize(self.source)

    def compile(self):
        """Parses self.source against the session's functions. Parser warnings are reported immediately."""
        parser, program = compile_source(self.source, self.functions)
        for warning in parser.warnings:
            self.error_handler.warn(warning)
        return parser, program

    def run(self, compiled=None):
        """Runs self.source, or the (parser, program) pair compiled from it. Definitions are only kept if the whole run
        succeeds. Returns the value.
        """
        parser, program = compiled if compiled is not None else self.compile()
        value = evaluate(program)

        self.functions = parser.functions
        self.results.append(value)
        return value

    def pop(self):
        """Pops the most recent result, rendered."""
        return render(self.results.pop())
