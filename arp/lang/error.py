"""Error handling for the arp language. Only ArpErrors should be encountered during running: if another type of error
is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class ArpError(Exception):
    """Templates an error/warning message so that it can be used to throw an arp error/warning. exprs are the snippets
    interpolated into msg (they are bolded when displayed), pos is the (line, col) of the offending token.
    """

    def __init__(self, msg, exprs=None, pos=None, span=None, internal=False):
        if exprs is None:
            exprs = ()
        if isinstance(exprs, str):
            exprs = (exprs,)

        self.template = msg
        self.exprs = tuple(str(expr) for expr in exprs)
        self.msg = msg.format(*self.exprs)
        self.pos = pos
        self.span = span if span is not None else len(self.exprs[0]) if self.exprs else 1  # needed for diagnosis
        self.internal = internal

        super().__init__(self.msg)

    @classmethod
    def at(cls, token, msg, exprs=None):
        """Builds an error pointing at token, using token.text as the default expr."""
        if exprs is None:
            exprs = (token.text,)
        return cls(msg, exprs, pos=token.pos, span=max(len(token.text), 1))


class MalformedSourceError(ArpError):
    """Unterminated strings, stray characters, unmatched parentheses and badly shaped forms."""


class UnresolvedIdentifierError(ArpError):
    """An identifier that is neither an operator, a keyword, a parameter nor a previously defined function."""


class ArityError(ArpError):
    """Wrong number of operands for a form."""


class OperandTypeError(ArpError):
    """Mixed or non-numeric operands."""


class DomainError(ArpError):
    """Division or remainder by zero."""


class UnboundParameterError(ArpError):
    """A parameter reference with no value in the current binding context."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report arp errors/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, no_color=False):
        self.fatal = fatal
        self.no_color = no_color
        self.path = None
        self.source = ""

    def register_file(self, path, source=""):
        """Registers the file (and its text, for diagnoses) that errors will be reported against."""
        self.path = path
        self.source = source

    def _colored(self, text, color=None, bold=True):
        return colored(text, color, attrs=["bold"] if bold else None, no_color=self.no_color)

    def _message(self, error):
        """Message with its interpolated exprs bolded."""
        return error.template.format(*(self._colored(expr) for expr in error.exprs))

    def _location(self, error):
        location = self.path or "<arp>"
        if error.pos is not None:
            location += ":{}:{}".format(*error.pos)
        return self._colored(f"{location}: ")

    def diagnose(self, error, warning=False):
        """Returns the offending source line with the part at error.pos highlighted and underlined."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line_num, col = error.pos
        lines = self.source.splitlines()
        if not 0 < line_num <= len(lines):
            return ""

        line = lines[line_num - 1]
        start = col - 1
        end = min(start + max(error.span, 1), max(len(line), start + 1))

        diagnosis = "  " + line[:start]
        diagnosis += self._colored(line[start:end], color)
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += self._colored("^" + "~" * (end - start - 1), color)

        return diagnosis

    def _report(self, error, warning=False):
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        label = "warning: " if warning else "error: "

        error_msg = self._location(error)
        if error.internal:
            error_msg += self._colored("[internal] ", ErrorHandler.ERROR)
        error_msg += self._colored(label, color) + self._message(error)
        print(error_msg)

        if not error.internal and error.pos is not None:
            diagnosis = self.diagnose(error, warning)
            if diagnosis:
                print(diagnosis)

    def warn(self, error):
        """Prints a runtime warning for error (an ArpError). Never stops the run."""
        self._report(error, warning=True)

    def throw(self, error):
        """Reports error, which must be an ArpError. Exits if this handler is fatal."""
        self._report(error)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(ArpError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(ArpError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, ArpError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(ArpError("unknown error: '{}: {}'", (exc_type.__name__, exc_val), internal=True))
            do_exit = True

        return not do_exit
