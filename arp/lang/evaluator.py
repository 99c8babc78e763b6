"""Tree-walking evaluation of parsed arp programs.

Values are scalars only: ints/floats, strs and bools. A form that produces no value (an `if` whose condition is false
and that has no else branch) evaluates to None. Contexts are flat dicts of parameter name: value, created fresh for
every function call and never chained to the caller's, so function bodies only ever see their own parameters.
"""

from arp.lang.numerical import is_number


def truthy(value):
    """Non-zero numbers, non-empty strings and True are truthy."""
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return False


def render(value):
    """Textual representation of value, as printed by the interpreter."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def evaluate(program, context=None):
    """Evaluates program (any Form) and returns its value. The top-level context is empty."""
    return program.evaluate({} if context is None else context)
