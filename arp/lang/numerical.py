"""Numbers in the arp language. Number literals are integers; division may produce floats, which are folded back to
ints whenever they are integral so that `(/ 20 2 5)` gives `2`, not `2.0`.
"""

import math

from arp.lang.error import DomainError, OperandTypeError


def is_number(value):
    """bools are ints in Python, but not numbers in arp."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(text):
    """Converts a Number token's text. The tokenizer guarantees text is a run of digits."""
    return int(text)


def normalize(value):
    """Returns value as an int if it is an integral float."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def check_numbers(values, form):
    """Raises OperandTypeError unless every value is a number. form is the operator being evaluated."""
    op = form.token.text
    for value in values:
        if not is_number(value):
            msg = "'{}' expects numbers, got {}"
            raise OperandTypeError(msg, (op, repr(value)), pos=form.pos, span=len(op))
    return values


def divide(dividend, divisor):
    """Exact integer quotients stay ints of any size; anything else goes through float division."""
    if isinstance(dividend, int) and isinstance(divisor, int) and dividend % divisor == 0:
        return dividend // divisor
    return normalize(dividend / divisor)


def remainder(dividend, divisor):
    """Truncated remainder: the result has the sign of the dividend."""
    if isinstance(dividend, int) and isinstance(divisor, int):
        result = abs(dividend) % abs(divisor)
        return -result if dividend < 0 else result
    return normalize(math.fmod(dividend, divisor))


def check_nonzero(value, what, form):
    if value == 0:
        raise DomainError("{} by zero", what, pos=form.pos, span=len(form.token.text))
    return value
