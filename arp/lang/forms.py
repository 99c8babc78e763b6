"""Forms: the nodes of a parsed arp program.

Every Form knows how to evaluate itself against a binding context (see evaluator.py). The tree is built by parser.py
and is never modified once a form has been closed, so evaluating the same tree twice gives the same result.

```
Form
├── Primitive            ; number/string literal
├── VariableRef          ; parameter reference inside a function body
├── Sequence             ; un-typed group: program root, parameter lists, `((+ 1 2))`
├── Arithmetic
│   ├── Add              ; +
│   ├── Subtract         ; -
│   ├── Multiply         ; *
│   ├── Divide           ; /
│   └── Remainder        ; re
├── Conditional          ; if
├── FunctionDefinition   ; defunc (consumed by the parser, never part of the final tree)
└── FunctionCall         ; call to a function defined earlier in the source
```
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import reduce
import operator
from typing import Tuple

from arp.lang.error import ArityError, DomainError, MalformedSourceError, OperandTypeError, UnboundParameterError
from arp.lang.evaluator import render, truthy
from arp.lang.lexical import TokenKind
from arp.lang.numerical import check_nonzero, check_numbers, divide, is_number, remainder, to_number


class Form(ABC):
    """Superclass that represents any node in an arp program tree."""

    def __init__(self, token=None, children=None):
        self.token = token
        self.children = list(children) if children else []
        self._cls = type(self).__name__

    @property
    def pos(self):
        return self.token.pos if self.token is not None else None

    @abstractmethod
    def evaluate(self, context):
        """This method should return the value of this form given context, a dict of parameter name: value."""

    def evaluate_children(self, context):
        """Evaluates all children left to right."""
        return [child.evaluate(context) for child in self.children]

    def sexp(self):
        """S-expression text of this form."""
        parts = [self.token.text] if self.token is not None else []
        parts += [child.sexp() for child in self.children]
        return "(" + " ".join(parts) + ")"

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Form>('<head>', children=[
            <Form>('<head>', children=[
                ...
                <Form>('<head>')  # <-- if children is empty
            ])
        ])
        """
        head = self.token.text if self.token is not None else ""
        result = f"{'    ' * indents}{self._cls}('{head}'"
        if self.children:
            result += ", children=["
            for child in self.children:
                result += "\n" + child.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}({self.sexp()!r})"

    def __str__(self):
        return self.sexp()

    def __eq__(self, other):
        return type(other) is type(self) and self.token == other.token and self.children == other.children

    __hash__ = None


class Primitive(Form):
    """Number or string literal. Numbers are converted from text on evaluation."""

    def evaluate(self, context):
        if self.token.kind is TokenKind.NUMBER:
            return to_number(self.token.text)
        return self.token.text

    def sexp(self):
        if self.token.kind is TokenKind.STRING:
            return f'"{self.token.text}"'
        return self.token.text


class VariableRef(Form):
    """Identifier that denotes a function parameter. Only legal inside a function definition."""

    @property
    def name(self):
        return self.token.text

    def evaluate(self, context):
        try:
            return context[self.name]
        except KeyError:
            raise UnboundParameterError.at(self.token, "'{}' has no value in this call") from None

    def sexp(self):
        return self.name


class Sequence(Form):
    """Ordered group of forms with no operator of its own.

    A Sequence with one child evaluates to that child's value. With several children it evaluates to the rendered
    values of the children that produced one, separated by newlines; this is how a program with more than one
    top-level form is printed. An empty Sequence produces no value.
    """

    def evaluate(self, context):
        values = self.evaluate_children(context)
        if not values:
            return None
        if len(values) == 1:
            return values[0]
        return "\n".join(render(value) for value in values if value is not None)

    def sexp(self):
        return "(" + " ".join(child.sexp() for child in self.children) + ")"

    def flatten(self, context):
        """Values of the children, with nested Sequences spliced in place."""
        values = []
        for child in self.children:
            if type(child) is Sequence:
                values += child.flatten(context)
            else:
                values.append(child.evaluate(context))
        return values


class Arithmetic(Form):
    """Superclass of the arithmetic operators. All operands are evaluated, left to right, before being combined."""

    @property
    def symbol(self):
        return self.token.text

    def evaluate(self, context):
        return self.combine(self.evaluate_children(context))

    @abstractmethod
    def combine(self, values):
        """This method should reduce the operand values to the result of the operation."""

    def _at_least_one(self, values):
        if not values:
            raise ArityError.at(self.token, "'{}' expects at least one operand")
        return values


class Add(Arithmetic):
    """Sums numbers or concatenates strings, but never both."""

    def combine(self, values):
        if all(is_number(value) for value in values):
            return sum(values, 0)
        if all(isinstance(value, str) for value in values):
            return "".join(values)
        raise OperandTypeError.at(self.token, "'{}' cannot mix numbers and strings")


class Subtract(Arithmetic):

    def combine(self, values):
        check_numbers(self._at_least_one(values), self)
        return reduce(operator.sub, values)


class Multiply(Arithmetic):

    def combine(self, values):
        check_numbers(values, self)
        return reduce(operator.mul, values, 1)


class Divide(Arithmetic):
    """Left-to-right division. Any zero operand, the first included, is an error."""

    def combine(self, values):
        check_numbers(self._at_least_one(values), self)
        for value in values:
            check_nonzero(value, "division", self)
        try:
            return reduce(divide, values)
        except OverflowError:
            raise DomainError.at(self.token, "'{}' result is too large to represent") from None


class Remainder(Arithmetic):
    """Remainder of exactly two operands."""

    def combine(self, values):
        if len(values) != 2:
            msg = "'{}' expects exactly 2 operands, got {}"
            raise ArityError.at(self.token, msg, (self.symbol, len(values)))

        dividend, divisor = check_numbers(values, self)
        check_nonzero(divisor, "remainder", self)
        return remainder(dividend, divisor)


class Conditional(Form):
    """(if condition then [else]). Produces no value when condition is false and there is no else branch."""

    def evaluate(self, context):
        if not 2 <= len(self.children) <= 3:
            msg = "'{}' expects a condition, a then-branch and an optional else-branch, got {} parts"
            raise ArityError.at(self.token, msg, (self.token.text, len(self.children)))

        condition, then, *otherwise = self.children
        if truthy(condition.evaluate(context)):
            return then.evaluate(context)
        elif otherwise:
            return otherwise[0].evaluate(context)
        return None


@dataclass(frozen=True)
class FunctionRecord:
    """A defined function, as captured when its defunc form is closed."""
    name: str
    parameters: Tuple[str, ...]
    body: Form


class FunctionDefinition(Form):
    """(defunc name (params...) body). The parser extracts a FunctionRecord from it on close and then discards it."""

    def evaluate(self, context):
        """Definitions produce no value."""
        return None

    def record(self):
        """Extracts the FunctionRecord. Raises MalformedSourceError if this form is not shaped like a definition."""
        if len(self.children) != 3:
            msg = "'{}' expects a name, a parameter list and a body, got {} parts"
            raise MalformedSourceError.at(self.token, msg, (self.token.text, len(self.children)))

        name, params, body = self.children
        if not isinstance(name, VariableRef):
            raise MalformedSourceError.at(self.token, "'{}' expects a function name first")
        if type(params) is not Sequence or not all(isinstance(param, VariableRef) for param in params.children):
            msg = "parameter list of '{}' must be a parenthesized list of names"
            raise MalformedSourceError.at(name.token, msg)

        parameters = tuple(param.name for param in params.children)
        for idx, param in enumerate(params.children):
            if param.name in parameters[:idx]:
                raise MalformedSourceError.at(param.token, "duplicate parameter '{}'")

        return FunctionRecord(name.name, parameters, body)


class FunctionCall(Form):
    """Call to a user-defined function. definition is the FunctionRecord the name resolved to when this call was
    parsed; redefining the name afterwards does not change it.
    """

    def __init__(self, token, definition, children=None):
        super().__init__(token, children)
        self.definition = definition

    @property
    def name(self):
        return self.definition.name

    def arguments(self, context):
        """Argument values, evaluated in the caller's context. Un-typed groups are spliced into the argument list."""
        return Sequence(children=self.children).flatten(context)

    def bind(self, values):
        """Fresh context pairing parameters with values positionally. Parameters without a value stay unbound."""
        return dict(zip(self.definition.parameters, values))

    def evaluate(self, context):
        return self.definition.body.evaluate(self.bind(self.arguments(context)))

    def __eq__(self, other):
        return super().__eq__(other) and self.definition == other.definition

    __hash__ = None
