"""Single-pass, stack-based parser for the arp language.

Parsing produces two things: the program tree (a Sequence whose children are the top-level forms) and the function
table (name: FunctionRecord). Every `(` pushes an OpenForm whose variant is unknown; the first meaningful token inside
it decides what it becomes:

```
(+ ...)  (- ...)  (* ...)  (/ ...)  (re ...)   ; arithmetic
(if ...)                                       ; conditional
(defunc name (params...) body)                 ; function definition, goes to the function table on `)`
(name ...)                                     ; call, only if `name` was defined earlier in the source
(...)                                          ; anything else stays an un-typed Sequence
```

Calls are bound to the FunctionRecord their name refers to at the moment they are parsed, so redefining a function
only affects the calls that come after the redefinition.
"""

from arp.lang.error import ArpError, MalformedSourceError, UnresolvedIdentifierError
from arp.lang.forms import (
    Add, Conditional, Divide, FunctionCall, FunctionDefinition, Multiply, Primitive, Remainder, Sequence, Subtract,
    VariableRef
)
from arp.lang.lexical import TokenKind


OPERATORS = {
    TokenKind.PLUS: Add,
    TokenKind.MINUS: Subtract,
    TokenKind.STAR: Multiply,
    TokenKind.SLASH: Divide,
    TokenKind.REMAINDER: Remainder,
    TokenKind.IF: Conditional,
}

LITERALS = (TokenKind.NUMBER, TokenKind.STRING)


class OpenForm:
    """A form that is still being parsed. kind is None until the form's variant has been resolved; it is resolved at
    most once, from the form's first token.
    """

    def __init__(self, token=None, params=False):
        self.token = token    # the "(" that opened this form (None for the program root)
        self.params = params  # whether or not this is the parameter list of a defunc
        self.kind = None
        self.head = None
        self.definition = None
        self.children = []

    @property
    def resolvable(self):
        """Whether or not the next token may still decide what this form is."""
        return self.token is not None and not self.params and self.kind is None and not self.children

    @property
    def expects_name(self):
        """Whether or not this is a defunc still waiting for its function name."""
        return self.kind is FunctionDefinition and not self.children

    def resolve(self, kind, head, definition=None):
        self.kind = kind
        self.head = head
        self.definition = definition

    def close(self):
        """Builds the finished Form."""
        if self.kind is None:
            return Sequence(self.token, self.children)
        if self.kind is FunctionCall:
            return FunctionCall(self.head, self.definition, self.children)
        return self.kind(self.head, self.children)


class Parser:
    """Governs one parse. functions may be an existing function table (used by the interactive shell), which is copied
    rather than mutated.
    """

    def __init__(self, tokens, functions=None):
        self.tokens = list(tokens)
        self.functions = dict(functions) if functions else {}
        self.defining = 0    # number of open defunc forms
        self.warnings = []   # ArpErrors that do not stop parsing

    def parse(self):
        """Parses self.tokens. Returns (program, function table)."""
        root = OpenForm()
        stack = [root]

        for token in self.tokens:
            top = stack[-1]

            if token.kind is TokenKind.LEFT_PAREN:
                stack.append(OpenForm(token, params=top.kind is FunctionDefinition and len(top.children) == 1))

            elif token.kind is TokenKind.RIGHT_PAREN:
                if len(stack) == 1:
                    raise MalformedSourceError.at(token, "unmatched '{}'")
                self.close(stack.pop(), stack[-1])

            else:
                self.feed(top, token)

        if len(stack) > 1:
            raise MalformedSourceError.at(stack[-1].token, "unclosed '{}'")

        return root.close(), self.functions

    def feed(self, top, token):
        """Adds a non-parenthesis token to the open form top."""
        if top.params:
            if token.kind is not TokenKind.IDENTIFIER:
                raise MalformedSourceError.at(token, "'{}' is not a parameter name")
            top.children.append(VariableRef(token))

        elif token.kind in LITERALS:
            top.children.append(Primitive(token))

        elif top.expects_name:
            if token.kind is not TokenKind.IDENTIFIER:
                raise MalformedSourceError.at(token, "'{}' is not a valid function name")
            top.children.append(VariableRef(token))

        elif top.resolvable and self.resolve(top, token):
            pass

        elif token.kind is TokenKind.IDENTIFIER:
            self.identifier(top, token)

        else:
            raise MalformedSourceError.at(token, "'{}' must be the first element of a form")

    def resolve(self, top, token):
        """Resolves top's variant from token if token is an operator, a keyword or a defined function name. Returns
        whether or not top was resolved.
        """
        if token.kind in OPERATORS:
            top.resolve(OPERATORS[token.kind], token)
        elif token.kind is TokenKind.DEFUNC:
            top.resolve(FunctionDefinition, token)
            self.defining += 1
        elif token.kind is TokenKind.IDENTIFIER and token.text in self.functions:
            top.resolve(FunctionCall, token, self.functions[token.text])
        else:
            return False
        return True

    def identifier(self, top, token):
        """Non-head identifiers are parameter references, which only exist inside function definitions."""
        if self.defining:
            top.children.append(VariableRef(token))
        elif token.text in self.functions:
            raise MalformedSourceError.at(token, "function '{}' can only be called at the start of a form")
        else:
            msg = "'{}' is not defined (functions must be defined before they are used)"
            raise UnresolvedIdentifierError.at(token, msg)

    def close(self, form, parent):
        """Finishes form and attaches it to parent, unless it is a function definition."""
        node = form.close()

        if isinstance(node, FunctionDefinition):
            record = node.record()
            if record.name in self.functions:
                msg = "'{}' is redefined; calls parsed before this point keep the previous definition"
                self.warnings.append(ArpError.at(node.children[0].token, msg))
            self.functions[record.name] = record
            self.defining -= 1
            return

        if isinstance(node, FunctionCall):
            self._check_call(node)
        parent.children.append(node)

    def _check_call(self, call):
        """Warns when a call's argument count visibly differs from the definition's parameter count."""
        if any(type(child) is Sequence for child in call.children):
            return  # argument groups are flattened at evaluation time
        expected, given = len(call.definition.parameters), len(call.children)
        if expected != given:
            msg = "'{}' takes {} argument(s) but {} were given"
            self.warnings.append(ArpError.at(call.token, msg, (call.name, expected, given)))


def parse(tokens, functions=None):
    """Returns (program, function table) for tokens."""
    return Parser(tokens, functions).parse()
