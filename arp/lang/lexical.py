"""Lexical analysis for the arp language: turns source text into a flat list of Tokens in a single left-to-right pass.

All tokens can be loosely defined as follows:

```
<left_paren>  ::= "("
<right_paren> ::= ")"
<operator>    ::= "+" | "-" | "*" | "/"
<string>      ::= '"' <char>* '"'                    ; no escape sequences
<number>      ::= <digit>+                           ; no sign, no decimal point
<identifier>  ::= <letter> (<letter> | <digit> | "_")*
<keyword>     ::= "if" | "defunc" | "re"             ; identifiers that are reserved words

<comment>     ::= ";" <char>*                        ; runs until the end of the line
```
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional

from arp.lang.error import MalformedSourceError


class TokenKind(Enum):
    NUMBER = "number"
    STRING = "string"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    REMAINDER = "re"
    IF = "if"
    DEFUNC = "defunc"
    IDENTIFIER = "identifier"


class Pos(NamedTuple):
    line: int
    col: int


@dataclass(frozen=True)
class Token:
    """Immutable (kind, text) pair. pos is only used for error messages, so it takes no part in equality."""
    kind: TokenKind
    text: str
    pos: Optional[Pos] = field(default=None, compare=False)

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r})"


SINGLE_CHARS = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
}

KEYWORDS = {
    "if": TokenKind.IF,
    "defunc": TokenKind.DEFUNC,
    "re": TokenKind.REMAINDER,
}

QUOTE = '"'
COMMENT = ";"


def is_identifier_start(char):
    return char.isalpha()


def is_identifier_char(char):
    return char.isalpha() or char.isdecimal() or char == "_"


class Tokenizer:
    """Scans source one character at a time, keeping at most one run (number, identifier or string) open."""

    def __init__(self, source):
        self.source = source
        self.tokens = []

        self.line = 1
        self.col = 1

        self._run = ""
        self._run_kind = None
        self._run_pos = None

    def _emit(self, kind, text, pos):
        self.tokens.append(Token(kind, text, pos))

    def _start(self, kind):
        self._run = ""
        self._run_kind = kind
        self._run_pos = Pos(self.line, self.col)

    def _end(self):
        """Ends the open run (if any), emitting its token."""
        if self._run_kind is TokenKind.IDENTIFIER:
            self._emit(KEYWORDS.get(self._run, TokenKind.IDENTIFIER), self._run, self._run_pos)
        elif self._run_kind is not None:
            self._emit(self._run_kind, self._run, self._run_pos)
        self._run_kind = None

    def _continues(self, char):
        """Whether or not char extends the open number/identifier run."""
        if self._run_kind is TokenKind.NUMBER:
            return char.isdecimal()
        return self._run_kind is TokenKind.IDENTIFIER and is_identifier_char(char)

    def tokenize(self):
        """Tokenizes self.source and returns the tokens. Raises MalformedSourceError on unterminated strings and
        characters that cannot start a token.
        """
        in_comment = False

        for char in self.source:
            if self._run_kind is TokenKind.STRING:
                if char == QUOTE:
                    self._end()
                else:
                    self._run += char

            elif in_comment:
                in_comment = char != "\n"

            elif self._continues(char):
                self._run += char

            else:
                self._end()

                if char in SINGLE_CHARS:
                    self._emit(SINGLE_CHARS[char], char, Pos(self.line, self.col))
                elif char == QUOTE:
                    self._start(TokenKind.STRING)
                elif char == COMMENT:
                    in_comment = True
                elif char.isspace():
                    pass
                elif char.isdecimal():
                    self._start(TokenKind.NUMBER)
                    self._run = char
                elif is_identifier_start(char):
                    self._start(TokenKind.IDENTIFIER)
                    self._run = char
                else:
                    raise MalformedSourceError("unexpected character '{}'", char, pos=Pos(self.line, self.col))

            if char == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1

        if self._run_kind is TokenKind.STRING:
            raise MalformedSourceError("unterminated string '{}'", QUOTE + self._run, pos=self._run_pos)
        self._end()

        return self.tokens


def tokenize(source):
    """Returns the list of Tokens in source."""
    return Tokenizer(source).tokenize()
