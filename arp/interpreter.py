"""arp interpreter pipeline.

Basic program flow:
    1. Tokenizer (lang/lexical.py): source text -> flat list of Tokens
    2. Parser (lang/parser.py): Tokens -> program tree + function table, in one pass with an explicit stack
    3. Evaluator (lang/evaluator.py, lang/forms.py): program tree -> a single number, string or boolean

Each stage runs exactly once over the output of the previous one.
"""

from arp.lang.evaluator import evaluate
from arp.lang.lexical import tokenize
from arp.lang.parser import Parser


def compile_source(source, functions=None):
    """Tokenizes and parses source. Returns the Parser, which holds the function table and any warnings, and the
    program tree.
    """
    parser = Parser(tokenize(source), functions)
    program, __ = parser.parse()
    return parser, program


def interpret(source, functions=None):
    """Runs source and returns (value, function table). functions is the table of previously defined functions, if
    any; it is not modified.
    """
    parser, program = compile_source(source, functions)
    return evaluate(program), parser.functions
