"""
Chomp, small composable text parsers

This is a parser-combinator library for puzzle-sized inputs.
Parsers are immutable values built from characters, literals and predicates,
then combined by sequencing, alternation, mapping and bounded repetition.
"""

__all__ = [
    "abstract",
    "parser",
    "primitives",
    "repetition",
    "ParseResult",
    "ParserAbstract",
    "BoxedParser",
    "as_parser",
    "either",
    "joined",
    "option",
    "lazy",
    "character",
    "literal",
    "satisfy",
    "digit",
    "whitespace",
    "word",
    "identifier",
    "uint32",
    "string",
    "succeed",
    "end_of_input",
    "Repetition",
    "NEVER",
    "ANY",
    "MANY",
    "exactly",
    "at_least",
    "at_most",
    "between",
    "Grammar",
    "grammar",
    "Parser",
    "ParseError",
]

from . import abstract
from . import parser
from . import primitives
from . import repetition

from .abstract import ParseResult, ParserAbstract, BoxedParser, as_parser, either, joined, option, lazy
from .primitives import (
    character,
    literal,
    satisfy,
    digit,
    whitespace,
    word,
    identifier,
    uint32,
    string,
    succeed,
    end_of_input,
)
from .repetition import Repetition, NEVER, ANY, MANY, exactly, at_least, at_most, between
from .parser import Grammar, grammar, Parser, ParseError
