from typing import Any, Callable, List, Optional as OptionalType

from .abstract import (
    EndOfInput,
    FunctionParser,
    Literal,
    ParseResult,
    ParserAbstract,
    ParserLike,
    Succeed,
    as_parser,
)
from .repetition import ANY, MANY

UINT32_MAX = 2 ** 32 - 1

def _next_character(text: str) -> OptionalType[ParseResult[str]]:
    if not text:
        return None
    return ParseResult(text[0], text[1:])

def character() -> ParserAbstract[str]:
    """
    Matches any one single character and returns it.
    """
    return FunctionParser(_next_character)

def literal(expected: str) -> Literal:
    """
    Matches a specific string and returns it.
    """
    return Literal(expected)

def satisfy(predicate: Callable[[str], bool]) -> ParserAbstract[str]:
    """
    Matches one character accepted by `predicate`.
    """
    return character().filter(predicate)

def digit() -> ParserAbstract[str]:
    return satisfy(str.isdecimal)

def whitespace() -> ParserAbstract[str]:
    return satisfy(str.isspace)

def _is_word_character(c: str) -> bool:
    return c.isalnum() or c == "_"

def word() -> ParserAbstract[str]:
    return satisfy(_is_word_character).repeat(MANY).map("".join)

def identifier() -> ParserAbstract[str]:
    """
    A letter or underscore, followed by any number of letters, digits and underscores.
    """
    return (
        satisfy(lambda c: c.isalpha() or c == "_")
        .then(satisfy(_is_word_character).repeat(ANY))
        .map(lambda pair: pair[0] + "".join(pair[1]))
    )

def _fold_digits(digits: List[str]) -> int:
    n = 0
    for d in digits:
        n = n * 10 + int(d)
    return n

def uint32() -> ParserAbstract[int]:
    """
    One or more decimal digits read as an unsigned integer.
    Numbers that don't fit in 32 bits don't match.
    """
    return (
        digit()
        .repeat(MANY)
        .map(_fold_digits)
        .filter(lambda n: n <= UINT32_MAX)
    )

def string(parser: ParserLike) -> ParserAbstract[str]:
    """
    Runs `parser` and returns the text it consumed instead of its value.
    """
    parser = as_parser(parser)

    def consumed(text: str) -> OptionalType[ParseResult[str]]:
        result = parser.parse(text)
        if result is None:
            return None
        return ParseResult(text[:len(text) - len(result.remaining)], result.remaining)

    return FunctionParser(consumed)

def succeed(value: Any = None) -> Succeed:
    """
    Always matches without consuming anything.
    """
    return Succeed(value)

def end_of_input() -> EndOfInput:
    """
    Matches only when there is no input left.
    """
    return EndOfInput()
