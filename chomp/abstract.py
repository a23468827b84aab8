import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, List, Optional as OptionalType, Sequence, Tuple, TypeVar, Union

from .repetition import Repetition

logger = logging.getLogger("chomp")

T = TypeVar('T')
U = TypeVar('U')

@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    A successful match: the produced value and the input left after it.

    Failure is represented by None rather than by a ParseResult.
    """
    value: T
    remaining: str = ""

    def __iter__(self) -> Iterator[Any]:
        return iter((self.value, self.remaining))

ParserLike = Union['ParserAbstract', str, Sequence[str], Callable[[str], OptionalType[ParseResult]]]

class ParserAbstract(Generic[T]):
    def parse(self, text: str) -> OptionalType[ParseResult[T]]:
        raise NotImplementedError("Subclasses must implement this method")

    def parse_result(self, text: str) -> OptionalType[T]:
        """
        Parse `text` and return only the value, or None if it didn't match.
        The remaining input is thrown away, it is not required to be empty.
        """
        result = self.parse(text)
        if result is None:
            return None
        return result.value

    def parse_to_completion(self, text: str) -> OptionalType[T]:
        return self.parse_result(text)

    def node_type(self) -> str:
        return self.__class__.__name__

    def get_node_name(self) -> str:
        return self.node_type()

    def with_name(self, custom_name: str) -> 'BoxedParser[T]':
        return BoxedParser(self, custom_name)

    def boxed(self) -> 'BoxedParser[T]':
        return BoxedParser(self)

    def traced(self, name: str = None) -> 'Traced[T]':
        """
        Logs every attempt of this parser to the `chomp` logger at DEBUG level.
        """
        return Traced(self, name or self.get_node_name())

    def map(self, f: Callable[[T], U]) -> 'Map[U]':
        """
        Transforms the value of this parser.
        """
        return Map(self, f)

    def map_into(self, cls: Callable[[T], U]) -> 'Map[U]':
        return Map(self, cls)

    def bind(self, f: Callable[[T], ParserLike]) -> 'Bind':
        """
        Builds a new parser out of this parser's value and runs it on the rest of the input.
        """
        return Bind(self, f)

    def and_then(self, f: Callable[[T], ParserLike]) -> 'Bind':
        return self.bind(f)

    def skip(self, second: ParserLike) -> 'Skip[T]':
        """
        Runs `second` after this parser and throws its value away. `a.skip(b)` yields a's value.
        """
        return Skip(self, as_parser(second))

    def but_really(self, second: ParserLike) -> 'ButReally':
        """
        Throws this parser's value away and keeps the second. `a.but_really(b)` yields b's value.
        """
        return ButReally(self, as_parser(second))

    def then(self, second: ParserLike) -> 'Then':
        """
        Captures both values in a tuple. `a.then(b)` yields `(a, b)`.
        """
        return Then(self, as_parser(second))

    def or_(self, second: ParserLike) -> 'Or[T]':
        """
        Falls back to `second` on the original input if this parser doesn't match.
        """
        return Or(self, as_parser(second))

    def filter(self, predicate: Callable[[T], bool]) -> 'Filter[T]':
        return Filter(self, predicate)

    def repeat(self, rep: Union[Repetition, int]) -> 'Repeat[T]':
        return Repeat(self, Repetition.coerce(rep), Succeed())

    def repeat_delimited(self, rep: Union[Repetition, int], separator: ParserLike) -> 'Repeat[T]':
        return Repeat(self, Repetition.coerce(rep), as_parser(separator))

    def up_until(self, stop: ParserLike) -> 'UpUntil[T]':
        """
        Matches this parser repeatedly until `stop` matches. `stop`'s match is left in the input.
        """
        return UpUntil(self, as_parser(stop))

    def whole(self) -> 'Skip[T]':
        """
        Requires this parser to consume all of the input.
        """
        return Skip(self, EndOfInput())

    def __repr__(self) -> str:
        return f"<{self.get_node_name()}>"

class BoxedParser(ParserAbstract[T]):
    """
    Holds any parser-like value behind the common interface.
    """
    def __init__(self, parser: ParserLike, custom_name: str = None) -> None:
        self.parser: ParserAbstract[T] = as_parser(parser)
        self._custom_name: OptionalType[str] = custom_name

    def parse(self, text: str) -> OptionalType[ParseResult[T]]:
        return self.parser.parse(text)

    def get_node_name(self) -> str:
        return self._custom_name or self.parser.get_node_name()

class Lazy(ParserAbstract[T]):
    """
    Builds its parser at parse time, so grammars can refer to themselves.
    """
    def __init__(self, factory: Callable[[], ParserLike]) -> None:
        self.factory: Callable[[], ParserLike] = factory

    def parse(self, text: str) -> OptionalType[ParseResult[T]]:
        return as_parser(self.factory()).parse(text)

class FunctionParser(ParserAbstract[T]):
    def __init__(self, function: Callable[[str], OptionalType[ParseResult[T]]]) -> None:
        self.function: Callable[[str], OptionalType[ParseResult[T]]] = function

    def parse(self, text: str) -> OptionalType[ParseResult[T]]:
        return self.function(text)

    def get_node_name(self) -> str:
        return getattr(self.function, '__name__', None) or self.node_type()

class Literal(ParserAbstract[str]):
    def __init__(self, value: str) -> None:
        self.value: str = value

    def parse(self, text: str) -> OptionalType[ParseResult[str]]:
        if text.startswith(self.value):
            return ParseResult(text[:len(self.value)], text[len(self.value):])
        return None

    def get_node_name(self) -> str:
        return repr(self.value)

class OneOf(ParserAbstract[str]):
    """
    Matches the first of several literal texts, in the order given.
    """
    def __init__(self, values: Sequence[str]) -> None:
        for value in values:
            if not isinstance(value, str):
                raise TypeError(f"OneOf expects literal strings, got {type(value).__name__}")
        self.literals: Tuple[Literal, ...] = tuple(Literal(value) for value in values)

    def parse(self, text: str) -> OptionalType[ParseResult[str]]:
        for literal in self.literals:
            result = literal.parse(text)
            if result is not None:
                return result
        return None

    def get_node_name(self) -> str:
        return f"OneOf({', '.join(literal.get_node_name() for literal in self.literals)})"

class Succeed(ParserAbstract[Any]):
    def __init__(self, value: Any = None) -> None:
        self.value: Any = value

    def parse(self, text: str) -> ParseResult[Any]:
        return ParseResult(self.value, text)

class EndOfInput(ParserAbstract[None]):
    def parse(self, text: str) -> OptionalType[ParseResult[None]]:
        if text:
            return None
        return ParseResult(None, text)

class Map(ParserAbstract[U]):
    def __init__(self, parser: ParserAbstract, f: Callable[[Any], U]) -> None:
        self.parser: ParserAbstract = parser
        self.f: Callable[[Any], U] = f

    def parse(self, text: str) -> OptionalType[ParseResult[U]]:
        result = self.parser.parse(text)
        if result is None:
            return None
        return ParseResult(self.f(result.value), result.remaining)

class Bind(ParserAbstract[Any]):
    def __init__(self, parser: ParserAbstract, f: Callable[[Any], ParserLike]) -> None:
        self.parser: ParserAbstract = parser
        self.f: Callable[[Any], ParserLike] = f

    def parse(self, text: str) -> OptionalType[ParseResult[Any]]:
        result = self.parser.parse(text)
        if result is None:
            return None
        return as_parser(self.f(result.value)).parse(result.remaining)

class Sequenced(ParserAbstract[T]):
    """
    Runs two parsers one after the other; subclasses decide which values to keep.
    """
    def __init__(self, first: ParserAbstract, second: ParserAbstract) -> None:
        self.first: ParserAbstract = first
        self.second: ParserAbstract = second

    def combine(self, first: Any, second: Any) -> T:
        raise NotImplementedError("Subclasses must implement this method")

    def parse(self, text: str) -> OptionalType[ParseResult[T]]:
        first = self.first.parse(text)
        if first is None:
            return None
        second = self.second.parse(first.remaining)
        if second is None:
            return None
        return ParseResult(self.combine(first.value, second.value), second.remaining)

class Skip(Sequenced[T]):
    def combine(self, first: T, second: Any) -> T:
        return first

class ButReally(Sequenced[Any]):
    def combine(self, first: Any, second: Any) -> Any:
        return second

class Then(Sequenced[Tuple[Any, Any]]):
    def combine(self, first: Any, second: Any) -> Tuple[Any, Any]:
        return first, second

class Or(ParserAbstract[T]):
    def __init__(self, *alternatives: ParserAbstract[T]) -> None:
        self.alternatives: Tuple[ParserAbstract[T], ...] = alternatives

    def parse(self, text: str) -> OptionalType[ParseResult[T]]:
        for alternative in self.alternatives:
            result = alternative.parse(text)
            if result is not None:
                return result
        return None

class Filter(ParserAbstract[T]):
    def __init__(self, parser: ParserAbstract[T], predicate: Callable[[T], bool]) -> None:
        self.parser: ParserAbstract[T] = parser
        self.predicate: Callable[[T], bool] = predicate

    def parse(self, text: str) -> OptionalType[ParseResult[T]]:
        result = self.parser.parse(text)
        if result is None or not self.predicate(result.value):
            return None
        return result

class Repeat(ParserAbstract[List[T]]):
    def __init__(self, parser: ParserAbstract[T], rep: Repetition, separator: ParserAbstract) -> None:
        self.parser: ParserAbstract[T] = parser
        self.rep: Repetition = rep
        self.separator: ParserAbstract = separator

    def parse(self, text: str) -> OptionalType[ParseResult[List[T]]]:
        minimum, maximum = self.rep.range()
        values: List[T] = []

        # until we hit the minimum, every element and separator must match
        for i in range(minimum):
            if i > 0:
                separator = self.separator.parse(text)
                if separator is None:
                    return None
                text = separator.remaining
            result = self.parser.parse(text)
            if result is None:
                return None
            values.append(result.value)
            text = result.remaining

        # a separator only counts once an element follows it
        while not self.rep.reached(len(values)):
            current = text
            if values:
                separator = self.separator.parse(current)
                if separator is None:
                    break
                current = separator.remaining
            result = self.parser.parse(current)
            if result is None:
                break
            values.append(result.value)
            if maximum is None and len(result.remaining) == len(text):
                break
            text = result.remaining

        return ParseResult(values, text)

    def get_node_name(self) -> str:
        return f"Repeat({self.rep!r})"

class UpUntil(ParserAbstract[List[T]]):
    def __init__(self, parser: ParserAbstract[T], stop: ParserAbstract) -> None:
        self.parser: ParserAbstract[T] = parser
        self.stop: ParserAbstract = stop

    def parse(self, text: str) -> OptionalType[ParseResult[List[T]]]:
        values: List[T] = []
        while self.stop.parse(text) is None:
            result = self.parser.parse(text)
            # no progress means `stop` can never match
            if result is None or len(result.remaining) == len(text):
                return None
            values.append(result.value)
            text = result.remaining
        return ParseResult(values, text)

class Joined(ParserAbstract[List[Any]]):
    def __init__(self, *parsers: ParserAbstract) -> None:
        self.parsers: Tuple[ParserAbstract, ...] = parsers

    def parse(self, text: str) -> OptionalType[ParseResult[List[Any]]]:
        values: List[Any] = []
        for parser in self.parsers:
            result = parser.parse(text)
            if result is None:
                return None
            values.append(result.value)
            text = result.remaining
        return ParseResult(values, text)

class Optional(ParserAbstract[OptionalType[T]]):
    def __init__(self, parser: ParserAbstract[T]) -> None:
        self.parser: ParserAbstract[T] = parser

    def parse(self, text: str) -> ParseResult[OptionalType[T]]:
        result = self.parser.parse(text)
        if result is None:
            return ParseResult(None, text)
        return result

class Traced(ParserAbstract[T]):
    def __init__(self, parser: ParserAbstract[T], name: str) -> None:
        self.parser: ParserAbstract[T] = parser
        self.name: str = name

    def parse(self, text: str) -> OptionalType[ParseResult[T]]:
        result = self.parser.parse(text)
        if logger.isEnabledFor(logging.DEBUG):
            if result is None:
                logger.debug(f"{self.name}: no match at {text[:20]!r}")
            else:
                consumed = len(text) - len(result.remaining)
                logger.debug(f"{self.name}: matched {result.value!r}, consumed {consumed} characters")
        return result

    def get_node_name(self) -> str:
        return self.name

def as_parser(value: ParserLike) -> ParserAbstract:
    """
    Turns a parser-like value into a parser.

    Strings match themselves, lists and tuples of strings match any one of them,
    and callables taking the input and returning a ParseResult or None are used as-is.
    """
    if isinstance(value, ParserAbstract):
        return value
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, (list, tuple)):
        return OneOf(value)
    if callable(value):
        return FunctionParser(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a parser")

def either(*parsers: ParserLike) -> Or:
    """
    Matches the first of the provided parsers that succeeds.
    """
    return Or(*(as_parser(parser) for parser in parsers))

def joined(*parsers: ParserLike) -> Joined:
    """
    Matches a sequence of parsers, collecting their values in a list.
    """
    return Joined(*(as_parser(parser) for parser in parsers))

def option(parser: ParserLike) -> Optional:
    """
    Matches a parser zero or one time. Yields None when it doesn't match.
    """
    return Optional(as_parser(parser))

def lazy(factory: Callable[[], ParserLike]) -> Lazy:
    return Lazy(factory)
