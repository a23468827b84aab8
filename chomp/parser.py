import logging
from typing import Any, Callable, Tuple, Type, TypeVar

from .abstract import ParseResult, ParserAbstract, ParserLike, as_parser

logger = logging.getLogger("chomp")

class ParseError(ValueError):
    """
    Raised by `Parser.parse` when a grammar doesn't match the whole input.
    """
    def __init__(self, message: str, text: str, remaining: str = None) -> None:
        super().__init__(message)
        self.text: str = text
        self.remaining: str = remaining

class Grammar:
    """
    Declares a complete grammar. Use the `grammar` decorator to set its root rule.
    """
    name: str = "Grammar"
    rule_root: ParserAbstract = None

    def ignore(self) -> Tuple[str, ...]:
        """
        Literal texts removed from the input before parsing.
        """
        return tuple()

    def transform(self, value: Any) -> Any:
        return value

G = TypeVar('G', bound=Type[Grammar])
def grammar(rule: ParserLike) -> Callable[[G], G]:
    """
    Define the root rule of a grammar class.
    """
    def decorator(cls: G) -> G:
        cls.rule_root = as_parser(rule)
        return cls
    return decorator

class Parser:
    def __init__(self, grammar_class: Type[Grammar]) -> None:
        if grammar_class.rule_root is None:
            raise ValueError(f"Grammar {grammar_class.__name__} has no root rule, decorate it with @grammar")
        self.grammar_class: Type[Grammar] = grammar_class
        self.grammar_instance: Grammar = grammar_class()
        self.ignore_rules: Tuple[str, ...] = self.grammar_instance.ignore()

    def parse(self, text: str) -> ParseResult:
        """
        Parse the input text with the grammar's root rule.

        Only trailing whitespace may be left over. The returned result holds the
        transformed value and no remaining input.
        """
        text = self._clean_text(text)
        name = self.grammar_instance.name
        logger.debug(f"{name}: parsing {len(text)} characters")

        result = self.grammar_class.rule_root.parse(text)
        if result is None:
            logger.debug(f"{name}: no match")
            raise ParseError(f"Failed to parse: {text}", text)

        if result.remaining.strip():
            logger.debug(f"{name}: {len(result.remaining)} characters left over")
            raise ParseError(
                f"Failed to parse entire string. Remaining text: {result.remaining}",
                text,
                result.remaining,
            )

        return ParseResult(self.grammar_instance.transform(result.value))

    def _clean_text(self, text: str) -> str:
        for ignored in self.ignore_rules:
            text = text.replace(ignored, '')
        return text
