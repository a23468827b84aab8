import logging

import pytest

from ..abstract import ParseResult, as_parser, either, joined, option, lazy, OneOf
from ..primitives import character, literal, digit, whitespace, word, uint32, succeed
from ..repetition import NEVER, ANY, MANY, exactly, at_most, between

KEYWORDS = ["foo", "bar", "baz"]

def test_range_pair():
    parser = uint32().skip("-").then(uint32())
    assert parser.parse("1-3 a") == ParseResult((1, 3), " a")

def test_many_requires_one_match():
    assert character().filter(str.isdigit).repeat(MANY).parse("abc") is None

def test_keywords_delimited():
    parser = as_parser(KEYWORDS).repeat_delimited(MANY, ",")
    assert parser.parse("foo,bar,baz") == ParseResult(["foo", "bar", "baz"], "")
    assert parser.parse("foo,dog,cat") == ParseResult(["foo"], ",dog,cat")

def test_up_until():
    parser = as_parser("abc").up_until("end")
    assert parser.parse("abcabcend") == ParseResult(["abc", "abc"], "end")
    assert parser.parse("") is None

def test_up_until_leaves_stop_match():
    result = character().up_until(whitespace()).parse("abc def")
    assert result == ParseResult(["a", "b", "c"], " def")

def test_up_until_stops_immediately():
    assert word().up_until(";").parse(";rest") == ParseResult([], ";rest")

def test_up_until_without_progress_fails():
    assert succeed().up_until("x").parse("abc") is None

def test_dangling_separator_is_not_consumed():
    items = as_parser("a").or_("b")
    assert items.repeat_delimited(ANY, ",").parse("a,b,") == ParseResult(["a", "b"], ",")

def test_exactly():
    parser = literal("a").repeat(exactly(3))
    assert parser.parse("aaaa") == ParseResult(["a", "a", "a"], "a")
    assert parser.parse("aa") is None

def test_bare_int_repetition():
    assert digit().repeat(2).parse("123") == ParseResult(["1", "2"], "3")

def test_never_and_at_most():
    assert literal("a").repeat(NEVER).parse("aaa") == ParseResult([], "aaa")
    assert literal("a").repeat(at_most(2)).parse("aaa") == ParseResult(["a", "a"], "a")
    assert literal("a").repeat(ANY).parse("bbb") == ParseResult([], "bbb")

def test_between():
    parser = literal("a").repeat(between(1, 2))
    assert parser.parse("") is None
    assert parser.parse("ab") == ParseResult(["a"], "b")

def test_mandatory_separator():
    parser = literal("a").repeat_delimited(exactly(2), ",")
    assert parser.parse("a,a,a") == ParseResult(["a", "a"], ",a")
    assert parser.parse("a a") is None

def test_zero_width_repeat_terminates():
    assert succeed(1).repeat(ANY).parse("abc") == ParseResult([1], "abc")

def test_map():
    parser = uint32().map(lambda n: n * 2)
    assert parser.parse("21!") == ParseResult(42, "!")
    assert parser.parse("!") is None

@pytest.mark.parametrize("text", ["12ab", "ab", ""])
def test_map_identity(text):
    assert word().map(lambda v: v).parse(text) == word().parse(text)

def test_map_into():
    assert uint32().map_into(str).parse("12") == ParseResult("12", "")

def test_bind_uses_previous_value():
    parser = uint32().bind(lambda n: character().repeat(n))
    assert parser.parse("3abcd") == ParseResult(["a", "b", "c"], "d")
    assert parser.parse("5abc") is None
    assert uint32().and_then(lambda n: literal("x" * n)).parse("2xxx") == ParseResult("xx", "x")

def test_skip_and_but_really():
    parser = literal("(").but_really(word()).skip(")")
    assert parser.parse("(hi) x") == ParseResult("hi", " x")
    assert parser.parse("(hi x") is None
    assert parser.parse("hi)") is None

def test_or_is_left_biased():
    assert literal("ab").or_("abc").parse("abcd") == ParseResult("ab", "cd")
    assert literal("ax").or_("ab").parse("abc") == ParseResult("ab", "c")
    assert literal("x").or_("y").parse("z") is None

def test_filter():
    even = uint32().filter(lambda n: n % 2 == 0)
    assert even.parse("4,") == ParseResult(4, ",")
    assert even.parse("5,") is None

def test_whole():
    assert literal("a").whole().parse("a") == ParseResult("a", "")
    assert literal("a").whole().parse("ab") is None

def test_parse_result():
    assert word().parse_result("abc def") == "abc"
    assert word().parse_to_completion("abc def") == "abc"
    assert word().parse_result("!") is None

def test_chained_password_policy():
    parser = (
        uint32()
        .skip("-")
        .then(uint32())
        .skip(whitespace().repeat(ANY))
        .then(character())
        .skip(":")
        .skip(whitespace().repeat(ANY))
        .then(word())
    )
    (((low, high), letter), password) = parser.parse_result("1-3 a: abcdef")
    assert (low, high, letter, password) == (1, 3, "a", "abcdef")

def test_callable_as_parser():
    def everything(text):
        return ParseResult(len(text), "")

    assert as_parser(everything).parse("xyz") == ParseResult(3, "")
    assert literal("a").then(everything).parse("abc") == ParseResult(("a", 2), "")

def test_as_parser_rejects_non_parsers():
    with pytest.raises(TypeError):
        as_parser(42)
    with pytest.raises(TypeError):
        OneOf(["a", 1])

def test_helpers():
    assert either("x", "y", uint32()).parse("7") == ParseResult(7, "")
    assert joined("a", uint32()).parse("a12!") == ParseResult(["a", 12], "!")
    assert joined("a", uint32()).parse("ab") is None
    assert option("x").parse("y") == ParseResult(None, "y")
    assert option("x").parse("xy") == ParseResult("x", "y")

def test_lazy_recursion():
    nested = lazy(lambda: literal("(").but_really(option(nested)).skip(")").map(lambda inner: 1 + (inner or 0)))
    assert nested.parse("((()))") == ParseResult(3, "")
    assert nested.parse("(()") is None

def test_parsers_are_reusable():
    parser = word().skip(whitespace().repeat(ANY))
    assert parser.parse("a b") == parser.parse("a b") == ParseResult("a", "b")

def test_with_name_and_boxed():
    named = literal("a").with_name("letter a")
    assert repr(named) == "<letter a>"
    assert named.parse("ab") == ParseResult("a", "b")
    assert literal("a").boxed().parse("ab") == ParseResult("a", "b")

def test_traced(caplog):
    parser = literal("a").traced("letter a")
    with caplog.at_level(logging.DEBUG, logger="chomp"):
        parser.parse("abc")
        parser.parse("xyz")
    assert "letter a: matched 'a', consumed 1 characters" in caplog.text
    assert "letter a: no match at 'xyz'" in caplog.text
