"""Tests for pattern and line filter compilation."""

import re

import pytest

from sub.errors import PatternError
from sub.patterns import (
    GroupRef,
    compile_line_filter,
    compile_pattern,
    parse_replacement,
)


def test_plain_pattern_replaces_all_occurrences():
    pattern = compile_pattern("foo")
    assert pattern.replace("foo dummy foo", "bar") == ("bar dummy bar", 2)


def test_ignore_case_is_a_compile_flag():
    pattern = compile_pattern("Foo", ignore_case=True)
    assert pattern.regex.flags & re.IGNORECASE
    assert pattern.replace("FOO foo fOo", "x") == ("x x x", 3)


def test_ignore_case_does_not_change_replacement_text():
    pattern = compile_pattern("foo", ignore_case=True)
    assert pattern.replace("FOO", "BaR") == ("BaR", 1)


def test_whole_word_skips_substrings():
    pattern = compile_pattern("foo", whole_word=True)
    assert pattern.replace("foo foobar barfoo foo.", "x") == (
        "x foobar barfoo x.",
        2,
    )


def test_whole_word_wraps_pattern_in_boundaries():
    assert compile_pattern("a+", whole_word=True).regex.pattern == r"\ba+\b"


def test_whole_word_and_ignore_case_compose():
    pattern = compile_pattern("FOO", whole_word=True, ignore_case=True)
    assert pattern.replace("Foo foobar", "x") == ("x foobar", 1)


def test_backreferences_in_replacement():
    pattern = compile_pattern(r"(\w+)@(\w+)")
    assert pattern.replace("me@host", "$2 at $1") == ("host at me", 1)


def test_named_group_in_replacement():
    pattern = compile_pattern(r"(?P<word>\w+)!")
    assert pattern.replace("hey!", "${word}?") == ("hey?", 1)


def test_invalid_pattern_raises_pattern_error():
    with pytest.raises(PatternError) as exc_info:
        compile_pattern("foo(")
    assert str(exc_info.value).startswith("Regex error")


def test_invalid_whole_word_pattern_raises_pattern_error():
    with pytest.raises(PatternError):
        compile_pattern("[", whole_word=True)


def test_check_replacement_rejects_unknown_group():
    pattern = compile_pattern("foo")
    with pytest.raises(PatternError):
        pattern.check_replacement("$1")


def test_check_replacement_accepts_valid_template():
    compile_pattern("(foo)").check_replacement("<$1>")


def test_check_replacement_rejects_unknown_name():
    pattern = compile_pattern(r"(?P<word>\w+)")
    with pytest.raises(PatternError) as exc_info:
        pattern.check_replacement("$other")
    assert "${other}" in str(exc_info.value)


def test_check_replacement_ignores_backslashes():
    compile_pattern("dir").check_replacement(r"C:\dir\1\g<0>")


@pytest.mark.parametrize(
    "replacement, expected",
    [
        (r"C:\dir", r"C:\dir"),
        (r"x\ny", r"x\ny"),
        (r"x\ty", r"x\ty"),
        ("\\", "\\"),
        (r"\1", r"\1"),
    ],
)
def test_backslashes_in_replacement_are_literal(replacement, expected):
    pattern = compile_pattern("dir")
    assert pattern.replace("dir", replacement) == (expected, 1)


@pytest.mark.parametrize(
    "replacement, expected",
    [
        ("$1", "a"),
        ("${1}", "a"),
        ("${1}x", "ax"),
        ("$0!", "a-b!"),
        ("${key}=${value}", "a=b"),
        ("$key", "a"),
        ("$$1", "$1"),
        ("$$$1", "$a"),
        ("cost: $", "cost: $"),
        ("$-", "$-"),
        ("${", "${"),
    ],
)
def test_dollar_references(replacement, expected):
    pattern = compile_pattern(r"(?P<key>\w)-(?P<value>\w)")
    assert pattern.replace("a-b", replacement) == (expected, 1)


def test_bare_name_is_read_greedily():
    assert parse_replacement("$1a") == (GroupRef("1a"),)
    assert parse_replacement("${1}a") == (GroupRef(1), "a")
    with pytest.raises(PatternError):
        compile_pattern("(x)").check_replacement("$1a")


def test_unmatched_optional_group_expands_to_empty():
    pattern = compile_pattern(r"a(b)?")
    assert pattern.replace("a ab", "[$1]") == ("[] [b]", 2)


def test_line_filter_absent():
    assert compile_line_filter(None) is None


def test_line_filter_searches_anywhere_in_line():
    line_filter = compile_line_filter("todo", ignore_case=True)
    assert line_filter.matches("x = 1  # TODO remove")
    assert not line_filter.matches("x = 1")


def test_invalid_line_filter_raises_pattern_error():
    with pytest.raises(PatternError):
        compile_line_filter("(")
