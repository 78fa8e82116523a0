"""Tests for goatee.search.replace."""

from __future__ import annotations

import logging

import pytest

from goatee.content.hexcodec import encode
from goatee.errors import InvalidHexError, InvalidPatternError
from goatee.models import SearchOptions
from goatee.search.replace import replace

PLAIN = SearchOptions()
EXACT = SearchOptions(case_sensitive=True)
REGEX = SearchOptions(use_regex=True)


def test_replace_first():
    outcome = replace("a a a", "a", "b", EXACT)
    assert outcome.text == "b a a"
    assert outcome.count == 1
    assert not outcome.promoted_to_all


def test_replace_all():
    outcome = replace("a a a", "a", "b", EXACT, replace_all=True)
    assert outcome.text == "b b b"
    assert outcome.count == 3


def test_no_occurrence():
    outcome = replace("abc", "z", "y", EXACT, replace_all=True)
    assert outcome.text == "abc"
    assert outcome.count == 0


def test_case_insensitive_replacement_is_verbatim():
    outcome = replace("Foo foo", "FOO", r"x\1$1", PLAIN)
    assert outcome.text == r"x\1$1 foo"
    assert outcome.count == 1


def test_case_insensitive_replace_all():
    outcome = replace("Foo foo fOO", "foo", "bar", PLAIN, replace_all=True)
    assert outcome.text == "bar bar bar"
    assert outcome.count == 3


def test_plain_pattern_is_not_a_regex():
    outcome = replace("a.c abc", "a.c", "X", PLAIN, replace_all=True)
    assert outcome.text == "X abc"


def test_regex_always_replaces_all(caplog):
    with caplog.at_level(logging.INFO, logger="goatee.search.replace"):
        outcome = replace("a1 b2 c3", r"(\w)(\d)", r"\2\1", REGEX)
    assert outcome.text == "1a 2b 3c"
    assert outcome.count == 3
    assert outcome.promoted_to_all
    assert "regexp always replace all occurrences" in caplog.text


def test_regex_replace_all_is_not_a_promotion():
    outcome = replace("a1 b2", r"\d", "#", REGEX, replace_all=True)
    assert outcome.text == "a# b#"
    assert not outcome.promoted_to_all


def test_regex_dot_stays_on_one_line():
    outcome = replace("a\nb", "a.b", "x", REGEX, replace_all=True)
    assert outcome.text == "a\nb"
    assert outcome.count == 0


def test_invalid_regex():
    with pytest.raises(InvalidPatternError):
        replace("abc", "(", "x", REGEX)


@pytest.mark.parametrize("replacement", [r"C:\path", r"\1", r"\g<name>"])
def test_invalid_regex_replacement(replacement):
    with pytest.raises(InvalidPatternError, match="invalid replacement") as exc:
        replace("abc", "b", replacement, REGEX, replace_all=True)
    assert exc.value.cause is not None


def test_valid_group_reference():
    outcome = replace("abc", "(b)", r"[\1]", REGEX, replace_all=True)
    assert outcome.text == "a[b]c"


def test_empty_pattern_is_a_no_op():
    outcome = replace("abc", "", "x", PLAIN, replace_all=True)
    assert outcome.text == "abc"
    assert outcome.count == 0


# -- hex mode ----------------------------------------------------------------


@pytest.fixture
def dump():
    return encode(b"\x01\x02\x03\x02\x03")


def test_hex_replace_first(dump):
    outcome = replace(dump, "02 03", "ff", PLAIN, hex_mode=True)
    assert outcome.text == "01 ff 02 03"
    assert outcome.count == 1


def test_hex_replace_all(dump):
    outcome = replace(dump, "0203", "ff", PLAIN, replace_all=True, hex_mode=True)
    assert outcome.text == "01 ff ff"
    assert outcome.count == 2


def test_hex_replace_rewraps_lines(dump):
    outcome = replace(dump, "01", "aa bb cc", PLAIN, replace_all=True, hex_mode=True, group_size=4)
    assert outcome.text == "aa bb cc 02\n03 02 03"


def test_hex_replace_can_delete_bytes(dump):
    outcome = replace(dump, "02", "", PLAIN, replace_all=True, hex_mode=True)
    assert outcome.text == "01 03 03"


def test_hex_no_occurrence_keeps_text():
    text = "01 02\n"
    outcome = replace(text, "ff", "00", PLAIN, hex_mode=True)
    assert outcome.text == text
    assert outcome.count == 0


@pytest.mark.parametrize("pattern, replacement", [("zz", "00"), ("02", "0"), ("02", "xy")])
def test_invalid_hex(dump, pattern, replacement):
    with pytest.raises(InvalidHexError):
        replace(dump, pattern, replacement, PLAIN, hex_mode=True)
