"""Tests for match extraction.

Covers ordering and non-overlap, global vs. first-match mode, the
zero-length termination rule, flag effects, and conversion of engine
failures into structured results.
"""

from __future__ import annotations

import logging
import re
from types import SimpleNamespace

import pytest

from regexly.matching import extractor
from regexly.matching.extractor import extract, recompute
from regexly.matching.flags import FlagSet
from regexly.matching.models import EMPTY_RESULT, ErrorKind, MatchRecord

GLOBAL = FlagSet.from_flag_string("g")
FIRST_ONLY = FlagSet.from_flag_string("")


def _patch_compile(monkeypatch: pytest.MonkeyPatch, compile_fn: object) -> None:
    """Swap the extractor's view of re.compile, leaving the real module alone."""
    fake_re = SimpleNamespace(compile=compile_fn, error=re.error)
    monkeypatch.setattr(extractor, "re", fake_re)


def _texts(pattern: str, text: str, flags: str = "g") -> list[str]:
    result = extract(pattern, FlagSet.from_flag_string(flags), text)
    assert result.ok
    return [m.text for m in result.matches]


class TestEmptyInputs:
    """Empty pattern or empty text short-circuits to an empty result."""

    def test_empty_pattern(self) -> None:
        assert extract("", GLOBAL, "some text") is EMPTY_RESULT

    def test_empty_text(self) -> None:
        assert extract(r"\d+", GLOBAL, "") is EMPTY_RESULT

    def test_empty_text_with_invalid_pattern_is_not_an_error(self) -> None:
        """Nothing is compiled when there is nothing to search."""
        result = extract("(", GLOBAL, "")
        assert result.ok
        assert result.count == 0


class TestGlobalScan:
    def test_digits_example(self) -> None:
        result = extract(r"\d+", GLOBAL, "a1 b22 c333")
        assert [m.text for m in result.matches] == ["1", "22", "333"]
        assert [m.start for m in result.matches] == [1, 4, 8]
        assert result.count == 3

    def test_matches_ascending_and_non_overlapping(self) -> None:
        text = "one two three four five"
        result = extract(r"\w+", GLOBAL, text)
        previous_end = 0
        for match in result.matches:
            assert match.start >= previous_end
            assert text[match.start : match.end] == match.text
            previous_end = match.end

    def test_alternation(self) -> None:
        assert _texts(r"\d+|[a-zA-Z]+", "abc 123 def") == ["abc", "123", "def"]

    def test_no_match(self) -> None:
        result = extract("xyz", GLOBAL, "abc")
        assert result.ok
        assert result.matches == ()


class TestFirstMatchOnly:
    def test_at_most_one_match(self) -> None:
        result = extract(r"\d+", FIRST_ONLY, "a1 b22 c333")
        assert result.matches == (MatchRecord(text="1", start=1),)

    def test_no_match(self) -> None:
        assert extract(r"\d+", FIRST_ONLY, "abc").matches == ()


class TestZeroLengthMatches:
    """Scanning stops right after a zero-length match is recorded."""

    def test_star_on_non_matching_text_terminates(self) -> None:
        result = extract("x*", GLOBAL, "abc")
        assert result.matches == (MatchRecord(text="", start=0),)

    def test_zero_length_after_real_match(self) -> None:
        result = extract(r"\d*", GLOBAL, "12a")
        assert [(m.text, m.start) for m in result.matches] == [("12", 0), ("", 2)]

    def test_lookahead_terminates(self) -> None:
        result = extract(r"(?=b)", GLOBAL, "abab")
        assert result.matches == (MatchRecord(text="", start=1),)

    def test_anchor_at_end(self) -> None:
        result = extract("$", GLOBAL, "abc")
        assert result.matches == (MatchRecord(text="", start=3),)


class TestGroups:
    def test_groups_in_order(self) -> None:
        result = extract(r"(\w)(\d)", GLOBAL, "a1 b2")
        assert [m.groups for m in result.matches] == [("a", "1"), ("b", "2")]

    def test_unmatched_optional_group_is_none(self) -> None:
        result = extract("(a)|(b)", GLOBAL, "b")
        assert result.matches[0].groups == (None, "b")

    def test_no_groups(self) -> None:
        assert extract("a", GLOBAL, "a").matches[0].groups == ()


class TestFlagEffects:
    def test_ignore_case(self) -> None:
        assert _texts("a", "aA") == ["a"]
        assert _texts("a", "aA", "gi") == ["a", "A"]

    def test_multiline(self) -> None:
        assert _texts("^b", "a\nb") == []
        assert _texts("^b", "a\nb", "gm") == ["b"]

    def test_dot_all(self) -> None:
        assert _texts("a.b", "a\nb") == []
        assert _texts("a.b", "a\nb", "gs") == ["a\nb"]

    def test_word_class_is_ascii_without_unicode(self) -> None:
        assert _texts(r"\w+", "café") == ["caf"]
        assert _texts(r"\w+", "café", "gu") == ["café"]

    def test_ignore_case_folds_ascii_only_without_unicode(self) -> None:
        """ASCII mode also limits case folding; u restores it for 'é'/'É'."""
        assert _texts("é", "É", "gi") == []
        assert _texts("é", "É", "giu") == ["É"]

    def test_offsets_are_code_points(self) -> None:
        result = extract("b", GLOBAL, "\U0001f600b")
        assert result.matches[0].start == 1


class TestErrors:
    def test_invalid_pattern(self) -> None:
        result = extract("(", GLOBAL, "abc")
        assert result.error is not None
        assert result.error.kind is ErrorKind.INVALID_PATTERN
        assert result.count == 0
        assert result.matches == ()

    def test_inline_unicode_flag_conflicts_with_ascii_mode(self) -> None:
        """(?u) cannot be combined with the ASCII mode of an unset u flag."""
        result = extract(r"(?u)\w", GLOBAL, "abc")
        assert result.error is not None
        assert result.error.kind is ErrorKind.INVALID_PATTERN
        assert "incompatible" in result.error.message
        assert result.count == 0

    def test_inline_unicode_flag_accepted_with_unicode(self) -> None:
        result = extract(r"(?u)\w", FlagSet.from_flag_string("gu"), "ab")
        assert result.ok
        assert result.count == 2

    def test_invalid_pattern_message_is_engine_message(self) -> None:
        with pytest.raises(re.error) as excinfo:
            re.compile("[a-")
        result = extract("[a-", GLOBAL, "abc")
        assert result.error is not None
        assert result.error.message == str(excinfo.value)

    def test_engine_failure_during_search(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Exceptions raised while searching become ENGINE_FAILURE results."""

        class _Exploding:
            def search(self, text: str, pos: int = 0) -> re.Match[str] | None:
                raise RecursionError("maximum recursion depth exceeded")

        _patch_compile(monkeypatch, lambda *_args: _Exploding())

        with caplog.at_level(logging.WARNING, logger="regexly.matching.extractor"):
            result = extract("a", GLOBAL, "aaa")

        assert result.error is not None
        assert result.error.kind is ErrorKind.ENGINE_FAILURE
        assert "recursion" in result.error.message
        assert result.count == 0
        assert any("failed searching" in r.message for r in caplog.records)

    def test_engine_failure_during_compile(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _overflow(*_args: object) -> None:
            raise OverflowError

        _patch_compile(monkeypatch, _overflow)

        result = extract("a", GLOBAL, "aaa")

        assert result.error is not None
        assert result.error.kind is ErrorKind.ENGINE_FAILURE
        assert result.error.message == "OverflowError"


class TestRecompute:
    def test_same_as_extract(self) -> None:
        assert recompute(r"\d", GLOBAL, "a1b2") == extract(r"\d", GLOBAL, "a1b2")

    def test_is_pure(self) -> None:
        first = recompute("b+", GLOBAL, "abbb")
        second = recompute("b+", GLOBAL, "abbb")
        assert first == second
