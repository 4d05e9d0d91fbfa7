# tests/unit/core/test_result.py — v1
"""Tests for core/result.py."""

from __future__ import annotations

import pytest

from scripturai.core.result import (
    ChapterNotFoundError,
    NotFoundError,
    Outcome,
    OutcomeKind,
    VerseNotFoundError,
)


class TestOutcome:
    def test_hit_is_ok(self):
        outcome = Outcome.hit("text")
        assert outcome.ok
        assert outcome.kind is OutcomeKind.HIT
        assert outcome.value_or("") == "text"

    def test_computed_is_ok(self):
        assert Outcome.computed([1]).ok

    @pytest.mark.parametrize("outcome", [
        Outcome.missing(),
        Outcome.transient(RuntimeError("empty")),
        Outcome.unexpected(RuntimeError("boom")),
    ])
    def test_failures_fall_back(self, outcome):
        assert not outcome.ok
        assert outcome.value_or("") == ""

    def test_not_found(self):
        assert Outcome.missing().not_found
        assert not Outcome.transient().not_found

    def test_computed_none_falls_back(self):
        assert Outcome.computed(None).value_or("default") == "default"


class TestNotFoundErrors:
    def test_verse(self):
        err = VerseNotFoundError("John:3:99:KJV")
        assert isinstance(err, NotFoundError)
        assert "John:3:99:KJV" in str(err)

    def test_chapter(self):
        err = ChapterNotFoundError("KJV", "John", 99)
        assert isinstance(err, LookupError)
        assert err.chapter == 99
