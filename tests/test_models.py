"""Tests for pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from logflow.models import AppConfig, LogLine, MatchedLine, SearchMode, Viewport


class TestLogLine:
    def test_contains_literal(self) -> None:
        line = LogLine(line_number=1, raw="ERROR: disk full")
        assert line.contains("disk")
        assert line.contains("ERROR: ")

    def test_contains_is_case_sensitive(self) -> None:
        line = LogLine(line_number=1, raw="ERROR: disk full")
        assert not line.contains("error")

    def test_contains_no_regex(self) -> None:
        line = LogLine(line_number=1, raw="ERROR: disk full")
        assert not line.contains("E.*R")
        assert LogLine(line_number=2, raw="a.*b").contains(".*")

    def test_empty_needle_never_matches(self) -> None:
        assert not LogLine(line_number=1, raw="anything").contains("")


class TestViewport:
    def test_limit(self) -> None:
        assert Viewport(reverse_index=3, rows=10).limit() == 13

    def test_defaults(self) -> None:
        viewport = Viewport()
        assert viewport.reverse_index == 0
        assert viewport.limit() == 0

    def test_negative_reverse_index_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Viewport(reverse_index=-1, rows=5)

    def test_frozen(self) -> None:
        viewport = Viewport(reverse_index=1, rows=5)
        with pytest.raises(ValidationError):
            viewport.reverse_index = 2  # type: ignore[misc]

    def test_scrolled_back(self) -> None:
        viewport = Viewport(reverse_index=0, rows=10).scrolled(5, total_height=100)
        assert viewport.reverse_index == 5
        assert viewport.rows == 10

    def test_scrolled_clamps_at_bottom(self) -> None:
        assert Viewport(reverse_index=2, rows=10).scrolled(-5, total_height=100).reverse_index == 0

    def test_scrolled_clamps_at_top(self) -> None:
        assert Viewport(reverse_index=85, rows=10).scrolled(50, total_height=100).reverse_index == 90

    def test_scrolled_short_buffer(self) -> None:
        assert Viewport(rows=10).scrolled(3, total_height=4).reverse_index == 0

    def test_centered_on(self) -> None:
        viewport = Viewport(rows=10).centered_on(50, total_height=100)
        assert viewport.reverse_index == 45
        assert viewport.reverse_index <= 50 <= viewport.limit()

    def test_centered_on_near_bottom(self) -> None:
        assert Viewport(rows=10).centered_on(2, total_height=100).reverse_index == 0

    def test_centered_on_near_top(self) -> None:
        viewport = Viewport(rows=10).centered_on(100, total_height=100)
        assert viewport.reverse_index == 90
        assert viewport.limit() == 100


class TestMatchedLine:
    def test_equality(self) -> None:
        assert MatchedLine(line=1, match_index=0) == MatchedLine(line=1, match_index=0)
        assert MatchedLine(line=1, match_index=0) != MatchedLine(line=1, match_index=1)


class TestSearchMode:
    def test_values(self) -> None:
        assert str(SearchMode.IDLE) == "idle"
        assert str(SearchMode.SEARCHING) == "searching"
        assert str(SearchMode.NAVIGATING) == "navigating"


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.max_scrollback == 10_000
        assert config.theme == "textual-dark"
        assert config.tail_interval == 0.1

    def test_scrollback_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(max_scrollback=0)
