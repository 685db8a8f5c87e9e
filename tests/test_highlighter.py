"""Tests for literal search highlighting."""

from __future__ import annotations

from rich.style import Style

from logflow.content import Content
from logflow.highlighter import LineHighlighter, find_occurrences

_STYLE = Style(bgcolor="#6e5600")


def _painted(content: Content, row: int) -> list[tuple[int, int]]:
    return [(span.start, span.end) for span in content.row(row).spans]


class TestFindOccurrences:
    def test_single(self) -> None:
        assert find_occurrences("an ERROR here", "ERROR") == [3]

    def test_multiple(self) -> None:
        assert find_occurrences("ab ab ab", "ab") == [0, 3, 6]

    def test_non_overlapping(self) -> None:
        assert find_occurrences("aaaa", "aa") == [0, 2]

    def test_case_sensitive(self) -> None:
        assert find_occurrences("Error ERROR", "ERROR") == [6]

    def test_empty_needle(self) -> None:
        assert find_occurrences("text", "") == []

    def test_no_match(self) -> None:
        assert find_occurrences("text", "zzz") == []


class TestLineHighlighter:
    def test_rows_of_matches(self, content: Content) -> None:
        text = "ERROR here ERROR"
        height = content.print(text, 0)
        rows = LineHighlighter(content, text, 10, _STYLE).print("ERROR", 0, height)
        assert rows == [0, 1]
        assert _painted(content, 0) == [(0, 5)]
        assert _painted(content, 1) == [(1, 6)]

    def test_rows_deduplicated(self, content: Content) -> None:
        text = "ab ab ab"
        height = content.print(text, 0)
        rows = LineHighlighter(content, text, 10, _STYLE).print("ab", 0, height)
        assert rows == [0]
        assert _painted(content, 0) == [(0, 2), (3, 5), (6, 8)]

    def test_occurrence_across_wrap(self) -> None:
        content = Content(4)
        text = "xxERRORxx"
        height = content.print(text, 0)
        rows = LineHighlighter(content, text, 4, _STYLE).print("ERROR", 0, height)
        assert rows == [0]
        assert _painted(content, 0) == [(2, 4)]
        assert _painted(content, 1) == [(0, 3)]
        assert _painted(content, 2) == []

    def test_paints_at_accumulated_height(self, content: Content) -> None:
        content.print("first", 0)
        height = content.print("second ERROR", 1)
        rows = LineHighlighter(content, "second ERROR", 10, _STYLE).print("ERROR", 1, height)
        assert rows == [0]
        assert _painted(content, 0) == []
        assert _painted(content, 1) == [(7, 10)]
        assert _painted(content, 2) == [(0, 2)]

    def test_single_row_filter(self, content: Content) -> None:
        text = "ERROR here ERROR"
        height = content.print(text, 0)
        rows = LineHighlighter(content, text, 10, _STYLE).print("ERROR", 0, height, row=1)
        assert rows == [1]
        assert _painted(content, 0) == []
        assert _painted(content, 1) == [(1, 6)]

    def test_no_occurrence(self, content: Content) -> None:
        height = content.print("nothing", 0)
        assert LineHighlighter(content, "nothing", 10, _STYLE).print("ERROR", 0, height) == []

    def test_row_of(self, content: Content) -> None:
        highlighter = LineHighlighter(content, "x" * 25, 10, _STYLE)
        assert highlighter.row_of(0) == 0
        assert highlighter.row_of(9) == 0
        assert highlighter.row_of(10) == 1
        assert highlighter.row_of(24) == 2
