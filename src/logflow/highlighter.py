"""Literal search highlighting on wrapped lines."""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING

from logflow.content import wrap_cells

if TYPE_CHECKING:
    from rich.style import Style

    from logflow.content import Content


def find_occurrences(text: str, needle: str) -> list[int]:
    """Start offsets of every non-overlapping, case-sensitive occurrence of ``needle``."""
    if not needle:
        return []
    positions: list[int] = []
    pos = text.find(needle)
    while pos != -1:
        positions.append(pos)
        pos = text.find(needle, pos + len(needle))
    return positions


class LineHighlighter:
    """Paints the occurrences of a needle in one line printed on a Content surface."""

    def __init__(self, content: Content, text: str, width: int, style: Style) -> None:
        self._content = content
        self._text = text
        self._style = style
        self._row_starts = self._compute_row_starts(text, width)

    @staticmethod
    def _compute_row_starts(text: str, width: int) -> list[int]:
        starts: list[int] = []
        offset = 0
        for chunk in wrap_cells(text, width):
            starts.append(offset)
            offset += len(chunk)
        return starts

    def row_of(self, position: int) -> int:
        """Wrapped row holding the character at ``position``."""
        return bisect.bisect_right(self._row_starts, position) - 1

    def print(self, needle: str, accumulated_height: int, height: int, row: int | None = None) -> list[int]:
        """Paint every occurrence and return the ascending rows that contain one.

        An occurrence belongs to the row of its first character. When ``row`` is
        given only occurrences starting on that row are painted and reported.
        """
        rows: list[int] = []
        for position in find_occurrences(self._text, needle):
            first_row = self.row_of(position)
            if first_row >= height:
                break
            if row is not None and first_row != row:
                continue
            self._paint_span(first_row, position, position + len(needle), accumulated_height, height)
            if not rows or rows[-1] != first_row:
                rows.append(first_row)
        return rows

    def _paint_span(self, first_row: int, start: int, end: int, accumulated_height: int, height: int) -> None:
        current = first_row
        while current < height and current < len(self._row_starts):
            row_start = self._row_starts[current]
            if row_start >= end:
                break
            row_end = self._row_starts[current + 1] if current + 1 < len(self._row_starts) else len(self._text)
            span_start = max(start, row_start)
            span_end = min(end, row_end)
            if span_start < span_end:
                self._content.paint(accumulated_height + current, span_start - row_start, span_end - row_start, self._style)
            current += 1
