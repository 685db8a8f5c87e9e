"""Rendered line buffer: wrapped lines, search state and bottom-anchored scroll math."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from logflow.highlighter import LineHighlighter
from logflow.models import LogLine, MatchedLine, Viewport

if TYPE_CHECKING:
    from rich.style import Style

    from logflow.content import Content

logger = logging.getLogger(__name__)


class MatchStateError(RuntimeError):
    """A match query was made on a line or buffer that holds no matches."""


class RenderedLine:
    """A log line wrapped at a fixed width, with the rows matching the active query."""

    __slots__ = ("found_matches", "height", "line")

    def __init__(self, line: LogLine, height: int, found_matches: list[int] | None = None) -> None:
        self.line = line
        self.height = height
        self.found_matches = found_matches

    def __repr__(self) -> str:
        return f"RenderedLine({self.line.raw!r}, height={self.height}, found_matches={self.found_matches})"

    def copy(self) -> RenderedLine:
        found = list(self.found_matches) if self.found_matches is not None else None
        return RenderedLine(self.line, self.height, found)

    def search(self, needle: str, content: Content, width: int, accumulated_height: int, style: Style) -> bool:
        """Search the line for ``needle``, repainting it when its match state changes.

        A matching line is repainted and highlighted. A line that stops matching is
        repainted once so the stale highlight disappears.
        """
        is_match = self.line.contains(needle)
        found_matches = None

        if is_match:
            self.print(content, accumulated_height)
            found_matches = self.highlight(needle, content, width, accumulated_height, style)

        if self.update_found_matches(found_matches) and not is_match:
            self.print(content, accumulated_height)

        return is_match

    def highlight(
        self,
        needle: str,
        content: Content,
        width: int,
        accumulated_height: int,
        style: Style,
        row: int | None = None,
    ) -> list[int]:
        highlighter = LineHighlighter(content, self.line.raw, width, style)
        return highlighter.print(needle, accumulated_height, self.height, row=row)

    def print(self, content: Content, accumulated_height: int) -> None:
        content.print(self.line.raw, accumulated_height)

    def update_found_matches(self, found_matches: list[int] | None) -> bool:
        """Replace the match rows. Returns True if they changed."""
        if self.found_matches != found_matches:
            self.found_matches = found_matches
            return True
        return False

    def match_count(self) -> int:
        if self.found_matches is None:
            msg = f"Line {self.line.line_number} has no matches"
            raise MatchStateError(msg)
        return len(self.found_matches)


def _height(entries: Iterable[RenderedLine]) -> int:
    return sum(entry.height for entry in entries)


class LineBuffer:
    """Ordered scrollback of rendered lines, oldest first.

    Scroll positions are expressed as reverse indices: the distance in rows from
    the bottom of the buffer, so the newest line is always the anchor.
    """

    def __init__(self, entries: Iterable[RenderedLine] = (), max_length: int | None = None) -> None:
        self._entries: list[RenderedLine] = list(entries)
        self.max_length = max_length

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> RenderedLine:
        """Line at ``index``, counted from the oldest. Negative indices are rejected."""
        if not 0 <= index < len(self._entries):
            msg = f"Line index {index} out of range for {len(self._entries)} line(s)"
            raise IndexError(msg)
        return self._entries[index]

    def __iter__(self) -> Iterator[RenderedLine]:
        return iter(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        self._entries.clear()

    def append(self, line: LogLine, height: int, found_matches: list[int] | None = None) -> list[RenderedLine]:
        """Add a line at the end. Returns the oldest lines evicted to respect ``max_length``."""
        self._entries.append(RenderedLine(line, height, found_matches))
        if self.max_length is None or len(self._entries) <= self.max_length:
            return []
        overflow = len(self._entries) - self.max_length
        evicted = self._entries[:overflow]
        del self._entries[:overflow]
        logger.debug("Evicted %d line(s) from scrollback", overflow)
        return evicted

    def matching(self, needle: str) -> LineBuffer:
        """A new buffer holding copies of the lines that contain ``needle``."""
        return LineBuffer(entry.copy() for entry in self._entries if entry.line.contains(needle))

    def height(self) -> int:
        return _height(self._entries)

    def height_up_to(self, index: int) -> int:
        """Rows above line ``index``, i.e. its offset from the top."""
        return _height(self._entries[:index])

    def last_lines_height(self, count: int) -> int:
        if count <= 0:
            return 0
        return _height(self._entries[-count:])

    def has_matches(self) -> bool:
        return any(entry.found_matches is not None for entry in self._entries)

    def reverse_index_of(self, line: int, match_index: int) -> int:
        """Distance from the bottom of the buffer to the row of a match."""
        found = self[line].found_matches
        if found is None:
            msg = f"Line index {line} has no matches"
            raise MatchStateError(msg)
        return _height(self._entries[line:]) - found[match_index]

    def is_match_visible(self, matched: MatchedLine, viewport: Viewport) -> bool:
        reverse_index = self.reverse_index_of(matched.line, matched.match_index)
        return viewport.reverse_index <= reverse_index <= viewport.limit()

    def visible_match(self, viewport: Viewport) -> MatchedLine | None:
        """The match closest to the bottom of the viewport, if any is on screen.

        Only lines up to the top of the viewport are examined.
        """
        limit = viewport.limit()
        accumulated_height = 0

        for index in range(len(self._entries) - 1, -1, -1):
            entry = self._entries[index]
            line_end = accumulated_height + entry.height
            if entry.found_matches is not None:
                for match_index in range(len(entry.found_matches) - 1, -1, -1):
                    reverse_index = line_end - entry.found_matches[match_index]
                    if reverse_index > limit:
                        break
                    if reverse_index >= viewport.reverse_index:
                        return MatchedLine(line=index, match_index=match_index)

            accumulated_height = line_end
            if accumulated_height >= limit:
                break

        return None

    def last_match(self) -> MatchedLine:
        """The newest match in the buffer. Raises MatchStateError if nothing matches."""
        for index in range(len(self._entries) - 1, -1, -1):
            entry = self._entries[index]
            if entry.found_matches is not None:
                return MatchedLine(line=index, match_index=entry.match_count() - 1)
        msg = "No line in the buffer matches"
        raise MatchStateError(msg)

    def next_match(self, index: int) -> MatchedLine | None:
        """First match on a line strictly after ``index``."""
        for current in range(max(index + 1, 0), len(self._entries)):
            if self._entries[current].found_matches is not None:
                return MatchedLine(line=current, match_index=0)
        return None

    def previous_match(self, index: int) -> MatchedLine | None:
        """Last match on a line strictly before ``index``."""
        for current in range(min(index, len(self._entries)) - 1, -1, -1):
            entry = self._entries[current]
            if entry.found_matches is not None:
                return MatchedLine(line=current, match_index=entry.match_count() - 1)
        return None
