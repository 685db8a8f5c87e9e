"""Main scrollable log line display widget."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from textual.binding import Binding, BindingType
from textual.geometry import Size
from textual.message import Message
from textual.scroll_view import ScrollView
from textual.strip import Strip

from logflow.buffer import LineBuffer
from logflow.colors import search_current_style, search_match_style
from logflow.content import Content
from logflow.models import AppConfig, LogLine, MatchedLine, SearchMode, Viewport

if TYPE_CHECKING:
    from rich.style import Style
    from textual import events

    from logflow.buffer import RenderedLine

logger = logging.getLogger(__name__)

_DEFAULT_WIDTH = 80


class LogView(ScrollView, can_focus=True):
    """Scrollback viewer anchored at the newest line, with incremental literal search."""

    DEFAULT_CSS = """
    LogView {
        background: $surface;
        height: 1fr;
        overflow-x: hidden;
        overflow-y: scroll;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("up", "scroll_back(1)", "Up", show=False),
        Binding("down", "scroll_forward(1)", "Down", show=False),
        Binding("k", "scroll_back(1)", "Up", show=False),
        Binding("j", "scroll_forward(1)", "Down", show=False),
        Binding("pageup", "page_back", "Page Up", show=False),
        Binding("pagedown", "page_forward", "Page Down", show=False),
        Binding("home", "scroll_oldest", "Top", show=False),
        Binding("g", "scroll_oldest", "Top", show=False),
        Binding("end", "scroll_newest", "Bottom", show=False),
        Binding("G", "scroll_newest", "Bottom", show=False),
        Binding("n", "next_match", "Next"),
        Binding("N", "prev_match", "Prev"),
        Binding("b", "last_match", "Last match", show=False),
    ]

    class Changed(Message):
        """Posted when the search query, its matches or the current match change."""

        def __init__(self, log_view: LogView) -> None:
            super().__init__()
            self.log_view = log_view

    def __init__(self, lines: list[LogLine] | None = None, config: AppConfig | None = None, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(**kwargs)
        self._config = config or AppConfig()
        self._content = Content(_DEFAULT_WIDTH)
        self._buffer = LineBuffer(max_length=self._config.max_scrollback)
        self._needle: str = ""
        self._mode: SearchMode = SearchMode.IDLE
        self._cursor: MatchedLine | None = None
        self._matching_count: int = 0
        self._following: bool = True
        self._rows: int = 0
        self._initial_lines: list[LogLine] = lines or []

    @property
    def buffer(self) -> LineBuffer:
        return self._buffer

    @property
    def content(self) -> Content:
        return self._content

    @property
    def line_count(self) -> int:
        return len(self._buffer)

    @property
    def needle(self) -> str:
        return self._needle

    @property
    def mode(self) -> SearchMode:
        return self._mode

    @property
    def cursor(self) -> MatchedLine | None:
        """The current match, if a query is active and anything matches."""
        return self._cursor

    @property
    def matching_count(self) -> int:
        """Number of lines in the scrollback containing the query."""
        return self._matching_count

    @property
    def viewport(self) -> Viewport:
        """The visible window in bottom-anchored coordinates."""
        rows = max(0, self.scrollable_content_region.height)
        top = self.scroll_offset.y
        reverse_index = max(0, self._content.height - rows - top)
        return Viewport(reverse_index=reverse_index, rows=rows)

    @property
    def is_following(self) -> bool:
        """Whether the view is pinned to the newest line."""
        return self._following

    def _match_window(self) -> Viewport:
        """The reverse indices of the rows actually on screen, for match queries.

        The bottom row of a window at ``reverse_index`` r has reverse index r + 1.
        """
        viewport = self.viewport
        return Viewport(reverse_index=viewport.reverse_index + 1, rows=max(0, viewport.rows - 1))

    def watch_scroll_y(self, old_value: float, new_value: float) -> None:
        super().watch_scroll_y(old_value, new_value)
        # Scrollbar and mouse wheel scrolling bypass _scroll_to_viewport.
        if self.scrollable_content_region.height > 0:
            self._following = self.viewport.reverse_index == 0

    def on_mount(self) -> None:
        if self._initial_lines:
            self.set_lines(self._initial_lines)
            self._initial_lines = []

    # --- Loading ---

    def set_lines(self, lines: list[LogLine]) -> None:
        """Replace the scrollback and show the newest lines."""
        self._load(lines)
        self._scroll_to_viewport(Viewport(rows=self.viewport.rows))
        self.refresh()

    def reset(self) -> None:
        """Drop the whole scrollback (the log source was reset). The query is kept."""
        self._buffer.clear()
        self._content.clear()
        self._cursor = None
        self._matching_count = 0
        self._following = True
        self._update_virtual_size()
        self.refresh()
        self.post_message(self.Changed(self))

    def _load(self, lines: list[LogLine]) -> None:
        self._buffer.clear()
        self._content.clear()
        self._cursor = None
        for line in lines[-self._config.max_scrollback :]:
            height = self._content.print(line.raw, self._content.height)
            self._buffer.append(line, height)
        self._update_virtual_size()
        if self._needle:
            self._search_all()

    def append_line(self, line: LogLine) -> None:
        """Append a new line. Pinned views follow it, scrolled-back views keep their rows on screen."""
        viewport = self.viewport
        following = self._following
        row = self._content.height
        height = self._content.print(line.raw, row)
        evicted = self._buffer.append(line, height)

        if self._needle:
            entry = self._buffer[len(self._buffer) - 1]
            if entry.search(self._needle, self._content, self._content.width, row, self._match_style):
                self._matching_count += 1

        if evicted:
            self._drop_evicted(evicted)

        self._update_virtual_size()
        if following:
            self._scroll_to_viewport(Viewport(rows=viewport.rows))
        else:
            self._scroll_to_viewport(viewport.scrolled(height, self._content.height))
        self.refresh()

    def _drop_evicted(self, evicted: list[RenderedLine]) -> None:
        self._content.drop_top(sum(entry.height for entry in evicted))
        self._matching_count -= sum(1 for entry in evicted if entry.found_matches is not None)
        if self._cursor is not None:
            line = self._cursor.line - len(evicted)
            self._cursor = MatchedLine(line=line, match_index=self._cursor.match_index) if line >= 0 else None

    def _update_virtual_size(self) -> None:
        self.virtual_size = Size(self._content.width, self._content.height)

    def _scroll_to_viewport(self, viewport: Viewport) -> None:
        y = max(0, self._content.height - viewport.rows - viewport.reverse_index)
        self.scroll_to(y=y, animate=False, immediate=True)
        self._following = viewport.reverse_index == 0

    def on_resize(self, _event: events.Resize) -> None:
        width = self.scrollable_content_region.width
        rows = self.scrollable_content_region.height
        if width <= 0:
            return
        # The scroll offset still belongs to the previous size.
        reverse_index = 0 if self._following else max(0, self._content.height - self._rows - self.scroll_offset.y)
        self._rows = rows
        if width != self._content.width:
            lines = [entry.line for entry in self._buffer]
            cursor = self._cursor
            self._content.resize(width)
            self._load(lines)
            if cursor is not None and self._buffer.has_matches():
                self._restore_cursor(cursor)
        target = Viewport(reverse_index=reverse_index, rows=max(0, rows))
        self._scroll_to_viewport(target.scrolled(0, self._content.height))
        self.refresh()

    def _restore_cursor(self, cursor: MatchedLine) -> None:
        entry = self._buffer[cursor.line]
        if entry.found_matches is None:
            self._cursor = None
            return
        match_index = min(cursor.match_index, entry.match_count() - 1)
        self._cursor = MatchedLine(line=cursor.line, match_index=match_index)
        self._paint_line(cursor.line, entry.found_matches[match_index])

    # --- Search ---

    @property
    def _match_style(self) -> Style:
        return search_match_style(self._config)

    def search(self, needle: str) -> None:
        """Run ``needle`` over the whole scrollback and keep a match in view.

        An empty needle clears every highlight. Otherwise the match closest to the
        bottom of the window becomes current; if none is on screen the newest
        match is brought into view.
        """
        self._needle = needle
        self._cursor = None
        self._search_all()

        if not needle:
            self._mode = SearchMode.IDLE
        else:
            self._mode = SearchMode.SEARCHING
            cursor = self._buffer.visible_match(self._match_window())
            if cursor is None and self._buffer.has_matches():
                cursor = self._buffer.last_match()
            if cursor is not None:
                self._focus_match(cursor)
        logger.debug("Search %r: %d matching line(s)", needle, self._matching_count)
        self.refresh()
        self.post_message(self.Changed(self))

    def _search_all(self) -> None:
        style = self._match_style
        width = self._content.width
        accumulated_height = 0
        for entry in self._buffer:
            entry.search(self._needle, self._content, width, accumulated_height, style)
            accumulated_height += entry.height
        self._matching_count = len(self._buffer.matching(self._needle)) if self._needle else 0

    def _paint_line(self, index: int, current_row: int | None = None) -> None:
        entry = self._buffer[index]
        top = self._buffer.height_up_to(index)
        entry.print(self._content, top)
        if entry.found_matches is None:
            return
        width = self._content.width
        entry.highlight(self._needle, self._content, width, top, self._match_style)
        if current_row is not None:
            entry.highlight(self._needle, self._content, width, top, search_current_style(self._config), row=current_row)

    def _focus_match(self, cursor: MatchedLine) -> None:
        """Make ``cursor`` the current match, scrolling only if it is off screen."""
        previous = self._cursor
        self._cursor = cursor
        if previous is not None and previous.line != cursor.line:
            self._paint_line(previous.line)
        found = self._buffer[cursor.line].found_matches
        self._paint_line(cursor.line, found[cursor.match_index] if found is not None else None)

        viewport = self.viewport
        if not self._buffer.is_match_visible(cursor, self._match_window()):
            reverse_index = self._buffer.reverse_index_of(cursor.line, cursor.match_index)
            self._scroll_to_viewport(viewport.centered_on(reverse_index, self._content.height))
        self.refresh()

    def _can_navigate(self) -> bool:
        return bool(self._needle) and self._buffer.has_matches()

    def action_next_match(self) -> None:
        """Go to the next match towards the newest line, wrapping to the oldest."""
        if not self._can_navigate():
            return
        cursor = self._cursor
        if cursor is None:
            target = self._buffer.last_match()
        elif cursor.match_index + 1 < self._buffer[cursor.line].match_count():
            target = MatchedLine(line=cursor.line, match_index=cursor.match_index + 1)
        else:
            target = self._buffer.next_match(cursor.line) or self._buffer.next_match(-1)
        if target is None:
            return
        self._mode = SearchMode.NAVIGATING
        self._focus_match(target)
        self.post_message(self.Changed(self))

    def action_prev_match(self) -> None:
        """Go to the previous match towards the oldest line, wrapping to the newest."""
        if not self._can_navigate():
            return
        cursor = self._cursor
        if cursor is None:
            target = self._buffer.last_match()
        elif cursor.match_index > 0:
            target = MatchedLine(line=cursor.line, match_index=cursor.match_index - 1)
        else:
            target = self._buffer.previous_match(cursor.line) or self._buffer.previous_match(len(self._buffer))
        if target is None:
            return
        self._mode = SearchMode.NAVIGATING
        self._focus_match(target)
        self.post_message(self.Changed(self))

    def action_last_match(self) -> None:
        """Jump to the newest match."""
        if not self._can_navigate():
            return
        self._mode = SearchMode.NAVIGATING
        self._focus_match(self._buffer.last_match())
        self.post_message(self.Changed(self))

    # --- Scrolling ---

    def action_scroll_back(self, rows: int) -> None:
        self._scroll_to_viewport(self.viewport.scrolled(rows, self._content.height))

    def action_scroll_forward(self, rows: int) -> None:
        self._scroll_to_viewport(self.viewport.scrolled(-rows, self._content.height))

    def action_page_back(self) -> None:
        self.action_scroll_back(max(1, self.viewport.rows - 1))

    def action_page_forward(self) -> None:
        self.action_scroll_forward(max(1, self.viewport.rows - 1))

    def action_scroll_oldest(self) -> None:
        self._scroll_to_viewport(self.viewport.scrolled(self._content.height, self._content.height))

    def action_scroll_newest(self) -> None:
        self._scroll_to_viewport(Viewport(rows=self.viewport.rows))

    # --- Rendering ---

    def render_line(self, y: int) -> Strip:
        scroll_y = self.scroll_offset.y
        row = scroll_y + y
        content_width = self.scrollable_content_region.width

        if content_width <= 0:
            return Strip.blank(self.size.width, self.rich_style)

        if row < 0 or row >= self._content.height:
            return Strip.blank(content_width, self.rich_style)

        text = self._content.row(row)
        strip = Strip(text.render(self.app.console))
        strip = strip.crop(0, content_width).extend_cell_length(content_width)
        return strip.apply_style(self.rich_style)
