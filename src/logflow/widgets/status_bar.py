"""Bottom status bar."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget

from logflow.models import SearchMode


class StatusBar(Widget):
    """Bottom status bar showing line counts, search state and source info."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        dock: bottom;
        background: #264f78;
        color: #ffffff;
        padding: 0 1;
    }
    """

    def __init__(self, source: str = "", id: str | None = None) -> None:  # noqa: A002
        super().__init__(id=id)
        self._total: int = 0
        self._source = source
        self._tailing: bool = False
        self._new_lines: int = 0
        self._needle: str = ""
        self._matching: int = 0
        self._mode: SearchMode = SearchMode.IDLE

    def update_counts(self, total: int) -> None:
        """Update the line count."""
        self._total = total
        self.refresh()

    def update_search(self, needle: str, matching: int, mode: SearchMode) -> None:
        """Update the search query and the number of lines matching it."""
        self._needle = needle
        self._matching = matching
        self._mode = mode
        self.refresh()

    def set_tailing(self, tailing: bool) -> None:  # noqa: FBT001
        """Set tailing mode indicator."""
        self._tailing = tailing
        self.refresh()

    def set_new_lines(self, count: int) -> None:
        """Set new lines indicator (lines held back while tailing is paused)."""
        self._new_lines = count
        self.refresh()

    def render(self) -> Text:
        text = Text()

        if self._tailing:
            text.append(" TAIL ", style="bold reverse")
            text.append(" ")

        text.append(f"{self._total} lines")

        if self._new_lines > 0:
            text.append(f"  +{self._new_lines} new", style="bold")

        if self._mode != SearchMode.IDLE:
            text.append(f"  /{self._needle}", style="bold")
            noun = "line" if self._matching == 1 else "lines"
            text.append(f" {self._matching} matching {noun}")

        right_part = self._source
        if right_part:
            used = len(text.plain)
            padding = max(1, self.size.width - used - len(right_part))
            text.append(" " * padding)
            text.append(right_part)

        return text
