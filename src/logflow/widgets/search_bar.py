"""Incremental search input."""

from __future__ import annotations

from typing import ClassVar

from textual.binding import Binding, BindingType
from textual.message import Message
from textual.widgets import Input


class SearchBar(Input):
    """Single-line query input docked above the log view, hidden until opened."""

    DEFAULT_CSS = """
    SearchBar {
        dock: top;
        display: none;
        border: none;
        height: 1;
        padding: 0 1;
        background: $surface-darken-1;
    }

    SearchBar.visible {
        display: block;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("escape", "cancel", "Clear search"),
    ]

    def __init__(self, id: str | None = None) -> None:  # noqa: A002
        super().__init__(placeholder="search (literal, case-sensitive)", id=id)

    def open(self) -> None:
        """Show the bar and focus it, keeping the current query for editing."""
        self.add_class("visible")
        self.focus()

    def close(self) -> None:
        self.remove_class("visible")

    def action_cancel(self) -> None:
        """Clear the query (which clears the highlights) and hide the bar."""
        self.value = ""
        self.close()
        self.post_message(self.Cancelled(self))

    class Cancelled(Message):
        """Posted when the search is abandoned with Escape."""

        def __init__(self, search_bar: SearchBar) -> None:
            super().__init__()
            self.search_bar = search_bar
