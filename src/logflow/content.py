"""Rendering surface holding the wrapped rows of the scrollback."""

from __future__ import annotations

from rich.cells import chop_cells
from rich.style import Style
from rich.text import Text


def wrap_cells(text: str, width: int) -> list[str]:
    """Split ``text`` into rows of at most ``width`` cells. Always returns at least one row."""
    return chop_cells(text, max(1, width)) or [""]


class Content:
    """A pad of wrapped rows addressed by absolute row from the top.

    Lines are printed at a row and may later be repainted in place; spans of a
    row can be styled independently, which is how search matches are painted.
    """

    def __init__(self, width: int) -> None:
        self.width = max(1, width)
        self._rows: list[Text] = []

    @property
    def height(self) -> int:
        return len(self._rows)

    def wrap(self, text: str) -> list[str]:
        return wrap_cells(text, self.width)

    def line_height(self, text: str) -> int:
        """Number of rows ``text`` occupies at the current width."""
        return len(self.wrap(text))

    def print(self, text: str, row: int) -> int:
        """Write ``text`` starting at ``row``, replacing any styling. Returns the row count."""
        wrapped = self.wrap(text)
        end = row + len(wrapped)
        if end > len(self._rows):
            self._rows.extend(Text() for _ in range(end - len(self._rows)))
        for offset, chunk in enumerate(wrapped):
            self._rows[row + offset] = Text(chunk, no_wrap=True, end="")
        return len(wrapped)

    def paint(self, row: int, start: int, end: int, style: Style) -> None:
        """Style the characters ``[start, end)`` of one row."""
        self._rows[row].stylize(style, start, end)

    def row(self, index: int) -> Text:
        return self._rows[index]

    def drop_top(self, count: int) -> None:
        """Forget the first ``count`` rows (evicted scrollback)."""
        del self._rows[:count]

    def clear(self) -> None:
        self._rows.clear()

    def resize(self, width: int) -> None:
        """Change the wrap width. Existing rows are discarded and must be printed again."""
        self.width = max(1, width)
        self._rows.clear()
