"""Pydantic models for logflow."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class LogLine(BaseModel):
    """A single ingested log line."""

    line_number: int
    raw: str

    def contains(self, needle: str) -> bool:
        """Literal, case-sensitive containment. The empty needle never matches."""
        return bool(needle) and needle in self.raw


class Viewport(BaseModel):
    """Visible window measured from the bottom of the scrollback.

    ``reverse_index`` is the number of rows between the newest row and the
    window's trailing edge, ``rows`` is the window height.
    """

    model_config = ConfigDict(frozen=True)

    reverse_index: int = Field(default=0, ge=0)
    rows: int = Field(default=0, ge=0)

    def limit(self) -> int:
        """Leading (top) edge of the window."""
        return self.reverse_index + self.rows

    def max_reverse_index(self, total_height: int) -> int:
        return max(0, total_height - self.rows)

    def scrolled(self, delta: int, total_height: int) -> Viewport:
        """Move the window ``delta`` rows back into history (negative moves forward)."""
        reverse_index = min(max(0, self.reverse_index + delta), self.max_reverse_index(total_height))
        return self.model_copy(update={"reverse_index": reverse_index})

    def centered_on(self, reverse_index: int, total_height: int) -> Viewport:
        """Window that shows the row at ``reverse_index`` roughly in the middle."""
        target = min(max(0, reverse_index - self.rows // 2), self.max_reverse_index(total_height))
        return self.model_copy(update={"reverse_index": target})


class MatchedLine(BaseModel):
    """Cursor on one match: a line index and an index into its matched rows."""

    model_config = ConfigDict(frozen=True)

    line: int
    match_index: int


class SearchMode(StrEnum):
    """Search state of a log view."""

    IDLE = "idle"
    SEARCHING = "searching"
    NAVIGATING = "navigating"


class AppConfig(BaseModel):
    """Application configuration persisted to disk."""

    theme: str = "textual-dark"
    max_scrollback: int = Field(default=10_000, gt=0)
    highlight_color: str = "#6e5600"
    current_highlight_color: str = "#9e7c00"
    tail_interval: float = Field(default=0.1, gt=0)
