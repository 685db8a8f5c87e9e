"""Search highlight styles."""

from __future__ import annotations

from rich.style import Style

from logflow.models import AppConfig


def search_match_style(config: AppConfig) -> Style:
    """Return the highlight style for every match of the active query."""
    return Style(bgcolor=config.highlight_color, color="#ffffff")


def search_current_style(config: AppConfig) -> Style:
    """Return the highlight style for the match under the cursor (brighter + bold)."""
    return Style(bgcolor=config.current_highlight_color, color="#ffffff", bold=True)
