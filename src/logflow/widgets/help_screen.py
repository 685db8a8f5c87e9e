"""Help screen showing all keyboard shortcuts."""

from __future__ import annotations

from typing import ClassVar

from textual.app import ComposeResult
from textual.binding import BindingType
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

HELP_TEXT = """\
[bold]Scrolling[/bold]
  Up/Down, k/j  Scroll one row back/forward
  PgUp/PgDn     Page back/forward
  Home, g       Jump to the oldest line
  End, G        Jump to the newest line (follow new lines)

[bold]Search[/bold]
  /             Open the search bar (matches update as you type)
  Enter         Keep the query and return to the log
  Escape        Clear the query and its highlights
  n             Next match (towards newer lines, wraps)
  N             Previous match (towards older lines, wraps)
  b             Newest match

  Search is literal and case-sensitive.

[bold]Tailing (--tail / -t)[/bold]
  p             Pause/resume tailing

  Pipe input is always tailed automatically.
  A truncated file is reloaded from its first line.

[bold]General[/bold]
  t             Next theme (remembered)
  h, ?          Show this help
  q             Quit
"""


class HelpScreen(ModalScreen[None]):
    """Modal help screen with keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > VerticalScroll {
        width: 70;
        height: 80%;
        max-height: 30;
        background: $surface;
        border: tall $accent;
        padding: 1 2;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        ("escape", "dismiss_help", "Close"),
        ("h", "dismiss_help", "Close"),
        ("question_mark", "dismiss_help", "Close"),
    ]

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(HELP_TEXT, markup=True)

    def action_dismiss_help(self) -> None:
        self.dismiss(None)
