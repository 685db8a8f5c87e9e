"""Textual application for logflow."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.widgets import Footer, Input
from textual.worker import get_current_worker

from logflow.config import load_config, save_config
from logflow.reader import read_file_async, read_pipe_async
from logflow.widgets.help_screen import HelpScreen
from logflow.widgets.log_view import LogView
from logflow.widgets.search_bar import SearchBar
from logflow.widgets.status_bar import StatusBar

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

    from logflow.models import AppConfig, LogLine


class LogFlowApp(App[None]):
    """Realtime log viewer TUI application."""

    ENABLE_COMMAND_PALETTE = False

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit"),
        Binding("slash", "open_search", "Search"),
        Binding("p", "toggle_tail_pause", "Pause"),
        Binding("t", "cycle_theme", "Theme", show=False),
        Binding("h", "show_help", "Help"),
        Binding("question_mark", "show_help", "Help", show=False),
    ]

    def __init__(
        self,
        lines: list[LogLine] | None = None,
        source: str = "",
        file_path: Path | None = None,
        *,
        tail: bool = False,
        pipe_fd: int | None = None,
        config: AppConfig | None = None,
    ) -> None:
        super().__init__()
        self._lines = lines or []
        self._source = source
        self._file_path = file_path
        self._tail = tail
        self._pipe_fd = pipe_fd
        self._tail_paused: bool = False
        self._tail_buffer: list[LogLine] = []
        self._config = config or load_config()
        self.theme = self._config.theme

    @property
    def _is_streaming(self) -> bool:
        return self._tail or self._pipe_fd is not None

    def compose(self) -> ComposeResult:
        yield SearchBar(id="search-bar")
        yield LogView(config=self._config, id="log-view")
        yield StatusBar(source=self._source, id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        log_view = self.query_one("#log-view", LogView)
        status_bar = self.query_one("#status-bar", StatusBar)

        if self._lines:
            log_view.set_lines(self._lines)

        if self._tail and self._file_path:
            status_bar.set_tailing(True)
            reader = read_file_async(
                self._file_path, tail=True, on_reset=self._on_source_reset, interval=self._config.tail_interval
            )
            self.run_worker(self._tail_worker(reader), exclusive=True)
        elif self._pipe_fd is not None:
            status_bar.set_tailing(True)
            self.run_worker(self._tail_worker(read_pipe_async(self._pipe_fd)), exclusive=True)

        log_view.focus()
        self._update_status_bar()

    async def _tail_worker(self, reader: AsyncIterator[LogLine]) -> None:
        """Consume async line reader and append lines to the view."""
        log_view = self.query_one("#log-view", LogView)
        worker = get_current_worker()
        async for line in reader:
            if worker.is_cancelled:
                break
            if self._tail_paused:
                self._tail_buffer.append(line)
                status_bar = self.query_one("#status-bar", StatusBar)
                status_bar.set_new_lines(len(self._tail_buffer))
            else:
                log_view.append_line(line)
                self._update_status_bar()

    def _on_source_reset(self) -> None:
        """The tailed file was truncated: start over with an empty scrollback."""
        self._tail_buffer.clear()
        self.query_one("#status-bar", StatusBar).set_new_lines(0)
        self.query_one("#log-view", LogView).reset()
        self.notify("Log file truncated, reloading")

    def action_toggle_tail_pause(self) -> None:
        """Toggle tail pause/resume."""
        if not self._is_streaming:
            return
        self._tail_paused = not self._tail_paused
        status_bar = self.query_one("#status-bar", StatusBar)

        if self._tail_paused:
            status_bar.set_tailing(False)
            self.notify("Tailing paused")
        else:
            # Flush buffered lines
            log_view = self.query_one("#log-view", LogView)
            for line in self._tail_buffer:
                log_view.append_line(line)
            self._tail_buffer.clear()
            status_bar.set_tailing(True)
            status_bar.set_new_lines(0)
            self._update_status_bar()
            self.notify("Tailing resumed")

    def _update_status_bar(self) -> None:
        log_view = self.query_one("#log-view", LogView)
        status_bar = self.query_one("#status-bar", StatusBar)
        status_bar.update_counts(log_view.line_count)
        status_bar.update_search(log_view.needle, log_view.matching_count, log_view.mode)

    # --- Search ---

    def action_open_search(self) -> None:
        self.query_one("#search-bar", SearchBar).open()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-bar":
            self.query_one("#log-view", LogView).search(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "search-bar":
            return
        search_bar = self.query_one("#search-bar", SearchBar)
        log_view = self.query_one("#log-view", LogView)
        if not event.value:
            search_bar.close()
        elif log_view.matching_count == 0:
            self.notify(f"Pattern not found: {event.value}", severity="warning")
        log_view.focus()

    def on_search_bar_cancelled(self, _event: SearchBar.Cancelled) -> None:
        self.query_one("#log-view", LogView).focus()

    def on_log_view_changed(self, _event: LogView.Changed) -> None:
        self._update_status_bar()

    # --- Theme ---

    def action_cycle_theme(self) -> None:
        """Switch to the next theme and remember it for the next start."""
        names = sorted(self.available_themes)
        index = names.index(self.theme) if self.theme in names else -1
        self.theme = names[(index + 1) % len(names)]
        self._config = self._config.model_copy(update={"theme": self.theme})
        # Command-line overrides such as --max-lines stay out of the saved file.
        save_config(load_config().model_copy(update={"theme": self.theme}))

    # --- Help ---

    def action_show_help(self) -> None:
        self.push_screen(HelpScreen())

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:  # noqa: ARG002
        """Hide pause binding when not tailing."""
        if action == "toggle_tail_pause":
            return True if self._is_streaming else None
        return True
