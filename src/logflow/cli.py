"""CLI entry point for logflow."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path  # noqa: TC003 - typer needs this at runtime for argument parsing
from typing import Annotated

import typer
from textual.logging import TextualHandler

from logflow.config import load_config
from logflow.reader import is_pipe, read_file

app = typer.Typer(add_completion=False)


def _setup_pipe_input() -> int:
    """Save stdin pipe fd, then redirect fd 0 to /dev/tty for Textual keyboard.

    Returns the saved pipe fd for reading data.
    """
    pipe_fd = os.dup(sys.stdin.fileno())
    tty_fd = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(tty_fd, sys.stdin.fileno())
    os.close(tty_fd)
    sys.stdin = os.fdopen(0)
    return pipe_fd


def _setup_logging(debug: bool) -> None:  # noqa: FBT001
    """Route log records to the Textual devtools console, never to the terminal."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, handlers=[TextualHandler()], force=True)


@app.command()
def run(
    file: Annotated[Path | None, typer.Argument(help="Log file to view")] = None,
    tail: Annotated[bool, typer.Option("--tail", "-t", help="Follow file for new lines")] = False,  # noqa: FBT002
    max_lines: Annotated[
        int | None, typer.Option("--max-lines", "-n", min=1, help="Scrollback size (lines kept in memory)")
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Log to the Textual devtools console")] = False,  # noqa: FBT002
) -> None:
    """View, tail and search log lines in a terminal UI."""
    if file is not None and not file.is_file():
        typer.echo(f"Error: {file} is not a file")
        raise typer.Exit(1)

    _setup_logging(debug)
    config = load_config()
    if max_lines is not None:
        config = config.model_copy(update={"max_scrollback": max_lines})

    pipe_fd: int | None = None
    if file is not None:
        lines = [] if tail else read_file(file)
        source = str(file)
    elif is_pipe():
        pipe_fd = _setup_pipe_input()
        lines = []  # Lines arrive via async reader
        source = "stdin"
    else:
        typer.echo("Error: provide a file or pipe input")
        raise typer.Exit(1)

    from logflow.app import LogFlowApp  # noqa: PLC0415

    log_app = LogFlowApp(
        lines=lines,
        source=source,
        file_path=file,
        tail=tail if file is not None else False,
        pipe_fd=pipe_fd,
        config=config,
    )
    log_app.run()


def main() -> None:
    """Entry point for the CLI."""
    app()
