"""Log file reading (sync and async with tailing)."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import AsyncIterator, Callable
from pathlib import Path

import aiofiles

from logflow.models import LogLine

logger = logging.getLogger(__name__)

TAB_SIZE = 8


def make_line(line_number: int, raw_line: str) -> LogLine:
    """Build a LogLine from a raw line, dropping the newline and expanding tabs."""
    return LogLine(line_number=line_number, raw=raw_line.rstrip("\r\n").expandtabs(TAB_SIZE))


def read_file(path: Path) -> list[LogLine]:
    """Read all log lines from a file (synchronous)."""
    lines: list[LogLine] = []
    with path.open(errors="replace") as f:
        for i, raw_line in enumerate(f, start=1):
            lines.append(make_line(i, raw_line))
    return lines


def is_pipe() -> bool:
    """Check if stdin is a pipe (not a terminal)."""
    return not sys.stdin.isatty()


async def read_file_async(
    path: Path,
    tail: bool = False,
    on_reset: Callable[[], None] | None = None,
    interval: float = 0.1,
) -> AsyncIterator[LogLine]:
    """Read log lines from a file asynchronously, optionally tailing.

    When a tailed file shrinks (truncation or rotation) ``on_reset`` is called and
    reading starts over from the first line.
    """
    line_number = 0
    async with aiofiles.open(path, errors="replace") as f:
        async for raw_line in f:
            line_number += 1
            yield make_line(line_number, raw_line)

        if not tail:
            return

        # Tail mode: poll for new content
        last_size = path.stat().st_size
        while True:
            line = await f.readline()
            if line:
                line_number += 1
                yield make_line(line_number, line)
            else:
                try:
                    current_size = path.stat().st_size
                except OSError:
                    await asyncio.sleep(interval * 2)
                    continue
                if current_size < last_size:
                    logger.debug("%s was truncated, reading from the start", path)
                    await f.seek(0)
                    line_number = 0
                    if on_reset is not None:
                        on_reset()
                last_size = current_size
                await asyncio.sleep(interval)


async def read_pipe_async(pipe_fd: int) -> AsyncIterator[LogLine]:
    """Read log lines from a pipe file descriptor asynchronously."""
    line_number = 0
    async with aiofiles.open(pipe_fd, closefd=True, errors="replace") as f:
        async for raw_line in f:
            line_number += 1
            yield make_line(line_number, raw_line)
