"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from logflow.content import Content

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_LINES = [
    "2024-01-15T10:30:00Z INFO Server started on port 8080",
    "2024-01-15T10:30:01Z INFO Connection established from 192.168.1.1",
    "2024-01-15T10:30:02Z ERROR Failed to connect to database: timeout after 30s",
    "2024-01-15T10:30:03Z WARN Slow query on users table",
    "2024-01-15T10:30:04Z ERROR Retry limit reached",
    "",
    "2024-01-15T10:30:05Z INFO\tRequest completed",
]


@pytest.fixture
def sample_log_file(tmp_path: Path) -> Path:
    """Create a temporary log file with sample content."""
    log_file = tmp_path / "test.log"
    log_file.write_text("\n".join(SAMPLE_LINES) + "\n")
    return log_file


@pytest.fixture
def content() -> Content:
    """A 10-column rendering surface."""
    return Content(10)
