"""Terminal I/O used by the interactive sessions.

Sessions only talk to the :class:`Terminal` protocol, so tests can drive
them with scripted input.
"""

from __future__ import annotations

import signal
import threading
from typing import Any, Protocol

import click
from rich.console import Console


class Terminal(Protocol):
    def read_line(self, prompt: str = "") -> str:
        """Read one line. Raises EOFError or KeyboardInterrupt to end input."""

    def read_key(self) -> str:
        """Read a single keypress without waiting for Enter."""

    def write(self, *objects: Any) -> None:
        """Write rich renderables or markup strings."""


class ConsoleTerminal:
    """Terminal backed by a rich Console and click's raw-mode getchar."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def read_line(self, prompt: str = "") -> str:
        # Ctrl+C must interrupt a blocking read even under asyncio.run()'s
        # SIGINT handler, which only cancels the main task.
        if threading.current_thread() is not threading.main_thread():
            return self.console.input(prompt)
        previous = signal.signal(signal.SIGINT, signal.default_int_handler)
        try:
            return self.console.input(prompt)
        finally:
            signal.signal(signal.SIGINT, previous)

    def read_key(self) -> str:
        # click translates Ctrl+C / Ctrl+D into KeyboardInterrupt / EOFError
        return click.getchar()

    def write(self, *objects: Any) -> None:
        self.console.print(*objects)
