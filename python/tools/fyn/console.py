#!/usr/bin/env python3
"""
User input/output channel.

The selection and install flows talk to the user only through an IOChannel,
so they can be driven by scripted input in tests.
"""

from __future__ import annotations

from typing import Optional, Protocol

from rich.console import Console


class IOChannel(Protocol):
    """Line-oriented, blocking user channel."""

    def write(self, text: str = "") -> None: ...

    def read_line(self, prompt: str) -> Optional[str]:
        """Show `prompt` and return one line, or None at end of input."""
        ...


class ConsoleChannel:
    """IOChannel backed by a rich Console on the real terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def write(self, text: str = "") -> None:
        # Package text (descriptions, PKGBUILDs) must come out verbatim
        self.console.print(
            text, markup=False, highlight=False, emoji=False, soft_wrap=True
        )

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return self.console.input(prompt, markup=False)
        except EOFError:
            return None
