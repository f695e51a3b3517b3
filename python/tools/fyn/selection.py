#!/usr/bin/env python3
"""
Interactive package selection over an aggregated result list.

The engine is a small state machine. `handle_input` maps one line of user
input to a Transition without doing any I/O; `run` drives it against an
IOChannel until a terminal state is reached.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from .aggregator import format_description, format_record
from .console import IOChannel
from .models import PackageRecord

DEFAULT_PAGE_SIZE = 10

CANCEL_INPUTS = frozenset({"q"})
MORE_INPUTS = frozenset({"more", "m"})

# Optional sign and ASCII digits only
_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


class SelectionState(Enum):
    """States of the selection state machine"""

    EXACT_MATCH = auto()
    PAGED_LIST = auto()
    CANCELLED = auto()
    SELECTED = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not SelectionState.PAGED_LIST


@dataclass(frozen=True)
class Transition:
    """Result of feeding one input to the selection engine."""

    state: SelectionState
    record: Optional[PackageRecord] = None
    notice: Optional[str] = None
    page_advanced: bool = False

    @property
    def selected(self) -> bool:
        return self.record is not None and self.state in (
            SelectionState.SELECTED,
            SelectionState.EXACT_MATCH,
        )


class SelectionEngine:
    """Lets the user pick one package out of the aggregated results."""

    def __init__(
        self,
        packages: Sequence[PackageRecord],
        query: str,
        channel: IOChannel,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.packages: List[PackageRecord] = list(packages)
        self.query = query
        self.channel = channel
        self.page_size = page_size
        self.page = 0
        self.state = SelectionState.PAGED_LIST

    @property
    def count(self) -> int:
        return len(self.packages)

    def find_by_name(self, name: str) -> Optional[PackageRecord]:
        """First record whose name equals `name` exactly, in aggregate order."""
        return next((pkg for pkg in self.packages if pkg.name == name), None)

    def find_exact_match(self) -> Optional[PackageRecord]:
        return self.find_by_name(self.query)

    def page_bounds(self) -> Tuple[int, int]:
        """Zero-based [start, end) slice of the current page."""
        start = self.page * self.page_size
        return start, min(start + self.page_size, self.count)

    @property
    def has_more(self) -> bool:
        return self.page_bounds()[1] < self.count

    def page_lines(self) -> List[str]:
        """Listing of the current page with 1-based, list-wide indices."""
        start, end = self.page_bounds()
        lines: List[str] = []
        for index in range(start, end):
            pkg = self.packages[index]
            lines.append(f"[{index + 1}] {format_record(pkg)}")
            lines.append(format_description(pkg))
        return lines

    def prompt(self) -> str:
        if not self.has_more:
            return "Enter number or package name to install (or 'q' to quit): "
        start, end = self.page_bounds()
        return (
            f"Showing {start + 1}-{end} of {self.count}. "
            "Enter number/name, 'more' for next page, or 'q' to quit: "
        )

    def handle_input(self, raw: Optional[str]) -> Transition:
        """
        Apply one line of user input.

        Args:
            raw: The line as read, or None at end of input

        Returns:
            The resulting Transition. Only the 'more' input changes the
            current page; invalid input leaves the engine on the same page.
        """
        text = (raw or "").strip()
        lowered = text.lower()

        if not text or lowered in CANCEL_INPUTS:
            self.state = SelectionState.CANCELLED
            return Transition(SelectionState.CANCELLED)

        if lowered in MORE_INPUTS:
            if self.has_more:
                self.page += 1
                return Transition(SelectionState.PAGED_LIST, page_advanced=True)
            return Transition(
                SelectionState.PAGED_LIST, notice="No more packages to show."
            )

        if _NUMBER_RE.fullmatch(text):
            number = int(text)
            if 1 <= number <= self.count:
                self.state = SelectionState.SELECTED
                return Transition(SelectionState.SELECTED, self.packages[number - 1])
            return Transition(
                SelectionState.PAGED_LIST,
                notice=f"Invalid number. Please enter 1-{self.count}.",
            )

        record = self.find_by_name(text)
        if record is not None:
            self.state = SelectionState.SELECTED
            return Transition(SelectionState.SELECTED, record)

        return Transition(
            SelectionState.PAGED_LIST,
            notice=f"Package '{text}' not found in results. Try again.",
        )

    def run(self) -> Transition:
        """Run the selection until a package is chosen or the user quits."""
        exact = self.find_exact_match()
        if exact is not None:
            self.state = SelectionState.EXACT_MATCH
            logger.debug(f"Exact match for '{self.query}': {exact.qualified_name}")
            self.channel.write(f"Found exact match: {format_record(exact)}")
            return Transition(SelectionState.EXACT_MATCH, exact)

        self.channel.write(f"Found {self.count} matching package(s):")
        self.channel.write()

        while True:
            for line in self.page_lines():
                self.channel.write(line)
            self.channel.write()

            transition = self.handle_input(self.channel.read_line(self.prompt()))
            if transition.state.is_terminal:
                return transition

            if transition.notice:
                self.channel.write(transition.notice)
            self.channel.write()
