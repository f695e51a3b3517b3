#!/usr/bin/env python3
"""
Search of the official repositories through `pacman -Ss`.
"""

import re
from typing import List

from loguru import logger

from .models import PackageRecord, PackageSource
from .runner import ProcessRunner

# repo/name version [group] [installed]
_HEADER_RE = re.compile(r"^(\S+)/(\S+)\s+(\S+)")


def parse_search_output(output: str) -> List[PackageRecord]:
    """
    Parse `pacman -Ss` output into package records.

    Each result spans two lines: a `repo/name version [...]` header and an
    indented description. Lines that don't look like a header are skipped,
    and the description line is consumed together with its header.
    """
    packages: List[PackageRecord] = []
    lines = output.split("\n")
    i = 0

    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if not line:
            continue

        match = _HEADER_RE.match(line)
        if not match:
            continue

        repo, name, version = match.groups()
        description = ""
        if i < len(lines):
            description = lines[i].strip()
            i += 1

        packages.append(
            PackageRecord(
                source=PackageSource.OFFICIAL,
                name=name,
                version=version,
                description=description,
                repository=repo,
            )
        )

    return packages


class OfficialRepoSearcher:
    """Searches the sync databases with the system package manager."""

    def __init__(self, runner: ProcessRunner, pacman_command: str = "pacman"):
        self.runner = runner
        self.pacman_command = pacman_command

    def search(self, query: str) -> List[PackageRecord]:
        """
        Search the official repositories.

        Never raises: failures are logged and produce an empty list so that
        the archive search can still run.
        """
        result = self.runner.run([self.pacman_command, "-Ss", query])

        if result.error:
            logger.error(f"Error searching official repos: {result.error}")
            return []

        if not result.success:
            # pacman exits 1 with no output when nothing matches
            if result.stderr.strip():
                logger.error(f"Error searching official repos: {result.stderr.strip()}")
            else:
                logger.debug(f"No official packages match '{query}'")
            return []

        try:
            packages = parse_search_output(result.stdout)
        except ValueError as e:
            logger.error(f"Error parsing pacman output: {e}")
            return []

        logger.debug(f"Found {len(packages)} official package(s) for '{query}'")
        return packages
