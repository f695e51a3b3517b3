#!/usr/bin/env python3
"""
High-level search and install operations.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from .aggregator import Aggregator, format_description, format_record
from .archive import ArchiveClient
from .config import FynConfig
from .console import ConsoleChannel, IOChannel
from .installer import InstallOrchestrator
from .models import InstallResult, InstallStatus, PackageRecord
from .official import OfficialRepoSearcher
from .runner import ProcessRunner
from .selection import SelectionEngine


class FynHelper:
    """
    Entry point tying the package sources, selection and installer together.

    All collaborators can be passed in; anything left out is built from
    the configuration.
    """

    def __init__(
        self,
        config: Optional[FynConfig] = None,
        *,
        channel: Optional[IOChannel] = None,
        runner: Optional[ProcessRunner] = None,
        archive: Optional[ArchiveClient] = None,
        official: Optional[OfficialRepoSearcher] = None,
    ):
        self.config = config or FynConfig()
        self.channel = channel or ConsoleChannel()
        self.runner = runner or ProcessRunner(use_sudo=self.config.use_sudo)
        self.archive = archive or ArchiveClient(self.config.rpc_url)
        self.official = official or OfficialRepoSearcher(
            self.runner, self.config.pacman_command
        )
        self.aggregator = Aggregator(self.official, self.archive)
        self.installer = InstallOrchestrator(
            self.config, self.runner, self.archive, self.channel
        )

        logger.debug(f"FynHelper initialized with cache at {self.config.cache_dir}")

    async def search(self, query: str) -> List[PackageRecord]:
        """Search both sources and print every result."""
        packages = await self.aggregator.aggregate(query)

        self.channel.write(f"Found {len(packages)} package(s)")
        self.channel.write()

        if not packages:
            self.channel.write("No packages found.")
            return packages

        for pkg in packages:
            self.channel.write(format_record(pkg))
            self.channel.write(format_description(pkg))

        return packages

    async def install(self, query: str) -> InstallResult:
        """Search for `query`, let the user pick a package and install it."""
        self.channel.write(f"Searching for {query}...")
        self.channel.write()

        packages = await self.aggregator.aggregate(query)
        if not packages:
            return InstallResult(
                InstallStatus.NOT_FOUND, f"Package '{query}' not found."
            )

        engine = SelectionEngine(
            packages, query, self.channel, page_size=self.config.page_size
        )
        transition = engine.run()
        if not transition.selected:
            return InstallResult(InstallStatus.CANCELLED, "Installation cancelled.")

        return await self.installer.install(transition.record)
