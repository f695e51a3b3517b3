#!/usr/bin/env python3
"""
Merges official repository and archive search results.
"""

from typing import List

from loguru import logger

from .archive import ArchiveClient
from .models import PackageRecord
from .official import OfficialRepoSearcher


def format_record(record: PackageRecord) -> str:
    """Render a record as `repo/name version`."""
    return f"{record.qualified_name} {record.version}"


def format_description(record: PackageRecord) -> str:
    return f"    {record.description}"


class Aggregator:
    """Queries both package sources, one after the other."""

    def __init__(self, official: OfficialRepoSearcher, archive: ArchiveClient):
        self.official = official
        self.archive = archive

    async def aggregate(self, query: str) -> List[PackageRecord]:
        """
        Search both sources for `query`.

        Returns:
            Official results followed by archive results, each in the order
            its source returned them. Nothing is de-duplicated.
        """
        official_packages = self.official.search(query)
        archive_packages = await self.archive.search(query)

        packages = [*official_packages, *archive_packages]
        logger.info(
            f"Found {len(packages)} package(s) for '{query}' "
            f"({len(official_packages)} official, {len(archive_packages)} AUR)"
        )
        return packages
