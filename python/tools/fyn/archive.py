#!/usr/bin/env python3
"""
Client for the package archive (AUR) RPC interface.

Two read-only calls are used: a full-text search and a by-name info lookup.
Both are best-effort; a failing archive never aborts a search or install.
"""

from __future__ import annotations

import asyncio
from typing import Any, List
from urllib.parse import quote

import aiohttp
from loguru import logger
from pydantic import ValidationError

from .exceptions import ArchiveError
from .models import ArchiveResponse, PackageRecord


class ArchiveClient:
    """Queries the archive RPC API over HTTPS."""

    def __init__(self, rpc_url: str = "https://aur.archlinux.org/rpc/v5"):
        self.rpc_url = rpc_url.rstrip("/")

    def search_url(self, query: str) -> str:
        return f"{self.rpc_url}/search/{quote(query, safe='')}"

    def info_url(self, name: str) -> str:
        return f"{self.rpc_url}/info?arg[]={quote(name, safe='')}"

    async def _get_json(self, url: str) -> Any:
        """Fetch `url` and return the decoded JSON body."""
        logger.debug(f"GET {url}")
        try:
            # No overall deadline; a slow archive is waited for
            timeout = aiohttp.ClientTimeout(total=None)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as response:
                    response.raise_for_status()
                    # The RPC sometimes answers with a non-JSON content type
                    return await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            raise ArchiveError(
                f"Archive request failed with HTTP {e.status}: {url}",
                url=url,
                status=e.status,
                original_error=e,
            ) from e
        except aiohttp.ClientError as e:
            raise ArchiveError(
                f"Could not reach archive: {e}", url=url, original_error=e
            ) from e
        except asyncio.TimeoutError as e:
            raise ArchiveError(
                f"Archive request timed out: {url}", url=url, original_error=e
            ) from e
        except ValueError as e:
            raise ArchiveError(
                f"Archive returned invalid JSON: {e}", url=url, original_error=e
            ) from e

    async def _query(self, url: str) -> ArchiveResponse:
        payload = await self._get_json(url)
        try:
            response = ArchiveResponse.model_validate(payload)
        except ValidationError as e:
            raise ArchiveError(
                f"Unexpected archive response: {e}", url=url, original_error=e
            ) from e
        if response.is_error:
            raise ArchiveError(f"Archive reported an error: {response.error}", url=url)
        return response

    async def search(self, query: str) -> List[PackageRecord]:
        """
        Full-text search of the archive.

        Returns:
            Archive package records, or an empty list if the request fails
        """
        try:
            response = await self._query(self.search_url(query))
        except ArchiveError as e:
            logger.error(f"Error searching AUR: {e}")
            return []

        packages: List[PackageRecord] = []
        for entry in response.results:
            try:
                packages.append(entry.to_record())
            except ValueError as e:
                logger.warning(f"Skipping malformed archive entry: {e}")

        logger.debug(f"Found {len(packages)} archive package(s) for '{query}'")
        return packages

    async def fetch_build_base(self, name: str) -> str:
        """
        Look up the build base (PackageBase) of an archive package.

        Falls back to `name` itself when the lookup fails or returns no
        result, so the caller can still try to clone using the package name.
        """
        try:
            response = await self._query(self.info_url(name))
        except ArchiveError as e:
            logger.warning(f"Could not fetch package info from AUR API: {e}")
            logger.warning(f"Attempting to use package name '{name}' for cloning...")
            return name

        if not response.results:
            logger.warning(
                f"AUR has no info for '{name}', using the package name for cloning"
            )
            return name

        build_base = response.results[0].package_base or name
        if build_base != name:
            logger.info(f"Package '{name}' is built from base '{build_base}'")
        return build_base
