#!/usr/bin/env python3
"""
fyn - AUR Helper

A small package helper for ArchLinux that searches the official
repositories and the AUR together and installs what the user picks.

Features:
- Combined search of pacman sync databases and the AUR RPC API
- Exact-match shortcut and paginated interactive selection
- Official packages installed with pacman
- AUR packages cloned into a cache, reviewed and built with makepkg

Author:
    fyn developers

License:
    GPL-3.0-or-later

Version:
    1.0.0
"""

import platform
from typing import Any, Dict, List

from .aggregator import Aggregator
from .archive import ArchiveClient
from .config import FynConfig, load_config
from .exceptions import (
    ArchiveError,
    BuildError,
    ConfigError,
    FynError,
    SourceSyncError,
)
from .helper import FynHelper
from .installer import InstallOrchestrator
from .models import (
    CommandResult,
    InstallResult,
    InstallStatus,
    PackageRecord,
    PackageSource,
)
from .official import OfficialRepoSearcher, parse_search_output
from .runner import ProcessRunner
from .selection import SelectionEngine, SelectionState, Transition

__version__ = "1.0.0"
__author__ = "fyn developers"
__license__ = "GPL-3.0-or-later"

__all__ = [
    # Core classes
    "FynHelper",
    "FynConfig",
    "load_config",
    "ProcessRunner",
    "OfficialRepoSearcher",
    "ArchiveClient",
    "Aggregator",
    "SelectionEngine",
    "InstallOrchestrator",
    "parse_search_output",

    # Data models
    "PackageRecord",
    "PackageSource",
    "CommandResult",
    "InstallResult",
    "InstallStatus",
    "SelectionState",
    "Transition",

    # Exceptions
    "FynError",
    "ArchiveError",
    "SourceSyncError",
    "BuildError",
    "ConfigError",

    # Discovery function
    "get_tool_info",
]


def _check_platform_support() -> bool:
    """Check if the current platform can run pacman and makepkg."""
    return platform.system().lower() == "linux"


def get_tool_info() -> Dict[str, Any]:
    """
    Return metadata about this tool for discovery.

    Returns:
        Dict containing tool metadata including name, version, description,
        available functions, requirements, and platform compatibility.
    """
    return {
        "name": "fyn",
        "version": __version__,
        "description": "ArchLinux package helper for the official repos and the AUR",
        "author": __author__,
        "license": __license__,
        "supported": _check_platform_support(),
        "platform": ["linux"],
        "functions": [
            "search_packages",
            "install_package",
        ],
        "requirements": ["loguru", "pydantic", "aiohttp", "typer", "rich"],
        "capabilities": [
            "package_search",
            "aur_support",
            "interactive_selection",
            "makepkg_build",
        ],
        "classes": {
            "FynHelper": "Search and install entry point",
            "FynConfig": "Runtime settings",
            "SelectionEngine": "Interactive package selection",
            "InstallOrchestrator": "pacman / makepkg installation",
        },
    }


async def search_packages(query: str) -> List[Dict[str, Any]]:
    """
    Search both package sources without printing anything.

    Args:
        query: Search query string

    Returns:
        List of matching package information dicts
    """
    config = load_config()
    runner = ProcessRunner(use_sudo=config.use_sudo)
    aggregator = Aggregator(
        OfficialRepoSearcher(runner, config.pacman_command),
        ArchiveClient(config.rpc_url),
    )
    packages = await aggregator.aggregate(query)
    return [
        {
            "source": pkg.source.value,
            "repository": pkg.repository,
            "name": pkg.name,
            "version": pkg.version,
            "description": pkg.description,
            "build_base": pkg.build_base,
        }
        for pkg in packages
    ]


async def install_package(query: str) -> Dict[str, Any]:
    """
    Run the interactive install flow on the terminal.

    Args:
        query: Package name or search term

    Returns:
        Dict with the outcome status and message
    """
    result = await FynHelper(load_config()).install(query)
    return {
        "success": bool(result),
        "status": result.status.name.lower(),
        "message": result.message,
        "package": result.record.name if result.record else None,
    }
