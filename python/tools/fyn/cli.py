#!/usr/bin/env python3
"""
Command-line interface for fyn using Typer.

    fyn s <query>   search the official repos and the AUR
    fyn i <query>   install a package, building AUR packages with makepkg
"""

from __future__ import annotations

import asyncio
import sys
from enum import IntEnum
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from .config import FynConfig, load_config
from .console import ConsoleChannel
from .exceptions import FynError
from .helper import FynHelper
from .models import InstallStatus


class ExitCode(IntEnum):
    """Process exit codes, one per outcome class"""

    SUCCESS = 0
    FAILURE = 1
    USAGE = 2
    NOT_FOUND = 3
    INTERRUPTED = 130


INSTALL_EXIT_CODES = {
    InstallStatus.SUCCESS: ExitCode.SUCCESS,
    InstallStatus.CANCELLED: ExitCode.SUCCESS,
    InstallStatus.FAILED: ExitCode.FAILURE,
    InstallStatus.NOT_FOUND: ExitCode.NOT_FOUND,
}

app = typer.Typer(
    name="fyn",
    help="Search and install packages from the official repositories and the AUR.",
    add_completion=False,
)
console = Console()


def setup_logger(level: str) -> None:
    """Configures the logger for the given level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )


def build_helper(config: FynConfig) -> FynHelper:
    return FynHelper(config, channel=ConsoleChannel(console))


def _run(coro):
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n⚠️  Operation cancelled by user", highlight=False)
        raise typer.Exit(code=ExitCode.INTERRUPTED)


def _get_config(ctx: typer.Context) -> FynConfig:
    config_path: Optional[Path] = ctx.meta.get("config_path")
    try:
        return load_config(config_path)
    except FynError as e:
        logger.error(f"Configuration error: {e}")
        raise typer.Exit(code=ExitCode.FAILURE)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable info logging."),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file."),
):
    """Arch Linux package helper for the official repos and the AUR."""
    setup_logger("DEBUG" if debug else "INFO" if verbose else "WARNING")
    ctx.meta["config_path"] = config


@app.command("s")
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Package name or search term."),
):
    """Search for a package."""
    helper = build_helper(_get_config(ctx))
    packages = _run(helper.search(query))
    if not packages:
        raise typer.Exit(code=ExitCode.NOT_FOUND)


@app.command("i")
def install(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Package name or search term."),
):
    """Install a package."""
    helper = build_helper(_get_config(ctx))
    try:
        result = _run(helper.install(query))
    except FynError as e:
        logger.error(f"Installation failed: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=ExitCode.FAILURE)

    match result.status:
        case InstallStatus.SUCCESS:
            console.print()
            console.print(f"[green]✔[/green] {escape(result.message)}", highlight=False)
        case InstallStatus.CANCELLED:
            console.print(result.message, markup=False, highlight=False)
        case _:
            console.print()
            console.print(f"[red]Error:[/red] {escape(result.message)}", highlight=False)
            for detail in result.details:
                console.print(f"  {detail}", markup=False, highlight=False)

    raise typer.Exit(code=INSTALL_EXIT_CODES[result.status])

