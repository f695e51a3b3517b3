#!/usr/bin/env python3
"""
Installation of a selected package.

Official packages are installed with a single privileged pacman call.
Archive packages go through the build pipeline: resolve the build base,
clone or update its source tree in the cache, show the PKGBUILD, ask for
confirmation and run makepkg.
"""

from __future__ import annotations

import shutil
from enum import Enum, auto
from pathlib import Path

from loguru import logger

from .aggregator import format_record
from .archive import ArchiveClient
from .config import FynConfig
from .console import IOChannel
from .exceptions import BuildError, SourceSyncError
from .models import InstallResult, InstallStatus, PackageRecord, PackageSource
from .runner import ProcessRunner


class ArchiveInstallStep(Enum):
    """Steps of the archive install pipeline, in execution order"""

    RESOLVE_BASE = auto()
    PREPARE_CACHE = auto()
    SYNC_SOURCE = auto()
    REVIEW = auto()
    CONSENT = auto()
    BUILD = auto()


class InstallOrchestrator:
    """Installs one package record according to its source."""

    def __init__(
        self,
        config: FynConfig,
        runner: ProcessRunner,
        archive: ArchiveClient,
        channel: IOChannel,
    ):
        self.config = config
        self.runner = runner
        self.archive = archive
        self.channel = channel
        self.step: ArchiveInstallStep | None = None

    async def install(self, record: PackageRecord) -> InstallResult:
        """Install `record` from the official repos or the archive."""
        self.channel.write()
        self.channel.write(f"Installing {format_record(record)}...")
        self.channel.write()

        match record.source:
            case PackageSource.OFFICIAL:
                return self.install_official(record)
            case PackageSource.ARCHIVE:
                return await self.install_archive(record)
            case _:
                raise ValueError(f"Unknown package source: {record.source}")

    def install_official(self, record: PackageRecord) -> InstallResult:
        """Install from the official repositories with `sudo pacman -S`."""
        self.channel.write("Installing from official repository using pacman...")

        result = self.runner.run(
            [self.config.pacman_command, "-S", record.name],
            capture_output=False,
            privileged=True,
        )
        if result.success:
            return InstallResult(
                InstallStatus.SUCCESS, f"{record.name} installed successfully!", record
            )

        logger.error(f"pacman install failed: {result.describe()}")
        return InstallResult(
            InstallStatus.FAILED,
            f"Failed to install {record.name}",
            record,
            details=[result.describe()],
        )

    async def install_archive(self, record: PackageRecord) -> InstallResult:
        """Build and install an archive package with makepkg."""
        self.step = ArchiveInstallStep.RESOLVE_BASE
        build_base = await self.archive.fetch_build_base(record.name)

        try:
            self.step = ArchiveInstallStep.PREPARE_CACHE
            package_dir = self.prepare_cache(build_base)

            self.step = ArchiveInstallStep.SYNC_SOURCE
            self.sync_source(build_base, package_dir)

            self.step = ArchiveInstallStep.REVIEW
            self.review_recipe(package_dir)

            self.step = ArchiveInstallStep.CONSENT
            if not self.confirm():
                return InstallResult(
                    InstallStatus.CANCELLED, "Installation cancelled.", record
                )

            self.step = ArchiveInstallStep.BUILD
            self.build(package_dir)
        except SourceSyncError as e:
            logger.error(f"Source sync failed: {e}")
            return InstallResult(
                InstallStatus.FAILED,
                "Failed to clone repository.",
                record,
                details=[str(e)],
            )
        except BuildError as e:
            logger.error(f"Build failed: {e}")
            return InstallResult(
                InstallStatus.FAILED,
                f"Failed to build/install {record.name}",
                record,
                details=[str(e)],
            )
        except OSError as e:
            # Partially synced sources are left in the cache as they are
            logger.error(f"I/O error during {self.step.name}: {e}")
            return InstallResult(
                InstallStatus.FAILED,
                f"Error during installation: {e}",
                record,
            )

        return InstallResult(
            InstallStatus.SUCCESS, f"{record.name} installed successfully!", record
        )

    def prepare_cache(self, build_base: str) -> Path:
        """Create the cache root and return the source dir for `build_base`."""
        cache_dir = self.config.cache_dir
        cache_dir.mkdir(parents=True, exist_ok=True)
        return cache_dir / build_base

    def sync_source(self, build_base: str, package_dir: Path) -> None:
        """
        Bring the source tree of `build_base` up to date.

        An existing checkout is updated with `git pull`. If that fails the
        checkout is deleted and cloned again; a failed clone raises.

        Raises:
            SourceSyncError: If cloning fails
        """
        if package_dir.exists():
            self.channel.write("Package directory exists in cache. Updating...")
            pull = self.runner.run(
                [self.config.git_command, "pull"],
                cwd=package_dir,
                capture_output=False,
            )
            if pull.success:
                return

            logger.warning(f"Update of {package_dir} failed: {pull.describe()}")
            self.channel.write("Error updating repository. Trying fresh clone...")
            shutil.rmtree(package_dir)
        else:
            self.channel.write(f"Cloning AUR repository for {build_base}...")

        self.clone(build_base, package_dir)

    def clone(self, build_base: str, package_dir: Path) -> None:
        url = self.config.clone_url(build_base)
        result = self.runner.run(
            [self.config.git_command, "clone", url],
            cwd=package_dir.parent,
            capture_output=False,
        )
        if not result.success:
            raise SourceSyncError(
                f"Failed to clone {url}: {result.describe()}",
                build_base=build_base,
                package_dir=package_dir,
                return_code=result.return_code,
            )

    def review_recipe(self, package_dir: Path) -> None:
        """Print the PKGBUILD, if there is one, before asking to build."""
        recipe = package_dir / self.config.recipe_filename
        if not recipe.is_file():
            logger.debug(f"No {self.config.recipe_filename} in {package_dir}")
            return

        self.channel.write()
        self.channel.write(f"==> {self.config.recipe_filename}:")
        self.channel.write(recipe.read_text(encoding="utf-8", errors="replace"))
        self.channel.write()

    def confirm(self) -> bool:
        """Ask for consent. Empty input means yes."""
        answer = self.channel.read_line("Proceed with installation? [Y/n] ")
        if answer is None:
            return False
        answer = answer.strip()
        return not answer or answer.lower() == "y"

    def build(self, package_dir: Path) -> None:
        """
        Run makepkg in `package_dir` with output going to the terminal.

        Raises:
            BuildError: If makepkg exits non-zero or cannot be started
        """
        self.channel.write()
        self.channel.write("Building package...")
        result = self.runner.run(
            [self.config.makepkg_command, *self.config.makepkg_flags],
            cwd=package_dir,
            capture_output=False,
        )
        if not result.success:
            raise BuildError(
                f"Build failed: {result.describe()}",
                package_dir=package_dir,
                return_code=result.return_code,
            )
