#!/usr/bin/env python3
"""
Configuration management for the fyn package helper.

Settings are read from an optional TOML file and validated with Pydantic v2.
Every field has a default, so fyn works without any configuration file.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError

APP_NAME = "fyn"


def _xdg_dir(env_var: str, fallback: str) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value)
    return Path.home() / fallback


def default_cache_dir() -> Path:
    """Return the user cache root for build sources (`~/.cache/fyn`)."""
    return _xdg_dir("XDG_CACHE_HOME", ".cache") / APP_NAME


def default_config_path() -> Path:
    """Return the default config file location (`~/.config/fyn/config.toml`)."""
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / APP_NAME / "config.toml"


class FynConfig(BaseModel):
    """Runtime settings for fyn."""

    model_config = ConfigDict(
        extra="forbid", validate_assignment=True, str_strip_whitespace=True
    )

    cache_dir: Path = Field(
        default_factory=default_cache_dir, description="Build source cache root"
    )
    archive_base_url: str = Field(
        default="https://aur.archlinux.org", description="Package archive host"
    )
    rpc_path: str = Field(default="/rpc/v5", description="Archive RPC endpoint prefix")
    page_size: int = Field(default=10, ge=1, description="Results per selection page")
    pacman_command: str = Field(default="pacman", min_length=1)
    git_command: str = Field(default="git", min_length=1)
    makepkg_command: str = Field(default="makepkg", min_length=1)
    makepkg_flags: List[str] = Field(default_factory=lambda: ["-si"])
    recipe_filename: str = Field(default="PKGBUILD", min_length=1)
    use_sudo: bool = Field(default=True, description="Prefix pacman installs with sudo")

    @field_validator("cache_dir")
    @classmethod
    def expand_cache_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("archive_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("archive_base_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("rpc_path")
    @classmethod
    def normalize_rpc_path(cls, v: str) -> str:
        return "/" + v.strip("/")

    @property
    def rpc_url(self) -> str:
        return f"{self.archive_base_url}{self.rpc_path}"

    def clone_url(self, build_base: str) -> str:
        """Git URL of the archive source tree for `build_base`."""
        return f"{self.archive_base_url}/{build_base}.git"


def load_config(config_path: Optional[Path] = None) -> FynConfig:
    """
    Load configuration from a TOML file.

    Args:
        config_path: Explicit config file. When None the default location is
            tried and silently skipped if it does not exist.

    Returns:
        Validated FynConfig

    Raises:
        ConfigError: If an explicit file is missing, or any file cannot be
            read, parsed or validated.
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else default_config_path()

    if not path.exists():
        if explicit:
            raise ConfigError(
                f"Specified config path does not exist: {path}", config_path=path
            )
        logger.debug(f"No config file at {path}, using defaults")
        return FynConfig()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(
            f"Cannot read configuration file {path}: {e}",
            config_path=path,
            original_error=e,
        ) from e

    # Accept both a flat file and a [fyn] table
    if isinstance(data.get(APP_NAME), dict):
        data = data[APP_NAME]

    try:
        config = FynConfig(**data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid configuration in {path}: {e}", config_path=path, original_error=e
        ) from e

    logger.debug(f"Loaded configuration from {path}")
    return config
