#!/usr/bin/env python3
"""
Data models for the fyn package helper
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum, auto
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Placeholder for text fields the archive leaves out
MISSING = "N/A"

ARCHIVE_REPOSITORY = "aur"


class PackageSource(StrEnum):
    """Where a package record came from; decides how it gets installed."""

    OFFICIAL = "official"
    ARCHIVE = "archive"


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """A single search result from either package source."""

    source: PackageSource
    name: str
    version: str
    description: str = ""
    build_base: str = ""
    repository: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Package name must not be empty")
        # Frozen dataclass, so defaults are filled through object.__setattr__
        if not self.build_base:
            object.__setattr__(self, "build_base", self.name)
        if not self.repository and self.source is PackageSource.ARCHIVE:
            object.__setattr__(self, "repository", ARCHIVE_REPOSITORY)

    @property
    def qualified_name(self) -> str:
        """Return the `repo/name` label used in listings."""
        return f"{self.repository}/{self.name}"


class ArchivePackage(BaseModel):
    """One element of the archive RPC `results` array."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(default=MISSING, alias="Name")
    version: str = Field(default=MISSING, alias="Version")
    description: str = Field(default=MISSING, alias="Description")
    package_base: Optional[str] = Field(default=None, alias="PackageBase")

    @field_validator("name", "version", "description", mode="before")
    @classmethod
    def _default_missing(cls, v: Any) -> Any:
        return MISSING if v is None else v

    @model_validator(mode="after")
    def _default_package_base(self) -> "ArchivePackage":
        if not self.package_base:
            self.package_base = self.name
        return self

    def to_record(self) -> PackageRecord:
        """Convert the decoded entry into an archive PackageRecord."""
        return PackageRecord(
            source=PackageSource.ARCHIVE,
            name=self.name,
            version=self.version,
            description=self.description,
            build_base=self.package_base or self.name,
            repository=ARCHIVE_REPOSITORY,
        )


class ArchiveResponse(BaseModel):
    """Envelope returned by every archive RPC call."""

    model_config = ConfigDict(extra="ignore")

    version: Optional[int] = None
    type: Optional[str] = None
    resultcount: Optional[int] = None
    results: List[ArchivePackage] = Field(default_factory=list)
    error: Optional[str] = None

    @field_validator("results", mode="before")
    @classmethod
    def _default_results(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_error(self) -> bool:
        return self.type == "error" or self.error is not None


@dataclass
class CommandResult:
    """Class to represent the result of running an external command."""

    command: List[str]
    return_code: int
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.return_code == 0 and self.error is None

    def __bool__(self) -> bool:
        """Return whether the command was successful."""
        return self.success

    def describe(self) -> str:
        """Short human-readable summary of a failure."""
        if self.error:
            return f"could not start {self.command[0]}: {self.error}"
        return f"{' '.join(self.command)} exited with code {self.return_code}"


class InstallStatus(Enum):
    """Outcome of an install flow"""

    SUCCESS = auto()
    CANCELLED = auto()
    FAILED = auto()
    NOT_FOUND = auto()


@dataclass
class InstallResult:
    """Result of an install flow, reported back to the CLI."""

    status: InstallStatus
    message: str = ""
    record: Optional[PackageRecord] = None
    details: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.status is InstallStatus.SUCCESS
