#!/usr/bin/env python3
"""
Exception types for the fyn package helper.
Provides structured error handling with context for debugging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional


class FynError(Exception):
    """
    Base exception for all fyn errors.

    Carries an error code and a free-form context dictionary so that callers
    can log or serialize the failure without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        original_error: Optional[Exception] = None,
        **context: Any,
    ):
        super().__init__(message)
        self.error_code = error_code or self.__class__.__name__.upper()
        self.original_error = original_error
        self.context: Dict[str, Any] = context

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to structured dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "error_code": self.error_code,
            "context": {
                key: str(value) if isinstance(value, Path) else value
                for key, value in self.context.items()
            },
            "original_error": str(self.original_error) if self.original_error else None,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={str(self)!r}, error_code={self.error_code!r})"


class ArchiveError(FynError):
    """Exception raised when the package archive API cannot be queried."""

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status: Optional[int] = None,
        **kwargs: Any,
    ):
        self.url = url
        self.status = status
        super().__init__(
            message, error_code="ARCHIVE_REQUEST_FAILED", url=url, status=status, **kwargs
        )


class SourceSyncError(FynError):
    """Exception raised when a build source tree cannot be cloned or updated."""

    def __init__(self, message: str, *, build_base: str, package_dir: Path, **kwargs: Any):
        self.build_base = build_base
        self.package_dir = package_dir
        super().__init__(
            message,
            error_code="SOURCE_SYNC_FAILED",
            build_base=build_base,
            package_dir=package_dir,
            **kwargs,
        )


class BuildError(FynError):
    """Exception raised when the package build tool fails."""
    pass


class ConfigError(FynError):
    """Exception raised when there's a configuration error."""
    pass
