"""
Custom exceptions for file-backed environment resolution.

Exception hierarchy:
- FileEnvError (base)
  - FileReadError: a pointer entry's file could not be opened or read
  - PreconditionError: builder used in an order that would invalidate state
  - ConfigurationError: invalid settings or arguments
"""

from __future__ import annotations

from typing import Any, Optional


class FileEnvError(Exception):
    """Base exception for all file_env errors."""

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.component = component
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.component:
            parts.append(f"[component={self.component}]")
        if self.details:
            parts.append(f"[details={self.details}]")
        return " ".join(parts)


class FileReadError(FileEnvError):
    """Raised when the file named by a pointer entry cannot be read."""

    def __init__(
        self,
        *,
        raw_key: str,
        logical_key: str,
        path: str,
        reason: str,
        component: Optional[str] = None,
    ) -> None:
        self.raw_key = raw_key
        self.logical_key = logical_key
        self.path = path
        self.reason = reason
        details = {"logical_key": logical_key}
        super().__init__(
            f"Could not open `{path}` from env variable `{raw_key}`: {reason}",
            component=component,
            details=details,
        )


class PreconditionError(FileEnvError):
    """Raised when the suffix is changed after only/ignore restrictions were applied."""


class ConfigurationError(FileEnvError):
    """Raised when settings or builder arguments are invalid."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field = field
        self.value = value
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, component=component, details=details)
