from __future__ import annotations

import codecs
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from file_env.errors.errors import ConfigurationError

DEFAULT_SUFFIX = "_file"


class MissingFilePolicy(str, Enum):
    ERROR = "error"  # abort the whole resolution
    SKIP = "skip"  # drop the pointer entry, other read failures stay fatal


class Precedence(str, Enum):
    """Which value wins when a key has both a direct and a file-backed entry."""

    FILE = "file"
    ENV = "env"


class FileEnvSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    suffix: str = Field(
        default=DEFAULT_SUFFIX, description="pointer-key suffix, matched case-insensitively"
    )
    on_missing: MissingFilePolicy = Field(
        default=MissingFilePolicy.ERROR, description="what to do when a pointer file is absent"
    )
    precedence: Precedence = Field(
        default=Precedence.FILE, description="direct vs file-backed value for the same key"
    )
    encoding: str = Field(default="utf-8", description="text encoding of pointer files")
    base_dir: Optional[Path] = Field(
        default=None, description="anchor for relative pointer paths (cwd when unset)"
    )

    @field_validator("suffix")
    @classmethod
    def _normalize_suffix(cls, value: str) -> str:
        if not value:
            raise ValueError("suffix must be a non-empty string")
        return value.lower()

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("encoding must be a non-empty string")
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        return value


def validation_error_parser(error: ValidationError) -> list[dict[str, str]]:
    parsed_error = [
        {
            "component": "file_env.settings",
            "path": ".".join(map(str, err["loc"])),
            "message": err["msg"],
            "error_type": err["type"],
        }
        for err in error.errors()
    ]
    return parsed_error


def build_settings(base: Optional[FileEnvSettings] = None, **overrides: Any) -> FileEnvSettings:
    """
    Return validated settings with ``overrides`` applied on top of ``base``.
    model_copy(update=...) skips validation, so the merged dict is re-validated.
    On failure: raises ConfigurationError naming the first offending field.
    """
    data: dict[str, Any] = base.model_dump() if base is not None else {}
    data.update(overrides)
    try:
        return FileEnvSettings.model_validate(data)
    except ValidationError as e:
        parsed_error = validation_error_parser(e)
        first = parsed_error[0]
        raise ConfigurationError(
            f"Invalid file_env setting '{first['path']}': {first['message']}",
            field=first["path"],
            value=data.get(first["path"]),
            component="file_env.settings",
            details={"errors": parsed_error},
        ) from e
