"""
File-backed environment configuration.

Any config value ``foo`` can be supplied either directly (``APP_FOO=abc123``) or
through a pointer entry naming a file (``APP_FOO_FILE=/run/secrets/foo``), which
suits secrets mounted into containers.

Components:
- FileEnv: builder and provider (suffix, only/ignore, missing-file policy, precedence)
- FileEnvWithRestrictions: FileEnv after only/ignore; its suffix is locked
- EnvSource / MemorySource: key-value sources (process environment, in-memory)
- resolve_entries: the resolution pass over raw entries
- JsonlTelemetry: optional structured event sink

Usage:
    from file_env import FileEnv

    settings = (
        FileEnv.prefixed("APP_")
        .only(["api_key", "db_password"])
        .extract(AppSettings)
    )
"""

from file_env.adapters.env_source import EnvSource
from file_env.adapters.memory_source import MemorySource
from file_env.adapters.telemetry.jsonl import JsonlTelemetry
from file_env.config.settings import (
    DEFAULT_SUFFIX,
    FileEnvSettings,
    MissingFilePolicy,
    Precedence,
)
from file_env.core.provider import FileEnv, FileEnvWithRestrictions
from file_env.core.resolver import resolve_entries
from file_env.errors.errors import (
    ConfigurationError,
    FileEnvError,
    FileReadError,
    PreconditionError,
)
from file_env.types.types import Metadata, ResolvedConfig

__all__ = [
    # Main entry point
    "FileEnv",
    "FileEnvWithRestrictions",
    "resolve_entries",
    # Sources
    "EnvSource",
    "MemorySource",
    # Settings
    "DEFAULT_SUFFIX",
    "FileEnvSettings",
    "MissingFilePolicy",
    "Precedence",
    # Types
    "Metadata",
    "ResolvedConfig",
    # Telemetry
    "JsonlTelemetry",
    # Errors
    "FileEnvError",
    "FileReadError",
    "PreconditionError",
    "ConfigurationError",
]
