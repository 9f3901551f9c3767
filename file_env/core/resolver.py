from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from file_env.config.settings import (
    FileEnvSettings,
    MissingFilePolicy,
    Precedence,
    build_settings,
)
from file_env.errors.errors import FileReadError
from file_env.ports.telemetry import Telemetry
from file_env.types.types import DEFAULT_PROFILE, RawEntry, ResolvedConfig

"""
Purpose:
    - Turn raw (key, value) entries into a flat logical-key -> string mapping
    - `<key><suffix>` entries are pointers: their value is a path, the file's
      contents become the value of `<key>`
    - Direct vs file-backed precedence is a single rule from the settings
"""

_LOGGER = logging.getLogger(__name__)


def logical_key(raw_key: str, suffix: str) -> Optional[str]:
    """
    Return the key with the suffix stripped, or None when ``raw_key`` is not a pointer.
    The suffix match is case-insensitive; a key equal to the suffix is not a pointer
    (its logical key would be empty) and stays a direct entry.
    """
    if len(raw_key) <= len(suffix):
        return None
    if not raw_key.lower().endswith(suffix.lower()):
        return None
    return raw_key[: -len(suffix)]


def read_pointer_file(
    path: str, *, encoding: str = "utf-8", base_dir: Optional[Path] = None
) -> str:
    """
    Read a pointer file verbatim. newline="" disables newline translation, so the
    returned text is exactly what the file holds (trailing newline included).
    Raises OSError or ValueError (UnicodeDecodeError, embedded NUL in the path).
    """
    # an empty path would otherwise resolve to the working directory
    if not path:
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
    target = Path(path)
    if base_dir is not None and not target.is_absolute():
        target = Path(base_dir) / target
    with target.open("r", encoding=encoding, newline="") as handle:
        return handle.read()


def resolve_entries(
    entries: Iterable[RawEntry],
    settings: FileEnvSettings | str | None = None,
    *,
    profile: str = DEFAULT_PROFILE,
    telemetry: Optional[Telemetry] = None,
) -> ResolvedConfig:
    """
    1. First pass: read every pointer entry's file into its logical key
       (last pointer wins when two strip to the same key)
    2. Second pass: add every direct entry, honouring the precedence rule
    3. Return the mapping tagged with the source's profile

    Fails on the first unreadable pointer file; no partial mapping is returned.
    Passing a plain string is shorthand for settings with that suffix.
    """
    if settings is None:
        settings = FileEnvSettings()
    elif isinstance(settings, str):
        settings = build_settings(suffix=settings)

    # entries may be a one-shot iterator; both passes need it
    snapshot: list[RawEntry] = list(entries)
    suffix = settings.suffix

    values: dict[str, str] = {}
    file_keys: set[str] = set()
    consumed: set[str] = set()
    skipped: list[str] = []

    # 1. pointer entries
    for raw_key, path in snapshot:
        key = logical_key(raw_key, suffix)
        if key is None:
            continue
        consumed.add(raw_key)
        try:
            contents = read_pointer_file(
                path, encoding=settings.encoding, base_dir=settings.base_dir
            )
        except FileNotFoundError as exc:
            if settings.on_missing is MissingFilePolicy.SKIP:
                _LOGGER.warning(
                    "file_env_pointer_skipped",
                    extra={
                        "event": "file_env_pointer_skipped",
                        "raw_key": raw_key,
                        "path": path,
                        "reason": "missing",
                    },
                )
                skipped.append(raw_key)
                continue
            raise _read_failed(raw_key, key, path, exc) from exc
        # ValueError covers undecodable bytes and paths with an embedded NUL
        except (OSError, ValueError) as exc:
            raise _read_failed(raw_key, key, path, exc) from exc

        values[key] = contents
        file_keys.add(key)
        _LOGGER.debug(
            "file_env_pointer_resolved",
            extra={
                "event": "file_env_pointer_resolved",
                "raw_key": raw_key,
                "logical_key": key,
                "path": path,
            },
        )

    # 2. direct entries
    for raw_key, value in snapshot:
        if raw_key in consumed:
            continue
        if settings.precedence is Precedence.FILE and raw_key in file_keys:
            continue
        values[raw_key] = value
        file_keys.discard(raw_key)

    _LOGGER.debug(
        "file_env_resolved",
        extra={
            "event": "file_env_resolved",
            "profile": profile,
            "keys_total": len(values),
            "file_keys_total": len(file_keys),
            "skipped_total": len(skipped),
        },
    )
    if telemetry is not None:
        telemetry.log(
            event="file_env_resolved",
            profile=profile,
            suffix=suffix,
            precedence=settings.precedence.value,
            keys=sorted(values),
            keys_total=len(values),
            file_keys_total=len(file_keys),
            skipped_keys=sorted(skipped),
        )

    return ResolvedConfig(profile=profile, values=values, file_keys=frozenset(file_keys))


def _read_failed(raw_key: str, key: str, path: str, exc: Exception) -> FileReadError:
    reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
    _LOGGER.error(
        "file_env_read_failed",
        extra={
            "event": "file_env_read_failed",
            "raw_key": raw_key,
            "path": path,
            "reason": reason,
        },
    )
    return FileReadError(
        raw_key=raw_key,
        logical_key=key,
        path=path,
        reason=reason,
        component="file_env.resolver",
    )
