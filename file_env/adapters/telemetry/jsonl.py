"""JSON Lines Telemetry adapter.

Implements the Telemetry port by appending structured JSON objects (one per
line) to a sink file.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import orjson


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JsonlTelemetry:
    _REDACTION_TOKEN = "***REDACTED***"
    _DEFAULT_SECRET_KEYS = frozenset(
        {
            "value",
            "values",
            "contents",
            "secret",
            "password",
            "token",
        }
    )

    def __init__(
        self,
        component: str,
        sink_path: Path,
        secret_keys: Iterable[str] = _DEFAULT_SECRET_KEYS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not component:
            raise ValueError("Telemetry component must be a non-empty string")
        self._component = component
        self._sink_path = sink_path if isinstance(sink_path, Path) else Path(sink_path)
        # a bare string would otherwise match by substring
        if isinstance(secret_keys, str):
            secret_keys = (secret_keys,)
        self._secret_keys = frozenset(secret_keys)
        self._clock = clock

    def log(self, event: str, **fields: Any) -> None:
        if not event:
            raise ValueError("Telemetry event name must be a non-empty string")
        extras = dict(fields)
        component = extras.pop("component", self._component)

        sanitized_fields, redacted = self._sanitize_fields(extras)

        record: dict[str, Any] = {
            "event": event,
            "ts_utc": self._clock().isoformat(),
            "component": component,
            **sanitized_fields,
        }
        if redacted:
            record["redacted_fields"] = sorted(redacted)

        self._write_record(record)

    def _sanitize_fields(self, fields: Mapping[str, Any]) -> tuple[dict[str, Any], set[str]]:
        sanitized: dict[str, Any] = {}
        redacted: set[str] = set()
        for key, value in fields.items():
            if key in self._secret_keys:
                sanitized[key] = self._REDACTION_TOKEN
                redacted.add(key)
            else:
                sanitized[key] = value

        return sanitized, redacted

    def _write_record(self, record: Mapping[str, Any]) -> None:
        # default=str covers Paths and other non-native types
        payload = orjson.dumps(record, default=str, option=orjson.OPT_SORT_KEYS)
        with self._sink_path.open("ab") as handle:
            handle.write(payload + b"\n")
