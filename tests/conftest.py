from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

import pytest


@dataclass
class StubTelemetry:
    events: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def log(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))


@pytest.fixture
def stub_telemetry() -> StubTelemetry:
    return StubTelemetry()


@pytest.fixture
def secret_file(tmp_path: Path) -> Callable[[str, str], str]:
    """
    Factory writing ``contents`` to ``tmp_path / name`` byte-for-byte and returning
    the absolute path as a string (the shape an env var value has).
    """

    def _write(name: str, contents: str) -> str:
        path = tmp_path / name
        path.write_bytes(contents.encode("utf-8"))
        return str(path)

    return _write
