"""Telemetry Port Interface.

Contract: Log structured events. Resolution reports key names and counts only,
never resolved values.
"""
from __future__ import annotations
from typing import Protocol, Any

class Telemetry(Protocol):
    def log(self, event: str, **fields: Any) -> None: ...
