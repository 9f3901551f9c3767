"""
define canonical types
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

# -------- Aliases (clarify intent) --------
RawKey = str
LogicalKey = str
RawEntry = tuple[RawKey, str]

DEFAULT_PROFILE = "default"


@dataclass(frozen=True)
class Metadata:
    """
    Describes where a resolved mapping came from, e.g. for error reports of the
    downstream materializer.
    """

    name: str  # e.g. "FileEnv"
    source: str  # e.g. "environment variable(s) prefixed APP_"


@dataclass(frozen=True)
class ResolvedConfig:
    profile: str
    values: Mapping[LogicalKey, str]
    # logical keys whose value was read from a file; values themselves stay out of logs
    file_keys: frozenset[LogicalKey] = field(default_factory=frozenset)

    def as_profile_map(self) -> dict[str, dict[LogicalKey, str]]:
        return {self.profile: dict(self.values)}
