"""In-memory key-value source.

Keys are yielded exactly as supplied; no prefix or case normalization.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, Iterator, Mapping

from file_env.types.types import DEFAULT_PROFILE, RawEntry


@dataclass(frozen=True)
class MemorySource:
    entries: tuple[RawEntry, ...] = ()
    profile: str = DEFAULT_PROFILE
    predicates: tuple[Callable[[str], bool], ...] = ()

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, str], *, profile: str = DEFAULT_PROFILE
    ) -> MemorySource:
        return cls(entries=tuple(mapping.items()), profile=profile)

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[RawEntry], *, profile: str = DEFAULT_PROFILE
    ) -> MemorySource:
        return cls(entries=tuple((str(k), str(v)) for k, v in pairs), profile=profile)

    def iter(self) -> Iterator[RawEntry]:
        for key, value in self.entries:
            if all(predicate(key) for predicate in self.predicates):
                yield key, value

    def filter(self, predicate: Callable[[str], bool]) -> MemorySource:
        return replace(self, predicates=self.predicates + (predicate,))

    def describe(self) -> str:
        return f"in-memory source ({len(self.entries)} entries)"
