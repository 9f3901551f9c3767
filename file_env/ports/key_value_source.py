"""KeyValueSource Port Interface.

Contract: Enumerate raw (key, value) pairs after the source's own namespace and
case normalization, carry an opaque profile tag, and derive restricted copies
through key predicates. Sources are immutable; filter() never mutates.
"""

from __future__ import annotations

from typing import Callable, Iterator, Protocol


class KeyValueSource(Protocol):
    @property
    def profile(self) -> str: ...

    def iter(self) -> Iterator[tuple[str, str]]: ...

    """
    Yield the current raw entries in the source's enumeration order.
    Called once per resolution pass; values are never cached between calls.
    """

    def filter(self, predicate: Callable[[str], bool]) -> "KeyValueSource": ...

    def describe(self) -> str: ...
