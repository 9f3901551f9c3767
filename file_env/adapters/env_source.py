from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Callable, Iterator, Mapping, Optional

from file_env.types.types import DEFAULT_PROFILE

KeyPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class EnvSource:
    """
    Key-value source backed by process environment variables.

    Keys are matched against ``prefix`` case-insensitively, the prefix is stripped
    and (by default) the remainder is lower-cased, so ``APP_FOO_FILE`` becomes
    ``foo_file`` for ``EnvSource.prefixed("APP_")``.

    ``environ`` is an injected snapshot. When it is None the live ``os.environ``
    is read on every iteration, never copied at construction time.
    """

    prefix: str = ""
    profile: str = DEFAULT_PROFILE
    environ: Optional[Mapping[str, str]] = None
    lowercase: bool = True
    predicates: tuple[KeyPredicate, ...] = ()

    @classmethod
    def prefixed(
        cls,
        prefix: str,
        *,
        environ: Optional[Mapping[str, str]] = None,
        profile: str = DEFAULT_PROFILE,
    ) -> EnvSource:
        if not prefix:
            raise ValueError("Environment prefix must be a non-empty string")
        return cls(prefix=prefix, environ=environ, profile=profile)

    @classmethod
    def raw(
        cls,
        *,
        environ: Optional[Mapping[str, str]] = None,
        profile: str = DEFAULT_PROFILE,
    ) -> EnvSource:
        return cls(environ=environ, profile=profile)

    def iter(self) -> Iterator[tuple[str, str]]:
        environ = os.environ if self.environ is None else self.environ
        prefix = self.prefix.lower()
        # snapshot the items so a concurrent os.environ update cannot break iteration
        for raw_key, value in list(environ.items()):
            if not raw_key.lower().startswith(prefix):
                continue
            key = raw_key[len(prefix) :]
            if not key:
                continue
            if self.lowercase:
                key = key.lower()
            if all(predicate(key) for predicate in self.predicates):
                yield key, value

    def filter(self, predicate: KeyPredicate) -> EnvSource:
        return replace(self, predicates=self.predicates + (predicate,))

    def profiled(self, profile: str) -> EnvSource:
        return replace(self, profile=profile)

    def describe(self) -> str:
        if self.prefix:
            return f"environment variable(s) prefixed {self.prefix}"
        return "environment variable(s)"
