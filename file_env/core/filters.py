"""
Purpose:
    - Build only/ignore key predicates over a source's raw key space
    - Every listed logical key is extended with its suffixed (pointer) variant,
      otherwise `only(["foo"])` would silently drop `foo_file`.

Membership is case-insensitive on both sides; sources decide the key casing.
"""

from __future__ import annotations

from typing import Callable, Iterable

from file_env.errors.errors import ConfigurationError

KeyPredicate = Callable[[str], bool]


def _checked_keys(keys: Iterable[str]) -> list[str]:
    # a bare string is iterable too and would be split into characters
    if isinstance(keys, (str, bytes)):
        raise ConfigurationError(
            "Expected a collection of keys, got a single string",
            field="keys",
            value=keys,
            component="file_env.filters",
        )
    checked: list[str] = []
    for key in keys:
        if not isinstance(key, str):
            raise ConfigurationError(
                f"Keys must be strings: {key!r}",
                field="keys",
                value=key,
                component="file_env.filters",
            )
        checked.append(key)
    return checked


def expand_keys(keys: Iterable[str], suffix: str) -> frozenset[str]:
    """Return the case-folded union of each key and key + suffix."""
    checked = _checked_keys(keys)
    suffix = suffix.casefold()
    expanded = {key.casefold() for key in checked}
    expanded.update(key.casefold() + suffix for key in checked)
    return frozenset(expanded)


def only_predicate(keys: Iterable[str], suffix: str) -> KeyPredicate:
    allowed = expand_keys(keys, suffix)

    def _only(key: str) -> bool:
        return key.casefold() in allowed

    return _only


def ignore_predicate(keys: Iterable[str], suffix: str) -> KeyPredicate:
    ignored = expand_keys(keys, suffix)

    def _ignore(key: str) -> bool:
        return key.casefold() not in ignored

    return _ignore
