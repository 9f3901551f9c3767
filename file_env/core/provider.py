from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, Mapping, Optional, TypeVar

from pydantic import BaseModel

from file_env.adapters.env_source import EnvSource
from file_env.config.settings import (
    FileEnvSettings,
    MissingFilePolicy,
    Precedence,
    build_settings,
)
from file_env.core.filters import ignore_predicate, only_predicate
from file_env.core.resolver import resolve_entries
from file_env.errors.errors import PreconditionError
from file_env.ports.key_value_source import KeyValueSource
from file_env.ports.telemetry import Telemetry
from file_env.types.types import Metadata, ResolvedConfig

_LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class FileEnv:
    """
    Provider that reads config values from a key-value source or from files the
    source points to.

    The value ``foo`` is read either from the entry ``foo`` or from the file named
    by ``foo_file``. Every builder method returns a new instance::

        config = (
            FileEnv.prefixed("APP_")
            .with_suffix("_PATH")
            .only(["api_key", "db_password"])
            .extract(Settings)
        )

    The suffix is fixed once ``only``/``ignore`` have been applied; those return a
    FileEnvWithRestrictions, which has no way to change it.
    """

    source: KeyValueSource
    settings: FileEnvSettings = field(default_factory=FileEnvSettings)
    telemetry: Optional[Telemetry] = None

    @classmethod
    def from_env(cls, source: KeyValueSource) -> FileEnv:
        """
        Wrap a source. Restrictions applied to the source itself carry over, but
        its own key filters know nothing about the suffix; use FileEnv.only and
        FileEnv.ignore instead.
        """
        return cls(source=source)

    @classmethod
    def prefixed(cls, prefix: str, *, environ: Optional[Mapping[str, str]] = None) -> FileEnv:
        return cls.from_env(EnvSource.prefixed(prefix, environ=environ))

    @property
    def suffix(self) -> str:
        return self.settings.suffix

    def with_suffix(self, suffix: str) -> FileEnv:
        """Change the pointer suffix ("_file" by default). Stored lower-cased."""
        return replace(self, settings=build_settings(self.settings, suffix=suffix))

    def skip_missing_files(self) -> FileEnv:
        return replace(
            self, settings=build_settings(self.settings, on_missing=MissingFilePolicy.SKIP)
        )

    def prefer_env(self) -> FileEnv:
        return replace(self, settings=build_settings(self.settings, precedence=Precedence.ENV))

    def with_base_dir(self, base_dir: Path | str) -> FileEnv:
        return replace(self, settings=build_settings(self.settings, base_dir=base_dir))

    def with_telemetry(self, telemetry: Telemetry) -> FileEnv:
        return replace(self, telemetry=telemetry)

    def only(self, keys: Iterable[str]) -> FileEnvWithRestrictions:
        """
        Restrict the provider to the given logical keys and their suffixed
        counterparts: ``only(["foo"])`` looks at ``foo`` and ``foo_file``.
        """
        return FileEnvWithRestrictions(file_env=self).only(keys)

    def ignore(self, keys: Iterable[str]) -> FileEnvWithRestrictions:
        """Skip the given logical keys and their suffixed counterparts."""
        return FileEnvWithRestrictions(file_env=self).ignore(keys)

    def metadata(self) -> Metadata:
        return Metadata(name="FileEnv", source=self.source.describe())

    def data(self) -> ResolvedConfig:
        """Run one resolution pass against the live source and filesystem."""
        return resolve_entries(
            self.source.iter(),
            self.settings,
            profile=self.source.profile,
            telemetry=self.telemetry,
        )

    def extract(self, model: type[ModelT]) -> ModelT:
        """
        Hand the resolved mapping to a pydantic model. Coercion and missing-field
        errors are the model's; pydantic's ValidationError propagates unchanged.
        """
        return model.model_validate(dict(self.data().values))


@dataclass(frozen=True)
class FileEnvWithRestrictions:
    """A FileEnv that cannot have its suffix changed anymore. See FileEnv.with_suffix."""

    file_env: FileEnv

    @property
    def suffix(self) -> str:
        return self.file_env.suffix

    @property
    def source(self) -> KeyValueSource:
        return self.file_env.source

    def with_suffix(self, suffix: str) -> FileEnvWithRestrictions:
        _LOGGER.debug(
            "file_env_suffix_locked",
            extra={
                "event": "file_env_suffix_locked",
                "current_suffix": self.suffix,
                "requested_suffix": suffix,
            },
        )
        raise PreconditionError(
            "The suffix cannot be changed after only()/ignore(); call with_suffix() first",
            component="file_env.provider",
            details={"current_suffix": self.suffix, "requested_suffix": suffix},
        )

    def only(self, keys: Iterable[str]) -> FileEnvWithRestrictions:
        predicate = only_predicate(keys, self.suffix)
        return self._with_source(self.file_env.source.filter(predicate))

    def ignore(self, keys: Iterable[str]) -> FileEnvWithRestrictions:
        predicate = ignore_predicate(keys, self.suffix)
        return self._with_source(self.file_env.source.filter(predicate))

    def skip_missing_files(self) -> FileEnvWithRestrictions:
        return FileEnvWithRestrictions(file_env=self.file_env.skip_missing_files())

    def prefer_env(self) -> FileEnvWithRestrictions:
        return FileEnvWithRestrictions(file_env=self.file_env.prefer_env())

    def with_base_dir(self, base_dir: Path | str) -> FileEnvWithRestrictions:
        return FileEnvWithRestrictions(file_env=self.file_env.with_base_dir(base_dir))

    def with_telemetry(self, telemetry: Telemetry) -> FileEnvWithRestrictions:
        return FileEnvWithRestrictions(file_env=self.file_env.with_telemetry(telemetry))

    def metadata(self) -> Metadata:
        return self.file_env.metadata()

    def data(self) -> ResolvedConfig:
        return self.file_env.data()

    def extract(self, model: type[ModelT]) -> ModelT:
        return self.file_env.extract(model)

    def _with_source(self, source: KeyValueSource) -> FileEnvWithRestrictions:
        return FileEnvWithRestrictions(file_env=replace(self.file_env, source=source))
