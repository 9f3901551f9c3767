"""
End-to-end: secrets mounted as files next to plain environment values, resolved
into an application settings model, with telemetry written to a JSONL sink.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import BaseModel

from file_env import EnvSource, FileEnv, FileReadError, JsonlTelemetry


class AppSettings(BaseModel):
    api_key: str
    db_password: str
    port: int
    log_level: str = "info"


@pytest.fixture
def secrets_dir(tmp_path: Path) -> Path:
    secrets = tmp_path / "run" / "secrets"
    secrets.mkdir(parents=True)
    (secrets / "api_key").write_text("abc123deadbeef", encoding="utf-8")
    (secrets / "db_password").write_text("hunter2\n", encoding="utf-8")
    return secrets


def test_container_style_configuration(secrets_dir: Path, tmp_path: Path) -> None:
    environ = {
        "MY_APP_API_KEY_FILE": str(secrets_dir / "api_key"),
        "MY_APP_DB_PASSWORD_FILE": "db_password",
        "MY_APP_PORT": "8080",
        "MY_APP_LOG_LEVEL": "debug",
        "OTHER_APP_PORT": "1",
    }
    sink = tmp_path / "events.jsonl"
    file_keys = ["api_key", "db_password"]

    secrets = (
        FileEnv.from_env(EnvSource.prefixed("MY_APP_", environ=environ))
        .only(file_keys)
        .with_base_dir(secrets_dir)
        .with_telemetry(JsonlTelemetry(component="file_env", sink_path=sink))
        .data()
    )
    plain = (
        FileEnv.from_env(EnvSource.prefixed("MY_APP_", environ=environ)).ignore(file_keys).data()
    )

    settings = AppSettings.model_validate({**plain.values, **secrets.values})

    assert settings.api_key == "abc123deadbeef"
    # contents are verbatim, trimming is the application's call
    assert settings.db_password == "hunter2\n"
    assert settings.port == 8080
    assert settings.log_level == "debug"
    assert secrets.file_keys == frozenset(file_keys)

    records = [json.loads(line) for line in sink.read_text(encoding="utf-8").splitlines()]
    assert [r["event"] for r in records] == ["file_env_resolved"]
    assert records[0]["keys"] == file_keys
    assert "abc123deadbeef" not in sink.read_text(encoding="utf-8")


def test_broken_secret_aborts_without_partial_result(secrets_dir: Path) -> None:
    environ = {
        "MY_APP_API_KEY_FILE": str(secrets_dir / "api_key"),
        "MY_APP_DB_PASSWORD_FILE": str(secrets_dir / "gone"),
        "MY_APP_PORT": "8080",
    }

    with pytest.raises(FileReadError) as exc_info:
        FileEnv.prefixed("MY_APP_", environ=environ).extract(AppSettings)

    assert exc_info.value.raw_key == "db_password_file"
    assert exc_info.value.path == str(secrets_dir / "gone")
