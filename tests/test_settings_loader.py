"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from mlpublish.settings import load_config


def _write_config(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_load_config_reads_channel_and_paths(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "config.toml",
        f"""
[channel]
host = "ml.example.com"
port = 8080
username = "user-token"
password = "password-token"
supported_mime_types = ["application/xml", "text/xml"]

[http]
timeout = 12.5

[paths]
scratch_dir = "{(tmp_path / 'scratch').as_posix()}"

[security]
decryptor = "plain"
secrets_file = "{(tmp_path / 'secrets.ini').as_posix()}"
""",
    )

    config = load_config(config_path)

    assert config.source == config_path
    assert config.http.timeout == 12.5
    assert config.paths.scratch_dir == tmp_path / "scratch"
    assert config.paths.scratch_dir.is_dir()
    assert config.security.decryptor == "plain"
    assert config.security.key_name == "marklogic.secret_key"
    assert config.channel.as_properties() == {
        "host": "ml.example.com",
        "port": 8080,
        "username": "user-token",
        "password": "password-token",
        "supported_mime_types": ["application/xml", "text/xml"],
    }
    assert "password-token" not in repr(config.channel)


def test_load_config_defaults(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "config.toml",
        f"""
[channel]
host = "localhost"

[paths]
scratch_dir = "{(tmp_path / 'scratch').as_posix()}"
""",
    )

    config = load_config(config_path)

    assert config.channel.port is None
    assert config.channel.supported_mime_types == ("application/xml",)
    assert config.http.timeout == 30.0
    assert config.security.decryptor == "fernet"


def test_load_config_honours_environment_variable(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = _write_config(
        tmp_path / "env.toml",
        f"""
[channel]
port = "8011"

[paths]
scratch_dir = "{(tmp_path / 'scratch').as_posix()}"
""",
    )
    monkeypatch.setenv("MLPUBLISH_CONFIG", str(config_path))

    config = load_config()

    assert config.source == config_path
    assert config.channel.port == 8011


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.toml")


@pytest.mark.parametrize(
    "body",
    [
        '[channel]\nport = "not-a-port"\n',
        '[security]\ndecryptor = "rot13"\n',
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, body: str) -> None:
    scratch = (tmp_path / "scratch").as_posix()
    config_path = _write_config(
        tmp_path / "config.toml", f'{body}\n[paths]\nscratch_dir = "{scratch}"\n'
    )

    with pytest.raises(ValueError):
        load_config(config_path)
