"""Helpers for loading channel configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:  # pragma: no cover - Python 3.11+ includes tomllib
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older versions
    import tomli as tomllib  # type: ignore[no-redef]

from mlpublish.channels.base import ChannelProperty

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_NAME = "config.toml"
CONFIG_ENV_VAR = "MLPUBLISH_CONFIG"
DEFAULT_MIME_TYPES = ("application/xml",)
DECRYPTOR_KINDS = {"fernet", "plain"}


@dataclass(slots=True)
class ChannelSettings:
    host: str | None
    port: int | None
    username: str | None
    password: str | None = field(repr=False)
    supported_mime_types: tuple[str, ...] = DEFAULT_MIME_TYPES

    def as_properties(self) -> dict[str, Any]:
        """Return the channel property mapping handed to publish/unpublish."""
        return {
            ChannelProperty.HOST: self.host,
            ChannelProperty.PORT: self.port,
            ChannelProperty.USERNAME: self.username,
            ChannelProperty.PASSWORD: self.password,
            ChannelProperty.SUPPORTED_MIME_TYPES: list(self.supported_mime_types),
        }


@dataclass(slots=True)
class HttpSettings:
    timeout: float


@dataclass(slots=True)
class PathSettings:
    scratch_dir: Path


@dataclass(slots=True)
class SecuritySettings:
    decryptor: str
    key_name: str
    secrets_file: Path | None


@dataclass(slots=True)
class AppConfig:
    channel: ChannelSettings
    http: HttpSettings
    paths: PathSettings
    security: SecuritySettings
    source: Path | None = None


def _to_path(value: str | None, *, fallback: Path) -> Path:
    if not value:
        return fallback
    candidate = Path(value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _config_path(explicit: str | os.PathLike[str] | None = None) -> Path:
    candidate: Path
    if explicit:
        candidate = Path(explicit)
    else:
        env_value = os.environ.get(CONFIG_ENV_VAR)
        candidate = Path(env_value) if env_value else PROJECT_ROOT / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _load_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("rb") as fp:
        return tomllib.load(fp)


def _optional_port(value: Any) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"channel.port must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"channel.port must be an integer, got {value!r}") from exc


def _mime_types(value: Any) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_MIME_TYPES
    if isinstance(value, str):
        value = [value]
    types = tuple(str(item).strip() for item in value if str(item).strip())
    return types or DEFAULT_MIME_TYPES


def _build_channel(data: dict[str, Any]) -> ChannelSettings:
    return ChannelSettings(
        host=data.get("host"),
        port=_optional_port(data.get("port")),
        username=data.get("username"),
        password=data.get("password"),
        supported_mime_types=_mime_types(data.get("supported_mime_types")),
    )


def _build_security(data: dict[str, Any]) -> SecuritySettings:
    kind = str(data.get("decryptor", "fernet")).lower()
    if kind not in DECRYPTOR_KINDS:
        available = ", ".join(sorted(DECRYPTOR_KINDS))
        raise ValueError(f"Unknown security.decryptor '{kind}', expected one of: {available}")
    secrets_value = data.get("secrets_file", "secrets.ini")
    return SecuritySettings(
        decryptor=kind,
        key_name=str(data.get("key_name", "marklogic.secret_key")),
        secrets_file=_to_path(secrets_value, fallback=PROJECT_ROOT) if secrets_value else None,
    )


def load_config(config_path: str | os.PathLike[str] | None = None) -> AppConfig:
    path = _config_path(config_path)
    data = _load_toml(path)

    paths_section = data.get("paths", {})
    http_section = data.get("http", {})

    data_dir = PROJECT_ROOT / "data"
    scratch_dir = _to_path(paths_section.get("scratch_dir"), fallback=data_dir / "tmp")
    scratch_dir.mkdir(parents=True, exist_ok=True)

    return AppConfig(
        channel=_build_channel(data.get("channel", {})),
        http=HttpSettings(timeout=float(http_section.get("timeout", 30))),
        paths=PathSettings(scratch_dir=scratch_dir),
        security=_build_security(data.get("security", {})),
        source=path,
    )

