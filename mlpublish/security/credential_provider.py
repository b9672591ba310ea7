"""Secret lookup used to obtain the channel credential key."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from configparser import ConfigParser
from pathlib import Path
from typing import Iterable, Mapping


class SecretNotFoundError(KeyError):
    """Raised when a secret cannot be resolved."""


class SecretProvider(ABC):
    """Abstract secret lookup contract."""

    @abstractmethod
    def get_secret(self, key: str) -> str:
        """Return the secret associated with a dotted ``section.option`` key."""


class EnvSecretProvider(SecretProvider):
    """Reads secrets from environment variables, ``marklogic.secret_key`` -> ``MARKLOGIC_SECRET_KEY``."""

    def __init__(self, env: Mapping[str, str] | None = None, *, prefix: str = "") -> None:
        self._env = env if env is not None else os.environ
        self._prefix = prefix

    def variable_for(self, key: str) -> str:
        compound = f"{self._prefix}{key}" if self._prefix else key
        return compound.upper().replace(".", "_")

    def get_secret(self, key: str) -> str:
        value = self._env.get(self.variable_for(key))
        if not value:
            raise SecretNotFoundError(key)
        return value


class FileSecretProvider(SecretProvider):
    """Loads secrets from an INI file; ``marklogic.secret_key`` reads ``[marklogic] secret_key``."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._parser = ConfigParser()
        if path.is_file():
            self._parser.read(path, encoding="utf-8")

    def get_secret(self, key: str) -> str:
        section, _, option = key.partition(".")
        if not section or not option:
            raise SecretNotFoundError(key)
        if self._parser.has_option(section, option):
            value = self._parser.get(section, option).strip()
            if value:
                return value
        raise SecretNotFoundError(key)


class MappingSecretProvider(SecretProvider):
    """Wraps a plain dictionary."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = mapping

    def get_secret(self, key: str) -> str:
        try:
            return self._mapping[key]
        except KeyError as exc:
            raise SecretNotFoundError(key) from exc


class ChainedSecretProvider(SecretProvider):
    """Tries multiple providers until one returns a secret."""

    def __init__(self, providers: Iterable[SecretProvider]) -> None:
        self._providers = tuple(providers)

    def get_secret(self, key: str) -> str:
        for provider in self._providers:
            try:
                return provider.get_secret(key)
            except SecretNotFoundError:
                continue
        raise SecretNotFoundError(key)


def default_secret_provider(
    secrets_file: Path | None,
    *,
    env: Mapping[str, str] | None = None,
) -> ChainedSecretProvider:
    """Environment first, then the optional INI secrets file."""
    providers: list[SecretProvider] = [EnvSecretProvider(env)]
    if secrets_file is not None:
        providers.append(FileSecretProvider(secrets_file))
    return ChainedSecretProvider(providers)


__all__ = [
    "ChainedSecretProvider",
    "EnvSecretProvider",
    "FileSecretProvider",
    "MappingSecretProvider",
    "SecretNotFoundError",
    "SecretProvider",
    "default_secret_provider",
]
