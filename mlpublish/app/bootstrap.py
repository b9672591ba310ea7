"""Builds a configured MarkLogic channel from application settings."""

from __future__ import annotations

from typing import Callable, Mapping

import requests

from mlpublish.channels.marklogic import MarkLogicChannelType, MarkLogicPublishingHelper
from mlpublish.content import ContentService, TempFileProvider
from mlpublish.security import (
    Decryptor,
    FernetDecryptor,
    PlaintextDecryptor,
    default_secret_provider,
)
from mlpublish.settings import AppConfig


def resolve_secret_key(config: AppConfig, *, env: Mapping[str, str] | None = None) -> str:
    """Look up the Fernet key in the environment, then the secrets file."""
    provider = default_secret_provider(config.security.secrets_file, env=env)
    return provider.get_secret(config.security.key_name)


def build_decryptor(config: AppConfig, *, env: Mapping[str, str] | None = None) -> Decryptor:
    if config.security.decryptor == "plain":
        return PlaintextDecryptor()
    return FernetDecryptor(resolve_secret_key(config, env=env))


def build_channel(
    config: AppConfig,
    content_service: ContentService,
    *,
    decryptor: Decryptor | None = None,
    env: Mapping[str, str] | None = None,
    session_factory: Callable[[], requests.Session] = requests.Session,
) -> MarkLogicChannelType:
    helper = MarkLogicPublishingHelper(decryptor or build_decryptor(config, env=env))
    return MarkLogicChannelType(
        helper=helper,
        content_service=content_service,
        temp_files=TempFileProvider(config.paths.scratch_dir),
        supported_mime_types=config.channel.supported_mime_types,
        timeout=config.http.timeout,
        session_factory=session_factory,
    )


__all__ = ["build_channel", "build_decryptor", "resolve_secret_key"]
