"""Security utilities package."""

from __future__ import annotations

from .credential_provider import (
    ChainedSecretProvider,
    EnvSecretProvider,
    FileSecretProvider,
    MappingSecretProvider,
    SecretNotFoundError,
    SecretProvider,
    default_secret_provider,
)
from .decryptor import DecryptionError, Decryptor, FernetDecryptor, PlaintextDecryptor

__all__ = [
    "ChainedSecretProvider",
    "DecryptionError",
    "Decryptor",
    "EnvSecretProvider",
    "FernetDecryptor",
    "FileSecretProvider",
    "MappingSecretProvider",
    "PlaintextDecryptor",
    "SecretNotFoundError",
    "SecretProvider",
    "default_secret_provider",
]
