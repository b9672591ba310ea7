"""Decryption of channel credentials stored at rest."""

from __future__ import annotations

from typing import Any, Protocol

from cryptography.fernet import Fernet, InvalidToken


class DecryptionError(RuntimeError):
    """Raised when a stored channel property cannot be decrypted."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class Decryptor(Protocol):
    """Turns a stored property value back into plain text."""

    def decrypt(self, key: str, value: Any) -> str:
        """Return the plain text for the property ``key`` stored as ``value``."""


class FernetDecryptor:
    """Decrypts values produced by :meth:`encrypt` with a shared Fernet key."""

    def __init__(self, secret_key: str | bytes) -> None:
        try:
            self._fernet = Fernet(secret_key)
        except (TypeError, ValueError) as exc:
            raise DecryptionError(f"Invalid Fernet key: {exc}") from exc

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode("ascii")

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, key: str, value: Any) -> str:
        if value is None:
            raise DecryptionError(f"Channel property '{key}' is not set", key=key)
        token = value.encode("ascii") if isinstance(value, str) else value
        try:
            return self._fernet.decrypt(token).decode("utf-8")
        except (InvalidToken, TypeError, UnicodeError) as exc:
            raise DecryptionError(f"Unable to decrypt channel property '{key}'", key=key) from exc


class PlaintextDecryptor:
    """Passes values through; for channels configured without encryption."""

    def decrypt(self, key: str, value: Any) -> str:
        if value is None:
            raise DecryptionError(f"Channel property '{key}' is not set", key=key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)


__all__ = [
    "DecryptionError",
    "Decryptor",
    "FernetDecryptor",
    "PlaintextDecryptor",
]
