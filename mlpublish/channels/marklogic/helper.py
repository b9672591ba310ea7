"""Helpers for addressing and authenticating against MarkLogic Server."""

from __future__ import annotations

import ipaddress
import urllib.parse
from dataclasses import dataclass, field

from requests.auth import HTTPBasicAuth

from mlpublish.channels.base import ChannelProperties, ChannelProperty
from mlpublish.security import Decryptor

STORE_PATH = "/store"
# Query characters left as-is; ``&``, ``=``, ``+`` and ``#`` would change the query's meaning.
_QUERY_SAFE = ":/@!$'()*,;"


class InvalidTargetURIError(ValueError):
    """Raised when channel properties cannot address a MarkLogic endpoint."""


@dataclass(slots=True)
class AuthContext:
    """Basic credentials presented to any host and realm."""

    username: str
    password: str = field(repr=False)

    @property
    def auth(self) -> HTTPBasicAuth:
        return HTTPBasicAuth(self.username, self.password)


class MarkLogicPublishingHelper:
    """Builds request contexts and target URIs from channel properties."""

    def __init__(self, decryptor: Decryptor) -> None:
        self._decryptor = decryptor

    def build_auth_context(self, properties: ChannelProperties) -> AuthContext:
        """Decrypt the channel's username and password into Basic credentials."""
        username = self._decryptor.decrypt(
            ChannelProperty.USERNAME, properties.get(ChannelProperty.USERNAME)
        )
        password = self._decryptor.decrypt(
            ChannelProperty.PASSWORD, properties.get(ChannelProperty.PASSWORD)
        )
        return AuthContext(username=username, password=password)

    def build_target_uri(self, document_id: str, properties: ChannelProperties) -> str:
        """
        Compose ``http://<host>:<port>/store?uri=<document_id>``.

        Raises:
            InvalidTargetURIError: host or port is missing or malformed.
        """
        host = _host(properties.get(ChannelProperty.HOST))
        port = _port(properties.get(ChannelProperty.PORT))
        query = "uri=" + urllib.parse.quote(str(document_id), safe=_QUERY_SAFE)
        return urllib.parse.urlunsplit(("http", f"{host}:{port}", STORE_PATH, query, ""))


def _host(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidTargetURIError(f"Invalid MarkLogic host: {value!r}")
    host = value.strip()
    if host.startswith("[") or host.endswith("]"):
        # Only a complete bracketed IPv6 literal, nothing after the closing bracket.
        try:
            if not (host.startswith("[") and host.endswith("]")):
                raise ValueError(host)
            ipaddress.IPv6Address(host[1:-1])
        except ValueError as exc:
            raise InvalidTargetURIError(f"Invalid MarkLogic host: {value!r}") from exc
        return host
    if any(ch in host for ch in "/?#@:[] "):
        raise InvalidTargetURIError(f"Invalid MarkLogic host: {value!r}")
    return host


def _port(value: object) -> int:
    if isinstance(value, bool):
        raise InvalidTargetURIError(f"Invalid MarkLogic port: {value!r}")
    if isinstance(value, int):
        port = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        port = int(value.strip())
    else:
        raise InvalidTargetURIError(f"Invalid MarkLogic port: {value!r}")
    if not 0 < port < 65536:
        raise InvalidTargetURIError(f"MarkLogic port out of range: {port}")
    return port


__all__ = [
    "AuthContext",
    "InvalidTargetURIError",
    "MarkLogicPublishingHelper",
    "STORE_PATH",
]
