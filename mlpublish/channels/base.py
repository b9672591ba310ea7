"""Base contracts for publishing channels."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AbstractSet, Any, Mapping

ChannelProperties = Mapping[str, Any]


class ChannelProperty:
    """Keys understood in a channel property mapping."""

    HOST = "host"
    PORT = "port"
    USERNAME = "username"
    PASSWORD = "password"
    SUPPORTED_MIME_TYPES = "supported_mime_types"


class PublishingError(RuntimeError):
    """Raised when a publish or unpublish call cannot be completed."""


class UnexpectedStatusError(PublishingError):
    """Raised when the remote store answers with an unexpected status code."""

    def __init__(self, reason: str, *, status_code: int, url: str | None = None) -> None:
        super().__init__(reason)
        self.status_code = status_code
        self.url = url


class UnsupportedMimeTypeError(PublishingError):
    """Raised when content does not match the channel's supported media types."""

    def __init__(self, mimetype: str, supported: AbstractSet[str]) -> None:
        super().__init__(
            f"Unsupported mimetype {mimetype!r}; channel accepts {', '.join(sorted(supported))}"
        )
        self.mimetype = mimetype
        self.supported = supported


class ChannelType(ABC):
    """Publishes documents to, and removes them from, a delivery channel."""

    @property
    @abstractmethod
    def channel_kind(self) -> str:
        """Identifier under which the channel is registered."""

    @property
    @abstractmethod
    def supported_mime_types(self) -> AbstractSet[str]:
        """Media types this channel accepts for publishing."""

    def can_publish(self) -> bool:
        return True

    def can_unpublish(self) -> bool:
        return True

    def can_publish_status_updates(self) -> bool:
        return False

    @abstractmethod
    def publish(self, document_id: str, properties: ChannelProperties) -> None:
        """Send the document's content to the channel."""

    @abstractmethod
    def unpublish(self, document_id: str, properties: ChannelProperties) -> None:
        """Remove the document from the channel."""


__all__ = [
    "ChannelProperties",
    "ChannelProperty",
    "ChannelType",
    "PublishingError",
    "UnexpectedStatusError",
    "UnsupportedMimeTypeError",
]
