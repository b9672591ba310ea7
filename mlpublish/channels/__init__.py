"""Publishing channel package."""

from __future__ import annotations

from .base import (
    ChannelProperties,
    ChannelProperty,
    ChannelType,
    PublishingError,
    UnexpectedStatusError,
    UnsupportedMimeTypeError,
)

__all__ = [
    "ChannelProperties",
    "ChannelProperty",
    "ChannelType",
    "PublishingError",
    "UnexpectedStatusError",
    "UnsupportedMimeTypeError",
]
