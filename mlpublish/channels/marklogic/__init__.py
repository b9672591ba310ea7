"""MarkLogic Server channel."""

from __future__ import annotations

from .channel import (
    DEFAULT_SUPPORTED_MIME_TYPES,
    MIMETYPE_XML,
    STATUS_DOCUMENT_DELETED,
    STATUS_DOCUMENT_INSERTED,
    MarkLogicChannelType,
)
from .helper import AuthContext, InvalidTargetURIError, MarkLogicPublishingHelper

__all__ = [
    "AuthContext",
    "DEFAULT_SUPPORTED_MIME_TYPES",
    "InvalidTargetURIError",
    "MIMETYPE_XML",
    "MarkLogicChannelType",
    "MarkLogicPublishingHelper",
    "STATUS_DOCUMENT_DELETED",
    "STATUS_DOCUMENT_INSERTED",
]
