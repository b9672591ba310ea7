"""Channel for publishing XML content to MarkLogic Server."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import AbstractSet, Any, Callable, Iterable, Iterator

import requests

from mlpublish.channels.base import (
    ChannelProperties,
    ChannelProperty,
    ChannelType,
    PublishingError,
    UnexpectedStatusError,
    UnsupportedMimeTypeError,
)
from mlpublish.content import ContentReader, ContentService, TempFileProvider

from .helper import InvalidTargetURIError, MarkLogicPublishingHelper

_LOGGER = logging.getLogger(__name__)

MIMETYPE_XML = "application/xml"
DEFAULT_SUPPORTED_MIME_TYPES = frozenset({MIMETYPE_XML})
STATUS_DOCUMENT_INSERTED = 204
STATUS_DOCUMENT_DELETED = 200
DEFAULT_TIMEOUT = 30.0


class MarkLogicChannelType(ChannelType):
    """Publishes documents to a MarkLogic REST store and removes them again."""

    ID = "marklogic"

    def __init__(
        self,
        *,
        helper: MarkLogicPublishingHelper,
        content_service: ContentService,
        temp_files: TempFileProvider,
        supported_mime_types: Iterable[str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._helper = helper
        self._content_service = content_service
        self._temp_files = temp_files
        self._supported = (
            _normalize_types(supported_mime_types)
            if supported_mime_types is not None
            else DEFAULT_SUPPORTED_MIME_TYPES
        )
        self._timeout = timeout
        self._session_factory = session_factory

    @property
    def channel_kind(self) -> str:
        return self.ID

    @property
    def supported_mime_types(self) -> AbstractSet[str]:
        return self._supported

    def publish(self, document_id: str, properties: ChannelProperties) -> None:
        """
        PUT the document's content to MarkLogic.

        A document without content is skipped with a warning. Content held
        outside the local file store is staged in a scratch file that is
        removed once the request finishes.

        Raises:
            UnsupportedMimeTypeError: the reader reports a type the channel does not accept.
            UnexpectedStatusError: MarkLogic answered with anything but 204.
            PublishingError: the target URI is invalid or the request failed in transit.
        """
        reader = self._content_service.get_reader(document_id)
        if not reader.exists():
            _LOGGER.warning(
                "No content to publish for %s",
                document_id,
                extra={"event": "marklogic.publish.skipped", "document_id": document_id},
            )
            return

        accepted = self._accepted_types(properties)
        mimetype = reader.mimetype
        if mimetype is not None and _normalize_type(mimetype) not in accepted:
            raise UnsupportedMimeTypeError(mimetype, accepted)

        _LOGGER.debug("Publishing document %s", document_id)
        try:
            with self._content_file(reader) as content_file, content_file.open("rb") as body:
                self._send(
                    "PUT",
                    document_id,
                    properties,
                    expected_status=STATUS_DOCUMENT_INSERTED,
                    data=body,
                    headers={"Content-Type": MIMETYPE_XML},
                )
        except OSError as exc:
            raise PublishingError(str(exc)) from exc

    def unpublish(self, document_id: str, properties: ChannelProperties) -> None:
        """DELETE the document from MarkLogic; anything but 200 is a failure."""
        _LOGGER.debug("Unpublishing document %s", document_id)
        self._send(
            "DELETE",
            document_id,
            properties,
            expected_status=STATUS_DOCUMENT_DELETED,
        )

    def _send(
        self,
        method: str,
        document_id: str,
        properties: ChannelProperties,
        *,
        expected_status: int,
        **request_kwargs: Any,
    ) -> None:
        session = self._session_factory()
        try:
            url = self._helper.build_target_uri(document_id, properties)
            context = self._helper.build_auth_context(properties)
            response = session.request(
                method,
                url,
                auth=context.auth,
                timeout=self._timeout,
                **request_kwargs,
            )
            try:
                status = response.status_code
                reason = response.reason or ""
            finally:
                response.close()

            _LOGGER.info(
                "Response Status: %s - Message: %s - Document: %s",
                status,
                reason,
                document_id,
                extra={
                    "event": f"marklogic.{method.lower()}",
                    "status": status,
                    "document_id": document_id,
                },
            )
            if status != expected_status:
                raise UnexpectedStatusError(reason, status_code=status, url=url)
        except InvalidTargetURIError as exc:
            raise PublishingError(str(exc)) from exc
        except requests.RequestException as exc:
            raise PublishingError(str(exc)) from exc
        finally:
            session.close()

    @contextmanager
    def _content_file(self, reader: ContentReader) -> Iterator[Path]:
        content_file = reader.get_file()
        if content_file is not None:
            yield content_file
            return

        temp_file = self._temp_files.create_temp_file(self.ID)
        try:
            reader.get_content(temp_file)
            yield temp_file
        finally:
            temp_file.unlink(missing_ok=True)

    def _accepted_types(self, properties: ChannelProperties) -> AbstractSet[str]:
        configured = properties.get(ChannelProperty.SUPPORTED_MIME_TYPES)
        if not configured:
            return self._supported
        if isinstance(configured, str):
            configured = [configured]
        return _normalize_types(configured)


def _normalize_type(mimetype: str) -> str:
    return mimetype.split(";", 1)[0].strip().lower()


def _normalize_types(mimetypes: Iterable[str]) -> frozenset[str]:
    return frozenset(_normalize_type(item) for item in mimetypes if item and item.strip())


__all__ = [
    "DEFAULT_SUPPORTED_MIME_TYPES",
    "MIMETYPE_XML",
    "MarkLogicChannelType",
    "STATUS_DOCUMENT_DELETED",
    "STATUS_DOCUMENT_INSERTED",
]
