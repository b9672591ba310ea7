"""Content reader contracts and simple implementations."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Mapping, Protocol

from .temp import ensure_parent


class ContentReader(Protocol):
    """Read access to the stored content of a single document."""

    mimetype: str | None

    def exists(self) -> bool:
        """Return whether any content is stored for the document."""

    def get_file(self) -> Path | None:
        """Return the backing file when the content lives on local disk."""

    def get_content(self, target: Path) -> None:
        """Copy the content into ``target``."""


class ContentService(Protocol):
    """Hands out content readers for document identifiers."""

    def get_reader(self, document_id: str) -> ContentReader:
        """Return a reader for ``document_id``; it may report no content."""


class FileContentReader:
    """Reader backed by a file in a local content store."""

    def __init__(self, path: Path, *, mimetype: str | None = None) -> None:
        self._path = path
        self.mimetype = mimetype

    def exists(self) -> bool:
        return self._path.is_file()

    def get_file(self) -> Path | None:
        return self._path

    def get_content(self, target: Path) -> None:
        ensure_parent(target)
        shutil.copyfile(self._path, target)


class BytesContentReader:
    """Reader over in-memory content with no backing file."""

    def __init__(self, data: bytes | None, *, mimetype: str | None = None) -> None:
        self._data = data
        self.mimetype = mimetype

    def exists(self) -> bool:
        return self._data is not None

    def get_file(self) -> Path | None:
        return None

    def get_content(self, target: Path) -> None:
        if self._data is None:
            raise FileNotFoundError("No content stored for this reader")
        ensure_parent(target)
        target.write_bytes(self._data)


class MappingContentService:
    """Content service over a fixed mapping of document ids to readers."""

    def __init__(self, readers: Mapping[str, ContentReader]) -> None:
        self._readers = dict(readers)

    def get_reader(self, document_id: str) -> ContentReader:
        try:
            return self._readers[document_id]
        except KeyError:
            return BytesContentReader(None)


__all__ = [
    "BytesContentReader",
    "ContentReader",
    "ContentService",
    "FileContentReader",
    "MappingContentService",
]
