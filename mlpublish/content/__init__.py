"""Repository content access."""

from .readers import (
    BytesContentReader,
    ContentReader,
    ContentService,
    FileContentReader,
    MappingContentService,
)
from .temp import TempFileProvider, ensure_parent

__all__ = [
    "BytesContentReader",
    "ContentReader",
    "ContentService",
    "FileContentReader",
    "MappingContentService",
    "TempFileProvider",
    "ensure_parent",
]
