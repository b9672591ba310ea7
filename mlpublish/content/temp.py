"""Scratch-file helpers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


class TempFileProvider:
    """Creates temporary files inside named scratch areas of a root directory."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def scratch_dir(self, name: str) -> Path:
        directory = self._root / name
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def create_temp_file(self, prefix: str, suffix: str = "", *, area: str | None = None) -> Path:
        """Create an empty file and return its path; the caller owns deletion."""
        directory = self.scratch_dir(area or prefix)
        fd, name = tempfile.mkstemp(prefix=f"{prefix}-", suffix=suffix, dir=str(directory))
        os.close(fd)
        return Path(name)


__all__ = ["TempFileProvider", "ensure_parent"]
