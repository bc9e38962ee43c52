"""Storage access for configuration and marshal data files."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class FileStore(ABC):
    """Source-agnostic interface for reading input files."""

    @abstractmethod
    def exists(self, path: str) -> bool: ...

    @abstractmethod
    def read_text(self, path: str) -> str: ...


class LocalFileStore(FileStore):
    """Reads files from the local filesystem, relative to an optional root."""

    def __init__(self, root: str | Path | None = None) -> None:
        self._root = Path(root) if root is not None else None

    def _resolve(self, path: str) -> Path:
        p = Path(path)
        if self._root is not None and not p.is_absolute():
            return self._root / p
        return p

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def read_text(self, path: str) -> str:
        # utf-8-sig drops the BOM spreadsheet exports prepend to the first header
        return self._resolve(path).read_text(encoding="utf-8-sig")
