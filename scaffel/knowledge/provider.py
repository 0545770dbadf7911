# scaffel/knowledge/provider.py
"""
Knowledge providers.

A provider loads raw knowledge entries from some source. ``JsonProvider``
reads a single JSON file (array or single object) or every matching file
in a directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from scaffel.errors import KnowledgeBaseError

logger = logging.getLogger(__name__)

BUNDLED_DATA_PATH = Path(__file__).parent / "data" / "features.json"


class KnowledgeProvider(Protocol):
    """Source of raw feature knowledge entries."""

    @property
    def name(self) -> str: ...

    def is_available(self) -> bool: ...

    def load(self) -> list[dict[str, Any]]: ...


class JsonProvider:
    """Loads knowledge entries from JSON files."""

    def __init__(
        self,
        path: str | Path = BUNDLED_DATA_PATH,
        recursive: bool = False,
        pattern: str = "*.json",
    ) -> None:
        self.path = Path(path).expanduser()
        self.recursive = recursive
        self.pattern = pattern

    @property
    def name(self) -> str:
        return f"JsonProvider({self.path})"

    def is_available(self) -> bool:
        return self.path.exists()

    def load(self) -> list[dict[str, Any]]:
        """
        Load all entries.

        Raises:
            KnowledgeBaseError: If a single file is unreadable or malformed,
                or the path is neither a file nor a directory
        """
        if self.path.is_file():
            return self._load_file(self.path)
        if self.path.is_dir():
            return self._load_directory(self.path)
        raise KnowledgeBaseError(f"Path is neither a file nor directory: {self.path}")

    def _load_file(self, file_path: Path) -> list[dict[str, Any]]:
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise KnowledgeBaseError(f"Invalid JSON in {file_path}: {e}") from e
        except OSError as e:
            raise KnowledgeBaseError(f"Cannot read {file_path}: {e}") from e

        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            return [data]
        raise KnowledgeBaseError(
            f"Invalid JSON structure in {file_path}: expected array or object"
        )

    def _load_directory(self, dir_path: Path) -> list[dict[str, Any]]:
        files = dir_path.rglob(self.pattern) if self.recursive else dir_path.glob(self.pattern)
        entries: list[dict[str, Any]] = []
        for file_path in sorted(p for p in files if p.is_file()):
            try:
                entries.extend(self._load_file(file_path))
            except KnowledgeBaseError as e:
                logger.warning(f"Failed to load {file_path}: {e}")
        return entries
