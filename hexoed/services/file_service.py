from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QFile, QIODevice, QSaveFile

from hexoed.domain.interfaces import IFileService

logger = logging.getLogger(__name__)


class FileService(IFileService):
    """Atomic reads/writes, trash and directory listing on the local filesystem."""

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text_atomic(self, path: Path, text: str) -> None:
        self.write_bytes_atomic(path, text.encode("utf-8"))

    def write_bytes_atomic(self, path: Path, data: bytes) -> None:
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {path}")
        sf.write(data)
        if not sf.commit():
            raise OSError(f"Commit failed for: {path}")

    def move_to_trash(self, path: Path) -> None:
        """Recoverable delete through the platform trash."""
        if not path.exists():
            raise FileNotFoundError(str(path))
        if not QFile(str(path)).moveToTrash():
            raise OSError(f"Failed to move to trash: {path}")
        logger.info("Moved to trash: %s", path)

    def list_dirs(self, path: Path) -> list[str]:
        return sorted(entry.name for entry in path.iterdir() if entry.is_dir())
