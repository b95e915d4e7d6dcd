from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable


class Question(Enum):
    """What a confirmation is about; adapters pick icon and safe default from it."""

    DISCARD_CHANGES = "discard"  # leave a post with unsaved edits
    MOVE_TO_TRASH = "trash"  # post or image goes to the system trash


@runtime_checkable
class IMessageService(Protocol):
    """Dialog port used by EditorPresenter and MainWindow. Titles and texts arrive translated."""

    def info(self, parent: Any | None, title: str, text: str) -> None: ...
    def warning(self, parent: Any | None, title: str, text: str) -> None: ...
    def error(self, parent: Any | None, title: str, text: str) -> None: ...

    def ask(self, parent: Any | None, title: str, text: str, kind: Question) -> bool:
        """True only when the user explicitly confirmed."""
        ...
