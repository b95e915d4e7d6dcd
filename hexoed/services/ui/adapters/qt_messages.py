from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from hexoed.services.ui.ports.messages import IMessageService, Question

_Button = QMessageBox.StandardButton
_Icon = QMessageBox.Icon

# kind -> (icon, default button); destructive questions default to No
_QUESTION_STYLE: dict[Question, tuple[QMessageBox.Icon, QMessageBox.StandardButton]] = {
    Question.DISCARD_CHANGES: (_Icon.Question, _Button.No),
    Question.MOVE_TO_TRASH: (_Icon.Warning, _Button.No),
}


class QtMessageService(IMessageService):
    """QMessageBox dialogs for the editor window."""

    def info(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.information(parent, title, text)

    def warning(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.warning(parent, title, text)

    def error(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.critical(parent, title, text)

    def ask(self, parent: Any | None, title: str, text: str, kind: Question) -> bool:
        icon, default = _QUESTION_STYLE[kind]
        box = QMessageBox(icon, title, text, _Button.Yes | _Button.No, parent)
        box.setDefaultButton(default)
        return box.exec() == _Button.Yes.value
