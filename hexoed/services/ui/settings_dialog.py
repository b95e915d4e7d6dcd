from __future__ import annotations

from PyQt6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QWidget,
)

from hexoed.domain.models import LANGUAGES, THEMES, AppSettings
from hexoed.utils.i18n import translate


class SettingsDialog(QDialog):
    """Edit posts/images folders, language and theme."""

    def __init__(self, settings: AppSettings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        t = lambda key: translate(settings.language, key)  # noqa: E731
        self.setWindowTitle(t("settings"))
        self.setModal(True)
        self.setMinimumWidth(520)

        self.posts_edit = QLineEdit(settings.posts_path, self)
        self.images_edit = QLineEdit(settings.images_path, self)

        self.language_combo = QComboBox(self)
        self.language_combo.addItems(list(LANGUAGES))
        self.language_combo.setCurrentText(settings.language)

        self.theme_combo = QComboBox(self)
        self.theme_combo.addItems(list(THEMES))
        self.theme_combo.setCurrentText(settings.theme)

        form = QFormLayout(self)
        form.addRow(t("postsPath"), self._with_browse(self.posts_edit, t("browse")))
        form.addRow(t("imagesPath"), self._with_browse(self.images_edit, t("browse")))
        form.addRow(t("language"), self.language_combo)
        form.addRow(t("theme"), self.theme_combo)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel, self
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        form.addRow(buttons)

    def _with_browse(self, edit: QLineEdit, label: str) -> QWidget:
        row = QWidget(self)
        lay = QHBoxLayout(row)
        lay.setContentsMargins(0, 0, 0, 0)
        btn = QPushButton(label, row)
        btn.clicked.connect(lambda: self._browse_into(edit, label))
        lay.addWidget(edit, 1)
        lay.addWidget(btn)
        return row

    def _browse_into(self, edit: QLineEdit, caption: str) -> None:
        chosen = QFileDialog.getExistingDirectory(self, caption, edit.text())
        if chosen:
            edit.setText(chosen)

    def get_settings(self) -> AppSettings:
        return AppSettings(
            posts_path=self.posts_edit.text().strip(),
            images_path=self.images_edit.text().strip(),
            language=self.language_combo.currentText(),
            theme=self.theme_combo.currentText(),
        )
