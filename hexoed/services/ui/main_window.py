from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from PyQt6.QtCore import QByteArray, Qt, QUrl
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QInputDialog,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QSplitter,
    QStatusBar,
    QTabWidget,
    QTextBrowser,
    QTextEdit,
    QToolBar,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from hexoed.domain.interfaces import IUiStateService
from hexoed.domain.models import Asset, ViewMode
from hexoed.services.ui.ports.messages import Question
from hexoed.services.ui.presenters.editor_presenter import EditorPresenter
from hexoed.services.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)

PreviewFactory = Callable[[QWidget], QWidget]

_DATA_ROLE = Qt.ItemDataRole.UserRole


def text_browser_preview(parent: QWidget) -> QWidget:
    w = QTextBrowser(parent)
    w.setOpenExternalLinks(True)
    return w


class MainWindow(QMainWindow):
    """Thin PyQt window; workspace state and decisions live in EditorPresenter."""

    def __init__(
        self,
        presenter: EditorPresenter,
        ui_state: IUiStateService,
        *,
        preview_factory: PreviewFactory = text_browser_preview,
        base_url: str | None = None,
        app_title: str = "Hexo Editor",
    ) -> None:
        super().__init__()
        self.presenter = presenter
        self.presenter.view_parent = self
        self.ui_state = ui_state
        self.base_url = base_url
        self.app_title = app_title
        self._loading = False
        self.resize(1280, 800)

        # Sidebar: posts + assets
        self.search = QLineEdit(self)
        self.search.textChanged.connect(self._refresh_post_list)
        self.post_list = QListWidget(self)
        self.post_list.itemClicked.connect(self._on_post_clicked)
        posts_tab = QWidget(self)
        lay = QVBoxLayout(posts_tab)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self.search)
        lay.addWidget(self.post_list)

        self.asset_tree = QTreeWidget(self)
        self.asset_tree.setHeaderHidden(True)
        self.asset_tree.itemDoubleClicked.connect(lambda *_: self._copy_asset_snippet())

        self.sidebar = QTabWidget(self)
        self.sidebar.addTab(posts_tab, "")
        self.sidebar.addTab(self.asset_tree, "")

        # Editor + preview
        self.editor = QTextEdit(self)
        self.editor.setAcceptRichText(False)
        self.editor.setTabStopDistance(4 * self.editor.fontMetrics().horizontalAdvance(" "))
        self.editor.textChanged.connect(self._on_text_changed)
        self.preview = preview_factory(self)

        self.splitter = QSplitter(Qt.Orientation.Horizontal, self)
        self.splitter.addWidget(self.sidebar)
        self.splitter.addWidget(self.editor)
        self.splitter.addWidget(self.preview)
        self.splitter.setStretchFactor(1, 1)
        self.splitter.setStretchFactor(2, 1)
        self.splitter.splitterMoved.connect(self._on_splitter_moved)
        self.setCentralWidget(self.splitter)

        self._build_actions()
        self._build_toolbar()
        self.setStatusBar(QStatusBar(self))

        split = self.ui_state.get_splitter()
        if isinstance(split, (bytes, bytearray)):
            self.splitter.restoreState(QByteArray(split))
        else:
            width = self.ui_state.get_sidebar_width()
            self.splitter.setSizes([width, 500, 500])
        geo = self.ui_state.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))
        self._retranslate()

    # ---------- UI creation ----------
    def _build_actions(self) -> None:
        self.act_new = QAction(self, shortcut=QKeySequence.StandardKey.New, triggered=self._new_post)
        self.act_save = QAction(self, shortcut=QKeySequence.StandardKey.Save, triggered=self._save)
        self.act_delete = QAction(self, triggered=self._delete_post)
        self.act_refresh = QAction(self, shortcut=QKeySequence.StandardKey.Refresh, triggered=self.reload)
        self.act_settings = QAction(self, triggered=self.open_settings)
        self.act_theme = QAction(self, triggered=self._toggle_theme)

        self.act_mode_edit = QAction(self, checkable=True, triggered=lambda: self._set_mode(ViewMode.EDIT))
        self.act_mode_preview = QAction(
            self, checkable=True, triggered=lambda: self._set_mode(ViewMode.PREVIEW)
        )
        self.act_mode_split = QAction(
            self, checkable=True, checked=True, triggered=lambda: self._set_mode(ViewMode.SPLIT)
        )

        self.act_upload = QAction(self, triggered=self._upload_asset)
        self.act_copy = QAction(self, triggered=self._copy_asset_snippet)
        self.act_rename = QAction(self, triggered=self._rename_asset)
        self.act_delete_asset = QAction(self, triggered=self._delete_asset)

        self.exit_action = QAction("&Exit", self, shortcut="Ctrl+Q")
        self.exit_action.triggered.connect(self.close)
        self._labels = {
            self.act_new: "newPost",
            self.act_save: "save",
            self.act_delete: "delete",
            self.act_refresh: "refresh",
            self.act_settings: "settings",
            self.act_theme: "toggleTheme",
            self.act_mode_edit: "editMode",
            self.act_mode_preview: "previewMode",
            self.act_mode_split: "splitMode",
            self.act_upload: "upload",
            self.act_copy: "copyPath",
            self.act_rename: "rename",
            self.act_delete_asset: "delete",
        }

    def _build_toolbar(self) -> None:
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        for a in (self.act_new, self.act_save, self.act_delete, self.act_refresh):
            tb.addAction(a)
        tb.addSeparator()
        for a in (self.act_mode_edit, self.act_mode_split, self.act_mode_preview):
            tb.addAction(a)
        tb.addSeparator()
        for a in (self.act_upload, self.act_copy, self.act_rename, self.act_delete_asset):
            tb.addAction(a)
        tb.addSeparator()
        tb.addAction(self.act_theme)
        tb.addAction(self.act_settings)
        self.addToolBar(tb)
        self.addAction(self.exit_action)

    def _retranslate(self) -> None:
        t = self.presenter.t
        for action, key in self._labels.items():
            action.setText(t(key))
        self.sidebar.setTabText(0, t("posts"))
        self.sidebar.setTabText(1, t("assets"))
        self.search.setPlaceholderText(t("search"))
        self.editor.setPlaceholderText(t("noPostSelected"))

    # ---------- Loading ----------
    def reload(self) -> None:
        configured = self.presenter.load()
        self._retranslate()
        self._refresh_post_list()
        self._refresh_asset_tree()
        self._show_active()
        if not configured:
            self.statusBar().showMessage(self.presenter.t("configureFirst"))

    def _refresh_post_list(self) -> None:
        self.post_list.clear()
        active = self.presenter.active
        for post in self.presenter.filtered_posts(self.search.text()):
            marker = " •" if post.is_dirty else ""
            item = QListWidgetItem(f"{post.title}{marker}\n{post.filename}")
            item.setData(_DATA_ROLE, post.filename)
            self.post_list.addItem(item)
            if active is not None and post.filename == active.filename:
                self.post_list.setCurrentItem(item)

    def _refresh_asset_tree(self) -> None:
        self.asset_tree.clear()
        for folder, assets in self.presenter.assets_by_folder().items():
            parent = QTreeWidgetItem([folder])
            for asset in assets:
                child = QTreeWidgetItem([asset.name])
                child.setData(0, _DATA_ROLE, asset)
                child.setToolTip(0, asset.path)
                parent.addChild(child)
            self.asset_tree.addTopLevelItem(parent)

    def _show_active(self) -> None:
        post = self.presenter.active
        self._loading = True
        try:
            text = post.content if post else ""
            if self.editor.toPlainText() != text:
                self.editor.setPlainText(text)
            self.editor.setReadOnly(post is None)
        finally:
            self._loading = False
        self.set_preview_html(self.presenter.render_active())
        self._update_title()

    # ---------- Preview ----------
    def set_preview_html(self, html: str) -> None:
        if self.base_url and not isinstance(self.preview, QTextBrowser):
            # QWebEngineView: resolve /api/image/* against the local server
            self.preview.setHtml(html, QUrl(self.base_url))
        else:
            self.preview.setHtml(html)

    # ---------- Actions ----------
    def _on_post_clicked(self, item: QListWidgetItem) -> None:
        filename = item.data(_DATA_ROLE)
        if self.presenter.select_post(filename) is not None:
            self.ui_state.set_last_post(filename)
            self._show_active()
        self._refresh_post_list()

    def select_post(self, filename: str) -> None:
        if self.presenter.select_post(filename) is not None:
            self._show_active()
            self._refresh_post_list()

    def _on_text_changed(self) -> None:
        if self._loading or self.presenter.active is None:
            return
        was_dirty = self.presenter.active.is_dirty
        self.set_preview_html(self.presenter.change_content(self.editor.toPlainText()))
        if not was_dirty:
            self._refresh_post_list()
        self._update_title()

    def _new_post(self) -> None:
        if self.presenter.create_post() is not None:
            self._refresh_post_list()
            self._show_active()

    def _save(self) -> None:
        if self.presenter.save():
            self.statusBar().showMessage(self.presenter.t("saved"), 3000)
            self._refresh_post_list()
            self._update_title()

    def _delete_post(self) -> None:
        post = self.presenter.active
        if post is not None and self.presenter.delete_post(post.filename):
            self._refresh_post_list()
            self._show_active()

    def _set_mode(self, mode: ViewMode) -> None:
        self.presenter.set_view_mode(mode)
        self.editor.setVisible(mode is not ViewMode.PREVIEW)
        self.preview.setVisible(mode is not ViewMode.EDIT)
        self.act_mode_edit.setChecked(mode is ViewMode.EDIT)
        self.act_mode_preview.setChecked(mode is ViewMode.PREVIEW)
        self.act_mode_split.setChecked(mode is ViewMode.SPLIT)

    def _toggle_theme(self) -> None:
        if self.presenter.toggle_theme():
            self.reload()

    def open_settings(self) -> None:
        dlg = SettingsDialog(self.presenter.settings, self)
        if dlg.exec() and self.presenter.save_settings(dlg.get_settings()):
            self.reload()

    def _selected_asset(self) -> Asset | None:
        item = self.asset_tree.currentItem()
        data = item.data(0, _DATA_ROLE) if item is not None else None
        return data if isinstance(data, Asset) else None

    def _upload_asset(self) -> None:
        t = self.presenter.t
        path_str, _ = QFileDialog.getOpenFileName(
            self, t("upload"), "", "Images (*.png *.jpg *.jpeg *.gif *.webp *.svg)"
        )
        if not path_str:
            return
        current = self._selected_asset()
        folder, ok = QInputDialog.getText(
            self, t("upload"), t("uploadFolder"), text=current.folder if current else ""
        )
        if not ok:
            return
        path = Path(path_str)
        try:
            data = path.read_bytes()
        except OSError as e:
            self.presenter.messages.error(self, t("uploadFailed"), str(e))
            return
        if self.presenter.upload_asset(folder.strip(), path.name, data) is not None:
            self._refresh_asset_tree()

    def _copy_asset_snippet(self) -> None:
        asset = self._selected_asset()
        if asset is None:
            return
        QApplication.clipboard().setText(self.presenter.asset_snippet(asset))
        self.statusBar().showMessage(self.presenter.t("copied"), 2000)

    def _rename_asset(self) -> None:
        asset = self._selected_asset()
        if asset is None:
            return
        t = self.presenter.t
        new_name, ok = QInputDialog.getText(self, t("rename"), t("renamePrompt"), text=asset.name)
        if ok and new_name.strip() and new_name.strip() != asset.name:
            if self.presenter.rename_asset(asset, new_name.strip()):
                self._refresh_asset_tree()

    def _delete_asset(self) -> None:
        asset = self._selected_asset()
        if asset is not None and self.presenter.delete_asset(asset):
            self._refresh_asset_tree()

    def _on_splitter_moved(self, *_args) -> None:
        sizes = self.splitter.sizes()
        if sizes:
            self.ui_state.set_sidebar_width(sizes[0])

    def _update_title(self) -> None:
        post = self.presenter.active
        name = post.filename if post else self.app_title
        star = " •" if post is not None and post.is_dirty else ""
        self.setWindowTitle(f"{name}{star} — {self.app_title}")

    # ---------- Close ----------
    def closeEvent(self, event):
        if self.presenter.has_unsaved_changes():
            t = self.presenter.t
            if not self.presenter.messages.ask(
                self, t("save"), f"{t('unsaved')}?", Question.DISCARD_CHANGES
            ):
                event.ignore()
                return
        self.ui_state.set_geometry(bytes(self.saveGeometry()))
        self.ui_state.set_splitter(bytes(self.splitter.saveState()))
        super().closeEvent(event)
