from __future__ import annotations

from pathlib import Path

from flask import Flask
from PyQt6.QtCore import QSettings

from hexoed.api.server import ApiServer, create_app
from hexoed.domain.interfaces import IFileService, ISettingsService, IUiStateService
from hexoed.domain.models import RenderConfig
from hexoed.services.asset_store import AssetStore
from hexoed.services.config.app_config import AppConfig, build_app_config
from hexoed.services.file_service import FileService
from hexoed.services.front_matter import FrontMatterCodec
from hexoed.services.image_paths import ImagePathResolver
from hexoed.services.markdown_renderer import MarkdownRenderer
from hexoed.services.post_store import PostStore
from hexoed.services.settings_service import SettingsService
from hexoed.services.ui.adapters.qt_messages import QtMessageService
from hexoed.services.ui.main_window import MainWindow, text_browser_preview
from hexoed.services.ui.ports.messages import IMessageService
from hexoed.services.ui.presenters.editor_presenter import EditorPresenter
from hexoed.services.ui_state_service import UiStateService
from hexoed.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - wires default services if not provided
      - builds the Flask API and its background server
      - builds the presenter and the Qt main window on demand
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        ui_state: IUiStateService | None = None,
        qsettings: QSettings | None = None,
        messages: IMessageService | None = None,
        settings_path: Path | None = None,
    ) -> None:
        self.config = config or build_app_config()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            settings_path or self.config.settings_file, self.file_service
        )
        self.ui_state: IUiStateService = ui_state or UiStateService(
            qsettings or QSettings(APP_ORG, APP_NAME)
        )

        self.codec = FrontMatterCodec()
        self.resolver = ImagePathResolver()
        self.renderer = MarkdownRenderer(
            RenderConfig(theme=self.settings_service.load().theme),
            resolver=self.resolver,
            codec=self.codec,
        )
        self.post_store = PostStore(self.settings_service, self.file_service, self.codec)
        self.asset_store = AssetStore(self.settings_service, self.file_service, self.resolver)

        self.messages = messages
        if self.messages is None:
            self.messages = QtMessageService()

    # ---------- API ----------

    def build_api_app(self) -> Flask:
        return create_app(
            settings=self.settings_service,
            posts=self.post_store,
            assets=self.asset_store,
            files=self.file_service,
        )

    def build_api_server(self) -> ApiServer:
        return ApiServer(self.build_api_app(), self.config.server_host, self.config.server_port)

    # ---------- UI factories ----------

    def build_presenter(self) -> EditorPresenter:
        return EditorPresenter(
            settings=self.settings_service,
            posts=self.post_store,
            assets=self.asset_store,
            renderer=self.renderer,
            messages=self.messages,
            codec=self.codec,
            resolver=self.resolver,
        )

    def build_main_window(self, *, preview_factory=None, base_url: str | None = None) -> MainWindow:
        return MainWindow(
            self.build_presenter(),
            self.ui_state,
            preview_factory=preview_factory or text_browser_preview,
            base_url=base_url,
            app_title=APP_NAME,
        )
