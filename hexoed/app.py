from __future__ import annotations

import logging
from collections.abc import Sequence

from PyQt6.QtWidgets import QApplication, QWidget

from hexoed.di.container import Container
from hexoed.services.config.app_config import build_app_config
from hexoed.utils.constants import APP_NAME, APP_ORG
from hexoed.utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def _web_preview_factory():
    """
    QWebEngineView renders the preview with the full CSS and fetches images from
    the local API. It must be imported before QApplication exists; when Qt
    WebEngine is not installed the window falls back to QTextBrowser.
    """
    try:
        from PyQt6.QtWebEngineWidgets import QWebEngineView
    except ImportError as e:
        logger.warning("Qt WebEngine unavailable (%s); using QTextBrowser preview", e)
        return None

    def factory(parent: QWidget) -> QWidget:
        return QWebEngineView(parent)

    return factory


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps logging and Qt, starts the local API server, composes the
    application via the DI container and launches the main window.
    """
    config = build_app_config()
    configure_logging(config.log_level)
    if config.loaded_from:
        logger.info("Config loaded from %s", config.loaded_from)

    preview_factory = _web_preview_factory()

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container(config)
    server = container.build_api_server()
    try:
        server.start()
    except OSError as e:
        # Degraded mode: editing works, image preview does not.
        logger.error("Cannot start API server on %s: %s", server.base_url, e)

    win = container.build_main_window(
        preview_factory=preview_factory,
        base_url=server.base_url if server.running else None,
    )
    win.reload()
    if not server.running:
        win.statusBar().showMessage(win.presenter.t("serverOffline"))
    win.show()

    last = container.ui_state.get_last_post()
    if last:
        win.select_post(last)
    if win.presenter.needs_settings:
        win.open_settings()

    try:
        return app.exec()
    finally:
        server.stop()
