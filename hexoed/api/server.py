from __future__ import annotations

import logging
import threading

from flask import Flask
from flask_cors import CORS
from werkzeug.serving import BaseWSGIServer, make_server

from hexoed.api.routes import ApiServices, api_bp
from hexoed.domain.interfaces import IAssetStore, IFileService, IPostStore, ISettingsService
from hexoed.utils.constants import APP_NAME

logger = logging.getLogger(__name__)


def create_app(
    *,
    settings: ISettingsService,
    posts: IPostStore,
    assets: IAssetStore,
    files: IFileService,
) -> Flask:
    """Flask app exposing the stores under /api (posts, assets, settings, image preview)."""
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 50 * 1024 * 1024
    app.json.sort_keys = False
    CORS(app)

    app.extensions["hexoed"] = ApiServices(
        settings=settings, posts=posts, assets=assets, files=files
    )
    app.register_blueprint(api_bp)

    @app.get("/")
    def index():
        return f"{APP_NAME} backend running", 200, {"Content-Type": "text/plain; charset=utf-8"}

    return app


class ApiServer:
    """Runs the Flask app on a background werkzeug server so the preview can load images."""

    def __init__(self, app: Flask, host: str, port: int) -> None:
        self.app = app
        self.host = host
        self.port = port
        self._server: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}/"

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Bind and serve. Raises OSError when the port is unavailable."""
        if self.running:
            return
        self._server = make_server(self.host, self.port, self.app, threaded=True)
        self.port = self._server.server_port
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="hexoed-api", daemon=True
        )
        self._thread.start()
        logger.info("API server listening on %s", self.base_url)

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
        logger.info("API server stopped")
