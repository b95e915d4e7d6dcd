from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from hexoed.api.server import create_app  # noqa: E402
from hexoed.domain.models import AppSettings  # noqa: E402
from hexoed.services.asset_store import AssetStore  # noqa: E402
from hexoed.services.file_service import FileService  # noqa: E402
from hexoed.services.front_matter import FrontMatterCodec  # noqa: E402
from hexoed.services.image_paths import ImagePathResolver  # noqa: E402
from hexoed.services.markdown_renderer import MarkdownRenderer  # noqa: E402
from hexoed.services.post_store import PostStore  # noqa: E402
from hexoed.services.settings_service import SettingsService  # noqa: E402
from hexoed.services.ui.ports.messages import IMessageService, Question  # noqa: E402
from hexoed.services.ui.presenters.editor_presenter import EditorPresenter  # noqa: E402
from hexoed.services.ui_state_service import UiStateService  # noqa: E402

FIXED_NOW = datetime(2024, 5, 1, 4, 30, 0, tzinfo=timezone.utc)


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt widgets."""
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        if created:
            app.quit()


class FakeTrashFileService(FileService):
    """FileService whose trash is a folder under tmp_path (no OS trash in tests)."""

    def __init__(self, trash_dir: Path) -> None:
        self.trash_dir = trash_dir
        self.trashed: list[Path] = []

    def move_to_trash(self, path: Path) -> None:
        if not path.exists():
            raise FileNotFoundError(str(path))
        self.trash_dir.mkdir(parents=True, exist_ok=True)
        path.rename(self.trash_dir / path.name)
        self.trashed.append(path)


# --- Workspace fixtures ---


@pytest.fixture()
def posts_dir(tmp_path: Path) -> Path:
    d = tmp_path / "source" / "_posts"
    d.mkdir(parents=True)
    return d


@pytest.fixture()
def images_dir(tmp_path: Path) -> Path:
    d = tmp_path / "source" / "img"
    d.mkdir(parents=True)
    return d


@pytest.fixture()
def file_service(tmp_path: Path) -> FakeTrashFileService:
    return FakeTrashFileService(tmp_path / ".trash")


@pytest.fixture()
def settings_service(tmp_path: Path, file_service: FileService) -> SettingsService:
    return SettingsService(tmp_path / "config" / "settings.json", file_service)


@pytest.fixture()
def configured(settings_service: SettingsService, posts_dir: Path, images_dir: Path) -> AppSettings:
    s = AppSettings(posts_path=str(posts_dir), images_path=str(images_dir), language="en")
    settings_service.save(s)
    return s


@pytest.fixture()
def codec() -> FrontMatterCodec:
    return FrontMatterCodec(clock=lambda: FIXED_NOW)


@pytest.fixture()
def resolver() -> ImagePathResolver:
    return ImagePathResolver()


@pytest.fixture()
def renderer(codec: FrontMatterCodec, resolver: ImagePathResolver) -> MarkdownRenderer:
    return MarkdownRenderer(resolver=resolver, codec=codec)


@pytest.fixture()
def post_store(settings_service, file_service, codec) -> PostStore:
    return PostStore(settings_service, file_service, codec)


@pytest.fixture()
def asset_store(settings_service, file_service, resolver) -> AssetStore:
    return AssetStore(settings_service, file_service, resolver)


@pytest.fixture()
def api_client(settings_service, post_store, asset_store, file_service):
    app = create_app(
        settings=settings_service, posts=post_store, assets=asset_store, files=file_service
    )
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture()
def qsettings(tmp_path: Path) -> QSettings:
    # INI file so we never touch the system registry / platform stores
    s = QSettings(str(tmp_path / "ui.ini"), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def ui_state(qsettings: QSettings) -> UiStateService:
    return UiStateService(qsettings)


def write(p: Path, text: str) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


class FakeMessages(IMessageService):
    """Records every dialog request; `ask` answers with `answer`."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.calls: list[tuple[str, str, str]] = []
        self.kinds: list[Question] = []

    def info(self, parent, title: str, text: str) -> None:
        self.calls.append(("info", title, text))

    def warning(self, parent, title: str, text: str) -> None:
        self.calls.append(("warning", title, text))

    def error(self, parent, title: str, text: str) -> None:
        self.calls.append(("error", title, text))

    def ask(self, parent, title: str, text: str, kind: Question) -> bool:
        self.calls.append(("ask", title, text))
        self.kinds.append(kind)
        return self.answer


@pytest.fixture()
def messages() -> FakeMessages:
    return FakeMessages()


@pytest.fixture()
def presenter(settings_service, post_store, asset_store, renderer, codec, resolver, messages):
    return EditorPresenter(
        settings=settings_service,
        posts=post_store,
        assets=asset_store,
        renderer=renderer,
        messages=messages,
        codec=codec,
        resolver=resolver,
    )
