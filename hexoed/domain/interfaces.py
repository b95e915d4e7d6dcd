from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from hexoed.domain.models import AppSettings, Asset, FrontMatterMap, Post


class IMarkdownRenderer(Protocol):
    """Convert post content to sanitized HTML. Must never raise."""

    def to_html(self, markdown_text: str) -> str: ...
    def render_body(self, markdown_text: str) -> str: ...


class IImagePathResolver(Protocol):
    """Map an authored image reference to the path the preview fetches from."""

    def resolve(self, ref: str) -> str: ...


class IFrontMatterCodec(Protocol):
    def parse(self, full_content: str, filename: str = "") -> tuple[FrontMatterMap, str]: ...
    def strip(self, full_content: str) -> str: ...
    def to_post(self, filename: str, content: str, *, is_dirty: bool = False) -> Post: ...


class IFileService(Protocol):
    """Read/write files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...
    def write_bytes_atomic(self, path: Path, data: bytes) -> None: ...
    def move_to_trash(self, path: Path) -> None: ...
    def list_dirs(self, path: Path) -> list[str]: ...


class ISettingsService(Protocol):
    """Persist the user-facing application settings."""

    def load(self) -> AppSettings: ...
    def save(self, settings: AppSettings) -> None: ...


class IUiStateService(Protocol):
    """Persist lightweight window state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_splitter(self) -> bytes | None: ...
    def set_splitter(self, blob: bytes) -> None: ...
    def get_sidebar_width(self) -> int: ...
    def set_sidebar_width(self, width: int) -> None: ...
    def get_last_post(self) -> str | None: ...
    def set_last_post(self, filename: str) -> None: ...


class IPostStore(ABC):
    @abstractmethod
    def list_posts(self) -> list[Post]:
        raise NotImplementedError

    @abstractmethod
    def save(self, filename: str, content: str) -> Post:
        raise NotImplementedError

    @abstractmethod
    def delete(self, filename: str) -> None:
        raise NotImplementedError


class IAssetStore(ABC):
    @abstractmethod
    def list_assets(self) -> list[Asset]:
        raise NotImplementedError

    @abstractmethod
    def upload(self, folder: str, filename: str, data: bytes) -> Asset:
        raise NotImplementedError

    @abstractmethod
    def rename(self, folder: str, old_name: str, new_name: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, folder: str, name: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def image_file(self, rel_path: str) -> Path:
        raise NotImplementedError


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
