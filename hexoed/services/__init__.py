"""Concrete service implementations."""

from .asset_store import AssetStore
from .file_service import FileService
from .front_matter import FrontMatterCodec
from .html_sanitizer import HtmlSanitizer
from .image_paths import ImagePathResolver
from .markdown_renderer import MarkdownRenderer
from .post_store import PostStore
from .settings_service import SettingsService
from .ui_state_service import UiStateService

__all__ = [
    "AssetStore",
    "FileService",
    "FrontMatterCodec",
    "HtmlSanitizer",
    "ImagePathResolver",
    "MarkdownRenderer",
    "PostStore",
    "SettingsService",
    "UiStateService",
]
