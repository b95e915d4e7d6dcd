"""Domain layer: interfaces, errors and simple models (dataclasses)."""

from .errors import (
    HexoEditorError,
    InvalidNameError,
    NotFoundError,
    PathNotConfiguredError,
    StorageError,
    UnsafePathError,
)
from .interfaces import (
    IAssetStore,
    IFileService,
    IFrontMatterCodec,
    IImagePathResolver,
    IMarkdownRenderer,
    IPostStore,
    ISettingsService,
    IUiStateService,
)
from .models import ApiResponse, AppSettings, Asset, Post, RenderConfig, ViewMode

__all__ = [
    "IMarkdownRenderer",
    "IImagePathResolver",
    "IFrontMatterCodec",
    "IFileService",
    "ISettingsService",
    "IUiStateService",
    "IPostStore",
    "IAssetStore",
    "HexoEditorError",
    "InvalidNameError",
    "NotFoundError",
    "PathNotConfiguredError",
    "StorageError",
    "UnsafePathError",
    "ApiResponse",
    "AppSettings",
    "Asset",
    "Post",
    "RenderConfig",
    "ViewMode",
]
