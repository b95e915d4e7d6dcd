from __future__ import annotations

import logging
from pathlib import Path

from hexoed.domain.errors import (
    InvalidNameError,
    NotFoundError,
    PathNotConfiguredError,
    StorageError,
)
from hexoed.domain.interfaces import IFileService, IPostStore, ISettingsService
from hexoed.domain.models import Post
from hexoed.services.front_matter import FrontMatterCodec

logger = logging.getLogger(__name__)


def validate_post_filename(filename: str) -> str:
    name = (filename or "").strip()
    if not name.endswith(".md") or len(name) <= 3:
        raise InvalidNameError(f"Post filename must end in .md: {filename!r}")
    if "/" in name or "\\" in name or ".." in name:
        raise InvalidNameError(f"Post filename must be a bare file name: {filename!r}")
    return name


class PostStore(IPostStore):
    """Markdown posts stored flat in the configured posts folder."""

    def __init__(
        self,
        settings: ISettingsService,
        files: IFileService,
        codec: FrontMatterCodec | None = None,
    ) -> None:
        self._settings = settings
        self._files = files
        self._codec = codec or FrontMatterCodec()

    def _root(self) -> Path | None:
        posts_path = self._settings.load().posts_path
        return Path(posts_path) if posts_path else None

    def _require_root(self) -> Path:
        root = self._root()
        if root is None:
            raise PathNotConfiguredError("Path not set")
        return root

    def list_posts(self) -> list[Post]:
        root = self._root()
        if root is None:
            return []
        try:
            names = sorted(p.name for p in root.iterdir() if p.name.endswith(".md"))
        except OSError as e:
            logger.warning("Cannot list posts in %s: %s", root, e)
            return []

        posts: list[Post] = []
        for name in names:
            try:
                content = self._files.read_text(root / name)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable post %s: %s", name, e)
                continue
            posts.append(self._codec.to_post(name, content))
        return posts

    def save(self, filename: str, content: str) -> Post:
        root = self._require_root()
        name = validate_post_filename(filename)
        try:
            self._files.write_text_atomic(root / name, content)
        except OSError as e:
            raise StorageError(str(e)) from e
        logger.info("Saved post %s", name)
        return self._codec.to_post(name, content)

    def delete(self, filename: str) -> None:
        root = self._require_root()
        name = validate_post_filename(filename)
        try:
            self._files.move_to_trash(root / name)
        except FileNotFoundError as e:
            raise NotFoundError(f"Post not found: {name}") from e
        except OSError as e:
            raise StorageError(f"Failed to move to trash: {e}") from e
