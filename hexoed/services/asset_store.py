from __future__ import annotations

import logging
import os
from pathlib import Path

from hexoed.domain.errors import (
    InvalidNameError,
    NotFoundError,
    PathNotConfiguredError,
    StorageError,
    UnsafePathError,
)
from hexoed.domain.interfaces import IAssetStore, IFileService, ISettingsService
from hexoed.domain.models import Asset
from hexoed.services.image_paths import ROOT_FOLDER, ImagePathResolver
from hexoed.utils.constants import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)


def _is_image(name: str) -> bool:
    return name.lower().endswith(IMAGE_EXTENSIONS)


def _folder_parts(folder: str) -> list[str]:
    """Relative folder -> path parts; "root"/"" is the image root itself."""
    if not folder or folder == ROOT_FOLDER:
        return []
    if ".." in folder:
        raise UnsafePathError(f"Folder escapes the image root: {folder!r}")
    return [p for p in folder.replace("\\", "/").split("/") if p]


def _check_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidNameError("Missing file name")
    if "/" in name or "\\" in name or ".." in name:
        raise UnsafePathError(f"Invalid file name: {name!r}")
    return name


class AssetStore(IAssetStore):
    """
    Image files under the configured image root, grouped by sub folder.

    Every Asset's `url` is produced by ImagePathResolver from its authoring
    `path`, so what the sidebar shows is exactly what the preview fetches.
    """

    def __init__(
        self,
        settings: ISettingsService,
        files: IFileService,
        resolver: ImagePathResolver | None = None,
    ) -> None:
        self._settings = settings
        self._files = files
        self.resolver = resolver or ImagePathResolver()

    def _root(self) -> Path | None:
        images_path = self._settings.load().images_path
        return Path(images_path) if images_path else None

    def _require_root(self) -> Path:
        root = self._root()
        if root is None:
            raise PathNotConfiguredError("Images path not set")
        return root

    def make_asset(self, folder: str, name: str) -> Asset:
        folder = folder or ROOT_FOLDER
        path = self.resolver.asset_path(folder, name)
        return Asset(path=path, name=name, folder=folder, url=self.resolver.resolve(path))

    # -------------------- queries --------------------

    def list_assets(self) -> list[Asset]:
        root = self._root()
        if root is None:
            return []
        assets: list[Asset] = []
        self._scan(root, "", assets)
        assets.sort(key=lambda a: (a.folder != ROOT_FOLDER, a.folder, a.name))
        return assets

    def _scan(self, directory: Path, relative: str, out: list[Asset]) -> None:
        try:
            entries = list(os.scandir(directory))
        except OSError as e:
            logger.debug("Skipping unreadable folder %s: %s", directory, e)
            return
        for entry in entries:
            if entry.is_dir():
                nxt = f"{relative}/{entry.name}" if relative else entry.name
                self._scan(Path(entry.path), nxt, out)
            elif entry.is_file() and _is_image(entry.name):
                out.append(self.make_asset(relative or ROOT_FOLDER, entry.name))

    def image_file(self, rel_path: str) -> Path:
        root = self._root()
        if root is None:
            raise NotFoundError("Not found")
        if ".." in rel_path:
            raise UnsafePathError("Forbidden")
        full = root.joinpath(*[p for p in rel_path.replace("\\", "/").split("/") if p])
        if not full.is_file():
            raise NotFoundError("Image not found")
        return full

    # -------------------- commands --------------------

    def upload(self, folder: str, filename: str, data: bytes) -> Asset:
        root = self._require_root()
        parts = _folder_parts(folder)
        name = _check_name(filename)
        dest = root.joinpath(*parts)
        try:
            dest.mkdir(parents=True, exist_ok=True)
            self._files.write_bytes_atomic(dest / name, data)
        except OSError as e:
            raise StorageError(str(e)) from e
        logger.info("Uploaded %s to %s", name, dest)
        return self.make_asset("/".join(parts) or ROOT_FOLDER, name)

    def rename(self, folder: str, old_name: str, new_name: str) -> None:
        root = self._require_root()
        if not old_name or not new_name:
            raise InvalidNameError("Missing parameters")
        base = root.joinpath(*_folder_parts(folder))
        src = base / _check_name(old_name)
        dst = base / _check_name(new_name)
        if not src.exists():
            raise NotFoundError(f"Asset not found: {old_name}")
        if dst.exists():
            raise StorageError(f"Target already exists: {new_name}")
        try:
            src.rename(dst)
        except OSError as e:
            raise StorageError(str(e)) from e

    def delete(self, folder: str, name: str) -> None:
        root = self._require_root()
        if not name:
            raise InvalidNameError("Missing name")
        full = root.joinpath(*_folder_parts(folder)) / _check_name(name)
        try:
            self._files.move_to_trash(full)
        except FileNotFoundError as e:
            raise NotFoundError(f"Asset not found: {name}") from e
        except OSError as e:
            raise StorageError(f"Failed to move to trash: {e}") from e
