from __future__ import annotations

import functools
import logging
import re
from datetime import datetime
from typing import Any

from hexoed.domain.errors import HexoEditorError
from hexoed.domain.interfaces import IAssetStore, IPostStore, ISettingsService
from hexoed.domain.models import AppSettings, Asset, Post, ViewMode
from hexoed.services.front_matter import FrontMatterCodec
from hexoed.services.image_paths import ROOT_FOLDER, ImagePathResolver
from hexoed.services.markdown_renderer import MarkdownRenderer
from hexoed.services.ui.ports.messages import IMessageService, Question
from hexoed.utils.i18n import translate

logger = logging.getLogger(__name__)

_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(\d+(?:\.\d*)?|\.\d+)")
_DIGITS_RE = re.compile(r"(\d+)")
_NUMERIC_NAME_RE = re.compile(r"^\d+$")


def _timestamp(value: Any) -> float:
    """Front-matter date -> epoch seconds; 0 for anything unparseable."""
    if not isinstance(value, str) or not value.strip():
        return 0.0
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).timestamp()
    except (ValueError, OverflowError, OSError):
        return 0.0


def _leading_number(name: str) -> float | None:
    m = _LEADING_NUMBER_RE.match(name)
    return float(m.group(0)) if m else None


def _natural_key(name: str) -> list[Any]:
    return [(0, int(part), "") if part.isdigit() else (1, 0, part.lower())
            for part in _DIGITS_RE.split(name) if part]


def _compare_posts(a: Post, b: Post) -> int:
    # newest date first
    da, db = _timestamp(a.front_matter.get("date")), _timestamp(b.front_matter.get("date"))
    if da != db:
        return -1 if da > db else 1
    # then numeric file names, highest first (10.md before 2.md)
    na, nb = _leading_number(a.stem), _leading_number(b.stem)
    if na is not None and nb is not None and na != nb:
        return -1 if na > nb else 1
    # then natural order, descending
    ka, kb = _natural_key(a.stem), _natural_key(b.stem)
    if ka == kb:
        return 0
    return -1 if ka > kb else 1


def sort_posts(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=functools.cmp_to_key(_compare_posts))


class EditorPresenter:
    """
    Workspace state behind the main window: settings, posts, assets and the
    active post. Qt free; the view renders whatever this holds.

    Local state changes only after the store call succeeded, so the sidebar
    never shows something the disk does not have.
    """

    def __init__(
        self,
        *,
        settings: ISettingsService,
        posts: IPostStore,
        assets: IAssetStore,
        renderer: MarkdownRenderer,
        messages: IMessageService,
        codec: FrontMatterCodec | None = None,
        resolver: ImagePathResolver | None = None,
    ) -> None:
        self.settings_service = settings
        self.post_store = posts
        self.asset_store = assets
        self.renderer = renderer
        self.messages = messages
        self.codec = codec or FrontMatterCodec()
        self.resolver = resolver or ImagePathResolver()

        self.view_parent: Any | None = None
        self.settings = AppSettings()
        self.posts: list[Post] = []
        self.assets: list[Asset] = []
        self.active: Post | None = None
        self.view_mode = ViewMode.SPLIT
        self.needs_settings = False

    def t(self, key: str) -> str:
        return translate(self.settings.language, key)

    # -------------------- loading --------------------

    def load(self) -> bool:
        """
        (Re)load settings, posts and assets. False means the user must configure paths.

        Unsaved edits survive a reload of the same posts folder: a dirty post
        replaces its on-disk copy, and stays listed even if the file vanished.
        """
        previous_root = self.settings.posts_path
        self.settings = self.settings_service.load()
        self.renderer = self.renderer.with_theme(self.settings.theme)
        if not self.settings.posts_path:
            self.posts, self.assets, self.active = [], [], None
            self.needs_settings = True
            return False

        self.needs_settings = False
        dirty: dict[str, Post] = {}
        if previous_root == self.settings.posts_path:
            dirty = {p.filename: p for p in self.posts if p.is_dirty}
        merged = [dirty.pop(p.filename, p) for p in self.post_store.list_posts()]
        self.posts = sort_posts(merged + list(dirty.values()))
        self.assets = self.asset_store.list_assets()
        if self.active is not None:
            self.active = self._find(self.active.filename)
        logger.info("Loaded %d posts and %d assets", len(self.posts), len(self.assets))
        return True

    def has_unsaved_changes(self) -> bool:
        return any(p.is_dirty for p in self.posts)

    def filtered_posts(self, term: str = "") -> list[Post]:
        needle = term.strip().lower()
        if not needle:
            return list(self.posts)
        return [p for p in self.posts if needle in p.title.lower() or needle in p.filename.lower()]

    def assets_by_folder(self) -> dict[str, list[Asset]]:
        groups: dict[str, list[Asset]] = {}
        for asset in self.assets:
            groups.setdefault(asset.folder, []).append(asset)
        return groups

    # -------------------- posts --------------------

    def next_post_id(self) -> int:
        numeric = [int(p.stem) for p in self.posts if _NUMERIC_NAME_RE.match(p.stem)]
        if numeric:
            return max(numeric) + 1
        return len(self.posts) + 1

    def create_post(self) -> Post | None:
        title = str(self.next_post_id())
        filename = f"{title}.md"
        if self._find(filename) is not None:
            self.messages.warning(self.view_parent, self.t("newPost"), self.t("fileExist"))
            return None
        try:
            post = self.post_store.save(filename, self.codec.new_post_content(title))
        except HexoEditorError as e:
            self.messages.error(self.view_parent, self.t("newPost"), str(e))
            return None
        self.posts.insert(0, post)
        self.active = post
        return post

    def select_post(self, filename: str) -> Post | None:
        current = self.active
        if current is not None and current.is_dirty and current.filename != filename:
            if not self.messages.ask(
                self.view_parent, self.t("save"), f"{self.t('unsaved')}?", Question.DISCARD_CHANGES
            ):
                return None
        post = self._find(filename)
        if post is not None:
            self.active = post
        return post

    def change_content(self, content: str) -> str:
        """Rebuild the active post from `content` (front matter recomputed, not merged)."""
        if self.active is None:
            return self.render_active()
        updated = self.codec.to_post(self.active.filename, content, is_dirty=True)
        self._replace(updated)
        self.active = updated
        return self.render_active()

    def render_active(self) -> str:
        return self.renderer.to_html(self.active.content if self.active else "")

    def save(self) -> bool:
        post = self.active
        if post is None or not post.is_dirty:
            return False
        try:
            saved = self.post_store.save(post.filename, post.content)
        except HexoEditorError as e:
            logger.warning("Saving %s failed: %s", post.filename, e)
            self.messages.error(self.view_parent, self.t("saveFailed"), str(e))
            return False
        self._replace(saved)
        self.active = saved
        return True

    def delete_post(self, filename: str) -> bool:
        if not self._confirm_trash():
            return False
        try:
            self.post_store.delete(filename)
        except HexoEditorError as e:
            self.messages.error(self.view_parent, self.t("deleteFailed"), str(e))
            return False
        self.posts = [p for p in self.posts if p.filename != filename]
        if self.active is not None and self.active.filename == filename:
            self.active = None
        return True

    # -------------------- assets --------------------

    def upload_asset(self, folder: str, filename: str, data: bytes) -> Asset | None:
        try:
            asset = self.asset_store.upload(folder or ROOT_FOLDER, filename, data)
        except HexoEditorError as e:
            self.messages.error(self.view_parent, self.t("uploadFailed"), str(e))
            return None
        self.assets.insert(0, asset)
        return asset

    def rename_asset(self, asset: Asset, new_name: str) -> bool:
        try:
            self.asset_store.rename(asset.folder, asset.name, new_name)
        except HexoEditorError as e:
            self.messages.error(self.view_parent, self.t("renameFailed"), str(e))
            return False
        self.assets = self.asset_store.list_assets()
        return True

    def delete_asset(self, asset: Asset) -> bool:
        if not self._confirm_trash():
            return False
        try:
            self.asset_store.delete(asset.folder, asset.name)
        except HexoEditorError as e:
            self.messages.error(self.view_parent, self.t("deleteFailed"), str(e))
            return False
        self.assets = [
            a for a in self.assets if not (a.folder == asset.folder and a.name == asset.name)
        ]
        return True

    def asset_snippet(self, asset: Asset) -> str:
        return self.resolver.markdown_snippet(asset.path)

    # -------------------- settings --------------------

    def save_settings(self, settings: AppSettings) -> bool:
        moving = settings.posts_path != self.settings.posts_path
        if moving and self.has_unsaved_changes():
            # unsaved posts belong to the old folder
            if not self.messages.ask(
                self.view_parent, self.t("settings"), f"{self.t('unsaved')}?",
                Question.DISCARD_CHANGES,
            ):
                return False
        try:
            self.settings_service.save(settings)
        except OSError as e:
            self.messages.error(self.view_parent, self.t("settings"), str(e))
            return False
        self.load()
        return True

    def toggle_theme(self) -> bool:
        theme = "light" if self.settings.theme == "dark" else "dark"
        return self.save_settings(self.settings.with_changes(theme=theme))

    def set_view_mode(self, mode: ViewMode) -> None:
        self.view_mode = mode

    # -------------------- internals --------------------

    def _confirm_trash(self) -> bool:
        return self.messages.ask(
            self.view_parent, self.t("delete"), self.t("deleteConfirm"), Question.MOVE_TO_TRASH
        )

    def _find(self, filename: str) -> Post | None:
        return next((p for p in self.posts if p.filename == filename), None)

    def _replace(self, post: Post) -> None:
        self.posts = [post if p.filename == post.filename else p for p in self.posts]
