from __future__ import annotations

import re

from hexoed.domain.interfaces import IImagePathResolver

API_IMAGE_PREFIX = "/api/image/"
AUTHORING_IMAGE_ROOT = "/img/"
ROOT_FOLDER = "root"

_EXTERNAL_PREFIXES = ("http", "//", "data:")
# First path segment literally named img/images, followed by a non-empty remainder.
_ASSET_DIR_RE = re.compile(r"(?:^|[\\/])(?:img|images)[\\/](.+)", re.IGNORECASE | re.DOTALL)
_LEADING_RELATIVE_RE = re.compile(r"^(?:\.{1,2}[\\/])+")


class ImagePathResolver(IImagePathResolver):
    """
    Rewrites image references as authored in a Hexo source tree into the
    `/api/image/...` paths served by the local API.

    Rules are tried strictly in order:

      1. ``<...>`` is unwrapped
      2. ``/api/image/...`` and ``api/image/...`` are kept (one leading slash)
      3. ``http...``, ``//...`` and ``data:...`` pass through untouched
      4. the remainder after the first ``img``/``images`` segment is served
         (``../img/18/1.jpg`` -> ``/api/image/18/1.jpg``)
      5. anything else is served relative to the image root once leading
         ``./`` / ``../`` runs and one leading slash are dropped

    This is purely syntactic: ``..`` surviving normalization is not blocked
    here, the image endpoint rejects it.
    """

    def __init__(self, prefix: str = API_IMAGE_PREFIX) -> None:
        self.prefix = prefix if prefix.endswith("/") else prefix + "/"

    def resolve(self, ref: str) -> str:
        src = (ref or "").strip()
        if src.startswith("<") and src.endswith(">"):
            src = src[1:-1]

        bare_prefix = self.prefix.lstrip("/")
        if src.startswith(self.prefix) or src.startswith(bare_prefix):
            return "/" + src.lstrip("/")

        if src.startswith(_EXTERNAL_PREFIXES):
            return src

        m = _ASSET_DIR_RE.search(src)
        if m:
            return self.prefix + m.group(1).replace("\\", "/")

        normalized = _LEADING_RELATIVE_RE.sub("", src)
        if normalized.startswith(("/", "\\")):
            normalized = normalized[1:]
        return self.prefix + normalized.replace("\\", "/")

    # ---- asset helpers ----

    @staticmethod
    def asset_path(folder: str, name: str) -> str:
        """Authoring path of a stored image, Hexo style (``/img/<folder>/<name>``)."""
        if not folder or folder == ROOT_FOLDER:
            return f"{AUTHORING_IMAGE_ROOT}{name}"
        return f"{AUTHORING_IMAGE_ROOT}{folder.strip('/')}/{name}"

    def asset_url(self, folder: str, name: str) -> str:
        return self.resolve(self.asset_path(folder, name))

    @staticmethod
    def markdown_snippet(path: str) -> str:
        """Image markdown for an asset, relative to source/_posts."""
        rel = ".." + path if path.startswith("/") else path
        return f"![]({rel})"
