from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar, Union

FrontMatterValue = Union[str, list[str]]
FrontMatterMap = dict[str, FrontMatterValue]

LANGUAGES = ("zh", "en")
THEMES = ("light", "dark")

T = TypeVar("T")


class ViewMode(Enum):
    EDIT = "EDIT"
    PREVIEW = "PREVIEW"
    SPLIT = "SPLIT"


@dataclass
class Post:
    """
    A blog post as held by the editor.

    `content` is authoritative; `front_matter` and `raw_body` are derived from it
    and must be rebuilt (see FrontMatterCodec.to_post) whenever it changes.
    """

    filename: str
    content: str
    front_matter: FrontMatterMap = field(default_factory=dict)
    raw_body: str = ""
    is_dirty: bool = False

    @property
    def title(self) -> str:
        t = self.front_matter.get("title", "")
        return t if isinstance(t, str) else ", ".join(t)

    @property
    def stem(self) -> str:
        return self.filename[:-3] if self.filename.lower().endswith(".md") else self.filename


@dataclass(frozen=True)
class Asset:
    path: str  # authoring path, e.g. "/img/18/1.jpg"
    name: str  # "1.jpg"
    folder: str  # "18" or "root"
    url: str  # preview path, e.g. "/api/image/18/1.jpg"

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "name": self.name, "folder": self.folder, "url": self.url}


@dataclass(frozen=True)
class AppSettings:
    posts_path: str = ""
    images_path: str = ""
    language: str = "zh"
    theme: str = "dark"

    @classmethod
    def from_dict(cls, data: Any) -> AppSettings:
        """Build settings from the persisted camelCase mapping, defaulting bad fields."""
        if not isinstance(data, dict):
            return cls()
        default = cls()
        posts = data.get("postsPath")
        images = data.get("imagesPath")
        lang = data.get("language")
        theme = data.get("theme")
        return cls(
            posts_path=posts if isinstance(posts, str) else default.posts_path,
            images_path=images if isinstance(images, str) else default.images_path,
            language=lang if lang in LANGUAGES else default.language,
            theme=theme if theme in THEMES else default.theme,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "postsPath": self.posts_path,
            "imagesPath": self.images_path,
            "language": self.language,
            "theme": self.theme,
        }

    def with_changes(self, **changes: Any) -> AppSettings:
        return replace(self, **changes)


@dataclass(frozen=True)
class RenderConfig:
    """Static configuration handed to the renderer on every call."""

    theme: str = "dark"
    image_prefix: str = "/api/image/"
    link_target: str = "_blank"
    link_rel: str = "noopener noreferrer"


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> ApiResponse[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> ApiResponse[T]:
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """JSON body; `data` and `error` appear only when set."""
        body: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            body["data"] = self.data
        if self.error is not None:
            body["error"] = self.error
        return body
