from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from hexoed.domain.interfaces import IFrontMatterCodec
from hexoed.domain.models import FrontMatterMap, FrontMatterValue, Post

# Leading "---" line, key/value lines, closing "---" line and its newline.
_FRONT_MATTER_RE = re.compile(r"\A---\r?\n(?:([\s\S]*?)\r?\n)?---\r?\n")
_MD_SUFFIX_RE = re.compile(r"\.md$", re.IGNORECASE)

# Hexo stores post dates as Beijing wall-clock time.
_POST_TZ = timezone(timedelta(hours=8))

NEW_POST_TEMPLATE = """---
title: {title}
date: {date}
cover: /img/{title}/1.jpg

#标签
tags:
  - note

#分类
categories:
  - Daily
abbrlink:
---

"""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FrontMatterCodec(IFrontMatterCodec):
    """
    Lenient parser for the `key: value` header block of a Hexo post.

    Only two value shapes are understood: plain strings and `[a, b]` inline lists.
    Lines without a colon (comments, YAML block-list items) are skipped, so a
    block list such as::

        tags:
          - note

    comes back as ``tags = ""``. The body is never touched.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock

    # -------------------- parsing --------------------

    def split(self, full_content: str) -> tuple[str | None, str]:
        """Return (raw header text or None, body)."""
        m = _FRONT_MATTER_RE.match(full_content)
        if not m:
            return None, full_content
        return m.group(1) or "", full_content[m.end():]

    def strip(self, full_content: str) -> str:
        return self.split(full_content)[1]

    def parse(self, full_content: str, filename: str = "") -> tuple[FrontMatterMap, str]:
        header, body = self.split(full_content)
        fm: FrontMatterMap = {}
        if header is not None:
            for line in header.splitlines():
                key, sep, raw = line.partition(":")
                if not sep:
                    continue
                fm[key.strip()] = self._parse_value(raw.strip())

        if not fm.get("title"):
            fm["title"] = _MD_SUFFIX_RE.sub("", filename)
        if not fm.get("date"):
            fm["date"] = _iso(self._clock())
        return fm, body

    @staticmethod
    def _parse_value(value: str) -> FrontMatterValue:
        if value.startswith("[") and value.endswith("]"):
            inner = value[1:-1]
            if not inner.strip():
                return []
            return [item.strip() for item in inner.split(",")]
        return value

    def to_post(self, filename: str, content: str, *, is_dirty: bool = False) -> Post:
        fm, body = self.parse(content, filename)
        return Post(
            filename=filename,
            content=content,
            front_matter=fm,
            raw_body=body,
            is_dirty=is_dirty,
        )

    # -------------------- writing --------------------

    def serialize(self, front_matter: FrontMatterMap, body: str) -> str:
        lines = ["---"]
        for key, value in front_matter.items():
            if isinstance(value, list):
                lines.append(f"{key}: [{', '.join(value)}]")
            else:
                lines.append(f"{key}: {value}")
        lines.append("---")
        return "\n".join(lines) + "\n" + body

    def new_post_content(self, title: str, now: datetime | None = None) -> str:
        ts = (now or self._clock()).astimezone(_POST_TZ)
        return NEW_POST_TEMPLATE.format(title=title, date=ts.strftime("%Y-%m-%d %H:%M:%S"))
