# hexoed/services/markdown_renderer.py
from __future__ import annotations

import html as html_lib
import logging
from dataclasses import replace

import markdown
from bs4 import BeautifulSoup, Tag

from hexoed.domain.interfaces import IMarkdownRenderer
from hexoed.domain.models import RenderConfig
from hexoed.services.front_matter import FrontMatterCodec
from hexoed.services.html_sanitizer import HtmlSanitizer
from hexoed.services.image_paths import ImagePathResolver
from hexoed.utils.constants import HTML_TEMPLATE, PREVIEW_CLASSES, preview_css

logger = logging.getLogger(__name__)

EXTENSIONS = [
    "extra",  # tables, fenced code, attr_list, footnotes, md_in_html
    "sane_lists",
    "nl2br",  # hexo-renderer-marked renders single newlines as <br>
    "pymdownx.tilde",
    "pymdownx.tasklist",
]

EXTENSION_CONFIGS = {
    "pymdownx.tilde": {"subscript": False},
    "pymdownx.tasklist": {"custom_checkbox": False},
}


class MarkdownRenderer(IMarkdownRenderer):
    """
    Preview pipeline for Hexo posts.

      content -> strip front matter -> Python-Markdown -> DOM
              -> decorate (image paths, classes, link attrs) -> sanitize -> HTML

    Every call builds its own Markdown instance and soup, so renders share no
    state. Nothing escapes the public methods: a failure anywhere falls back to
    the escaped source text.
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        resolver: ImagePathResolver | None = None,
        codec: FrontMatterCodec | None = None,
        sanitizer: HtmlSanitizer | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.resolver = resolver or ImagePathResolver(self.config.image_prefix)
        self.codec = codec or FrontMatterCodec()
        self.sanitizer = sanitizer or HtmlSanitizer()

    def with_config(self, config: RenderConfig) -> MarkdownRenderer:
        """Same collaborators, different static configuration (e.g. theme switch)."""
        return MarkdownRenderer(
            config, resolver=self.resolver, codec=self.codec, sanitizer=self.sanitizer
        )

    def with_theme(self, theme: str) -> MarkdownRenderer:
        return self.with_config(replace(self.config, theme=theme))

    # -------------------- public --------------------

    def to_html(self, markdown_text: str) -> str:
        """Full themed document for the preview widget."""
        return HTML_TEMPLATE.format(
            css=preview_css(self.config.theme),
            theme=html_lib.escape(self.config.theme),
            body=self.render_body(markdown_text),
        )

    def render_body(self, markdown_text: str) -> str:
        """Sanitized HTML fragment for a post's content (front matter excluded)."""
        text = ""
        try:
            text = _as_text(markdown_text)
            body = self.codec.strip(text)
            soup = BeautifulSoup(self._convert(body), "html.parser")
            self._decorate(soup)
            self.sanitizer.sanitize(soup)  # last: see HtmlSanitizer
            return str(soup)
        except Exception:
            logger.exception("Preview render failed; showing escaped source")
            return self._fallback(text)

    # -------------------- helpers --------------------

    @staticmethod
    def _convert(body: str) -> str:
        md = markdown.Markdown(
            extensions=EXTENSIONS,
            extension_configs=EXTENSION_CONFIGS,
            output_format="html",
        )
        return md.convert(body)

    def _decorate(self, soup: BeautifulSoup) -> None:
        for el in soup.find_all(True):
            name = el.name
            if name == "img":
                src = el.get("src")
                if src is not None:
                    el["src"] = self.resolver.resolve(str(src))
            elif name == "a":
                href = str(el.get("href", ""))
                if href and not href.startswith("#"):
                    el["target"] = self.config.link_target
                    el["rel"] = self.config.link_rel
            elif name == "code" and el.parent is not None and el.parent.name == "pre":
                # Block code keeps only its language-* hint.
                continue

            cls = PREVIEW_CLASSES.get(name)
            if cls:
                _add_class(el, cls)

    @staticmethod
    def _fallback(text: str) -> str:
        return f'<pre class="md-fallback">{html_lib.escape(text)}</pre>'


def _as_text(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if value is None:
        return ""
    return str(value)


def _add_class(el: Tag, cls: str) -> None:
    current = el.get("class") or []
    if isinstance(current, str):
        current = current.split()
    if cls not in current:
        el["class"] = [*current, cls]
