from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Comment, Tag

logger = logging.getLogger(__name__)

# Removed together with everything inside them, whatever the source.
DROP_WITH_CONTENT = frozenset(
    {
        "script",
        "style",
        "template",
        "noscript",
        "object",
        "embed",
        "applet",
        "base",
        "link",
        "meta",
        "frame",
        "frameset",
        "form",
        "textarea",
        "select",
        "button",
    }
)

ALLOWED_TAGS = frozenset(
    {
        "a", "abbr", "b", "blockquote", "br", "caption", "cite", "code", "col",
        "colgroup", "dd", "del", "details", "div", "dl", "dt", "em", "figcaption",
        "figure", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "input",
        "ins", "kbd", "li", "mark", "ol", "p", "picture", "pre", "q", "s", "samp",
        "small", "source", "span", "strike", "strong", "sub", "summary", "sup",
        "table", "tbody", "td", "tfoot", "th", "thead", "tr", "u", "ul", "var",
        "video", "audio",
        # Trusted: the editor only ever previews the author's own posts.
        "iframe",
    }
)

GLOBAL_ATTRS = frozenset({"class", "id", "title", "lang", "dir", "style", "align"})

TAG_ATTRS: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "name", "target", "rel"}),
    "img": frozenset(
        {"src", "alt", "width", "height", "loading", "srcset", "sizes", "decoding",
         "referrerpolicy", "crossorigin"}
    ),
    "iframe": frozenset(
        {"src", "width", "height", "frameborder", "allow", "allowfullscreen", "loading",
         "referrerpolicy", "sandbox"}
    ),
    "video": frozenset({"src", "poster", "controls", "width", "height", "loop", "muted"}),
    "audio": frozenset({"src", "controls", "loop", "muted"}),
    "source": frozenset({"src", "srcset", "type", "media"}),
    "ol": frozenset({"start", "type", "reversed"}),
    "li": frozenset({"value"}),
    "td": frozenset({"colspan", "rowspan"}),
    "th": frozenset({"colspan", "rowspan", "scope"}),
    "col": frozenset({"span"}),
    "colgroup": frozenset({"span"}),
    "blockquote": frozenset({"cite"}),
    "q": frozenset({"cite"}),
    "del": frozenset({"cite", "datetime"}),
    "ins": frozenset({"cite", "datetime"}),
    "details": frozenset({"open"}),
    "input": frozenset({"type", "checked", "disabled"}),
    "abbr": frozenset(),
}

URL_ATTRS = frozenset({"href", "src", "cite", "poster"})
_BLOCKED_SCHEMES = ("javascript:", "vbscript:")
_CONTROL_RE = re.compile(r"[\x00-\x20\x7f]+")


class HtmlSanitizer:
    """
    Allow-list sanitizer working on a BeautifulSoup tree.

    Call it last, after every attribute rewrite, so it also filters whatever
    raw HTML the Markdown source passed through.
    """

    def sanitize_html(self, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        self.sanitize(soup)
        return str(soup)

    def sanitize(self, soup: BeautifulSoup) -> BeautifulSoup:
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()

        # Snapshot first: the tree is mutated while walking it.
        for el in list(soup.find_all(True)):
            if el.decomposed or _detached(el, soup):
                continue
            name = (el.name or "").lower()
            if name in DROP_WITH_CONTENT:
                el.decompose()
            elif name not in ALLOWED_TAGS:
                el.unwrap()
            elif name == "input" and str(el.get("type", "")).lower() != "checkbox":
                el.decompose()
            else:
                self._clean_attrs(el, name)
        return soup

    def _clean_attrs(self, el: Tag, name: str) -> None:
        allowed = GLOBAL_ATTRS | TAG_ATTRS.get(name, frozenset())
        for attr in list(el.attrs):
            key = attr.lower()
            if key not in allowed and not (name == "img" and key.startswith("data-")):
                del el[attr]
            elif key in URL_ATTRS and not _safe_url(name, key, el.get(attr)):
                logger.debug("Dropped unsafe %s on <%s>", key, name)
                del el[attr]


def _safe_url(tag: str, attr: str, value: object) -> bool:
    if isinstance(value, list):
        value = " ".join(value)
    url = _CONTROL_RE.sub("", str(value or "")).lower()
    if url.startswith(_BLOCKED_SCHEMES):
        return False
    if url.startswith("data:"):
        return tag == "img" and attr == "src" and url.startswith("data:image/")
    return True


def _detached(el: Tag, soup: BeautifulSoup) -> bool:
    """True once an ancestor has been decomposed in this pass."""
    parent = el.parent
    while parent is not None:
        if parent is soup:
            return False
        if getattr(parent, "decomposed", False):
            return True
        parent = parent.parent
    return True
