APP_ORG = "HexoEditor"
APP_NAME = "Hexo Editor"

DEFAULT_SERVER_HOST = "127.0.0.1"
DEFAULT_SERVER_PORT = 3000
SETTINGS_FILE_NAME = "settings.json"

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg")

# Element -> preview class. Styling only; the CSS below is keyed on these.
PREVIEW_CLASSES = {
    "h1": "md-h1",
    "h2": "md-h2",
    "h3": "md-h3",
    "h4": "md-h4",
    "h5": "md-h5",
    "h6": "md-h6",
    "strong": "md-strong",
    "em": "md-em",
    "blockquote": "md-quote",
    "code": "md-code",
    "pre": "md-pre",
    "ul": "md-list",
    "ol": "md-list",
    "table": "md-table",
    "hr": "md-hr",
    "a": "md-link",
    "img": "md-img",
}

_PALETTES = {
    "light": "--bg:#ffffff; --fg:#1f2937; --muted:#6b7280; --code:#f3f4f6; --border:#e5e7eb; "
    "--link:#4f46e5; --accent:#6366f1;",
    "dark": "--bg:#0f172a; --fg:#cbd5e1; --muted:#94a3b8; --code:#1e293b; --border:#334155; "
    "--link:#818cf8; --accent:#6366f1;",
}

CSS_PREVIEW = """
html,body { background:var(--bg); color:var(--fg); }
body { font-family: -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; margin: 2rem; line-height: 1.65; }
.md-h1 { font-size:1.9em; border-bottom:1px solid var(--border); padding-bottom:.3em; }
.md-h2 { font-size:1.5em; margin-top:1.5em; }
.md-h3 { font-size:1.25em; margin-top:1.2em; }
.md-h4,.md-h5,.md-h6 { margin-top:1em; }
.md-strong { color:var(--link); font-weight:700; }
.md-em { font-style:italic; color:var(--muted); }
.md-quote { border-left:4px solid var(--accent); margin:1em 0; padding:.25em 1em; color:var(--muted); background:var(--code); }
.md-pre { padding:1rem; overflow:auto; border-radius:8px; background:var(--code); border:1px solid var(--border); }
.md-pre code { font-size:.875em; }
.md-code { background:var(--code); color:var(--link); padding:.1rem .35rem; border-radius:4px; font-size:.875em; }
.md-list { padding-left:1.5rem; }
.md-table { border-collapse: collapse; margin:1em 0; }
.md-table th, .md-table td { border:1px solid var(--border); padding:.4rem .6rem; }
.md-hr { border:none; border-top:1px solid var(--border); margin:1.5rem 0; }
.md-link { color:var(--link); text-decoration:none; } .md-link:hover { text-decoration:underline; }
.md-img { display:block; max-width:100%; margin:1rem auto; border-radius:8px; border:1px solid var(--border); }
.md-fallback { white-space:pre-wrap; color:var(--muted); }
"""


def preview_css(theme: str) -> str:
    palette = _PALETTES.get(theme, _PALETTES["dark"])
    return ":root { " + palette + " }\n" + CSS_PREVIEW


HTML_TEMPLATE = """<!doctype html>
<html class="{theme}">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<style>{css}</style>
</head>
<body>
{body}
</body>
</html>
"""

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_SPLITTER = "window/splitter"
SETTINGS_SIDEBAR_WIDTH = "window/sidebarWidth"
SETTINGS_LAST_POST = "editor/lastPost"
SIDEBAR_DEFAULT_WIDTH = 280
SIDEBAR_MIN_WIDTH = 150
SIDEBAR_MAX_WIDTH = 600
