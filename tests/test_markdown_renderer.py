from __future__ import annotations

from bs4 import BeautifulSoup

from hexoed.domain.models import RenderConfig
from hexoed.services.markdown_renderer import MarkdownRenderer


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_end_to_end_post(renderer, codec):
    content = "---\ntitle: Hi\ndate: 2024-01-01\n---\n# Hello\n![a](../img/5/1.jpg)\n"

    fm, body = codec.parse(content, filename="1.md")
    assert fm == {"title": "Hi", "date": "2024-01-01"}
    assert body == "# Hello\n![a](../img/5/1.jpg)\n"

    s = soup_of(renderer.render_body(content))
    h1 = s.find("h1")
    assert h1 is not None and h1.get_text() == "Hello"
    img = s.find("img")
    assert img["src"] == "/api/image/5/1.jpg"
    assert img["alt"] == "a"
    assert "title: Hi" not in s.get_text()


def test_front_matter_never_rendered(renderer):
    html = renderer.render_body("---\ntitle: Secret\n---\nvisible")
    assert "Secret" not in html
    assert "visible" in html


def test_raw_img_tags_resolved_and_attributes_kept(renderer):
    html = renderer.render_body('<p><img src="18/3.png" width="120" alt="x"></p>\n')
    img = soup_of(html).find("img")
    assert img["src"] == "/api/image/18/3.png"
    assert img["width"] == "120"
    assert img["alt"] == "x"
    assert "md-img" in img["class"]


def test_external_and_data_images_untouched(renderer):
    html = renderer.render_body(
        "![](http://x.com/a.png)\n\n![](data:image/png;base64,AAA)\n"
    )
    srcs = [i["src"] for i in soup_of(html).find_all("img")]
    assert srcs == ["http://x.com/a.png", "data:image/png;base64,AAA"]


def test_links_open_in_new_context(renderer):
    s = soup_of(renderer.render_body("[site](https://example.com) and [top](#top)\n"))
    external, anchor = s.find_all("a")
    assert external["target"] == "_blank"
    assert external["rel"] == ["noopener", "noreferrer"]
    assert "target" not in anchor.attrs


def test_structural_classes(renderer):
    md = (
        "## Sub\n\n"
        "**b** *i* `c`\n\n"
        "> quote\n\n"
        "- one\n- two\n\n"
        "1. a\n2. b\n\n"
        "| h |\n|---|\n| v |\n\n"
        "---\n"
    )
    s = soup_of(renderer.render_body(md))
    assert "md-h2" in s.find("h2")["class"]
    assert "md-strong" in s.find("strong")["class"]
    assert "md-em" in s.find("em")["class"]
    assert "md-code" in s.find("code")["class"]
    assert "md-quote" in s.find("blockquote")["class"]
    assert "md-list" in s.find("ul")["class"]
    assert "md-list" in s.find("ol")["class"]
    assert "md-table" in s.find("table")["class"]
    assert s.find("hr") is not None


def test_fenced_code_keeps_language_hint_only(renderer):
    s = soup_of(renderer.render_body("```python\nprint('<b>')\n```\n"))
    pre = s.find("pre")
    code = pre.find("code")
    assert "md-pre" in pre["class"]
    assert code["class"] == ["language-python"]
    assert code.get_text() == "print('<b>')\n"
    assert s.find("b") is None


def test_strikethrough_and_tasks(renderer):
    s = soup_of(renderer.render_body("~~gone~~\n\n- [x] done\n- [ ] todo\n"))
    assert s.find("del") is not None
    boxes = s.find_all("input")
    assert [b.get("type") for b in boxes] == ["checkbox", "checkbox"]


def test_script_removed_iframe_kept(renderer):
    md = (
        "Intro\n\n"
        "<script>alert(1)</script>\n\n"
        '<iframe src="https://www.youtube.com/embed/abc" width="560"></iframe>\n\n'
        "<style>body { display: none }</style>\n"
    )
    html = renderer.render_body(md)
    s = soup_of(html)
    assert s.find("script") is None
    assert s.find("style") is None
    assert "alert(1)" not in html
    iframe = s.find("iframe")
    assert iframe is not None
    assert iframe["src"] == "https://www.youtube.com/embed/abc"


def test_injected_attributes_filtered_after_rewrite(renderer):
    md = '<img src="../img/1.png" onerror="alert(1)">\n\n[x](javascript:alert(1))\n'
    s = soup_of(renderer.render_body(md))
    img = s.find("img")
    assert img["src"] == "/api/image/1.png"
    assert "onerror" not in img.attrs
    assert "href" not in s.find("a").attrs


def test_malformed_input_never_raises(renderer):
    samples = [
        "```\nunterminated fence",
        "<div><span><p>unbalanced",
        "</div></div>",
        "---\n---\n---",
        "\x00\x01\x02�",
        b"\xff\xfe\x00garbage\x80",
        None,
        "[" * 500 + "]" * 3,
    ]
    for sample in samples:
        assert isinstance(renderer.render_body(sample), str)


def test_pipeline_error_falls_back_to_escaped_source(renderer, monkeypatch):
    def boom(_body):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(renderer, "_convert", boom)
    html = renderer.render_body("<b>hi</b>")
    assert html == '<pre class="md-fallback">&lt;b&gt;hi&lt;/b&gt;</pre>'


def test_renders_are_independent(renderer):
    first = renderer.render_body("[^1]\n\n[^1]: note\n")
    second = renderer.render_body("plain\n")
    assert "footnote" in first
    assert "footnote" not in second


def test_to_html_wraps_themed_document(renderer):
    light = renderer.with_theme("light")
    doc = light.to_html("# T\n")
    assert doc.startswith("<!doctype html>")
    assert '<html class="light">' in doc
    assert "md-h1" in doc
    assert renderer.config.theme == "dark"
    assert light.resolver is renderer.resolver


def test_custom_link_config():
    r = MarkdownRenderer(RenderConfig(link_target="_self", link_rel="nofollow"))
    a = soup_of(r.render_body("[a](http://x)\n")).find("a")
    assert a["target"] == "_self"
    assert a["rel"] == ["nofollow"]
