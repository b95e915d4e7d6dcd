from __future__ import annotations

from conftest import write
from hexoed.domain.errors import StorageError
from hexoed.domain.models import AppSettings, Post, ViewMode
from hexoed.services.ui.ports.messages import Question
from hexoed.services.ui.presenters.editor_presenter import sort_posts


def post(filename: str, date: str = "") -> Post:
    fm = {"title": filename[:-3]}
    if date:
        fm["date"] = date
    return Post(filename=filename, content="", front_matter=fm)


def test_sort_posts_date_then_number_then_natural():
    posts = [
        post("2.md", "2024-01-01 10:00:00"),
        post("10.md", "2024-01-01 10:00:00"),
        post("old.md", "2020-05-05"),
        post("new.md", "2025-01-01T00:00:00.000Z"),
        post("note2.md"),
        post("note10.md"),
        post("bad.md", "not a date"),
    ]
    assert [p.filename for p in sort_posts(posts)] == [
        "new.md",
        "10.md",
        "2.md",
        "old.md",
        "note10.md",
        "note2.md",
        "bad.md",
    ]


def test_load_without_paths_requests_settings(presenter):
    assert presenter.load() is False
    assert presenter.needs_settings is True
    assert presenter.posts == []


def test_load_reads_posts_and_assets(configured, presenter, posts_dir, images_dir):
    write(posts_dir / "1.md", "---\ntitle: One\ndate: 2024-01-01\n---\n")
    write(posts_dir / "2.md", "---\ntitle: Two\ndate: 2024-02-01\n---\n")
    write(images_dir / "1" / "a.png", "x")

    assert presenter.load() is True
    assert [p.filename for p in presenter.posts] == ["2.md", "1.md"]
    assert [a.name for a in presenter.assets] == ["a.png"]
    assert presenter.assets_by_folder() == {"1": presenter.assets}
    assert presenter.t("save") == "Save"


def test_filtered_posts(configured, presenter, posts_dir):
    write(posts_dir / "1.md", "---\ntitle: Kyoto trip\n---\n")
    write(posts_dir / "2.md", "---\ntitle: Recipes\n---\n")
    presenter.load()
    assert [p.filename for p in presenter.filtered_posts("kyoto")] == ["1.md"]
    assert [p.filename for p in presenter.filtered_posts("2.md")] == ["2.md"]
    assert len(presenter.filtered_posts("  ")) == 2


def test_next_post_id(presenter):
    presenter.posts = [post("3.md"), post("17.md"), post("draft.md")]
    assert presenter.next_post_id() == 18
    presenter.posts = [post("a.md"), post("b.md")]
    assert presenter.next_post_id() == 3


def test_create_post(configured, presenter, posts_dir):
    write(posts_dir / "4.md", "---\ntitle: Four\n---\n")
    presenter.load()

    created = presenter.create_post()
    assert created is not None
    assert created.filename == "5.md"
    assert presenter.posts[0] is created
    assert presenter.active is created
    text = (posts_dir / "5.md").read_text(encoding="utf-8")
    assert text.startswith("---\ntitle: 5\ndate: 2024-05-01 12:30:00\n")


def test_create_post_refuses_existing_name(configured, presenter, posts_dir, messages,
                                           monkeypatch):
    write(posts_dir / "4.md", "original")
    presenter.load()
    monkeypatch.setattr(presenter, "next_post_id", lambda: 4)

    assert presenter.create_post() is None
    assert messages.calls[-1][0] == "warning"
    assert (posts_dir / "4.md").read_text(encoding="utf-8") == "original"


def test_change_content_recomputes_front_matter(configured, presenter, posts_dir):
    write(posts_dir / "1.md", "---\ntitle: Old\ntags: [a, b]\n---\nbody")
    presenter.load()
    presenter.select_post("1.md")

    html = presenter.change_content("---\ntitle: New\n---\n# Heading\n")
    active = presenter.active
    assert active.is_dirty is True
    assert active.title == "New"
    assert "tags" not in active.front_matter
    assert active.raw_body == "# Heading\n"
    assert "md-h1" in html
    assert presenter.posts[0] is active


def test_select_post_asks_before_leaving_dirty_post(configured, presenter, posts_dir,
                                                     messages):
    write(posts_dir / "1.md", "a")
    write(posts_dir / "2.md", "b")
    presenter.load()
    presenter.select_post("1.md")
    presenter.change_content("edited")

    messages.answer = False
    assert presenter.select_post("2.md") is None
    assert presenter.active.filename == "1.md"

    messages.answer = True
    assert presenter.select_post("2.md").filename == "2.md"
    assert [c[0] for c in messages.calls] == ["ask", "ask"]
    assert messages.kinds == [Question.DISCARD_CHANGES, Question.DISCARD_CHANGES]


def test_save_writes_and_clears_dirty(configured, presenter, posts_dir):
    write(posts_dir / "1.md", "a")
    presenter.load()
    presenter.select_post("1.md")
    assert presenter.save() is False

    presenter.change_content("changed")
    assert presenter.save() is True
    assert (posts_dir / "1.md").read_text(encoding="utf-8") == "changed"
    assert presenter.active.is_dirty is False


def test_failed_save_keeps_dirty_state(configured, presenter, posts_dir, messages,
                                       monkeypatch):
    write(posts_dir / "1.md", "a")
    presenter.load()
    presenter.select_post("1.md")
    presenter.change_content("changed")

    def fail(*_args):
        raise StorageError("disk full")

    monkeypatch.setattr(presenter.post_store, "save", fail)
    assert presenter.save() is False
    assert presenter.active.is_dirty is True
    assert messages.calls[-1] == ("error", "Save failed", "disk full")


def test_delete_post_confirms(configured, presenter, posts_dir, messages):
    write(posts_dir / "1.md", "a")
    presenter.load()
    presenter.select_post("1.md")

    messages.answer = False
    assert presenter.delete_post("1.md") is False
    assert (posts_dir / "1.md").exists()

    messages.answer = True
    assert presenter.delete_post("1.md") is True
    assert messages.kinds[-1] is Question.MOVE_TO_TRASH
    assert presenter.posts == []
    assert presenter.active is None


def test_asset_commands(configured, presenter, images_dir, messages):
    presenter.load()
    asset = presenter.upload_asset("", "a.png", b"1")
    assert asset is not None and asset.folder == "root"
    assert presenter.assets[0] == asset
    assert presenter.asset_snippet(asset) == "![](../img/a.png)"

    assert presenter.rename_asset(asset, "b.png") is True
    assert [a.name for a in presenter.assets] == ["b.png"]

    assert presenter.rename_asset(presenter.assets[0], "../x.png") is False
    assert messages.calls[-1][0] == "error"

    assert presenter.delete_asset(presenter.assets[0]) is True
    assert presenter.assets == []
    assert not (images_dir / "b.png").exists()


def test_settings_and_theme(presenter, posts_dir, images_dir):
    presenter.load()
    new = AppSettings(posts_path=str(posts_dir), images_path=str(images_dir), theme="light")
    assert presenter.save_settings(new) is True
    assert presenter.needs_settings is False
    assert presenter.renderer.config.theme == "light"

    assert presenter.toggle_theme() is True
    assert presenter.settings.theme == "dark"
    assert '<html class="dark">' in presenter.render_active()


def test_toggle_theme_keeps_unsaved_edits(configured, presenter, posts_dir):
    write(posts_dir / "1.md", "---\ntitle: A\n---\nold\n")
    presenter.load()
    presenter.select_post("1.md")
    presenter.change_content("---\ntitle: A\n---\nNEW UNSAVED TEXT\n")

    assert presenter.toggle_theme() is True
    assert presenter.settings.theme != configured.theme
    assert "NEW UNSAVED TEXT" in presenter.active.content
    assert presenter.active.is_dirty is True
    listed = next(p for p in presenter.posts if p.filename == "1.md")
    assert listed.is_dirty is True
    assert "NEW UNSAVED TEXT" in listed.content
    assert (posts_dir / "1.md").read_text(encoding="utf-8").endswith("old\n")


def test_reload_keeps_dirty_post_missing_on_disk(configured, presenter, posts_dir):
    write(posts_dir / "1.md", "a")
    write(posts_dir / "2.md", "b")
    presenter.load()
    presenter.select_post("2.md")
    presenter.change_content("edited")
    (posts_dir / "2.md").unlink()
    write(posts_dir / "3.md", "c")

    assert presenter.load() is True
    assert [p.filename for p in presenter.posts] == ["3.md", "2.md", "1.md"]
    assert presenter.active.content == "edited"
    assert presenter.has_unsaved_changes() is True


def test_changing_posts_folder_asks_when_unsaved(configured, presenter, posts_dir, tmp_path,
                                                 messages):
    other = tmp_path / "other"
    other.mkdir()
    write(posts_dir / "1.md", "a")
    presenter.load()
    presenter.select_post("1.md")
    presenter.change_content("edited")
    moved = configured.with_changes(posts_path=str(other))

    messages.answer = False
    assert presenter.save_settings(moved) is False
    assert presenter.settings.posts_path == str(posts_dir)
    assert presenter.active.content == "edited"
    assert messages.kinds == [Question.DISCARD_CHANGES]

    messages.answer = True
    assert presenter.save_settings(moved) is True
    assert presenter.settings.posts_path == str(other)
    assert presenter.posts == []
    assert presenter.active is None


def test_view_mode(presenter):
    assert presenter.view_mode is ViewMode.SPLIT
    presenter.set_view_mode(ViewMode.PREVIEW)
    assert presenter.view_mode is ViewMode.PREVIEW
