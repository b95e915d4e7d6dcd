from __future__ import annotations

import pytest

from conftest import write
from hexoed.domain.errors import InvalidNameError, NotFoundError, PathNotConfiguredError
from hexoed.domain.models import AppSettings
from hexoed.services.post_store import validate_post_filename


def test_list_posts_empty_when_unconfigured(post_store):
    assert post_store.list_posts() == []


def test_save_requires_configured_path(post_store):
    with pytest.raises(PathNotConfiguredError, match="Path not set"):
        post_store.save("1.md", "x")


def test_list_posts_reads_md_only(configured, post_store, posts_dir):
    write(posts_dir / "2.md", "---\ntitle: Two\n---\nbody")
    write(posts_dir / "1.md", "no header")
    write(posts_dir / "notes.txt", "ignored")
    (posts_dir / "drafts").mkdir()

    posts = post_store.list_posts()
    assert [p.filename for p in posts] == ["1.md", "2.md"]
    assert posts[0].title == "1"
    assert posts[1].title == "Two"
    assert posts[1].raw_body == "body"
    assert not any(p.is_dirty for p in posts)


def test_save_persists_verbatim(configured, post_store, posts_dir):
    content = "---\ntitle: A\n---\n# Body\r\nline"
    post = post_store.save("3.md", content)
    assert (posts_dir / "3.md").read_bytes() == content.encode("utf-8")
    assert post.content == content
    assert post.is_dirty is False


def test_delete_moves_to_trash(configured, post_store, posts_dir, file_service):
    write(posts_dir / "5.md", "x")
    post_store.delete("5.md")
    assert not (posts_dir / "5.md").exists()
    assert (file_service.trash_dir / "5.md").exists()


def test_delete_missing_is_not_found(configured, post_store):
    with pytest.raises(NotFoundError):
        post_store.delete("missing.md")


@pytest.mark.parametrize("name", ["", ".md", "post.txt", "../x.md", "a/b.md", "a\\b.md"])
def test_invalid_filenames_rejected(name):
    with pytest.raises(InvalidNameError):
        validate_post_filename(name)


def test_settings_changes_are_picked_up(settings_service, post_store, posts_dir, tmp_path):
    write(posts_dir / "1.md", "x")
    other = tmp_path / "other"
    write(other / "9.md", "y")

    settings_service.save(AppSettings(posts_path=str(posts_dir)))
    assert [p.filename for p in post_store.list_posts()] == ["1.md"]
    settings_service.save(AppSettings(posts_path=str(other)))
    assert [p.filename for p in post_store.list_posts()] == ["9.md"]
