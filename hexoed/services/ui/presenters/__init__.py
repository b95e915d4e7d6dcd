from .editor_presenter import EditorPresenter, sort_posts

__all__ = ["EditorPresenter", "sort_posts"]
