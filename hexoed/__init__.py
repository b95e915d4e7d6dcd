"""Hexo post editor: Markdown preview pipeline, local file API and PyQt6 shell."""

__version__ = "1.0.0"
