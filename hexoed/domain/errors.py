from __future__ import annotations


class HexoEditorError(Exception):
    """Base class for errors raised by the stores and surfaced by the API/UI."""

    status_code = 500


class PathNotConfiguredError(HexoEditorError):
    status_code = 400


class InvalidNameError(HexoEditorError):
    status_code = 400


class UnsafePathError(HexoEditorError):
    status_code = 403


class NotFoundError(HexoEditorError):
    status_code = 404


class StorageError(HexoEditorError):
    status_code = 500
