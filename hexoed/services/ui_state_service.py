from __future__ import annotations

from PyQt6.QtCore import QByteArray, QSettings

from hexoed.domain.interfaces import IUiStateService
from hexoed.utils.constants import (
    SETTINGS_GEOMETRY,
    SETTINGS_LAST_POST,
    SETTINGS_SIDEBAR_WIDTH,
    SETTINGS_SPLITTER,
    SIDEBAR_DEFAULT_WIDTH,
    SIDEBAR_MAX_WIDTH,
    SIDEBAR_MIN_WIDTH,
)


def clamp_sidebar_width(width: int) -> int:
    return max(SIDEBAR_MIN_WIDTH, min(SIDEBAR_MAX_WIDTH, int(width)))


class UiStateService(IUiStateService):
    """Window geometry, splitter layout, sidebar width and last opened post."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_splitter(self) -> bytes | None:
        v = self._s.value(SETTINGS_SPLITTER)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_splitter(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_SPLITTER, QByteArray(blob))

    def get_sidebar_width(self) -> int:
        v = self._s.value(SETTINGS_SIDEBAR_WIDTH, SIDEBAR_DEFAULT_WIDTH)
        try:
            return clamp_sidebar_width(int(v))
        except (TypeError, ValueError):
            return SIDEBAR_DEFAULT_WIDTH

    def set_sidebar_width(self, width: int) -> None:
        self._s.setValue(SETTINGS_SIDEBAR_WIDTH, clamp_sidebar_width(width))

    def get_last_post(self) -> str | None:
        v = self._s.value(SETTINGS_LAST_POST)
        return str(v) if v else None

    def set_last_post(self, filename: str) -> None:
        self._s.setValue(SETTINGS_LAST_POST, filename)
