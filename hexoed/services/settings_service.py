from __future__ import annotations

import json
import logging
from pathlib import Path

from hexoed.domain.interfaces import IFileService, ISettingsService
from hexoed.domain.models import AppSettings

logger = logging.getLogger(__name__)


class SettingsService(ISettingsService):
    """JSON-backed user settings (posts/images folders, language, theme)."""

    def __init__(self, path: Path, files: IFileService) -> None:
        self.path = path
        self._files = files

    def load(self) -> AppSettings:
        try:
            raw = self._files.read_text(self.path)
        except FileNotFoundError:
            return AppSettings()
        except OSError as e:
            logger.warning("Cannot read settings %s: %s", self.path, e)
            return AppSettings()

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Malformed settings file %s; using defaults", self.path)
            return AppSettings()
        return AppSettings.from_dict(data)

    def save(self, settings: AppSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._files.write_text_atomic(self.path, json.dumps(settings.to_dict(), indent=2))
        logger.info("Settings saved to %s", self.path)
