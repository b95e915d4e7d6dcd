from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

from hexoed.services.config.ini_config_service import IniConfigService
from hexoed.utils.constants import (
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    SETTINGS_FILE_NAME,
)


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode walks up from this file
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)
    # hexoed/services/config/app_config.py -> repository root
    return Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class AppConfig:
    """Typed view over IniConfigService with the application's defaults."""

    ini: IniConfigService
    project_root: Path

    @property
    def server_host(self) -> str:
        return (self.ini.get("server", "host") or "").strip() or DEFAULT_SERVER_HOST

    @property
    def server_port(self) -> int:
        port = self.ini.get_int("server", "port", DEFAULT_SERVER_PORT)
        if port is None or not 0 < port < 65536:
            return DEFAULT_SERVER_PORT
        return port

    @property
    def server_url(self) -> str:
        return f"http://{self.server_host}:{self.server_port}/"

    @property
    def log_level(self) -> str:
        return (self.ini.get("logging", "level") or "INFO").strip().upper()

    @property
    def settings_file(self) -> Path:
        explicit = (self.ini.get("storage", "settings_file") or "").strip()
        if explicit:
            return Path(explicit).expanduser()
        return IniConfigService.user_dir() / SETTINGS_FILE_NAME

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
