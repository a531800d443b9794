from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from java_game_rename.config.settings_models import (
    DEFAULT_SETTINGS_FILE,
    AppConfig,
    UserSettings,
)
from java_game_rename.errors import SettingsError


log = logging.getLogger(__name__)

# Keys as written in the settings file, matched case-insensitively.
SETTINGS_KEYS = {
    "JavaGameDir": "java_game_dir",
    "ExportFile": "export_file",
    "Rename": "rename",
    "ArchiveExtension": "archive_extension",
    "LogLevel": "log_level",
    "ErrorLogFile": "error_log_file",
}

_FIELD_BY_KEY = {key.lower(): field for key, field in SETTINGS_KEYS.items()}


def _default_settings_text() -> str:
    defaults = UserSettings()
    lines = [
        f"JavaGameDir={defaults.java_game_dir}",
        f"ExportFile={defaults.export_file}",
        f"Rename={'1' if defaults.rename else '0'}",
        f"ArchiveExtension={defaults.archive_extension}",
        f"LogLevel={defaults.log_level}",
        f"ErrorLogFile={defaults.error_log_file}",
    ]
    return "\n".join(lines) + "\n"


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` / ``key: value`` lines; ``#`` and ``!`` start comments."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        positions = [pos for pos in (line.find("="), line.find(":")) if pos != -1]
        if not positions:
            continue
        split_at = min(positions)
        key = line[:split_at].strip()
        if key:
            values[key] = line[split_at + 1 :].strip()
    return values


class SettingsLoader:
    @staticmethod
    def resolve_path(settings_path: Path | None = None) -> Path:
        if settings_path is not None:
            return settings_path
        env_path = os.getenv("SETTINGS_FILE", "").strip()
        return Path(env_path) if env_path else Path(DEFAULT_SETTINGS_FILE)

    @staticmethod
    def ensure_settings_file(settings_path: Path) -> bool:
        """Create the settings file with defaults; return True if it was created."""
        if settings_path.exists():
            return False
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            settings_path.write_text(_default_settings_text(), encoding="utf-8")
        except OSError as exc:
            raise SettingsError(
                f"Cannot create settings file {settings_path}: {exc}"
            ) from exc
        return True

    @staticmethod
    def _read_values(settings_path: Path) -> dict[str, str]:
        try:
            text = settings_path.read_text("utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise SettingsError(
                f"Cannot read settings file {settings_path}: {exc}"
            ) from exc

        values: dict[str, str] = {}
        for key, value in parse_properties(text).items():
            field = _FIELD_BY_KEY.get(key.lower())
            if field is None:
                log.warning("Unknown setting '%s' in %s ignored", key, settings_path)
                continue
            values[field] = value
        return values

    @classmethod
    def load(
        cls,
        settings_path: Path | None = None,
        overrides: Mapping[str, Any] | None = None,
        dry_run: bool = False,
    ) -> AppConfig:
        path = cls.resolve_path(settings_path)
        if cls.ensure_settings_file(path):
            log.info("Settings file created with defaults: %s", path)

        values: dict[str, Any] = cls._read_values(path)
        values.update(
            {key: value for key, value in (overrides or {}).items() if value is not None}
        )

        try:
            user = UserSettings(**values)
        except ValidationError as exc:
            raise SettingsError(f"Invalid settings in {path}:\n{exc}") from exc

        return AppConfig(user=user, settings_path=path, dry_run=dry_run)
