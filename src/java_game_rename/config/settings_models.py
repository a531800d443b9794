from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


DEFAULT_SETTINGS_FILE = "config.txt"
DEFAULT_EXPORT_FILE = "Java游戏目录.csv"


class UserSettings(BaseModel):
    java_game_dir: str = Field(default=".")
    export_file: str = Field(default=DEFAULT_EXPORT_FILE)
    rename: bool = Field(default=False)
    archive_extension: str = Field(default="jar")
    log_level: str = Field(default="info")
    error_log_file: str = Field(default="")

    @field_validator("java_game_dir", "export_file")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        normalized = str(value or "").strip()
        if not normalized:
            raise ValueError("path must not be empty")
        return normalized

    @field_validator("rename", mode="before")
    @classmethod
    def _validate_rename(cls, value: object) -> bool:
        # Only "1" turns renaming on; any other text leaves it off.
        if isinstance(value, bool):
            return value
        return str(value or "").strip() == "1"

    @field_validator("archive_extension")
    @classmethod
    def _validate_archive_extension(cls, value: str) -> str:
        normalized = str(value or "").strip().lstrip(".").lower()
        if not normalized:
            raise ValueError("ArchiveExtension must not be empty")
        return normalized

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = str(value or "").strip().lower()
        if normalized not in {"debug", "info", "warn", "warning", "error"}:
            raise ValueError("LogLevel must be one of: debug, info, warn, error")
        return "warning" if normalized == "warn" else normalized


@dataclass(frozen=True)
class AppConfig:
    user: UserSettings
    settings_path: Path
    dry_run: bool = False

    @property
    def game_dir(self) -> Path:
        return Path(self.user.java_game_dir)

    @property
    def export_path(self) -> Path:
        return Path(self.user.export_file)

    @property
    def error_log_path(self) -> Path | None:
        if not self.user.error_log_file.strip():
            return None
        return Path(self.user.error_log_file.strip())
