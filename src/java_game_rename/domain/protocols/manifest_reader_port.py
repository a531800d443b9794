from __future__ import annotations

from pathlib import Path
from typing import Protocol

from java_game_rename.domain.models.read_result import ReadResult


class ManifestReaderPort(Protocol):
    def read(self, archive_path: Path) -> ReadResult: ...
