from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ReportWriterPort(Protocol):
    @property
    def path(self) -> Path: ...

    def write_row(self, file_path: Path | str, name: str, description: str) -> None: ...
