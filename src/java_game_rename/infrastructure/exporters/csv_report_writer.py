from __future__ import annotations

import csv
from pathlib import Path
from types import TracebackType
from typing import IO

from java_game_rename.errors import ReportError


REPORT_HEADER = ("file path", "game name", "game description")


class CsvReportWriter:
    """Comma-separated report, UTF-8 with a BOM so spreadsheet tools detect it."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._file: IO[str] | None = None
        self._writer = None

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self._path.open("w", encoding="utf-8-sig", newline="")
        except OSError as exc:
            raise ReportError(f"Cannot create report {self._path}: {exc}") from exc
        self._writer = csv.writer(self._file)
        self._writer.writerow(REPORT_HEADER)

    def write_row(self, file_path: Path | str, name: str, description: str) -> None:
        if self._writer is None:
            raise ReportError("Report writer is not open")
        self._writer.writerow((str(file_path), name, description))

    def close(self) -> None:
        if self._file is None:
            return
        self._file.close()
        self._file = None
        self._writer = None

    def __enter__(self) -> "CsvReportWriter":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
