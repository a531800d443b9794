from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ScanResult:
    report_path: Path
    scanned: int
    extracted: int
    failed: int
    renamed: int
    rename_failed: int

    def as_rows(self) -> list[tuple[str, int]]:
        return [
            ("scanned", self.scanned),
            ("extracted", self.extracted),
            ("failed", self.failed),
            ("renamed", self.renamed),
            ("rename failed", self.rename_failed),
        ]
