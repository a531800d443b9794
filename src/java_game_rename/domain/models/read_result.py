from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from java_game_rename.domain.models.manifest_record import ManifestRecord


class ReadStatus(StrEnum):
    OK = "ok"
    OPEN_FAILED = "open_failed"
    MANIFEST_MISSING = "manifest_missing"
    PARSE_FAILED = "parse_failed"


@dataclass(frozen=True, slots=True)
class ReadResult:
    """Outcome of reading one archive: a record, or the reason there is none."""

    archive_path: Path
    status: ReadStatus
    record: ManifestRecord | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.OK and self.record is not None

    @classmethod
    def success(cls, archive_path: Path, record: ManifestRecord) -> "ReadResult":
        return cls(archive_path=archive_path, status=ReadStatus.OK, record=record)

    @classmethod
    def failure(cls, archive_path: Path, status: ReadStatus, reason: str) -> "ReadResult":
        return cls(archive_path=archive_path, status=status, reason=reason)
