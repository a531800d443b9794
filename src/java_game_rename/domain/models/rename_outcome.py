from __future__ import annotations

from enum import StrEnum


class RenameOutcome(StrEnum):
    RENAMED = "renamed"
    PLANNED = "planned"
    SKIPPED = "skipped"
    FAILED = "failed"
