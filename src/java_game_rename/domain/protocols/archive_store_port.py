from __future__ import annotations

from pathlib import Path
from typing import Iterator, Protocol

from java_game_rename.domain.models.rename_outcome import RenameOutcome


class ArchiveStorePort(Protocol):
    def walk(self, root: Path) -> Iterator[Path]: ...

    def rename_archive(
        self, archive_path: Path, name: str, extension: str, dry_run: bool = False
    ) -> RenameOutcome: ...
