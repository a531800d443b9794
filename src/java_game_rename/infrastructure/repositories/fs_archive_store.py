from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from java_game_rename.domain.models.rename_outcome import RenameOutcome
from java_game_rename.domain.protocols.logger_port import LoggerPort


class FsArchiveStore:
    def __init__(self, logger: LoggerPort) -> None:
        self._logger = logger

    def _list_dir(self, directory: Path) -> list[os.DirEntry[str]]:
        try:
            with os.scandir(directory) as entries:
                return sorted(entries, key=lambda entry: entry.name)
        except OSError as exc:
            self._logger.debug("Skipping unreadable directory %s: %s", directory, exc)
            return []

    def walk(self, root: Path) -> Iterator[Path]:
        """
        Yield every regular file under ``root``, depth first.

        A directory is listed completely before any of its entries is
        yielded, so callers may rename the file they were handed.
        """
        for entry in self._list_dir(root):
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file()
            except OSError:
                continue
            if is_dir:
                yield from self.walk(path)
            elif is_file:
                yield path

    def rename_archive(
        self, archive_path: Path, name: str, extension: str, dry_run: bool = False
    ) -> RenameOutcome:
        """
        Rename an archive to ``<name>.<extension>`` in its own directory.

        :param archive_path: Archive to rename
        :param name: Normalized game name
        :param extension: Archive extension, without the dot
        :param dry_run: Log the planned rename without touching the file
        :return: What happened to the archive
        """
        if not name:
            self._logger.warning("Rename skipped for %s: empty game name", archive_path)
            return RenameOutcome.SKIPPED

        planned_name = f"{name}.{extension.lstrip('.')}"
        if archive_path.name == planned_name:
            return RenameOutcome.SKIPPED

        try:
            target = archive_path.with_name(planned_name)
        except ValueError as exc:
            self._logger.error(
                "Failed to rename %s -> %s: %s", archive_path, planned_name, exc
            )
            return RenameOutcome.FAILED

        if dry_run:
            self._logger.info("Would rename %s -> %s", archive_path, target.name)
            return RenameOutcome.PLANNED

        try:
            if target.exists() and not target.samefile(archive_path):
                raise FileExistsError(f"Target already exists: {target}")
            archive_path.rename(target)
        except OSError as exc:
            self._logger.error(
                "Failed to rename %s -> %s: %s", archive_path, planned_name, exc
            )
            return RenameOutcome.FAILED

        self._logger.info("Renamed %s -> %s", archive_path, target.name)
        return RenameOutcome.RENAMED
