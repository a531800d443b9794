from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Callable

from java_game_rename.domain.models.read_result import ReadResult
from java_game_rename.domain.models.rename_outcome import RenameOutcome
from java_game_rename.domain.protocols.archive_store_port import ArchiveStorePort
from java_game_rename.domain.protocols.lock_port import LockPort
from java_game_rename.domain.protocols.logger_port import LoggerPort
from java_game_rename.domain.protocols.manifest_reader_port import ManifestReaderPort
from java_game_rename.domain.protocols.report_writer_port import ReportWriterPort
from java_game_rename.domain.workflows.models.scan_result import ScanResult
from java_game_rename.errors import ReportLockedError


FAILURE_MARKER = "!!!!! file error, failed to read game info !!!!!"


class ScanArchives:
    def __init__(
        self,
        archive_store: ArchiveStorePort,
        manifest_reader: ManifestReaderPort,
        report_writer_factory: Callable[[], AbstractContextManager[ReportWriterPort]],
        lock: LockPort,
        logger: LoggerPort,
        extension: str,
        rename: bool,
        dry_run: bool = False,
    ) -> None:
        self._archive_store = archive_store
        self._manifest_reader = manifest_reader
        self._report_writer_factory = report_writer_factory
        self._lock = lock
        self._logger = logger
        self._extension = extension.lower().lstrip(".")
        self._rename = rename
        self._dry_run = dry_run

    def _is_target(self, file_path: Path) -> bool:
        return file_path.suffix.lower() == f".{self._extension}"

    def _write_result(self, writer: ReportWriterPort, result: ReadResult) -> None:
        if result.record is None:
            writer.write_row(result.archive_path, FAILURE_MARKER, "")
            return
        writer.write_row(
            result.archive_path, result.record.name, result.record.description
        )

    def __call__(self, root: Path) -> ScanResult:
        if not self._lock.acquire():
            raise ReportLockedError("Report is locked by another run")

        scanned = extracted = failed = renamed = rename_failed = 0
        try:
            with self._report_writer_factory() as writer:
                for file_path in self._archive_store.walk(root):
                    if not self._is_target(file_path):
                        continue

                    scanned += 1
                    result = self._manifest_reader.read(file_path)
                    self._write_result(writer, result)
                    if not result.ok:
                        failed += 1
                        continue
                    extracted += 1

                    if not self._rename:
                        continue
                    outcome = self._archive_store.rename_archive(
                        file_path,
                        result.record.name,
                        self._extension,
                        dry_run=self._dry_run,
                    )
                    if outcome is RenameOutcome.RENAMED:
                        renamed += 1
                    elif outcome is RenameOutcome.FAILED:
                        rename_failed += 1

                report_path = writer.path
        finally:
            self._lock.release()

        self._logger.info(
            "Scan finished: archives: %d, extracted: %d, failed: %d, renamed: %d, rename failures: %d",
            scanned,
            extracted,
            failed,
            renamed,
            rename_failed,
        )
        return ScanResult(
            report_path=report_path,
            scanned=scanned,
            extracted=extracted,
            failed=failed,
            renamed=renamed,
            rename_failed=rename_failed,
        )
