from __future__ import annotations

import logging

from java_game_rename.config.settings_models import AppConfig
from java_game_rename.domain.workflows.scan_archives import ScanArchives
from java_game_rename.infrastructure.exporters.csv_report_writer import CsvReportWriter
from java_game_rename.infrastructure.locking.file_lock_adapter import FileLockAdapter
from java_game_rename.infrastructure.readers.jar_manifest_reader import JarManifestReader
from java_game_rename.infrastructure.repositories.fs_archive_store import FsArchiveStore


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.logger = logging.getLogger("java_game_rename")

        self.archive_store = FsArchiveStore(logging.getLogger("java_game_rename.store"))
        self.manifest_reader = JarManifestReader(
            logging.getLogger("java_game_rename.reader")
        )
        self.lock = FileLockAdapter.for_report(config.export_path)

    def report_writer(self) -> CsvReportWriter:
        return CsvReportWriter(self.config.export_path)

    def build_scan_use_case(self) -> ScanArchives:
        return ScanArchives(
            archive_store=self.archive_store,
            manifest_reader=self.manifest_reader,
            report_writer_factory=self.report_writer,
            lock=self.lock,
            logger=self.logger,
            extension=self.config.user.archive_extension,
            rename=self.config.user.rename,
            dry_run=self.config.dry_run,
        )
