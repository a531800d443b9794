from __future__ import annotations

import traceback
import zipfile
from pathlib import Path

from java_game_rename.domain.models.read_result import ReadResult, ReadStatus
from java_game_rename.domain.protocols.logger_port import LoggerPort
from java_game_rename.domain.services.manifest_decoder import decode_manifest
from java_game_rename.domain.services.manifest_parser import (
    MANIFEST_ENTRY,
    build_record,
    parse_manifest,
)


class JarManifestReader:
    def __init__(self, logger: LoggerPort) -> None:
        self._logger = logger

    def _read_manifest(self, archive: zipfile.ZipFile) -> bytes | None:
        try:
            info = archive.getinfo(MANIFEST_ENTRY)
        except KeyError:
            return None
        with archive.open(info) as entry:
            return entry.read()

    def read(self, archive_path: Path) -> ReadResult:
        try:
            archive = zipfile.ZipFile(archive_path)
        except (zipfile.BadZipFile, OSError) as exc:
            self._logger.error("Failed to open archive %s: %s", archive_path, exc)
            return ReadResult.failure(archive_path, ReadStatus.OPEN_FAILED, str(exc))
        except Exception as exc:
            # Malformed central directories raise UnicodeDecodeError, ValueError,
            # struct.error and others from the ZipFile constructor.
            self._logger.error(
                "Failed to open archive %s\n%s",
                archive_path,
                traceback.format_exc(),
            )
            return ReadResult.failure(archive_path, ReadStatus.OPEN_FAILED, str(exc))

        try:
            with archive:
                raw = self._read_manifest(archive)
                if raw is None:
                    self._logger.warning(
                        "Manifest %s not found in %s", MANIFEST_ENTRY, archive_path
                    )
                    return ReadResult.failure(
                        archive_path,
                        ReadStatus.MANIFEST_MISSING,
                        f"{MANIFEST_ENTRY} not found",
                    )
                record = build_record(parse_manifest(decode_manifest(raw)))
        except Exception as exc:
            self._logger.error(
                "Failed to read manifest of %s\n%s",
                archive_path,
                traceback.format_exc(),
            )
            return ReadResult.failure(archive_path, ReadStatus.PARSE_FAILED, str(exc))

        self._logger.debug(
            "Read %s: name=%r, description=%r",
            archive_path,
            record.name,
            record.description,
        )
        return ReadResult.success(archive_path, record)
