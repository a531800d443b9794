from __future__ import annotations

import csv
from pathlib import Path
from typing import final

import pytest

from java_game_rename.domain.models.manifest_record import ManifestRecord
from java_game_rename.domain.models.read_result import ReadResult, ReadStatus
from java_game_rename.domain.workflows.scan_archives import FAILURE_MARKER, ScanArchives
from java_game_rename.errors import ReportLockedError
from java_game_rename.infrastructure.exporters.csv_report_writer import CsvReportWriter
from java_game_rename.infrastructure.readers.jar_manifest_reader import JarManifestReader
from java_game_rename.infrastructure.repositories.fs_archive_store import FsArchiveStore
from tests.conftest import MakeJar, corrupt_central_directory_name
from tests.fakes import FakeLogger


@final
class _FakeLock:
    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.acquired = 0
        self.released = 0

    def acquire(self) -> bool:
        if not self.available:
            return False
        self.acquired += 1
        return True

    def release(self) -> None:
        self.released += 1


@final
class _ExplodingReader:
    def read(self, archive_path: Path) -> ReadResult:
        raise RuntimeError(f"unexpected {archive_path}")


@final
class _StubReader:
    def __init__(self, name: str) -> None:
        self._name = name

    def read(self, archive_path: Path) -> ReadResult:
        return ReadResult.success(archive_path, ManifestRecord(self._name, "desc"))


def _manifest(name: str, description: str = "", midlet_1: str = "") -> str:
    lines = ["Manifest-Version: 1.0", f"MIDlet-Name: {name}"]
    if midlet_1:
        lines.append(f"MIDlet-1: {midlet_1}")
    if description:
        lines.append(f"MIDlet-Description: {description}")
    return "\r\n".join(lines) + "\r\n"


def _build(
    report: Path,
    *,
    rename: bool = False,
    dry_run: bool = False,
    lock: _FakeLock | None = None,
    reader: object | None = None,
) -> tuple[ScanArchives, FakeLogger, _FakeLock]:
    logger = FakeLogger()
    lock = lock or _FakeLock()
    scan = ScanArchives(
        archive_store=FsArchiveStore(logger),
        manifest_reader=reader or JarManifestReader(logger),
        report_writer_factory=lambda: CsvReportWriter(report),
        lock=lock,
        logger=logger,
        extension="jar",
        rename=rename,
        dry_run=dry_run,
    )
    return scan, logger, lock


def _rows(report: Path) -> list[list[str]]:
    with report.open(encoding="utf-8-sig", newline="") as handle:
        return list(csv.reader(handle))[1:]


def test_scan_archives_given_mixed_files_when_scanned_then_reports_only_archives(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    snake = make_jar(root / "snake.jar", _manifest("Snake", "Eat apples"))
    tetris = make_jar(root / "puzzle" / "TETRIS.JAR", _manifest("俄罗斯方块"))
    (root / "readme.txt").write_text("not a game", encoding="utf-8")
    (root / "notes.jar.bak").write_bytes(b"backup")
    report = tmp_path / "report.csv"
    scan, _, lock = _build(report)

    result = scan(root)

    assert _rows(report) == [
        [str(tetris), "俄罗斯方块", ""],
        [str(snake), "Snake", "Eat apples"],
    ]
    assert result.scanned == 2
    assert result.extracted == 2
    assert result.failed == 0
    assert result.report_path == report
    assert (lock.acquired, lock.released) == (1, 1)


def test_scan_archives_given_corrupt_and_valid_archive_when_scanned_then_writes_two_rows(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    corrupt = root / "a_corrupt.jar"
    corrupt.parent.mkdir(parents=True)
    corrupt.write_bytes(b"PK\x03\x04 truncated")
    valid = make_jar(root / "b_valid.jar", _manifest("Snake"))
    report = tmp_path / "report.csv"
    scan, logger, _ = _build(report)

    result = scan(root)

    assert _rows(report) == [
        [str(corrupt), FAILURE_MARKER, ""],
        [str(valid), "Snake", ""],
    ]
    assert (result.scanned, result.extracted, result.failed) == (2, 1, 1)
    assert any(str(corrupt) in message for message in logger.errors)


def test_scan_archives_given_archive_without_manifest_when_scanned_then_writes_failure_row(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    bare = make_jar(root / "a.jar", None)
    valid = make_jar(root / "b.jar", _manifest("Snake"))
    report = tmp_path / "report.csv"
    scan, _, _ = _build(report)

    scan(root)

    assert _rows(report) == [
        [str(bare), FAILURE_MARKER, ""],
        [str(valid), "Snake", ""],
    ]


def test_scan_archives_given_rename_enabled_when_scanned_then_renames_archives(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    original = make_jar(
        root / "1234.jar",
        _manifest("Snake", midlet_1="贪吃蛇, /icon.png, com.nokia.Snake"),
    )
    report = tmp_path / "report.csv"
    scan, _, _ = _build(report, rename=True)

    result = scan(root)

    assert original.exists() is False
    assert (root / "贪吃蛇.jar").exists() is True
    assert _rows(report) == [[str(original), "贪吃蛇", ""]]
    assert result.renamed == 1


def test_scan_archives_given_rename_collision_when_scanned_then_keeps_row_and_continues(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    first = make_jar(root / "a.jar", _manifest("Snake"))
    second = make_jar(root / "b.jar", _manifest("Snake"))
    third = make_jar(root / "c.jar", _manifest("Tetris"))
    report = tmp_path / "report.csv"
    scan, logger, _ = _build(report, rename=True)

    result = scan(root)

    assert _rows(report) == [
        [str(first), "Snake", ""],
        [str(second), "Snake", ""],
        [str(third), "Tetris", ""],
    ]
    assert (root / "Snake.jar").exists() is True
    assert second.exists() is True
    assert (root / "Tetris.jar").exists() is True
    assert (result.renamed, result.rename_failed) == (2, 1)
    assert len(logger.errors) == 1


def test_scan_archives_given_rename_disabled_when_scanned_then_leaves_files(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    original = make_jar(root / "1234.jar", _manifest("Snake"))
    scan, _, _ = _build(tmp_path / "report.csv")

    result = scan(root)

    assert original.exists() is True
    assert result.renamed == 0


def test_scan_archives_given_dry_run_when_scanned_then_leaves_files(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    original = make_jar(root / "1234.jar", _manifest("Snake"))
    scan, logger, _ = _build(tmp_path / "report.csv", rename=True, dry_run=True)

    result = scan(root)

    assert original.exists() is True
    assert result.renamed == 0
    assert any("Snake.jar" in message for message in logger.infos)


def test_scan_archives_given_failed_read_when_rename_enabled_then_does_not_rename(
    tmp_path: Path,
) -> None:
    root = tmp_path / "games"
    root.mkdir()
    broken = root / "broken.jar"
    broken.write_bytes(b"garbage")
    scan, _, _ = _build(tmp_path / "report.csv", rename=True)

    result = scan(root)

    assert broken.exists() is True
    assert (result.failed, result.renamed, result.rename_failed) == (1, 0, 0)


def test_scan_archives_given_custom_extension_when_scanned_then_matches_case_insensitively(
    tmp_path: Path,
) -> None:
    root = tmp_path / "games"
    root.mkdir()
    (root / "a.JAD").write_bytes(b"x")
    (root / "b.jar").write_bytes(b"x")
    report = tmp_path / "report.csv"
    logger = FakeLogger()
    scan = ScanArchives(
        archive_store=FsArchiveStore(logger),
        manifest_reader=_StubReader("Name"),
        report_writer_factory=lambda: CsvReportWriter(report),
        lock=_FakeLock(),
        logger=logger,
        extension=".jad",
        rename=False,
    )

    result = scan(root)

    assert result.scanned == 1
    assert _rows(report) == [[str(root / "a.JAD"), "Name", "desc"]]


def test_scan_archives_given_locked_report_when_scanned_then_raises_without_writing(
    tmp_path: Path,
) -> None:
    report = tmp_path / "report.csv"
    scan, _, lock = _build(report, lock=_FakeLock(available=False))

    with pytest.raises(ReportLockedError):
        scan(tmp_path)

    assert report.exists() is False
    assert lock.released == 0


def test_scan_archives_given_reader_crash_when_scanned_then_releases_lock(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    make_jar(root / "a.jar", _manifest("Snake"))
    scan, _, lock = _build(tmp_path / "report.csv", reader=_ExplodingReader())

    with pytest.raises(RuntimeError):
        scan(root)

    assert lock.released == 1


def test_scan_archives_given_failed_status_then_result_is_not_ok(tmp_path: Path) -> None:
    result = ReadResult.failure(tmp_path / "a.jar", ReadStatus.MANIFEST_MISSING, "missing")

    assert result.ok is False


def test_scan_archives_given_invalid_central_directory_when_scanned_then_continues_to_next(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    broken = corrupt_central_directory_name(make_jar(root / "a.jar", _manifest("Broken")))
    valid = make_jar(root / "b.jar", _manifest("Snake"))
    report = tmp_path / "report.csv"
    scan, _, lock = _build(report, rename=True)

    result = scan(root)

    assert _rows(report) == [
        [str(broken), FAILURE_MARKER, ""],
        [str(valid), "Snake", ""],
    ]
    assert (result.scanned, result.extracted, result.failed) == (2, 1, 1)
    assert broken.exists() is True
    assert lock.released == 1


def test_scan_archives_given_gbk_manifest_when_renamed_then_uses_chinese_name(
    tmp_path: Path, make_jar: MakeJar
) -> None:
    root = tmp_path / "games"
    manifest = "MIDlet-Name: 贪吃蛇\r\nMIDlet-1: 贪吃蛇, /icon.png, Snake\r\n".encode("gbk")
    original = make_jar(root / "1234.jar", manifest)
    report = tmp_path / "report.csv"
    scan, _, _ = _build(report, rename=True)

    result = scan(root)

    assert _rows(report) == [[str(original), "贪吃蛇", ""]]
    assert (root / "贪吃蛇.jar").exists() is True
    assert result.renamed == 1
