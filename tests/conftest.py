from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Callable, Iterator

import pytest


MakeJar = Callable[..., Path]


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def temp_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "workspace"
    (root / "games").mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(root)
    monkeypatch.delenv("SETTINGS_FILE", raising=False)
    return root


@pytest.fixture
def make_jar() -> MakeJar:
    def _make_jar(
        path: Path,
        manifest: str | bytes | None,
        entry_name: str = "META-INF/MANIFEST.MF",
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("com/example/Main.class", b"\xca\xfe\xba\xbe")
            if manifest is not None:
                archive.writestr(entry_name, manifest)
        return path

    return _make_jar


def corrupt_central_directory_name(path: Path) -> Path:
    """Flag the first central directory entry as UTF-8 and give it an invalid name."""
    data = bytearray(path.read_bytes())
    header = data.find(b"PK\x01\x02")
    flags = int.from_bytes(data[header + 8 : header + 10], "little") | 0x800
    data[header + 8 : header + 10] = flags.to_bytes(2, "little")
    name_length = int.from_bytes(data[header + 28 : header + 30], "little")
    assert name_length >= 4
    data[header + 46 : header + 50] = b"\xff\xfe\xfd\xfc"
    path.write_bytes(bytes(data))
    return path
