from __future__ import annotations

from pathlib import Path

from filelock import FileLock, Timeout

from java_game_rename.domain.protocols.lock_port import LockPort


class FileLockAdapter(LockPort):
    """Non-blocking lock on a sibling ``.lock`` file; one run per report.

    The lock file is removed on release so no stray file is left next to the
    report.
    """

    def __init__(self, lock_path: Path, timeout_seconds: float = 0.0) -> None:
        self._lock_path = lock_path
        self._lock = FileLock(str(lock_path))
        self._timeout_seconds = float(timeout_seconds)
        self._held = False

    @classmethod
    def for_report(cls, report_path: Path) -> "FileLockAdapter":
        return cls(report_path.with_name(f"{report_path.name}.lock"))

    def acquire(self) -> bool:
        self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._lock.acquire(timeout=self._timeout_seconds)
        except Timeout:
            return False
        self._held = True
        return True

    def release(self) -> None:
        if not self._held:
            return
        self._held = False
        self._lock.release()
        self._lock_path.unlink(missing_ok=True)
