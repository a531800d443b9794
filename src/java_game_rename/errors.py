from __future__ import annotations


class JavaGameRenameError(Exception):
    """Base class for setup failures that stop a run."""


class SettingsError(JavaGameRenameError):
    pass


class ReportError(JavaGameRenameError):
    pass


class ReportLockedError(ReportError):
    pass
