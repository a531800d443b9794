from java_game_rename.domain.models.manifest_record import ManifestRecord
from java_game_rename.domain.models.read_result import ReadResult, ReadStatus
from java_game_rename.domain.models.rename_outcome import RenameOutcome

__all__ = [
    "ManifestRecord",
    "ReadResult",
    "ReadStatus",
    "RenameOutcome",
]
