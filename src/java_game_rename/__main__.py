from __future__ import annotations

from java_game_rename.entrypoints.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
