from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from tabulate import tabulate

from java_game_rename import __version__
from java_game_rename.bootstrap.container import Container
from java_game_rename.config.logging_setup import configure_logging
from java_game_rename.config.settings_loader import SettingsLoader
from java_game_rename.errors import JavaGameRenameError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="java-game-rename",
        description=(
            "Catalog Java ME games (.jar) into a CSV report and optionally "
            "rename them after the game name in their manifest."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: $SETTINGS_FILE or ./config.txt)",
    )
    parser.add_argument("--dir", dest="java_game_dir", help="Directory to scan")
    parser.add_argument("--export", dest="export_file", help="CSV report path")
    parser.add_argument(
        "--rename",
        dest="rename",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Rename archives after their game name",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log planned renames without touching any file",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        help="Console log level",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    log = logging.getLogger("java_game_rename.cli")

    overrides = {
        "java_game_dir": args.java_game_dir,
        "export_file": args.export_file,
        "rename": args.rename,
        "log_level": args.log_level,
    }
    try:
        config = SettingsLoader.load(args.config, overrides=overrides, dry_run=args.dry_run)
    except JavaGameRenameError as exc:
        configure_logging("info")
        log.error("%s", exc)
        return 1

    configure_logging(config.user.log_level, config.error_log_path)

    if not config.game_dir.is_dir():
        log.warning("Game directory not found, report will be empty: %s", config.game_dir)

    container = Container(config)
    scan = container.build_scan_use_case()
    try:
        result = scan(config.game_dir)
    except (JavaGameRenameError, OSError) as exc:
        log.error("%s", exc)
        return 1

    print(f"Game catalog finished! Report: {result.report_path}")
    print(tabulate(result.as_rows(), headers=["", "archives"], tablefmt="rounded_grid"))
    return 0
