#!/usr/bin/env python3
"""
Folder Sorter - CLI Entry Point
===============================

Usage:
    python -m sort_folder --path ~/Downloads
    python -m sort_folder --path ~/Downloads --by date --dry-run
    python -m sort_folder --path ~/Downloads --undo
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

from .config import MODES, DEFAULT_MODE, ConfigError, OrganizeConfig
from .executor import execute_moves
from .manifest import ManifestWriter, undo
from .planner import build_plan
from .utils import (
    print_header,
    print_error,
    print_warning,
    print_success,
    print_plan_table,
    print_line,
    save_json,
)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_RUNTIME = 2


def run_organize(config: OrganizeConfig) -> dict:
    """Plan and apply (or simulate) an organize run."""
    mode = "DRY-RUN" if config.dry_run else "APPLY"
    print_header("Folder Sorter", f"Root: {config.target}\nMode: by {config.mode}")

    plan = build_plan(config)
    print_line(f"[INFO] Scanned {plan.scanned} files, planned {plan.planned} moves")

    if not plan.moves:
        print_success("Nothing to do - directory is already organized")
        return _organize_report(config, plan, None)

    if config.dry_run:
        print_plan_table(plan)
        print_line(f"\n[{mode}] Moves that would be made:")
        report = execute_moves(plan.moves, plan.root, dry_run=True)
    else:
        print_line(f"\n[{mode}] Moving files...")
        with ManifestWriter(plan.root) as manifest:
            report = execute_moves(plan.moves, plan.root, dry_run=False, on_moved=manifest.record)
        if not manifest.ok:
            print_warning("Manifest is incomplete; some moves cannot be undone")

    print_line(f"\n[{mode}] Complete: {plan.scanned} scanned, {plan.planned} planned, "
               f"{report['moved']} moved, {report['failed']} failed")

    if config.dry_run:
        print_warning("This was a DRY-RUN. No files were actually moved.")

    return _organize_report(config, plan, report)


def _organize_report(config: OrganizeConfig, plan, report: dict | None) -> dict:
    return {
        "root": str(config.target),
        "action": "organize",
        "mode": config.mode,
        "dry_run": config.dry_run,
        "executed_at": datetime.now().isoformat(timespec='seconds'),
        "scanned": plan.scanned,
        "skipped": plan.skipped,
        "planned": plan.planned,
        "moved": report["moved"] if report else 0,
        "failed": report["failed"] if report else 0,
        "errors": report["errors"] if report else [],
    }


def run_undo(config: OrganizeConfig) -> dict:
    """Reverse the moves recorded in the target's manifest."""
    mode = "DRY-RUN" if config.dry_run else "UNDO"
    print_header("Folder Sorter", f"Root: {config.target}\nMode: undo")

    report = undo(config.target, dry_run=config.dry_run, prune_empty=config.prune_empty)

    if report["entries"] == 0:
        print_success("Nothing to undo - manifest is empty")
    else:
        print_line(f"\n[{mode}] Complete: {report['entries']} recorded, "
                   f"{report['restored']} restored, {report['failed']} failed")
        if report["pruned_folders"]:
            print_line(f"  [CLEANUP] Removed {len(report['pruned_folders'])} empty folders")

    if config.dry_run:
        print_warning("This was a DRY-RUN. No files were actually moved.")

    report.update({
        "root": str(config.target),
        "action": "undo",
        "executed_at": datetime.now().isoformat(timespec='seconds'),
    })
    return report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sort-folder",
        description="Folder Sorter - Sort the files of a directory into type or date folders, with undo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--path", type=Path, required=True,
                        help="Directory to organize")
    parser.add_argument("--by", choices=list(MODES), default=DEFAULT_MODE,
                        help=f"Sort by file type or modification date (default: {DEFAULT_MODE})")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would happen without moving anything")
    parser.add_argument("--undo", action="store_true",
                        help="Reverse the moves recorded in the directory's manifest")
    parser.add_argument("--exif", action="store_true",
                        help="With --by date, file photos by their EXIF capture date")
    parser.add_argument("--keep-folders", action="store_true",
                        help="With --undo, keep folders that end up empty")
    parser.add_argument("--report-out", type=Path, metavar="FILE",
                        help="Write a JSON summary of the run")
    return parser


# =============================================================================
# Main
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on bad arguments; report them as config errors
        return EXIT_OK if e.code == 0 else EXIT_CONFIG

    try:
        config = OrganizeConfig.from_args(args).validate()
    except ConfigError as e:
        print_error(str(e))
        return EXIT_CONFIG

    try:
        if config.undo:
            report = run_undo(config)
        else:
            report = run_organize(config)

        if config.report_out:
            save_json(report, config.report_out)

        return EXIT_OK

    except KeyboardInterrupt:
        print_line("\n[ABORT] Operation cancelled by user")
        return 130
    except Exception as e:
        print_error(f"Unexpected error: {type(e).__name__}: {e}")
        return EXIT_RUNTIME


if __name__ == "__main__":
    sys.exit(main())
