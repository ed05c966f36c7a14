"""
Move execution for the folder sorter.

Applies (or simulates) planned moves. Each move is independent: a failure is
recorded and the batch carries on.
"""

import os
import shutil
from pathlib import Path
from typing import Callable, Iterable
from tqdm import tqdm

from .planner import Move
from .utils import print_line, relative_posix


def _copy_and_delete(src: Path, dst: Path) -> str | None:
    """
    Fall back to copy + delete when a rename is not possible.

    Overwrites an existing destination. Returns an error message, or None on
    success.
    """
    try:
        shutil.copy2(src, dst)
    except OSError as e:
        return f"Copy failed: {e}"

    try:
        os.remove(src)
    except OSError as e:
        return f"Copied but could not remove source: {e}"

    return None


def move_file(src: Path, dst: Path) -> dict:
    """
    Move a single file, creating the destination folders as needed.

    Tries an atomic rename first; if that fails (typically a cross-device
    move) it copies the file and removes the source. An existing destination
    file is overwritten; a directory in its place fails the move.

    Returns:
        Dict with status ("moved" or "failed"), method ("rename", "copy" or
        None) and error (None on success).
    """
    res = {"source": src, "destination": dst, "status": "failed", "method": None, "error": None}

    if not src.exists():
        res["error"] = "Source not found"
        return res

    if dst.is_dir():
        res["error"] = "Destination is a directory"
        return res

    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        res["error"] = f"Failed to create parent dir: {e}"
        return res

    try:
        os.replace(src, dst)
        res["status"] = "moved"
        res["method"] = "rename"
        return res
    except OSError as rename_error:
        error = _copy_and_delete(src, dst)
        if error is None:
            res["status"] = "moved"
            res["method"] = "copy"
        else:
            res["error"] = f"{error} (rename failed: {rename_error})"
        return res


def execute_moves(
    moves: Iterable[Move],
    root: Path,
    dry_run: bool = True,
    on_moved: Callable[[Move], None] | None = None,
) -> dict:
    """
    Apply (or simulate) a list of moves in order.

    Args:
        moves: Planned moves.
        root: Target directory, used for display paths.
        dry_run: If True, only print what would happen.
        on_moved: Called with each move right after it succeeds.

    Returns:
        Report dict with moved/failed counts and error messages.
    """
    moves = list(moves)
    moved = 0
    failed = 0
    errors: list[str] = []

    if dry_run:
        for move in moves:
            old_rel = relative_posix(move.source, root)
            new_rel = relative_posix(move.destination, root)
            print_line(f"  [WOULD MOVE] {old_rel} -> {new_rel}")
        moved = len(moves)
    else:
        with tqdm(total=len(moves), unit="file", disable=not moves) as pbar:
            for move in moves:
                res = move_file(move.source, move.destination)
                if res["status"] == "moved":
                    moved += 1
                    if on_moved is not None:
                        on_moved(move)
                else:
                    failed += 1
                    msg = f"{res['error']}: {relative_posix(move.source, root)}"
                    errors.append(msg)
                    tqdm.write(f"[ERROR] {msg}")
                pbar.update(1)

    return {
        "dry_run": dry_run,
        "planned": len(moves),
        "moved": moved,
        "failed": failed,
        "errors": errors,
    }


def prune_empty_dirs(root: Path, candidates: Iterable[Path]) -> list[str]:
    """
    Remove now-empty folders among candidates and their parents below root.

    Deepest folders go first so that "2024/01" is removed before "2024".
    The root itself is never removed.

    Returns:
        List of removed folder paths (relative to root).
    """
    root = root.resolve()
    to_check: set[Path] = set()
    for folder in candidates:
        current = Path(folder)
        while current != root and root in current.parents:
            to_check.add(current)
            current = current.parent

    removed = []
    for folder in sorted(to_check, key=lambda p: len(p.parts), reverse=True):
        try:
            # os.rmdir only works if the directory is empty
            os.rmdir(folder)
            removed.append(relative_posix(folder, root))
        except OSError:
            # Not empty, already gone, or not removable
            continue

    return removed
