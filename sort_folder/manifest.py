"""
Undo manifest for the folder sorter.

Every successful move is appended to a plain-text log in the target directory,
one "source,destination" line per move, both relative to the target and
forward-slash separated. Undo replays the log newest-first and then empties
it.

Filenames are written unescaped: a comma in the source name or a newline in
either name will corrupt that record.
"""

from pathlib import Path
from typing import Iterable

from .config import MANIFEST_NAME
from .executor import move_file, prune_empty_dirs
from .planner import Move
from .utils import print_line, print_warning, relative_posix


def manifest_path(root: Path) -> Path:
    return root / MANIFEST_NAME


class ManifestWriter:
    """
    Append-mode writer that records moves as they complete.

    Opening is best-effort: if the manifest cannot be opened, a warning is
    printed and record() becomes a no-op, so the run itself still completes.
    """

    def __init__(self, root: Path):
        self.root = root
        self.path = manifest_path(root)
        self.written = 0
        self.ok = False
        self._handle = None

    def __enter__(self) -> "ManifestWriter":
        try:
            self._handle = open(self.path, 'a', encoding='utf-8', newline='\n')
            self.ok = True
        except OSError as e:
            print_warning(f"Cannot open manifest {self.path}: {e}. Moves will not be undoable.")
        return self

    def record(self, move: Move) -> None:
        if self._handle is None:
            return
        old_rel, new_rel = move.to_relative(self.root)
        try:
            self._handle.write(f"{old_rel},{new_rel}\n")
            # Keep the log usable if the run is interrupted
            self._handle.flush()
            self.written += 1
        except OSError as e:
            print_warning(f"Failed to write manifest entry for {old_rel}: {e}")
            self.ok = False

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._handle is not None:
            try:
                self._handle.close()
            except OSError as e:
                print_warning(f"Failed to close manifest {self.path}: {e}")
                self.ok = False
            self._handle = None


def append_manifest(root: Path, moves: Iterable[Move]) -> bool:
    """
    Append completed moves to the manifest.

    Returns:
        True if every record was written.
    """
    with ManifestWriter(root) as writer:
        for move in moves:
            writer.record(move)
    return writer.ok


def load_manifest(root: Path) -> list[Move]:
    """
    Read the manifest in file order.

    Each line is split at its first comma. Blank lines, lines without a
    comma and lines whose paths leave the target directory are ignored.
    A missing or unreadable manifest yields [].
    """
    path = manifest_path(root)
    if not path.exists():
        return []

    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        print_warning(f"Cannot read manifest {path}: {e}")
        return []

    moves = []
    malformed = 0
    for line in lines:
        if not line.strip():
            continue
        source_rel, sep, destination_rel = line.partition(",")
        if not sep or not source_rel or not destination_rel:
            malformed += 1
            continue
        try:
            moves.append(Move.from_relative(root, source_rel, destination_rel))
        except ValueError:
            malformed += 1

    if malformed:
        print_warning(f"Ignored {malformed} malformed manifest line(s) in {path}")

    return moves


def clear_manifest(root: Path) -> None:
    """Truncate the manifest to empty (no-op if it does not exist)."""
    path = manifest_path(root)
    if not path.exists():
        return
    try:
        with open(path, 'w', encoding='utf-8'):
            pass
    except OSError as e:
        print_warning(f"Cannot clear manifest {path}: {e}")


def undo(root: Path, dry_run: bool = False, prune_empty: bool = True) -> dict:
    """
    Move every recorded file back to where it came from, newest first.

    Entries whose recorded destination no longer exists count as failures.
    After all entries are attempted the manifest is emptied, whatever the
    individual outcomes. A dry run only prints and changes nothing.

    Returns:
        Report dict with entries/restored/failed counts and error messages.
    """
    moves = load_manifest(root)
    moves.reverse()

    restored = 0
    failed = 0
    errors: list[str] = []
    emptied_dirs: set[Path] = set()

    for move in moves:
        old_rel = relative_posix(move.source, root)
        new_rel = relative_posix(move.destination, root)

        if not move.destination.exists():
            failed += 1
            msg = f"Recorded file missing: {new_rel}"
            errors.append(msg)
            print_line(f"[ERROR] {msg}")
            continue

        if move.destination.is_symlink() or not move.destination.is_file():
            failed += 1
            msg = f"Recorded destination is not a file: {new_rel}"
            errors.append(msg)
            print_line(f"[ERROR] {msg}")
            continue

        if dry_run:
            print_line(f"  [WOULD RESTORE] {new_rel} -> {old_rel}")
            restored += 1
            continue

        res = move_file(move.destination, move.source)
        if res["status"] == "moved":
            restored += 1
            emptied_dirs.add(move.destination.parent)
        else:
            failed += 1
            msg = f"{res['error']}: {new_rel}"
            errors.append(msg)
            print_line(f"[ERROR] {msg}")

    pruned: list[str] = []
    if not dry_run:
        clear_manifest(root)
        if prune_empty and emptied_dirs:
            pruned = prune_empty_dirs(root, emptied_dirs)

    return {
        "dry_run": dry_run,
        "entries": len(moves),
        "restored": restored,
        "failed": failed,
        "pruned_folders": pruned,
        "errors": errors,
    }
