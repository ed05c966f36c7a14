"""
Move planning for the folder sorter.

Turns the top-level files of the target directory into an ordered list of
moves. Nothing is touched on disk here.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .categories import category_by_date, category_by_type
from .config import OrganizeConfig
from .scanner import get_exif_date, scan_top_level
from .utils import print_warning


def _join_inside(root: Path, rel: str) -> Path:
    """Join a forward-slash relative path onto root, refusing to leave it."""
    parts = rel.split("/")
    if rel.startswith("/") or any(p in ("", ".", "..") for p in parts) or Path(rel).is_absolute():
        raise ValueError(f"Path escapes target directory: {rel}")
    return root.joinpath(*parts)


@dataclass(frozen=True)
class Move:
    """A single file relocation from `source` to `destination`."""
    source: Path
    destination: Path

    def to_relative(self, root: Path) -> tuple[str, str]:
        """Return (source, destination) relative to root with forward slashes."""
        return (
            self.source.relative_to(root).as_posix(),
            self.destination.relative_to(root).as_posix(),
        )

    @classmethod
    def from_relative(cls, root: Path, source_rel: str, destination_rel: str) -> "Move":
        """
        Build a move from root-relative, forward-slash paths.

        Raises:
            ValueError: If either path is absolute or steps outside root.
        """
        return cls(
            source=_join_inside(root, source_rel),
            destination=_join_inside(root, destination_rel),
        )


@dataclass
class Plan:
    """Ordered moves plus the counters reported to the user."""
    root: Path
    mode: str
    moves: list[Move] = field(default_factory=list)
    scanned: int = 0
    skipped: int = 0

    @property
    def planned(self) -> int:
        return len(self.moves)


def destination_for(path: Path, root: Path, mode: str, prefer_exif: bool = False) -> Path:
    """
    Compute where a file belongs.

    Args:
        path: The file to classify.
        root: Target directory.
        mode: "type" or "date".
        prefer_exif: In date mode, use the EXIF capture date when present.

    Returns:
        root/<Category>/<name> or root/<YYYY>/<MM>/<name>.
    """
    if mode == "date":
        timestamp = None
        if prefer_exif:
            taken = get_exif_date(path)
            if taken is not None:
                timestamp = taken.timestamp()
        if timestamp is None:
            timestamp = path.stat().st_mtime
        year, month = category_by_date(timestamp).split("/")
        return root / year / month / path.name

    return root / category_by_type(path.name) / path.name


def _same_location(source: Path, destination: Path) -> bool:
    """True if both paths refer to the same file on disk."""
    if source == destination:
        return True
    try:
        return destination.exists() and os.path.samefile(source, destination)
    except OSError:
        return False


def build_plan(config: OrganizeConfig) -> Plan:
    """
    Plan the moves for an organize run.

    The listing order of the directory is kept as-is; the executor and the
    manifest see the moves in exactly this order.

    Args:
        config: A validated configuration.

    Returns:
        The plan. Files already at their destination are counted as
        scanned but not planned.
    """
    root = config.target
    files, skipped = scan_top_level(root)
    plan = Plan(root=root, mode=config.mode, skipped=skipped)

    for path in files:
        plan.scanned += 1
        try:
            destination = destination_for(path, root, config.mode, config.prefer_exif)
        except OSError as e:
            # Vanished between listing and stat
            print_warning(f"Skipping {path.name}: {e}")
            continue

        if _same_location(path, destination):
            continue

        plan.moves.append(Move(source=path, destination=destination))

    return plan
