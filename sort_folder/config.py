"""
Run configuration for the folder sorter.

Holds the resolved command-line options and the fixed names the rest of the
package agrees on (manifest file, hidden-entry marker, classification modes).
"""

from dataclasses import dataclass
from pathlib import Path

# Classification modes accepted by --by
MODES = ("type", "date")
DEFAULT_MODE = "type"

# Undo log written at the top level of the target directory
MANIFEST_NAME = ".sort_folder_manifest.csv"

# Entries starting with this character are treated as hidden
SKIP_PREFIX = "."


class ConfigError(ValueError):
    """Raised when the run configuration is unusable."""


@dataclass
class OrganizeConfig:
    """
    Resolved options for a single organize or undo run.

    Attributes:
        target: Directory whose top-level files are sorted.
        mode: "type" (by extension) or "date" (by modification month).
        dry_run: Report intended moves without touching the filesystem.
        undo: Replay the manifest in reverse instead of organizing.
        prefer_exif: In date mode, file images by their EXIF capture date.
        prune_empty: After undo, remove folders left empty by the restore.
        report_out: Optional path for a JSON summary of the run.
    """
    target: Path
    mode: str = DEFAULT_MODE
    dry_run: bool = False
    undo: bool = False
    prefer_exif: bool = False
    prune_empty: bool = True
    report_out: Path | None = None

    def validate(self) -> "OrganizeConfig":
        """
        Check the configuration before any filesystem mutation.

        Returns:
            The same config with `target` resolved to an absolute path.

        Raises:
            ConfigError: If the target is missing or the mode is unknown.
        """
        if self.target is None or str(self.target).strip() == "":
            raise ConfigError("No target directory given (use --path)")

        target = Path(self.target).expanduser()
        if not target.exists():
            raise ConfigError(f"Directory not found: {target}")
        if not target.is_dir():
            raise ConfigError(f"Not a directory: {target}")

        if not self.undo and self.mode not in MODES:
            raise ConfigError(
                f"Invalid mode '{self.mode}' (expected one of: {', '.join(MODES)})"
            )

        self.target = target.resolve()
        return self

    @classmethod
    def from_args(cls, args) -> "OrganizeConfig":
        """Build a config from parsed argparse arguments."""
        return cls(
            target=args.path,
            mode=args.by,
            dry_run=args.dry_run,
            undo=args.undo,
            prefer_exif=args.exif,
            prune_empty=not args.keep_folders,
            report_out=args.report_out,
        )
