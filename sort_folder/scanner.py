"""
Top-level directory scanning for the folder sorter.

Lists the immediate children of the target directory and filters out anything
that must not be moved: non-files, hidden entries, the manifest, and folders
created by earlier runs.
"""

import os
import re
from datetime import datetime
from pathlib import Path
from PIL import Image, UnidentifiedImageError
from PIL.ExifTags import TAGS

from .config import MANIFEST_NAME, SKIP_PREFIX
from .categories import CATEGORIES

# Year folders written by date mode ("2024")
_YEAR_FOLDER = re.compile(r"[0-9]{4}")

EXIF_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.tiff', '.webp', '.heic'}


def should_skip(entry: Path, root: Path) -> bool:
    """
    Decide whether a directory entry is left alone.

    Args:
        entry: Path of the entry being considered.
        root: The target directory being organized.

    Returns:
        True for the manifest, hidden entries, category folders, year
        folders at the root, and anything that is not a regular file.
    """
    name = entry.name

    if name == MANIFEST_NAME:
        return True

    if name.startswith(SKIP_PREFIX):
        return True

    if name in CATEGORIES:
        return True

    if entry.parent == root and _YEAR_FOLDER.fullmatch(name):
        return True

    # Symlinks and special files are never moved, not even symlinks to files
    try:
        if entry.is_symlink() or not entry.is_file():
            return True
    except OSError:
        return True

    return False


def list_entries(root: Path) -> list[Path]:
    """
    Snapshot the immediate children of root in filesystem order.

    No recursion and no sorting; the listing is materialized before any
    moves happen.
    """
    with os.scandir(root) as it:
        return [root / entry.name for entry in it]


def scan_top_level(root: Path) -> tuple[list[Path], int]:
    """
    List the files in root that are eligible for sorting.

    Returns:
        (files, skipped) where files keeps the filesystem order.
    """
    files = []
    skipped = 0
    for entry in list_entries(root):
        if should_skip(entry, root):
            skipped += 1
            continue
        files.append(entry)
    return files, skipped


def get_exif_date(filepath: Path) -> datetime | None:
    """Extract the 'DateTimeOriginal' (or 'DateTime') from an image's EXIF data."""
    if filepath.suffix.lower() not in EXIF_EXTENSIONS:
        return None

    try:
        with Image.open(filepath) as img:
            exif = img.getexif()
            if not exif:
                return None

            found = {}
            for tag_id, value in exif.items():
                tag = TAGS.get(tag_id, tag_id)
                if tag in ('DateTimeOriginal', 'DateTime'):
                    found[tag] = value

            # Format is "YYYY:MM:DD HH:MM:SS"
            for tag in ('DateTimeOriginal', 'DateTime'):
                date_str = found.get(tag)
                if isinstance(date_str, str) and len(date_str) >= 19:
                    try:
                        return datetime.strptime(date_str[:19], "%Y:%m:%d %H:%M:%S")
                    except ValueError:
                        continue
    except (UnidentifiedImageError, OSError, ValueError):
        pass
    return None
