"""
File classification for the folder sorter.

Maps a filename to a type category by extension, or a modification time to a
"YYYY/MM" date label. The category labels double as destination folder names,
so the scanner uses CATEGORIES to recognise folders created by earlier runs.
"""

from datetime import datetime
from types import MappingProxyType

OTHER = "Other"

# Extension (lowercase, no dot) -> category label
_EXTENSION_TABLE = {
    # Images
    "jpg": "Images", "jpeg": "Images", "png": "Images", "gif": "Images",
    "bmp": "Images", "tiff": "Images", "tif": "Images", "webp": "Images",
    "heic": "Images", "svg": "Images", "ico": "Images", "raw": "Images",
    # Videos
    "mp4": "Videos", "mov": "Videos", "avi": "Videos", "mkv": "Videos",
    "wmv": "Videos", "flv": "Videos", "webm": "Videos", "m4v": "Videos",
    # Audio
    "mp3": "Audio", "wav": "Audio", "flac": "Audio", "aac": "Audio",
    "ogg": "Audio", "m4a": "Audio", "wma": "Audio",
    # PDFs
    "pdf": "PDFs",
    # Documents
    "doc": "Documents", "docx": "Documents", "txt": "Documents",
    "rtf": "Documents", "odt": "Documents", "md": "Documents",
    # Spreadsheets
    "xls": "Spreadsheets", "xlsx": "Spreadsheets", "csv": "Spreadsheets",
    "ods": "Spreadsheets",
    # Presentations
    "ppt": "Presentations", "pptx": "Presentations", "odp": "Presentations",
    "key": "Presentations",
    # Archives
    "zip": "Archives", "rar": "Archives", "7z": "Archives", "tar": "Archives",
    "gz": "Archives", "bz2": "Archives", "xz": "Archives",
    # Code
    "py": "Code", "js": "Code", "ts": "Code", "html": "Code", "css": "Code",
    "java": "Code", "c": "Code", "cpp": "Code", "h": "Code", "go": "Code",
    "rs": "Code", "rb": "Code", "sh": "Code", "json": "Code", "xml": "Code",
    "yaml": "Code", "yml": "Code",
    # Apps
    "exe": "Apps", "msi": "Apps", "dmg": "Apps", "pkg": "Apps", "deb": "Apps",
    "rpm": "Apps", "apk": "Apps", "appimage": "Apps",
    # Fonts
    "ttf": "Fonts", "otf": "Fonts", "woff": "Fonts", "woff2": "Fonts",
}

EXTENSION_CATEGORIES = MappingProxyType(_EXTENSION_TABLE)

# Every label a type-mode run can create as a folder
CATEGORIES = frozenset(EXTENSION_CATEGORIES.values()) | {OTHER}


def get_extension(filename: str) -> str:
    """
    Return the lowercase text after the final dot, or "" if there is none.

    A leading dot alone (".bashrc") does not count as an extension.
    """
    name = filename.rsplit("/", 1)[-1]
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext.lower()


def category_by_type(filename: str) -> str:
    """
    Classify a file by its extension.

    Args:
        filename: A bare filename or path; only the last component is used.

    Returns:
        The category label, or "Other" for unknown and missing extensions.
    """
    return EXTENSION_CATEGORIES.get(get_extension(filename), OTHER)


def category_by_date(modification_time: float) -> str:
    """
    Classify a file by its modification timestamp.

    Args:
        modification_time: POSIX timestamp (e.g. st_mtime).

    Returns:
        "YYYY/MM" in the host's local time, month zero-padded.
    """
    dt = datetime.fromtimestamp(modification_time)
    return f"{dt.year:04d}/{dt.month:02d}"
