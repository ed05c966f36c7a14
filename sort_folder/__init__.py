"""
Folder Sorter
=============

A command-line tool that sorts the files at the top level of a directory into
type or date folders, records every move, and can undo them.
"""

__version__ = "1.0.0"

from .categories import CATEGORIES, EXTENSION_CATEGORIES, category_by_type, category_by_date
from .config import OrganizeConfig, ConfigError, MANIFEST_NAME
from .scanner import should_skip, scan_top_level
from .planner import Move, Plan, build_plan
from .executor import execute_moves, move_file
from .manifest import append_manifest, load_manifest, clear_manifest, undo

__all__ = [
    "CATEGORIES",
    "EXTENSION_CATEGORIES",
    "category_by_type",
    "category_by_date",
    "OrganizeConfig",
    "ConfigError",
    "MANIFEST_NAME",
    "should_skip",
    "scan_top_level",
    "Move",
    "Plan",
    "build_plan",
    "execute_moves",
    "move_file",
    "append_manifest",
    "load_manifest",
    "clear_manifest",
    "undo",
]
