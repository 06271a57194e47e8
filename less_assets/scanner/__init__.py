"""Source scanning: import extraction and file discovery."""

from __future__ import annotations

from less_assets.scanner.imports import (
    DEFAULT_EXTENSION,
    IMPORT_PATTERN,
    extract_imports,
    infer_extension,
    is_leaf,
    strip_comments,
)
from less_assets.scanner.finder import find_css_files, find_less_files

__all__ = [
    "DEFAULT_EXTENSION",
    "IMPORT_PATTERN",
    "extract_imports",
    "find_css_files",
    "find_less_files",
    "infer_extension",
    "is_leaf",
    "strip_comments",
]
