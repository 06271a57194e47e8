"""Discover LESS entry files and managed CSS artifacts."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path

from less_assets.compiler.output import is_managed_artifact

DEFAULT_SKIP_DIRS = ["node_modules", ".git", ".svn", "__pycache__"]


def find_less_files(root: Path, skip_dirs: list[str] | None = None) -> list[Path]:
    """All ``*.less`` entries under *root*, partials (``_*.less``) excluded.

    Symlinked directories are followed.
    """
    skip = skip_dirs if skip_dirs is not None else DEFAULT_SKIP_DIRS
    return sorted(
        p for p in _walk(Path(root), skip)
        if p.suffix == ".less" and not p.name.startswith("_")
    )


def find_css_files(root: Path, skip_dirs: list[str] | None = None) -> list[Path]:
    """All ``*.css`` files under *root* that carry the autocompile header."""
    skip = skip_dirs if skip_dirs is not None else DEFAULT_SKIP_DIRS
    return sorted(
        p for p in _walk(Path(root), skip)
        if p.suffix == ".css" and is_managed_artifact(p)
    )


def _walk(root: Path, skip_dirs: list[str]):
    if not root.is_dir():
        return
    seen: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        # Symlink loops would otherwise recurse forever
        real = os.path.realpath(dirpath)
        if real in seen:
            dirnames[:] = []
            continue
        seen.add(real)
        dirnames[:] = [d for d in dirnames if not _should_skip(d, skip_dirs)]
        for name in filenames:
            yield Path(dirpath) / name


def _should_skip(name: str, skip_dirs: list[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in skip_dirs)
