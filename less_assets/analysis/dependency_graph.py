"""Dependency resolver. Follows @import chains, suppresses duplicates and cycles."""

from __future__ import annotations

import logging
from pathlib import Path

from less_assets.errors import InvalidBaseDirError
from less_assets.models import DependencyCheck, DependencySet
from less_assets.paths import is_absolute, resolve_relative_to
from less_assets.scanner.imports import (
    extract_imports,
    infer_extension,
    is_leaf,
    strip_comments,
)

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Compute the transitive @import closure of LESS files under a base directory.

    Absolute imports (``@import "/mixins";``) are rooted at *base_dir*;
    relative imports are rooted at the directory of the importing file.
    """

    def __init__(self, base_dir: str | Path, *, strip_comments: bool = True):
        raw = str(base_dir)
        if not is_absolute(raw) or not Path(raw).is_dir():
            raise InvalidBaseDirError(base_dir)
        self.base_dir = raw.rstrip("/\\") or raw
        self.strip_comments = strip_comments

    def compute_dependencies(
        self,
        entry: str | Path,
        deps: DependencySet | None = None,
    ) -> DependencySet:
        """Return every file reachable from *entry* through @import.

        *entry* itself is only included when its own source imports it;
        chains that lead back to it are cut there. Imports that do not
        resolve to an existing file are dropped.
        """
        if deps is None:
            deps = set()

        entry_path = self._resolve_entry(entry)
        if entry_path is None:
            return deps

        self._collect(entry_path, entry_path, deps)
        return deps

    def check(self, entry: str | Path) -> DependencyCheck:
        """Like compute_dependencies, but report failures instead of raising."""
        entry_path = Path(entry)
        try:
            deps = self.compute_dependencies(entry)
        except (OSError, ValueError, UnicodeDecodeError, RecursionError) as e:
            logger.warning("Dependency check failed for %s: %s", entry, e)
            return DependencyCheck(entry=entry_path, error=f"{type(e).__name__}: {e}")
        return DependencyCheck(entry=entry_path, dependencies=deps)

    def direct_imports(self, entry: str | Path) -> list[Path]:
        """Resolved first-level imports of *entry*, in source order, without repeats."""
        entry_path = self._resolve_entry(entry)
        if entry_path is None:
            return []
        result: list[Path] = []
        for target in self._import_targets(entry_path):
            resolved = self._resolve_import(target, entry_path)
            if resolved is not None and resolved not in result:
                result.append(resolved)
        return result

    def dependents_of(self, changed: str | Path, entries: list[Path]) -> list[Path]:
        """Entries whose dependency set contains *changed*."""
        changed_path = self._resolve_entry(changed)
        if changed_path is None:
            return []
        result: list[Path] = []
        for entry in entries:
            check = self.check(entry)
            if check.ok and changed_path in check.dependencies:
                result.append(Path(entry))
        return result

    # ── Internals ─────────────────────────────────────────────

    def _collect(self, path: Path, root: Path, deps: DependencySet) -> None:
        for target in self._import_targets(path):
            resolved = self._resolve_import(target, path)
            if resolved is None or resolved in deps:
                continue
            if resolved == root:
                if path == root:
                    deps.add(root)
                continue
            # Added before recursing, this is what stops cycles
            deps.add(resolved)
            if not is_leaf(resolved):
                self._collect(resolved, root, deps)

    def _resolve_entry(self, entry: str | Path) -> Path | None:
        raw = str(entry)
        if is_absolute(raw):
            candidate = Path(raw)
        else:
            candidate = Path(self.base_dir) / raw
        try:
            resolved = candidate.resolve(strict=True)
        except (OSError, RuntimeError):
            return None
        return resolved if resolved.is_file() else None

    def _import_targets(self, path: Path) -> list[str]:
        if is_leaf(path):
            return []
        text = path.read_text(encoding="utf-8")
        if self.strip_comments:
            text = strip_comments(text)
        return [infer_extension(ref.raw_target) for ref in extract_imports(text)]

    def _resolve_import(self, target: str, importer: Path) -> Path | None:
        resolved = resolve_relative_to(self.base_dir, target, importer=importer)
        if resolved is None:
            logger.debug("Dropping unresolvable import %r in %s", target, importer)
        return resolved
