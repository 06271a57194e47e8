"""Decide whether a compiled artifact is older than its sources."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from less_assets.analysis.dependency_graph import DependencyResolver
from less_assets.models import CompileConfig, DependencySet, SourceFile, StalenessVerdict

logger = logging.getLogger(__name__)


def newest_mtime(paths: Iterable[Path]) -> float:
    """Largest mtime over *paths*; 0.0 for an empty iterable. Raises OSError."""
    return max((SourceFile(Path(p)).mtime for p in paths), default=0.0)


class StalenessOracle:
    """Compare source and dependency mtimes against the compiled artifact."""

    def __init__(self, config: CompileConfig, resolver: DependencyResolver | None = None):
        self.config = config
        self._resolver = resolver

    @property
    def resolver(self) -> DependencyResolver:
        # Built on first use so a disabled date check never touches base_dir
        if self._resolver is None:
            self._resolver = DependencyResolver(
                self.config.base_dir.resolve(),
                strip_comments=self.config.strip_comments,
            )
        return self._resolver

    def needs_recompile(
        self,
        entry: Path,
        artifact: Path,
        dependencies: DependencySet,
    ) -> bool:
        """True when the artifact is missing or anything it is built from is newer.

        Raises:
            OSError: an mtime could not be read.
        """
        if not os.path.isfile(artifact):
            return True
        if not self.config.check_dates:
            return True
        newest = max(SourceFile(Path(entry)).mtime, newest_mtime(dependencies))
        return newest > os.path.getmtime(artifact)

    def evaluate(self, entry: Path, artifact: Path) -> StalenessVerdict:
        """Full decision for one entry; never raises for filesystem races."""
        if not os.path.isfile(artifact) or not self.config.check_dates:
            return StalenessVerdict.STALE

        dependencies: DependencySet = set()
        if self.config.check_dependencies:
            try:
                check = self.resolver.check(entry)
            except ValueError as e:
                logger.warning("Cannot check dependencies of %s: %s", entry, e)
                return StalenessVerdict.CHECK_FAILED
            if not check.ok:
                return StalenessVerdict.CHECK_FAILED
            dependencies = check.dependencies

        try:
            stale = self.needs_recompile(entry, artifact, dependencies)
        except OSError as e:
            logger.warning("Cannot read modification times for %s: %s", entry, e)
            return StalenessVerdict.CHECK_FAILED

        return StalenessVerdict.STALE if stale else StalenessVerdict.FRESH
