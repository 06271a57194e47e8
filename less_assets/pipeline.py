"""Scan-and-compile orchestrator: find -> check staleness -> compile -> record."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import Callable, Iterable

from less_assets.analysis.dependency_graph import DependencyResolver
from less_assets.analysis.staleness import StalenessOracle
from less_assets.compiler import Compiler, LesscCompiler, write_artifact
from less_assets.compiler.output import ensure_parent_dir
from less_assets.errors import CompilerError
from less_assets.models import (
    CompilationRecord,
    CompileConfig,
    CompileLog,
    PassResult,
    StalenessVerdict,
)
from less_assets.paths import normalize_separators
from less_assets.scanner.finder import find_css_files, find_less_files

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]
ArtifactPathFn = Callable[[Path], Path]
# Success is "returned without raising"; only an explicit False counts as a failure
CompileFn = Callable[[Path, Path], object]


def artifact_path_for(source: Path, config: CompileConfig) -> Path:
    """Mirror *source* from the LESS tree into the CSS tree with a .css extension."""
    src = normalize_separators(source)
    less_root = normalize_separators(config.source_root).rstrip("/")
    css_root = normalize_separators(config.artifact_root).rstrip("/")
    src = re.sub(r"\.less$", ".css", src)
    if src.startswith(less_root + "/"):
        src = css_root + src[len(less_root):]
    return Path(src)


class CompileOrchestrator:
    """Drive one or more compile passes over the LESS source tree."""

    def __init__(
        self,
        config: CompileConfig,
        compiler: Compiler | None = None,
        log: CompileLog | None = None,
        resolver: DependencyResolver | None = None,
    ):
        self.config = config
        self.compiler = compiler or LesscCompiler(
            binary=config.compiler_binary,
            timeout=config.compiler_timeout,
        )
        self.log = log if log is not None else CompileLog()
        self.oracle = StalenessOracle(config, resolver=resolver)

    # ── Discovery ─────────────────────────────────────────────

    def find_entries(self) -> list[Path]:
        return find_less_files(self.config.source_root, skip_dirs=self.config.skip_dirs)

    def find_artifacts(self) -> list[Path]:
        return find_css_files(self.config.artifact_root, skip_dirs=self.config.skip_dirs)

    def artifact_path(self, source: Path) -> Path:
        return artifact_path_for(source, self.config)

    # ── Single file ───────────────────────────────────────────

    def verdict(self, entry: Path, artifact: Path | None = None) -> StalenessVerdict:
        return self.oracle.evaluate(Path(entry), artifact or self.artifact_path(entry))

    def compile(self, entry: Path, force: bool = False) -> bool:
        """Compile *entry* when stale; return True if an artifact was written."""
        entry = Path(entry)
        artifact = self.artifact_path(entry)
        if not force:
            if self.verdict(entry, artifact) is not StalenessVerdict.STALE:
                return False
        return self._attempt(entry, artifact, self.call_compiler)

    def call_compiler(self, source: Path, artifact: Path) -> bool:
        """Run the external compiler and write the artifact.

        Raises:
            CompilerError: the compiler rejected *source*.
            OSError: the artifact could not be written.
        """
        # Permissions are only relaxed for files this call creates
        is_new = not artifact.is_file()
        ensure_parent_dir(artifact)
        css = self.compiler.compile_file(source, artifact)
        write_artifact(artifact, css, compress=self.config.use_compression, is_new=is_new)
        logger.info("Compiled %s -> %s", source, artifact)
        return True

    # ── Passes ────────────────────────────────────────────────

    def process_all(
        self,
        entry_files: Iterable[Path],
        artifact_path_for: ArtifactPathFn | None = None,
        compile: CompileFn | None = None,
        progress: ProgressCallback | None = None,
        force: bool = False,
    ) -> PassResult:
        """Check and compile each entry in order; one failure never stops the rest.

        Only attempted compiles are recorded in the log. Fresh entries go to
        ``skipped``, entries whose check failed to ``check_failed``.
        """
        artifact_fn = artifact_path_for or self.artifact_path
        compile_fn = compile or self.call_compiler
        entries = [Path(e) for e in entry_files]
        result = PassResult(log=self.log)

        for i, entry in enumerate(entries):
            if progress:
                progress("Compiling", i, len(entries))
            artifact = Path(artifact_fn(entry))

            verdict = StalenessVerdict.STALE if force else self.verdict(entry, artifact)
            if verdict is StalenessVerdict.FRESH:
                logger.debug("Up to date: %s", entry)
                result.skipped.append(entry)
                continue
            if verdict is StalenessVerdict.CHECK_FAILED:
                logger.warning("Skipping %s this run, staleness check failed", entry)
                result.check_failed.append(entry)
                continue

            self._attempt(entry, artifact, compile_fn)

        if progress:
            progress("Compiling", len(entries), len(entries))
        logger.info("Pass finished: %s", self.log.summary())
        return result

    def run_pass(
        self,
        progress: ProgressCallback | None = None,
        force: bool = False,
    ) -> PassResult:
        """Reset the log, then compile every stale entry under the source root."""
        self.log.reset()
        entries = self.find_entries()
        logger.info("Found %d LESS file(s) in %s", len(entries), self.config.source_root)
        return self.process_all(entries, progress=progress, force=force)

    def clean(self) -> list[Path]:
        """Delete every managed artifact; hand-written CSS is left alone."""
        removed: list[Path] = []
        for path in self.find_artifacts():
            path.unlink()
            removed.append(path)
            logger.info("Removed %s", path)
        return removed

    def debug_info(self) -> dict:
        return {
            "dates": self.config.check_dates,
            "compress": self.config.use_compression,
            "dependencies": self.config.check_dependencies,
            "less": normalize_separators(self.config.source_root),
            "css": normalize_separators(self.config.artifact_root),
        }

    # ── Internals ─────────────────────────────────────────────

    def _attempt(self, entry: Path, artifact: Path, compile_fn: CompileFn) -> bool:
        start = time.perf_counter()
        succeeded = False
        try:
            succeeded = compile_fn(entry, artifact) is not False
        except CompilerError as e:
            self._compiler_failed(entry, e)
        except Exception as e:
            # Unwritable artifact dirs and broken collaborators fail this entry only
            self._compiler_failed(entry, CompilerError(entry, f"{type(e).__name__}: {e}"))
        finally:
            self.log.add_record(CompilationRecord(
                source_path=entry,
                artifact_path=artifact,
                elapsed=time.perf_counter() - start,
                succeeded=succeeded,
            ))
        return succeeded

    def _compiler_failed(self, source: Path, error: CompilerError) -> None:
        self.log.add_error(source, str(error))
        if self.config.strict:
            raise error
        logger.error("%s", error)
