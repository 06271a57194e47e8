"""Data models for the less-assets compile pipeline."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path


class StalenessVerdict(enum.Enum):
    FRESH = "fresh"
    STALE = "stale"
    CHECK_FAILED = "check_failed"


@dataclass(frozen=True)
class SourceFile:
    """A LESS source identified by its canonical path."""
    path: Path

    @property
    def mtime(self) -> float:
        return os.path.getmtime(self.path)


@dataclass
class ImportReference:
    """A raw ``@import`` target as written in a source file."""
    raw_target: str
    line_number: int = 0

    @property
    def target(self) -> str:
        from less_assets.scanner.imports import infer_extension
        return infer_extension(self.raw_target)


# Canonical absolute paths reachable from one entry file
DependencySet = set[Path]


@dataclass
class DependencyCheck:
    """Result of computing the dependencies of an entry file."""
    entry: Path
    dependencies: DependencySet = field(default_factory=set)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CompilationRecord:
    """One attempted compile within a pass."""
    source_path: Path
    artifact_path: Path
    elapsed: float
    succeeded: bool

    def to_dict(self) -> dict:
        return {
            "source": str(self.source_path),
            "artifact": str(self.artifact_path),
            "elapsed": round(self.elapsed, 4),
            "succeeded": self.succeeded,
        }


@dataclass
class CompilerErrorRecord:
    """Last compiler error seen for a source."""
    source_path: Path
    message: str

    def to_dict(self) -> dict:
        return {"source": str(self.source_path), "message": self.message}


@dataclass
class CompileLog:
    """Accumulates records and errors for a single pass."""
    records: list[CompilationRecord] = field(default_factory=list)
    errors: dict[Path, CompilerErrorRecord] = field(default_factory=dict)

    def add_record(self, record: CompilationRecord) -> None:
        self.records.append(record)

    def add_error(self, source_path: Path, message: str) -> None:
        # A later failure of the same source replaces the earlier message
        self.errors[source_path] = CompilerErrorRecord(source_path, message)

    def reset(self) -> None:
        self.records.clear()
        self.errors.clear()

    @property
    def compiled(self) -> list[CompilationRecord]:
        return [r for r in self.records if r.succeeded]

    @property
    def failed(self) -> list[CompilationRecord]:
        return [r for r in self.records if not r.succeeded]

    def summary(self) -> dict:
        return {
            "attempted": len(self.records),
            "compiled": len(self.compiled),
            "failed": len(self.failed),
            "errors": len(self.errors),
            "elapsed": round(sum(r.elapsed for r in self.records), 4),
        }


@dataclass
class CompileConfig:
    """Configuration threaded into every pipeline component."""
    source_root: Path = field(default_factory=lambda: Path("web/less"))
    artifact_root: Path = field(default_factory=lambda: Path("web/css"))
    base_dir: Path = field(default_factory=lambda: Path("web"))
    check_dates: bool = True
    use_compression: bool = False
    check_dependencies: bool = True
    strict: bool = False
    strip_comments: bool = True
    compiler_binary: str = "lessc"
    compiler_timeout: float | None = None
    skip_dirs: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", ".svn", "__pycache__",
        ".venv", "venv", "vendor",
    ])

    def __post_init__(self):
        self.source_root = Path(self.source_root)
        self.artifact_root = Path(self.artifact_root)
        self.base_dir = Path(self.base_dir)

    def to_dict(self) -> dict:
        return {
            "source_root": str(self.source_root),
            "artifact_root": str(self.artifact_root),
            "base_dir": str(self.base_dir),
            "check_dates": self.check_dates,
            "use_compression": self.use_compression,
            "check_dependencies": self.check_dependencies,
            "strict": self.strict,
            "strip_comments": self.strip_comments,
            "compiler_binary": self.compiler_binary,
            "compiler_timeout": self.compiler_timeout,
            "skip_dirs": list(self.skip_dirs),
        }


@dataclass
class PassResult:
    """Outcome of one scan-and-compile pass."""
    log: CompileLog
    skipped: list[Path] = field(default_factory=list)  # fresh, not compiled
    check_failed: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.log.failed

    def to_dict(self) -> dict:
        return {
            "summary": self.log.summary(),
            "records": [r.to_dict() for r in self.log.records],
            "errors": [e.to_dict() for e in self.log.errors.values()],
            "skipped": [str(p) for p in self.skipped],
            "check_failed": [str(p) for p in self.check_failed],
        }
