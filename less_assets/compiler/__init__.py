"""External compiler wrapper and artifact writer."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from less_assets.compiler.lessc import LesscCompiler
from less_assets.compiler.output import (
    CSS_HEADER,
    compress_css,
    is_managed_artifact,
    write_artifact,
)


class Compiler(Protocol):
    def compile_file(self, source: Path, dest: Path) -> str: ...


__all__ = [
    "CSS_HEADER",
    "Compiler",
    "LesscCompiler",
    "compress_css",
    "is_managed_artifact",
    "write_artifact",
]
