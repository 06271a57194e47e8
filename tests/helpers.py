"""Helpers for building LESS trees in tmp_path."""

import os
from pathlib import Path

from less_assets.errors import CompilerError


def write(path: Path, text: str = "", mtime: float | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def set_mtime(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


class FakeCompiler:
    """Stands in for lessc: echoes the source, fails for names in *fail*."""

    def __init__(self, fail=()):
        self.fail = set(fail)
        self.calls: list[tuple[Path, Path]] = []

    def compile_file(self, source, dest):
        self.calls.append((Path(source), Path(dest)))
        if Path(source).name in self.fail:
            raise CompilerError(source, f"ParseError: missing closing `}}` in {Path(source).name} on line 3")
        return f"/* from {Path(source).name} */\n.a {{\n  color: red;\n}}\n"
