"""Exceptions raised by less-assets."""

from __future__ import annotations

from pathlib import Path


class LessAssetsError(Exception):
    """Base class for less-assets errors."""


class InvalidBaseDirError(LessAssetsError, ValueError):
    """The dependency resolver was given a base that is not an existing absolute directory."""

    def __init__(self, base_dir):
        self.base_dir = base_dir
        super().__init__(f"An existing absolute folder must be provided, got {str(base_dir)!r}")


class CompilerError(LessAssetsError):
    """The external compiler failed on a source file."""

    def __init__(self, source: Path | str, output: str):
        self.source = Path(source)
        self.output = output
        super().__init__(f'LESS parser error in "{source}":\n\n{output}')
