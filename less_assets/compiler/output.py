"""Write compiled CSS artifacts with the provenance header."""

from __future__ import annotations

import os
from pathlib import Path

CSS_HEADER = "/* This CSS is autocompiled by LESS parser. Don't edit it manually. */"

_DIR_MODE = 0o777
_FILE_MODE = 0o666

_COMPRESS_TOKENS = ("\r\n", "\r", "\n", "\t", "  ")


def compress_css(css: str) -> str:
    """Strip line breaks, tabs and double spaces."""
    for token in _COMPRESS_TOKENS:
        css = css.replace(token, "")
    return css


def render_artifact(body: str, compress: bool = False) -> str:
    if compress:
        body = compress_css(body)
    return f"{CSS_HEADER}\n\n{body}"


def ensure_parent_dir(path: Path) -> None:
    parent = path.parent
    if parent.is_dir():
        return
    parent.mkdir(parents=True, exist_ok=True)
    # mkdir's mode is masked by the umask
    os.chmod(parent, _DIR_MODE)


def write_artifact(
    path: Path,
    body: str,
    compress: bool = False,
    is_new: bool | None = None,
) -> Path:
    """Write *body* under the header; relax permissions on new files only.

    Pass *is_new* when the compiler may already have created the file.
    """
    path = Path(path)
    ensure_parent_dir(path)
    if is_new is None:
        is_new = not path.is_file()
    path.write_text(render_artifact(body, compress), encoding="utf-8")
    if is_new:
        os.chmod(path, _FILE_MODE)
    return path


def read_first_line(path: Path) -> str | None:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            return fh.readline(1024).rstrip("\r\n")
    except OSError:
        return None


def is_managed_artifact(path: Path) -> bool:
    """True when the file starts with the autocompile header."""
    return read_first_line(path) == CSS_HEADER
