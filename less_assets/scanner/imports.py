"""Locate ``@import`` statements in LESS source text via pattern matching."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator

from less_assets.models import ImportReference

DEFAULT_EXTENSION = ".less"

# @import "target"; with the same quote on both sides
IMPORT_PATTERN = re.compile(r"\s*@import\s+(['\"])(.*?)\1\s*;")

# .less, the truncated .lss, or compiled .css
_STYLESHEET_EXT = re.compile(r"\.(le?|c)ss$")

# Quoted strings are matched first so comment markers inside them survive
_STRING_OR_COMMENT = re.compile(
    r"""("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')"""
    r"|(/\*.*?\*/)"
    r"|(?<![:\w(])//[^\n]*",
    re.DOTALL,
)

LEAF_EXTENSIONS = (".css",)


def extract_imports(source_text: str) -> Iterator[ImportReference]:
    """Yield each import target in order of appearance."""
    for m in IMPORT_PATTERN.finditer(source_text):
        line = source_text.count("\n", 0, m.start(2)) + 1
        yield ImportReference(raw_target=m.group(2), line_number=line)


def strip_comments(source_text: str) -> str:
    """Remove ``/* */`` and ``//`` comments, keeping ``url(http://...)`` intact."""
    return _STRING_OR_COMMENT.sub(_drop_comment, source_text)


def _drop_comment(m: re.Match) -> str:
    if m.group(1) is not None:
        return m.group(1)
    if m.group(2) is not None:
        # Keep the newlines so line numbers stay stable
        return "\n" * m.group(2).count("\n")
    return ""


def infer_extension(target: str) -> str:
    """Append ``.less`` when the target has no stylesheet extension."""
    if _STYLESHEET_EXT.search(target):
        return target
    return target + DEFAULT_EXTENSION


def is_leaf(path: str | Path) -> bool:
    """Plain CSS is never scanned for further imports."""
    return str(path).lower().endswith(LEAF_EXTENSIONS)
