"""Path helpers: absolute-path detection, separator normalization, canonical resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def is_absolute(path: str | Path) -> bool:
    """Return True for ``/x``, ``\\x`` and drive-letter paths such as ``C:\\x``.

    Detection is textual and independent of the host OS, so a Windows path is
    recognized on POSIX and vice versa.
    """
    p = str(path)
    if not p:
        return False
    if p[0] in ("/", "\\"):
        return True
    return len(p) > 3 and p[0].isalpha() and p[1] == ":" and p[2] in ("\\", "/")


def normalize_separators(path: str | Path) -> str:
    """Use ``/`` as the only separator."""
    p = str(path).replace("\\", "/")
    if os.sep != "/":
        p = p.replace(os.sep, "/")
    return p


def resolve_relative_to(
    base: str | Path,
    path: str | Path,
    importer: str | Path | None = None,
) -> Path | None:
    """Resolve *path* to a canonical existing file, or None.

    An absolute-looking *path* is rooted at *base* by concatenation, so
    ``/mixins.less`` with base ``/srv/web`` means ``/srv/web/mixins.less``.
    A relative *path* is resolved against the directory of *importer*, or
    against *base* when there is no importer.
    """
    raw = str(path)
    if is_absolute(raw):
        candidate = Path(str(base).rstrip("/\\") + raw)
    elif importer is not None:
        candidate = Path(importer).parent / raw
    else:
        candidate = Path(base) / raw

    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError):
        logger.debug("Unresolvable path %s", candidate)
        return None

    if not resolved.is_file():
        return None
    return resolved


def project_relative_path(full_path: str | Path, root: str | Path) -> str:
    """Strip *root* from *full_path*, both separator-normalized."""
    prefix = normalize_separators(root).rstrip("/") + "/"
    normalized = normalize_separators(full_path)
    if normalized.startswith(prefix):
        return normalized[len(prefix):]
    return normalized
