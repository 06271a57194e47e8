"""Invoke the external ``lessc`` compiler as a subprocess."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from less_assets.errors import CompilerError

logger = logging.getLogger(__name__)


class LesscCompiler:
    """Compile one LESS file to CSS with the ``lessc`` binary."""

    def __init__(self, binary: str = "lessc", timeout: float | None = None):
        self.binary = binary
        self.timeout = timeout

    def is_available(self) -> bool:
        return shutil.which(self.binary) is not None

    def command(self, source: Path, dest: Path) -> list[str]:
        return [self.binary, str(source), str(dest)]

    def compile_file(self, source: Path, dest: Path) -> str:
        """Run the compiler and return the compiled CSS.

        Raises:
            CompilerError: the binary is missing, timed out, or exited non-zero.
        """
        dest = Path(dest)
        before = _stamp(dest)
        cmd = self.command(source, dest)
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=str(Path(source).parent),
            )
        except FileNotFoundError:
            raise CompilerError(source, f"compiler not found: {self.binary!r}")
        except subprocess.TimeoutExpired:
            raise CompilerError(source, f"compiler timed out after {self.timeout}s")

        if result.returncode != 0:
            output = (result.stderr or result.stdout or "").strip()
            raise CompilerError(source, output or f"exit status {result.returncode}")

        if result.stderr:
            logger.warning("lessc warnings for %s:\n%s", source, result.stderr.strip())

        # A dest the compiler did not touch still holds the previous artifact
        after = _stamp(dest)
        if after is not None and (after != before or not result.stdout):
            return dest.read_text(encoding="utf-8")
        return result.stdout


def _stamp(path: Path) -> tuple[int, int] | None:
    try:
        st = path.stat()
    except FileNotFoundError:
        return None
    return st.st_mtime_ns, st.st_size
