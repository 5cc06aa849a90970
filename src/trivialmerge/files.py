"""Reading conflicted files and replacing them safely."""

from __future__ import annotations

import contextlib
import os
import shutil
import tempfile
from pathlib import Path

from trivialmerge.core.log import logger


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a file without translating line endings."""
    with open(path, encoding=encoding, newline="") as f:
        return f.read()


def replace_atomically(
    path: Path, content: str, encoding: str = "utf-8"
) -> None:
    """Replace a file's content so readers see old or new, never half.

    The new content is written to a temporary file in the same
    directory, given the original's permissions, and renamed over the
    original. The original is untouched if anything fails first.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise

    logger.debug("Replaced file", path=str(path), chars=len(content))
