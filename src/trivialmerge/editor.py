"""Launching an editor on files that still have conflicts."""

from __future__ import annotations

import os
import shlex
from pathlib import Path

from trivialmerge.core.log import logger
from trivialmerge.core.runner import Runner


class EditorError(RuntimeError):
    """No usable editor is configured."""


def editor_command(configured: str | None = None) -> list[str]:
    """Editor command line, from configuration or $EDITOR.

    Raises:
        EditorError: If neither is set
    """
    command = configured or os.environ.get("EDITOR")
    if not command:
        raise EditorError(
            "No editor configured: set $EDITOR or config.editor"
        )
    return shlex.split(command)


def open_editor(
    path: Path,
    configured: str | None = None,
    runner: Runner | None = None,
) -> int:
    """Open path in the editor and wait for it to exit.

    A non-zero exit (vim's :cq, for one) is logged, not raised; the
    file is left as the editor saved it.

    Returns:
        The editor's exit code

    Raises:
        EditorError: If no editor is configured
    """
    command = [*editor_command(configured), str(path)]
    logger.info("Opening editor", command=" ".join(command))
    result = (runner or Runner()).execute(
        command, check=False, interactive=True
    )
    if result.exited != 0:
        logger.warn(
            "Editor exited with code {exited}",
            exited=result.exited,
            path=str(path),
        )
    return result.exited
