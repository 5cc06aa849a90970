"""Resolve the trivial conflicts of one file on disk."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from trivialmerge.conflict import ResolutionResult, resolve_text
from trivialmerge.conflict.report import render_side_diff, summarize
from trivialmerge.core.log import logger
from trivialmerge.core.result import FileReport
from trivialmerge.editor import open_editor
from trivialmerge.files import read_text, replace_atomically
from trivialmerge.git.repo import GitError, GitRepository


def dump_diffs(
    path: Path,
    result: ResolutionResult,
    out: TextIO,
    color: bool = False,
) -> None:
    """Write every side diff of the unresolved conflicts to out."""
    for side_diff in result.diffs:
        out.write(render_side_diff(str(path), side_diff, color))


def resolve_file(
    path: Path,
    repo: GitRepository,
    *,
    encoding: str = "utf-8",
    show_diffs: bool = False,
    color: bool = False,
    use_editor: bool = False,
    editor: str | None = None,
    out: TextIO | None = None,
) -> FileReport:
    """Resolve trivial conflicts in a file and act on the outcome.

    - No conflicts left: stage the file.
    - Some resolved: rewrite the file; stage it if nothing is left,
      otherwise show diffs and open the editor as requested.
    - None resolved: leave the file alone, show diffs and open the
      editor as requested.

    A failed git add is recorded in the report's error rather than
    raised, since the file may already have been rewritten.

    Args:
        path: File to resolve
        repo: Repository used to stage the file
        encoding: File encoding
        show_diffs: Print side diffs of unresolved conflicts
        color: Color the printed diffs
        use_editor: Open an editor if conflicts remain
        editor: Editor command overriding $EDITOR
        out: Stream for the summary and diffs (default stdout)

    Returns:
        Report of what was done

    Raises:
        ParseError: If a conflict block is not terminated; the file
            is not modified
    """
    out = out or sys.stdout

    with logger.span("Resolving {path}", path=str(path)):
        result = resolve_text(read_text(path, encoding))
        logger.debug(
            "Resolved conflicts",
            path=str(path),
            resolved=result.resolved_count,
            unresolved=result.unresolved_count,
        )

        report = FileReport(
            path=path,
            resolved=result.resolved_count,
            unresolved=result.unresolved_count,
        )
        print(summarize(str(path), result), file=out)

        if result.changed:
            replace_atomically(path, result.content, encoding)
            report.written = True

        if result.unresolved_count == 0:
            try:
                repo.add(path)
            except GitError as e:
                logger.error(
                    "{path}: {error}", path=str(path), error=str(e)
                )
                report.error = str(e)
            else:
                report.staged = True
        else:
            if show_diffs:
                dump_diffs(path, result, out, color)
            if use_editor:
                open_editor(path, editor, repo.runner)

    return report
