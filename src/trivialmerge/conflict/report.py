"""Human-readable output for resolution results."""

from __future__ import annotations

from trivialmerge.conflict.assembler import ResolutionResult
from trivialmerge.conflict.model import DiffKind, DiffOp, SideDiff

_COLORS = {
    DiffKind.INSERT: "\033[32m",  # Green
    DiffKind.DELETE: "\033[31m",  # Red
}
_RESET = "\033[0m"


def summarize(path: str, result: ResolutionResult) -> str:
    """One-line summary of what happened to a file."""
    resolved = result.resolved_count
    failed = result.unresolved_count

    if resolved == 0 and failed == 0:
        return f"{path}: No conflicts, git-adding"
    if resolved == 0:
        return f"{path}: Failed to resolve any of the {failed} conflicts"
    return (
        f"{path}: Successfully resolved {resolved} conflicts "
        f"(failed to resolve {failed} conflicts)"
        + (", git adding" if failed == 0 else "")
    )


def render_op(op: DiffOp, color: bool = False) -> str:
    """Render one edit as a prefixed line."""
    text = f"{op.kind.value}{op.line}"
    if color and op.kind in _COLORS:
        return f"{_COLORS[op.kind]}{text}{_RESET}"
    return text


def render_side_diff(
    path: str, side_diff: SideDiff, color: bool = False
) -> str:
    """Render a side diff as a header line followed by its edits.

    Example:
        src/app.py:12:DiffOurs
        -old line
        +new line
    """
    lines = [f"{path}:{side_diff.line_number}:Diff{side_diff.side.value}"]
    lines.extend(render_op(op, color) for op in side_diff.edits)
    return "\n".join(lines) + "\n"
