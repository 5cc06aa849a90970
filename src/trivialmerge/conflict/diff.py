"""Line-level diffs explaining unresolved conflicts."""

from __future__ import annotations

from collections.abc import Sequence

from trivialmerge.conflict.model import (
    Conflict,
    DiffKind,
    DiffOp,
    Side,
    SideDiff,
)


def get_diff(old: Sequence[str], new: Sequence[str]) -> list[DiffOp]:
    """Compute a minimal edit script turning old into new.

    Builds the longest-common-subsequence table over suffixes and walks
    it from the front, so the script comes out in order without a
    reversal pass. Deletions are emitted before insertions when both
    are equally short.

    Args:
        old: Original lines
        new: Changed lines

    Returns:
        Keep/Delete/Insert operations in order
    """
    n, m = len(old), len(new)
    # lcs[i][j] = length of LCS of old[i:] and new[j:]
    lcs = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        for j in range(m - 1, -1, -1):
            if old[i] == new[j]:
                lcs[i][j] = lcs[i + 1][j + 1] + 1
            else:
                lcs[i][j] = max(lcs[i + 1][j], lcs[i][j + 1])

    ops = []
    i = j = 0
    while i < n and j < m:
        if old[i] == new[j]:
            ops.append(DiffOp(DiffKind.KEEP, old[i]))
            i += 1
            j += 1
        elif lcs[i + 1][j] >= lcs[i][j + 1]:
            ops.append(DiffOp(DiffKind.DELETE, old[i]))
            i += 1
        else:
            ops.append(DiffOp(DiffKind.INSERT, new[j]))
            j += 1
    ops.extend(DiffOp(DiffKind.DELETE, line) for line in old[i:])
    ops.extend(DiffOp(DiffKind.INSERT, line) for line in new[j:])
    return ops


def explain(conflict: Conflict) -> list[SideDiff]:
    """Diff each non-empty side of a conflict against its base."""
    return [
        SideDiff(
            side=side,
            line_number=conflict.line_number,
            edits=tuple(get_diff(conflict.base_lines, lines)),
        )
        for side in (Side.OURS, Side.THEIRS)
        if (lines := conflict.lines_for(side))
    ]
