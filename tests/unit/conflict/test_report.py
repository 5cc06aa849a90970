"""Tests for summary lines and diff rendering."""

from trivialmerge.conflict.assembler import ResolutionResult
from trivialmerge.conflict.model import DiffKind, DiffOp, Side, SideDiff
from trivialmerge.conflict.report import (
    render_op,
    render_side_diff,
    summarize,
)


def test_summary_no_conflicts():
    assert summarize("f.txt", ResolutionResult()) == (
        "f.txt: No conflicts, git-adding"
    )


def test_summary_none_resolved():
    result = ResolutionResult(unresolved_count=3)
    assert summarize("f.txt", result) == (
        "f.txt: Failed to resolve any of the 3 conflicts"
    )


def test_summary_all_resolved():
    result = ResolutionResult(resolved_count=2)
    assert summarize("f.txt", result) == (
        "f.txt: Successfully resolved 2 conflicts "
        "(failed to resolve 0 conflicts), git adding"
    )


def test_summary_partially_resolved():
    result = ResolutionResult(resolved_count=2, unresolved_count=1)
    assert summarize("f.txt", result) == (
        "f.txt: Successfully resolved 2 conflicts "
        "(failed to resolve 1 conflicts)"
    )


def test_render_side_diff_plain():
    side_diff = SideDiff(
        side=Side.THEIRS,
        line_number=12,
        edits=(
            DiffOp(DiffKind.KEEP, "same"),
            DiffOp(DiffKind.DELETE, "old"),
            DiffOp(DiffKind.INSERT, "new"),
        ),
    )

    assert render_side_diff("src/app.py", side_diff) == (
        "src/app.py:12:DiffTheirs\n"
        " same\n"
        "-old\n"
        "+new\n"
    )


def test_render_op_color():
    assert render_op(DiffOp(DiffKind.INSERT, "x"), color=True) == (
        "\033[32m+x\033[0m"
    )
    assert render_op(DiffOp(DiffKind.DELETE, "x"), color=True) == (
        "\033[31m-x\033[0m"
    )
    assert render_op(DiffOp(DiffKind.KEEP, "x"), color=True) == " x"
