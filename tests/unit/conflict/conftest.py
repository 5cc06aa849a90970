"""Fixtures for conflict tests."""

import pytest

from trivialmerge.conflict.model import Conflict


@pytest.fixture
def make_conflict():
    """Factory for conflicts with default marker lines."""

    def _make(ours, base, theirs, line_number=1):
        return Conflict(
            line_number=line_number,
            start_marker="<<<<<<< HEAD",
            base_marker="||||||| base",
            mid_marker="=======",
            end_marker=">>>>>>> branch",
            ours_lines=tuple(ours),
            base_lines=tuple(base),
            theirs_lines=tuple(theirs),
        )

    return _make
