"""Resolve conflicts where at most one side diverged from base."""

from trivialmerge.conflict.model import Conflict


def resolve(conflict: Conflict) -> list[str] | None:
    """Pick the resolution of a trivial conflict.

    Args:
        conflict: Conflict to resolve

    Returns:
        Resolved lines, or None if both sides changed base differently
    """
    ours = conflict.ours_lines
    base = conflict.base_lines
    theirs = conflict.theirs_lines

    if ours == base:
        return list(theirs)
    if theirs == base:
        return list(ours)
    if ours == theirs:
        return list(ours)
    return None
