"""Git integration."""

from trivialmerge.git.repo import (
    ConflictStyleError,
    GitError,
    GitRepository,
    conflicted_paths,
)

__all__ = [
    "ConflictStyleError",
    "GitError",
    "GitRepository",
    "conflicted_paths",
]
