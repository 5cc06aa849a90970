"""Workflow nodes for graph state machine."""

from trivialmerge.workflow.nodes.check_conflict_style import (
    CheckConflictStyle,
)
from trivialmerge.workflow.nodes.discover_files import DiscoverFiles
from trivialmerge.workflow.nodes.finalize import Finalize
from trivialmerge.workflow.nodes.resolve_file import ResolveFile

__all__ = [
    "CheckConflictStyle",
    "DiscoverFiles",
    "ResolveFile",
    "Finalize",
]
