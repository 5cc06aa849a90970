"""Resolve command - resolves trivial conflicts in the repository."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_graph import End

from trivialmerge.core.log import logger

if TYPE_CHECKING:
    from trivialmerge.core.config import State


def use_color(mode: str, stream=None) -> bool:
    """Whether to color output for a color mode.

    "auto" colors only when the stream is a terminal.
    """
    if mode == "always":
        return True
    if mode == "never":
        return False
    stream = stream or sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


class ResolveCommand(BaseModel):
    """Resolve trivial conflicts in every conflicted file.

    A conflict is trivial when one side left the base unchanged or
    both sides made the same change. Fully resolved files are staged
    with git add; the rest keep their remaining conflict markers.
    Requires merge.conflictstyle diff3 (or zdiff3).
    """

    editor: bool = Field(
        default=False,
        description=(
            "Open $EDITOR for each file that still has conflicts"
        ),
    )
    dump_diffs: bool = Field(
        default=False,
        alias="dump-diffs",
        description=(
            "Print the ours/theirs diffs from base of each conflict "
            "left unresolved"
        ),
    )
    color: Literal["auto", "always", "never"] = Field(
        default="auto",
        description="Color diffs: auto (terminal only), always, never",
    )
    set_conflict_style: bool = Field(
        default=False,
        alias="set-conflict-style",
        description=(
            "Set git's global merge.conflictstyle to diff3 if needed"
        ),
    )

    model_config = ConfigDict(populate_by_name=True)

    async def run_workflow(self, state: State) -> int:
        """Run resolve workflow.

        Args:
            state: State instance

        Returns:
            Exit code (0 = every file processed, 1 = some failed)
        """
        resolve = state.runtime.resolve
        resolve.use_editor = self.editor
        resolve.dump_diffs = self.dump_diffs
        resolve.color = use_color(self.color)
        resolve.set_conflict_style = self.set_conflict_style

        from trivialmerge.workflow.graph import create_workflow
        from trivialmerge.workflow.nodes import CheckConflictStyle

        workflow = create_workflow()

        async with workflow.iter(CheckConflictStyle(), state=state) as run:
            async for node in run:
                if isinstance(node, End):
                    return node.data

        logger.error("Resolve failed - workflow ended unexpectedly")
        return 1
