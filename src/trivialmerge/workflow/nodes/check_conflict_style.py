"""CheckConflictStyle node - make sure git writes base sections."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from trivialmerge.core.config import State
from trivialmerge.core.log import logger
from trivialmerge.editor import editor_command
from trivialmerge.git.repo import GitRepository


@dataclass
class CheckConflictStyle(BaseNode[State]):
    """Check the run can work before touching any file.

    Fails early when editing was requested without an editor, and
    verifies merge.conflictstyle, setting it if the user asked to.
    """

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> DiscoverFiles:
        """Open the repository and check its conflict style.

        Raises:
            EditorError: If editing was requested without an editor
            ConflictStyleError: If conflicts would be written without
                base sections
        """
        resolve = ctx.state.runtime.resolve
        resolve.status = "running"

        if resolve.repo is None:
            resolve.repo = GitRepository(ctx.state.config.git)

        if resolve.use_editor:
            editor_command(ctx.state.config.editor)

        style = resolve.repo.ensure_conflict_style(
            auto_set=resolve.set_conflict_style
        )
        logger.debug("Conflict style ok", style=style)

        from trivialmerge.workflow.nodes.discover_files import DiscoverFiles
        return DiscoverFiles()
