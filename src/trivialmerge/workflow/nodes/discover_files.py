"""DiscoverFiles node - list files git reports as conflicted."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from trivialmerge.core.config import State
from trivialmerge.core.log import logger


@dataclass
class DiscoverFiles(BaseNode[State]):
    """Collect the conflicted files of the repository."""

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> ResolveFile | Finalize:
        resolve = ctx.state.runtime.resolve
        resolve.files = resolve.repo.conflicted_files()

        logger.info(
            f"Found {len(resolve.files)} conflicted files",
            files=[str(path) for path in resolve.files],
        )

        from trivialmerge.workflow.nodes.finalize import Finalize
        from trivialmerge.workflow.nodes.resolve_file import ResolveFile

        if not resolve.files:
            return Finalize()
        return ResolveFile(index=0)
