"""Finalize node - summarize the run and pick the exit code."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from trivialmerge.core.config import State
from trivialmerge.core.log import logger


@dataclass
class Finalize(BaseNode[State, None, int]):
    """End the workflow with exit code 1 if any file failed."""

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> End[int]:
        resolve = ctx.state.runtime.resolve
        reports = resolve.reports

        logger.info(
            "Resolve complete",
            files=len(reports),
            resolved=sum(r.resolved for r in reports),
            unresolved=sum(r.unresolved for r in reports),
            staged=sum(r.staged for r in reports),
        )

        failed = resolve.failed_files
        if failed:
            resolve.status = "failed"
            logger.error(
                f"Could not process {len(failed)} files",
                files=[str(path) for path in failed],
            )
            return End(1)

        resolve.status = "complete"
        return End(0)
