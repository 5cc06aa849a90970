"""ResolveFile node - resolve trivial conflicts in one file."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from trivialmerge.conflict import ParseError
from trivialmerge.core.config import State
from trivialmerge.core.log import logger
from trivialmerge.core.result import FileReport
from trivialmerge.resolver import resolve_file


@dataclass
class ResolveFile(BaseNode[State]):
    """Resolve the file at `index` in the discovered file list.

    A file that cannot be read or parsed is reported and left as it
    was; the remaining files are still processed.
    """

    index: int = 0

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> ResolveFile | Finalize:
        resolve = ctx.state.runtime.resolve
        config = ctx.state.config
        path = resolve.files[self.index]

        try:
            report = resolve_file(
                path,
                resolve.repo,
                encoding=config.encoding,
                show_diffs=resolve.dump_diffs,
                color=resolve.color,
                use_editor=resolve.use_editor,
                editor=config.editor,
            )
        except (ParseError, OSError, UnicodeDecodeError) as e:
            logger.error("{path}: {error}", path=str(path), error=str(e))
            report = FileReport(path=path, error=str(e))

        resolve.reports.append(report)

        if self.index + 1 < len(resolve.files):
            return ResolveFile(index=self.index + 1)

        from trivialmerge.workflow.nodes.finalize import Finalize
        return Finalize()
