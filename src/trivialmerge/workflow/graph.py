"""Graph workflow definition."""

from pydantic_graph import Graph

from trivialmerge.core.config import State
from trivialmerge.core.log import logger


def create_workflow() -> Graph:
    """Create the resolve workflow graph.

    CheckConflictStyle → DiscoverFiles → ResolveFile (per file) →
        Finalize

    Returns:
        Graph workflow with State as state_type
    """
    logger.debug("Building workflow graph")

    from trivialmerge.workflow.nodes import (
        CheckConflictStyle,
        DiscoverFiles,
        Finalize,
        ResolveFile,
    )

    return Graph(
        nodes=(
            CheckConflictStyle,
            DiscoverFiles,
            ResolveFile,
            Finalize,
        ),
        state_type=State,
    )
