"""Rebuild file content from parsed units."""

from __future__ import annotations

from dataclasses import dataclass

from trivialmerge.conflict.diff import explain
from trivialmerge.conflict.model import (
    Conflict,
    LiteralLine,
    ParsedUnit,
    SideDiff,
)
from trivialmerge.conflict.policy import resolve


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving every conflict in one file.

    Results combine with ``+``; the combination is associative and
    ``ResolutionResult.empty()`` is its identity, so a file's result is
    the ordered sum of its per-unit results.
    """

    resolved_count: int = 0
    unresolved_count: int = 0
    content: str = ""
    diffs: tuple[SideDiff, ...] = ()

    @classmethod
    def empty(cls) -> ResolutionResult:
        return cls()

    def __add__(self, other: ResolutionResult) -> ResolutionResult:
        if not isinstance(other, ResolutionResult):
            return NotImplemented
        return ResolutionResult(
            resolved_count=self.resolved_count + other.resolved_count,
            unresolved_count=self.unresolved_count + other.unresolved_count,
            content=self.content + other.content,
            diffs=self.diffs + other.diffs,
        )

    @property
    def total_count(self) -> int:
        return self.resolved_count + self.unresolved_count

    @property
    def changed(self) -> bool:
        """Whether the content differs from the parsed input."""
        return self.resolved_count > 0


def _unlines(lines) -> str:
    return "".join(f"{line}\n" for line in lines)


def assemble_unit(unit: ParsedUnit) -> ResolutionResult:
    """Result of a single parsed unit."""
    match unit:
        case LiteralLine(text=text):
            return ResolutionResult(content=f"{text}\n")
        case Conflict() as conflict:
            resolved = resolve(conflict)
            if resolved is None:
                return ResolutionResult(
                    unresolved_count=1,
                    content=_unlines(conflict.render()),
                    diffs=tuple(explain(conflict)),
                )
            return ResolutionResult(
                resolved_count=1,
                content=_unlines(resolved),
            )
        case _:
            raise TypeError(f"Unexpected parsed unit: {unit!r}")


def assemble(units: list[ParsedUnit]) -> ResolutionResult:
    """Fold parsed units into the resolved content and statistics.

    Args:
        units: Parser output in file order

    Returns:
        Combined result with content and diffs in file order
    """
    resolved_count = unresolved_count = 0
    content: list[str] = []
    diffs: list[SideDiff] = []

    for unit in units:
        part = assemble_unit(unit)
        resolved_count += part.resolved_count
        unresolved_count += part.unresolved_count
        content.append(part.content)
        diffs.extend(part.diffs)

    return ResolutionResult(
        resolved_count=resolved_count,
        unresolved_count=unresolved_count,
        content="".join(content),
        diffs=tuple(diffs),
    )
