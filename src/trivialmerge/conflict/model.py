"""Structured representation of diff3 merge conflicts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# A marker line starts with this many repetitions of its marker character
MARKER_LENGTH = 7


class Marker(str, Enum):
    """Marker characters of a diff3 conflict block, in file order."""

    START = "<"
    BASE = "|"
    MID = "="
    END = ">"

    def matches(self, line: str) -> bool:
        """Return True if line is a marker line of this kind."""
        return line.startswith(self.value * MARKER_LENGTH)


class Side(str, Enum):
    """Side of a conflict compared against the common ancestor."""

    OURS = "Ours"
    THEIRS = "Theirs"


@dataclass(frozen=True)
class Conflict:
    """One diff3 conflict block as found in a file.

    The four marker lines are kept verbatim, including any label text
    after the marker characters, so an unresolved conflict can be
    written back exactly as it was read.
    """

    line_number: int
    start_marker: str
    base_marker: str
    mid_marker: str
    end_marker: str
    ours_lines: tuple[str, ...] = ()
    base_lines: tuple[str, ...] = ()
    theirs_lines: tuple[str, ...] = ()

    def lines_for(self, side: Side) -> tuple[str, ...]:
        """Lines of the given side."""
        if side is Side.OURS:
            return self.ours_lines
        return self.theirs_lines

    def render(self) -> list[str]:
        """Original conflict block, one entry per line."""
        return [
            self.start_marker,
            *self.ours_lines,
            self.base_marker,
            *self.base_lines,
            self.mid_marker,
            *self.theirs_lines,
            self.end_marker,
        ]


@dataclass(frozen=True)
class LiteralLine:
    """A line outside any conflict block, without its newline."""

    text: str


# Parse result item: a plain line or a conflict block
ParsedUnit = LiteralLine | Conflict


class DiffKind(str, Enum):
    """Edit operation of a line-level diff."""

    KEEP = " "
    INSERT = "+"
    DELETE = "-"


@dataclass(frozen=True)
class DiffOp:
    """One line of an edit script."""

    kind: DiffKind
    line: str


@dataclass(frozen=True)
class SideDiff:
    """Edit script from the base section to one side of a conflict."""

    side: Side
    line_number: int
    edits: tuple[DiffOp, ...] = field(default_factory=tuple)
