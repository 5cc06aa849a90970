"""Parse diff3 conflict markers into literal lines and conflicts."""

from __future__ import annotations

from trivialmerge.conflict.model import (
    Conflict,
    LiteralLine,
    Marker,
    ParsedUnit,
)

_MARKER_NAMES = {
    Marker.BASE: "base",
    Marker.MID: "mid",
    Marker.END: "end",
}


class ParseError(ValueError):
    """A conflict start marker without its closing markers."""

    def __init__(self, line_number: int, missing: Marker):
        self.line_number = line_number
        self.missing = missing
        super().__init__(
            f"Unterminated conflict at line {line_number}: "
            f"missing {_MARKER_NAMES[missing]} marker"
        )


def split_lines(text: str) -> list[str]:
    """Split text on newlines, dropping the final empty line.

    Carriage returns are kept as part of the line so that files with
    CRLF line endings are written back unchanged.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class _Cursor:
    """Forward-only position over the lines of a file."""

    def __init__(self, lines: list[str]):
        self.lines = lines
        self.pos = 0

    def take_until(self, marker: Marker) -> tuple[list[str], str | None]:
        """Consume lines up to and including the next marker line.

        Returns:
            Lines before the marker, and the marker line itself or None
            if input ran out first
        """
        start = self.pos
        for i in range(start, len(self.lines)):
            if marker.matches(self.lines[i]):
                self.pos = i + 1
                return self.lines[start:i], self.lines[i]
        self.pos = len(self.lines)
        return self.lines[start:], None

    @property
    def line_number(self) -> int:
        """1-based number of the most recently consumed line."""
        return self.pos


def _parse_conflict(cursor: _Cursor, start_marker: str) -> Conflict:
    line_number = cursor.line_number
    sections = []
    markers = []
    for marker in (Marker.BASE, Marker.MID, Marker.END):
        lines, marker_line = cursor.take_until(marker)
        if marker_line is None:
            raise ParseError(line_number, marker)
        sections.append(tuple(lines))
        markers.append(marker_line)

    return Conflict(
        line_number=line_number,
        start_marker=start_marker,
        base_marker=markers[0],
        mid_marker=markers[1],
        end_marker=markers[2],
        ours_lines=sections[0],
        base_lines=sections[1],
        theirs_lines=sections[2],
    )


def parse(text: str) -> list[ParsedUnit]:
    """Parse file content into an ordered list of units.

    Args:
        text: Full file content, possibly containing diff3 conflicts

    Returns:
        LiteralLine and Conflict items in file order

    Raises:
        ParseError: If a start marker is not followed by base, mid
            and end markers
    """
    cursor = _Cursor(split_lines(text))
    units: list[ParsedUnit] = []

    while True:
        lines, start_marker = cursor.take_until(Marker.START)
        units.extend(LiteralLine(line) for line in lines)
        if start_marker is None:
            return units
        units.append(_parse_conflict(cursor, start_marker))
