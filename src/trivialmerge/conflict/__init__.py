"""Parsing, resolution and diffing of diff3 conflict blocks."""

from trivialmerge.conflict.assembler import ResolutionResult, assemble
from trivialmerge.conflict.diff import explain, get_diff
from trivialmerge.conflict.model import (
    Conflict,
    DiffKind,
    DiffOp,
    LiteralLine,
    ParsedUnit,
    Side,
    SideDiff,
)
from trivialmerge.conflict.parser import ParseError, parse
from trivialmerge.conflict.policy import resolve


def resolve_text(text: str) -> ResolutionResult:
    """Parse text and resolve every trivial conflict in it.

    Raises:
        ParseError: If a conflict block is not terminated
    """
    return assemble(parse(text))


__all__ = [
    "Conflict",
    "DiffKind",
    "DiffOp",
    "LiteralLine",
    "ParseError",
    "ParsedUnit",
    "ResolutionResult",
    "Side",
    "SideDiff",
    "assemble",
    "explain",
    "get_diff",
    "parse",
    "resolve",
    "resolve_text",
]
