"""CLI command modules for trivialmerge."""

from trivialmerge.command.resolve import ResolveCommand

__all__ = ["ResolveCommand"]
