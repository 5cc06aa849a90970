#!/usr/bin/env python3
"""trivialmerge CLI - resolve trivial diff3 merge conflicts."""

import asyncio
import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from trivialmerge.command.resolve import ResolveCommand
from trivialmerge.core.config import State
from trivialmerge.core.log import logger
from trivialmerge.editor import EditorError
from trivialmerge.git.repo import ConflictStyleError, GitError


class CliState(State):
    """Resolve trivial three-way merge conflicts after a git merge.

    Conflicts where one side is unchanged from the common ancestor,
    or where both sides made the same change, are resolved and the
    file is rewritten; files left without conflicts are staged.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.encoding latin-1)
    2. trivialmerge.yaml files (user config directory, current
       directory, --include)
    3. .env file
    4. Environment variables (TRIVIALMERGE_CONFIG__EDITOR=vim)
    5. Package defaults
    """

    resolve: CliSubCommand[ResolveCommand]

    def cli_cmd(self):
        """Run the active subcommand, or show help if none given."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        with logger:
            try:
                exit_code = asyncio.run(subcommand.run_workflow(self))
            except (ConflictStyleError, GitError, EditorError) as e:
                logger.error("{error}", error=str(e))
                exit_code = 2
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
