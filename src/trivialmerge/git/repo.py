"""Git operations needed to find and stage conflicted files."""

from __future__ import annotations

from pathlib import Path

from invoke import Result

from trivialmerge.core.config import GitConfig
from trivialmerge.core.log import logger
from trivialmerge.core.runner import Runner

# Value written by the --set-conflict-style option
DEFAULT_CONFLICT_STYLE = "diff3"


class GitError(RuntimeError):
    """A git command failed."""

    def __init__(self, args: list[str], result: Result):
        self.command = args
        self.returncode = result.exited
        self.stderr = result.stderr.strip()
        super().__init__(
            f"'{' '.join(args)}' failed with exit code {result.exited}"
            + (f": {self.stderr}" if self.stderr else "")
        )


class ConflictStyleError(RuntimeError):
    """merge.conflictstyle does not produce base sections."""


def conflicted_paths(porcelain: str, statuses: list[str]) -> list[str]:
    """Paths from 'git status --porcelain' output with given statuses.

    Args:
        porcelain: Output of git status --porcelain -z
        statuses: Two-letter status codes to keep, e.g. ["UU"]

    Returns:
        Repository-relative paths in output order
    """
    paths = []
    for entry in porcelain.split("\0"):
        if len(entry) > 3 and entry[:2] in statuses and entry[2] == " ":
            paths.append(entry[3:])
    return paths


class GitRepository:
    """A git working tree, driven through the git command line."""

    def __init__(self, config: GitConfig, runner: Runner | None = None):
        self.config = config
        self.workdir = Path(config.workdir)
        self.runner = runner or Runner()

    def git(self, *args: str, check: bool = True) -> Result:
        """Run git in the working directory.

        Raises:
            GitError: If check is True and git exits non-zero
        """
        cmd = [self.config.executable, *args]
        result = self.runner.execute(
            cmd,
            cwd=self.workdir,
            timeout=self.config.timeout,
            check=False,
        )
        if check and result.exited != 0:
            raise GitError(cmd, result)
        return result

    def toplevel(self) -> Path:
        """Absolute path of the repository root."""
        return Path(self.git("rev-parse", "--show-toplevel").stdout.strip())

    def conflicted_files(self) -> list[Path]:
        """Absolute paths of files git reports as conflicted."""
        porcelain = self.git("status", "--porcelain", "-z").stdout
        root = self.toplevel()
        return [
            root / path
            for path in conflicted_paths(
                porcelain, self.config.conflict_statuses
            )
        ]

    def add(self, path: Path) -> None:
        """Stage a file, marking its conflict resolved."""
        logger.info("Staging file", path=str(path))
        self.git("add", "--", str(path))

    def get_conflict_style(self) -> str:
        """Current merge.conflictstyle, or "unset".

        git config exits with 1 when the key is not set; any other
        failure is an error.
        """
        result = self.git("config", "merge.conflictstyle", check=False)
        if result.exited == 0:
            return result.stdout.rstrip("\n")
        if result.exited == 1:
            return "unset"
        raise GitError(
            [self.config.executable, "config", "merge.conflictstyle"],
            result,
        )

    def set_conflict_style(self, style: str = DEFAULT_CONFLICT_STYLE):
        """Set merge.conflictstyle in the global git configuration."""
        logger.info("Setting global merge.conflictstyle", style=style)
        self.git("config", "--global", "merge.conflictstyle", style)

    def ensure_conflict_style(self, auto_set: bool = False) -> str:
        """Make sure conflicts are written with base sections.

        Args:
            auto_set: Set merge.conflictstyle globally if needed

        Returns:
            The conflict style in effect

        Raises:
            ConflictStyleError: If the style is wrong and auto_set is
                False, or setting it did not take effect
        """
        accepted = self.config.accepted_conflict_styles
        style = self.get_conflict_style()
        if style in accepted:
            return style

        if not auto_set:
            raise ConflictStyleError(
                f"merge.conflictstyle must be {DEFAULT_CONFLICT_STYLE} "
                f"but is {style!r}. Use --set-conflict-style to "
                f"automatically set it globally"
            )

        self.set_conflict_style()
        style = self.get_conflict_style()
        if style not in accepted:
            raise ConflictStyleError(
                "Attempt to set conflict style failed. Perhaps you have "
                "an incorrect merge.conflictstyle configuration "
                "specified in your per-project .git/config?"
            )
        return style
