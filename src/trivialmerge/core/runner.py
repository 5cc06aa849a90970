"""Command execution using invoke."""

import contextlib
import os
import platform
import shlex
from pathlib import Path

from invoke import Context, Result
from invoke.exceptions import CommandTimedOut

from trivialmerge.core.log import logger


class Runner(Context):
    """invoke.Context with the execution options this tool needs."""

    def kill(self) -> None:
        """Kill the running subprocess.

        invoke kills with signal.SIGKILL, which the signal module does
        not define on Windows; os.kill there takes the number and
        passes it to TerminateProcess as the exit code.
        """
        if platform.system() == "Windows":
            pid = self.pid if self.using_pty else self.process.pid
            with contextlib.suppress(ProcessLookupError):
                os.kill(pid, 9)
            return

        super().kill()

    def execute(
        self,
        args: list[str],
        cwd: Path | None = None,
        timeout: int | None = None,
        check: bool = True,
        interactive: bool = False,
        env: dict[str, str] | None = None,
    ) -> Result:
        """Run a command.

        Args:
            args: Command and arguments, quoted for the shell here
            cwd: Working directory for the command
            timeout: Maximum execution time in seconds
            check: If True, raise on non-zero exit code
            interactive: Attach the command to the terminal through a
                pty instead of capturing its output
            env: Extra environment variables

        Returns:
            invoke.Result with stdout, stderr and exited; a timed out
            command has exited == -1

        Raises:
            invoke.UnexpectedExit: If check is True and the command
                exits non-zero
        """
        command = shlex.join(str(arg) for arg in args)
        kwargs = {
            "hide": not interactive,
            "warn": not check,
            "pty": interactive,
            "in_stream": None if interactive else False,
        }
        if timeout:
            kwargs["timeout"] = timeout
        if env:
            kwargs["env"] = env

        logger.debug("Running command", command=command, cwd=str(cwd or ""))

        try:
            if cwd:
                with self.cd(str(cwd)):
                    result = self.run(command, **kwargs)
            else:
                result = self.run(command, **kwargs)
        except CommandTimedOut as e:
            result = e.result
            result.exited = -1

        logger.trace(
            "Command finished",
            command=command,
            exited=result.exited,
            stdout=result.stdout,
            stderr=result.stderr,
        )
        return result
