"""
gentr Command Runner.

Runs the user's command through a shell against the file that changed.
Requires Python 3.11+.
"""

import asyncio
from pathlib import Path

from executor.models import (
    LAUNCH_FAILED_STATUS,
    CommandResult,
    CommandStatus,
    classify_returncode,
)
from utils.config import get_settings
from utils.errors import ExecutionFailure
from utils.logger import LoggerMixin


def substitute_placeholder(template: str, path: Path | str, placeholder: str = "/_") -> str:
    """Replace every occurrence of the placeholder with the path."""
    return template.replace(placeholder, str(path))


class CommandRunner(LoggerMixin):
    """
    Executes a command template via `<shell> -c`.

    Standard error is merged into standard output. There is no timeout:
    a command that never exits blocks the caller.
    """

    def __init__(self, shell: str | None = None, placeholder: str | None = None) -> None:
        """
        Initialize the runner.

        Args:
            shell: Shell executable (defaults to EXECUTOR_SHELL)
            placeholder: Token replaced by the file path (defaults to EXECUTOR_PLACEHOLDER)
        """
        settings = get_settings()
        self._shell = shell or settings.executor.shell
        self._placeholder = placeholder or settings.executor.placeholder

    async def run(self, template: str, path: Path | str) -> CommandResult:
        """
        Run the template against a file.

        Args:
            template: Command template containing the placeholder
            path: File that triggered the run

        Returns:
            CommandResult; launch errors come back as EXECUTION_FAILURE
        """
        command = substitute_placeholder(template, path, self._placeholder)
        self.log.debug("command_starting", command=command, shell=self._shell)

        try:
            output, returncode = await self._execute(command)
        except ExecutionFailure as e:
            self.log.error("command_launch_failed", command=command, error=e.reason)
            return CommandResult(
                output="",
                status=LAUNCH_FAILED_STATUS,
                category=CommandStatus.EXECUTION_FAILURE,
                command=command,
            )

        status, category, signum = classify_returncode(returncode)
        self.log.info(
            "command_finished",
            command=command,
            status=status,
            category=category.value,
        )
        return CommandResult(
            output=output,
            status=status,
            category=category,
            command=command,
            signal=signum,
        )

    async def _execute(self, command: str) -> tuple[str, int]:
        """Start the shell and wait for it; returns (combined output, return code)."""
        try:
            process = await asyncio.create_subprocess_exec(
                self._shell,
                "-c",
                command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            raise ExecutionFailure(command, str(e)) from e

        stdout, _ = await process.communicate()
        return stdout.decode("utf-8", errors="replace"), process.returncode
