"""
Tests for the Command Executor.

Runs real commands through /bin/sh.
Requires Python 3.11+.
"""

import pytest

from executor.models import CommandStatus, classify_returncode
from executor.runner import CommandRunner, substitute_placeholder


class TestSubstitution:
    """Test cases for placeholder substitution."""

    def test_every_placeholder_is_replaced(self):
        assert substitute_placeholder("echo /_ /_", "a.txt") == "echo a.txt a.txt"

    def test_template_without_placeholder_is_unchanged(self):
        assert substitute_placeholder("make test", "a.txt") == "make test"

    def test_custom_placeholder(self):
        assert substitute_placeholder("cat {}", "b.txt", placeholder="{}") == "cat b.txt"


class TestClassifyReturncode:
    """Test cases for exit/signal classification."""

    def test_success(self):
        assert classify_returncode(0) == (0, CommandStatus.SUCCESS, None)

    def test_plain_failure(self):
        assert classify_returncode(3) == (3, CommandStatus.NONZERO_EXIT, None)

    def test_shell_killed_by_signal(self):
        """A negative code is re-encoded as 128 + signal."""
        assert classify_returncode(-15) == (143, CommandStatus.SIGNALED, 15)

    def test_child_killed_reported_by_shell(self):
        assert classify_returncode(130) == (130, CommandStatus.SIGNALED, 2)


class TestCommandRunner:
    """Test cases for CommandRunner."""

    @pytest.fixture
    def command_runner(self) -> CommandRunner:
        return CommandRunner(shell="/bin/sh", placeholder="/_")

    @pytest.mark.asyncio
    async def test_runs_substituted_command(self, command_runner: CommandRunner):
        """The exact post-substitution command is executed and recorded."""
        result = await command_runner.run("echo /_ /_", "a.txt")

        assert result.command == "echo a.txt a.txt"
        assert result.output == "a.txt a.txt\n"
        assert result.status == 0
        assert result.category is CommandStatus.SUCCESS
        assert result.succeeded

    @pytest.mark.asyncio
    async def test_nonzero_exit(self, command_runner: CommandRunner):
        result = await command_runner.run("exit 3", "a.txt")

        assert result.status == 3
        assert result.category is CommandStatus.NONZERO_EXIT
        assert result.signal is None
        assert not result.succeeded

    @pytest.mark.asyncio
    async def test_killed_by_signal(self, command_runner: CommandRunner):
        result = await command_runner.run("kill -9 $$", "a.txt")

        assert result.category is CommandStatus.SIGNALED
        assert result.signal == 9
        assert result.status == 137

    @pytest.mark.asyncio
    async def test_stderr_is_merged(self, command_runner: CommandRunner):
        result = await command_runner.run("echo out; echo err 1>&2", "a.txt")

        assert "out" in result.output
        assert "err" in result.output

    @pytest.mark.asyncio
    async def test_missing_shell_is_execution_failure(self):
        """A shell that cannot start yields an empty failure result, not an exception."""
        command_runner = CommandRunner(shell="/nonexistent/shell")

        result = await command_runner.run("echo /_", "a.txt")

        assert result.category is CommandStatus.EXECUTION_FAILURE
        assert result.output == ""
        assert result.status == -1
        assert result.command == "echo a.txt"
