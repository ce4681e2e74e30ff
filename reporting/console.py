"""
gentr Console Reporter.

Renders command output, status lines and diff entries with Rich.
Requires Python 3.11+.
"""

from pathlib import Path

from rich.console import Console
from rich.text import Text

from differ.models import ChangeKind, DiffChange
from executor.models import CommandResult, CommandStatus
from utils.text import ELLIPSIS

_LABEL_STYLES: dict[ChangeKind, tuple[str, str]] = {
    ChangeKind.ADD: ("bold white on green", "bold green"),
    ChangeKind.REMOVE: ("bold white on red", "bold red"),
    ChangeKind.MODIFY: ("bold grey50 on yellow", "bold"),
}

_STATUS_STYLES: dict[CommandStatus, tuple[str, str]] = {
    CommandStatus.SUCCESS: ("bold white on green", "green"),
    CommandStatus.NONZERO_EXIT: ("bold white on red", "red"),
    CommandStatus.SIGNALED: ("bold white on yellow", "yellow"),
    CommandStatus.EXECUTION_FAILURE: ("bold white on red", "red"),
}


def limit_output_lines(output: str, length: int = 0) -> list[str]:
    """
    Split raw command output into the lines to display.

    With length > 0 and more lines than that, only the last length - 1
    lines are kept behind a '...' marker. Escape codes are left in place.
    """
    lines = output.split("\n")
    if length > 0 and len(lines) > length:
        lines = [ELLIPSIS] + lines[len(lines) - length + 1 :]
    return lines


def render_output_line(line: str, max_line_length: int = 60) -> Text:
    """Turn one raw output line into styled text, truncated on its visible characters."""
    text = Text.from_ansi(line)
    if len(text) > max_line_length:
        text = text[:max_line_length]
        text.append(ELLIPSIS)
    return text


class ConsoleReporter:
    """Prints cycle results to the terminal."""

    def __init__(
        self,
        console: Console | None = None,
        length: int = 0,
        max_line_length: int = 60,
    ) -> None:
        """
        Initialize the reporter.

        Args:
            console: Rich console (creates one on stdout if not provided)
            length: Maximum number of output lines shown, 0 for all
            max_line_length: Per-line truncation width
        """
        self.console = console or Console(highlight=False)
        self._length = length
        self._max_line_length = max_line_length

    def status_text(self, result: CommandResult) -> Text:
        """Build the status line for a result."""
        label_style, tail_style = _STATUS_STYLES[result.category]
        if result.category is CommandStatus.EXECUTION_FAILURE:
            label = "launch failed"
        elif result.category is CommandStatus.SIGNALED:
            label = f"signal|{result.status}"
        else:
            label = f"exit|{result.status}"

        text = Text()
        text.append(label, style=label_style)
        text.append(f"|{result.command}", style=tail_style)
        return text

    def diff_entry(self, path: Path | str, change: DiffChange) -> Text:
        """Build the '<path>:<line> <KIND>: <text>' line for one change."""
        label_style, body_style = _LABEL_STYLES[change.kind]
        text = Text()
        text.append(str(path), style="bold cyan")
        text.append(f":{change.line_number} ")
        text.append(change.kind.value, style=label_style)
        text.append(": ")
        text.append(change.text, style=body_style)
        return text

    def print_result(self, result: CommandResult) -> None:
        """Print the command output block followed by the status line."""
        self.console.print(Text("Command Output:", style="bold blue"))
        for line in limit_output_lines(result.output, self._length):
            self.console.print(render_output_line(line, self._max_line_length))
        self.console.print(Text("Status Log:", style="bold blue"))
        self.console.print(self.status_text(result))

    def print_change(self, text: Text) -> None:
        self.console.print(text)

    def print_cycle_start(self, path: Path | str) -> None:
        self.console.print(
            Text(f"\nChange detected in file: {path}. Executing command...")
        )

    def print_deletion(self, path: Path | str) -> None:
        self.console.print(Text(f"\nFile deleted: {path}", style="bold red"))

    def print_discovery(self, path: Path | str) -> None:
        self.console.print(Text(f"\nNew file detected and added: {path}", style="cyan"))

    def print_notice(self, message: str) -> None:
        self.console.print(Text(message))

    def print_error(self, message: str) -> None:
        self.console.print(Text(f"\n{message}", style="bold red"))
