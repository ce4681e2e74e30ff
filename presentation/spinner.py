"""
gentr Spinner.

The watch loop only needs a spinner it can start, stop, pause and resume.
SpinnerStateMachine holds the RUNNING/PAUSED state; SnakeSpinner draws a
bouncing gradient bar on the terminal while running.
Requires Python 3.11+.
"""

import asyncio
import sys
from enum import Enum
from typing import Protocol, TextIO

from utils.logger import LoggerMixin


class Spinner(Protocol):
    """Presentation collaborator driven by the coordinator."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...


class SpinnerState(str, Enum):
    """Animation state."""

    RUNNING = "running"
    PAUSED = "paused"


class SpinnerStateMachine:
    """
    Two-state machine fed with discrete 'pause' / 'resume' messages.

    Pausing while paused and resuming while running are no-ops.
    """

    MESSAGES = ("pause", "resume")

    def __init__(self) -> None:
        self.state = SpinnerState.RUNNING
        self.history: list[SpinnerState] = []

    def send(self, message: str) -> SpinnerState:
        """
        Apply a message and return the resulting state.

        Raises:
            ValueError: For messages other than 'pause' and 'resume'
        """
        if message not in self.MESSAGES:
            raise ValueError(f"unknown spinner message: {message!r}")

        target = SpinnerState.PAUSED if message == "pause" else SpinnerState.RUNNING
        if target is not self.state:
            self.state = target
            self.history.append(target)
        return self.state

    @property
    def paused(self) -> bool:
        return self.state is SpinnerState.PAUSED


class NullSpinner:
    """Spinner that draws nothing but still tracks state."""

    def __init__(self) -> None:
        self.machine = SpinnerStateMachine()
        self.started = False

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.started = False

    def pause(self) -> None:
        self.machine.send("pause")

    def resume(self) -> None:
        self.machine.send("resume")


def generate_gradient(start_color: int, steps: int, decrement: int = 6) -> list[int]:
    """256-color codes fading from dim to start_color, never below 16."""
    gradient = []
    current = start_color
    for _ in range(steps):
        gradient.append(current)
        current = max(current - decrement, 16)
    gradient.reverse()
    return gradient


class SnakeSpinner(LoggerMixin):
    """
    Bouncing snake animation rendered on one terminal line.

    Must be started from inside a running event loop.
    """

    BLOCK = "█"
    FRAME_SECONDS = 0.15
    IDLE_SECONDS = 0.1

    def __init__(
        self,
        width: int = 30,
        snake_length: int = 6,
        start_color: int = 51,
        stream: TextIO | None = None,
    ) -> None:
        """
        Initialize the spinner.

        Args:
            width: Number of columns the snake bounces across
            snake_length: Number of blocks in the snake
            start_color: 256-color code of the head
            stream: Output stream (defaults to stdout)
        """
        self._width = width
        self._snake_length = snake_length
        self._start_color = start_color
        self._tail_colors = generate_gradient(start_color, snake_length - 1)
        self._stream = stream or sys.stdout
        self._machine = SpinnerStateMachine()
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> SpinnerState:
        return self._machine.state

    def start(self) -> None:
        """Start the animation task."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self.log.debug("spinner_started", width=self._width)

    def stop(self) -> None:
        """Stop the animation and clear its line."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._clear()

    def pause(self) -> None:
        if not self._machine.paused:
            self._clear()
        self._machine.send("pause")

    def resume(self) -> None:
        self._machine.send("resume")

    def render(self, snake: list[int]) -> str:
        """Render one frame for the given block positions."""
        line = [" "] * self._width
        for index, position in enumerate(snake):
            if 0 <= position < self._width:
                if index == self._snake_length - 1:
                    color = self._start_color
                else:
                    color = self._tail_colors[index]
                line[position] = f"\033[38;5;{color}m{self.BLOCK}\033[0m"
        return "".join(line)

    def _clear(self) -> None:
        self._stream.write("\r" + " " * self._width + "\r")
        self._stream.flush()

    async def _run(self) -> None:
        snake = list(range(self._snake_length))
        direction = 1

        while True:
            if self._machine.paused:
                await asyncio.sleep(self.IDLE_SECONDS)
                continue

            self._stream.write("\r" + self.render(snake))
            self._stream.flush()
            await asyncio.sleep(self.FRAME_SECONDS)

            head = snake[-1] + direction
            if head < 0 or head > self._width - 1:
                direction = -direction
                head = snake[-1] + direction
            snake = snake[1:] + [head]
