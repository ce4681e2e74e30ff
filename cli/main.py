#!/usr/bin/env python3
"""
gentr Command-Line Entry Point.

Watches files and runs a command whenever one of them changes.
Requires Python 3.11+.

Usage:
    gentr --input 'logs/*.log' echo changed /_
    find . -name '*.py' | gentr pytest /_
"""

import argparse
import asyncio
import contextlib
import signal
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.text import Text

from cli.options import Options
from presentation.spinner import NullSpinner, SnakeSpinner, Spinner
from reporting.console import ConsoleReporter
from reporting.session_log import SessionLog
from reporting.sink import ResultSink
from utils.config import get_settings
from utils.errors import LogWriteFailure, StartupError
from utils.logger import configure_logging, get_logger
from watcher.file_watcher import FileWatcher
from watcher.resolver import read_paths, resolve_files, root_directories

logger = get_logger("gentr")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="gentr",
        description="Run a command whenever a watched file changes. "
        "Every '/_' in the command is replaced with the changed file's path.",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Watch directories recursively and pick up new files",
    )
    parser.add_argument(
        "-i",
        "--input",
        default=".",
        help="Input directory, file, or glob pattern (e.g. '.', 'logs/*.log')",
    )
    parser.add_argument(
        "-l",
        "--length",
        type=int,
        default=0,
        help="Limit the number of command output lines shown",
    )
    parser.add_argument("--log", action="store_true", help="Write a session log file")
    parser.add_argument(
        "--version",
        action="version",
        version=f"gentr version {settings.app_version}",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run; '/_' is replaced with the changed file",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> tuple[Options, str]:
    """
    Parse the command line.

    Returns:
        (options, command template); the template is empty if no command was given
    """
    args = build_parser().parse_args(argv)
    options = Options(
        debug=args.debug,
        recursive=args.recursive,
        input=args.input,
        length=max(args.length, 0),
        log=args.log,
    )
    return options, " ".join(args.command)


def collect_paths(options: Options, stdin: TextIO) -> list[Path]:
    """
    Files to watch: piped paths on stdin win over --input.

    Raises:
        StartupError: If nothing could be resolved
    """
    if not stdin.isatty():
        paths = read_paths(stdin)
    else:
        paths = resolve_files(options.input, options.recursive)

    if not paths:
        raise StartupError("No files provided via STDIN or --input flag")
    return paths


def open_session_log(options: Options, command: str, console: Console) -> SessionLog | None:
    """Create the session log if enabled; failures only disable logging."""
    if not options.log:
        return None
    try:
        session_log = SessionLog.create(
            get_settings().report.log_dir,
            options=options.describe(),
            command=command,
        )
    except LogWriteFailure as e:
        logger.warning("session_log_unavailable", error=str(e))
        console.print(Text(f"Error creating log file: {e}", style="bold red"))
        return None
    console.print(Text(f"Created log file: {session_log.path}"))
    return session_log


async def watch(watcher: FileWatcher) -> None:
    """Run the watcher until SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    signals = (signal.SIGINT, signal.SIGTERM)
    for sig in signals:
        loop.add_signal_handler(sig, stop.set)

    try:
        run_task = asyncio.create_task(watcher.run(), name="watcher")
        stop_task = asyncio.create_task(stop.wait(), name="shutdown")
        done, _ = await asyncio.wait({run_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        stop_task.cancel()

        if run_task in done:
            run_task.result()
            return

        logger.info("shutdown_requested")
        run_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await run_task
    finally:
        for sig in signals:
            loop.remove_signal_handler(sig)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    options, command = parse_args(argv)
    configure_logging(debug=options.debug)
    settings = get_settings()

    console = Console(highlight=False)
    console.print(Text(f"Starting with options: {options.describe()}"))

    try:
        paths = collect_paths(options, sys.stdin)
        if not command:
            raise StartupError("No command provided to execute")
    except StartupError as e:
        logger.error("startup_failed", error=str(e))
        Console(stderr=True, highlight=False).print(Text(str(e), style="bold red"))
        return 1

    reporter = ConsoleReporter(
        console=console,
        length=options.length,
        max_line_length=settings.report.max_line_length,
    )
    session_log = open_session_log(options, command, console)
    sink = ResultSink(reporter, session_log)
    spinner: Spinner = SnakeSpinner() if sys.stdout.isatty() else NullSpinner()

    watcher = FileWatcher(
        paths=paths,
        command=command,
        sink=sink,
        spinner=spinner,
        roots=root_directories(options.input, options.recursive),
        recursive=options.recursive,
        exclude=[session_log.path] if session_log else [],
    )

    try:
        asyncio.run(watch(watcher))
    except StartupError as e:
        logger.error("startup_failed", error=str(e))
        Console(stderr=True, highlight=False).print(Text(str(e), style="bold red"))
        return 1
    except KeyboardInterrupt:
        pass

    console.print(Text("\nShutting down gentr..."))
    return 0


if __name__ == "__main__":
    sys.exit(main())
