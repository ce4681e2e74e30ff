"""
gentr Text Helpers.

Line splitting and truncation shared by the diff engine and the reporters.
"""

import re

ELLIPSIS = "..."

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def truncate_line(line: str, max_len: int = 60) -> str:
    """Cut a line to max_len characters, appending '...' if it was longer."""
    if len(line) > max_len:
        return line[:max_len] + ELLIPSIS
    return line


def split_lines(content: str) -> list[str]:
    """
    Split file content into lines on '\\n'.

    A trailing newline yields a final empty line, so an empty file is [""].
    """
    return content.split("\n")


def strip_ansi(text: str) -> str:
    """Remove ANSI color sequences."""
    return _ANSI_PATTERN.sub("", text)
