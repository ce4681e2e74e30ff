"""
gentr Line Diff Engine.

Longest-common-subsequence diff between two line sequences, plus a pass
that folds adjacent add/remove pairs into modifications.
Requires Python 3.11+.
"""

from collections.abc import Sequence

from differ.models import ChangeKind, DiffChange
from utils.text import truncate_line

MAX_TEXT_LENGTH = 60


def _change(line_number: int, kind: ChangeKind, line: str) -> DiffChange:
    return DiffChange(
        line_number=line_number,
        kind=kind,
        text=truncate_line(line, MAX_TEXT_LENGTH),
        source=line,
    )


def lcs_table(old: Sequence[str], new: Sequence[str]) -> list[list[int]]:
    """
    Build the (m+1) x (n+1) LCS length table.

    table[i][j] is the LCS length of old[:i] and new[:j].
    """
    m, n = len(old), len(new)
    table = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if old[i - 1] == new[j - 1]:
                table[i][j] = table[i - 1][j - 1] + 1
            else:
                table[i][j] = max(table[i - 1][j], table[i][j - 1])
    return table


def diff_lines(old: Sequence[str], new: Sequence[str]) -> list[DiffChange]:
    """
    Compute the line changes that turn `old` into `new`.

    Backtracks from the bottom-right of the LCS table. On a tie between
    dropping an old line and taking a new one the old line is removed
    first, which keeps the output deterministic.

    Args:
        old: Previous content, one entry per line
        new: Current content, one entry per line

    Returns:
        Changes ordered ascending by position
    """
    table = lcs_table(old, new)
    changes: list[DiffChange] = []
    i, j = len(old), len(new)

    # Built back to front, reversed at the end
    while i > 0 and j > 0:
        if old[i - 1] == new[j - 1]:
            i -= 1
            j -= 1
        elif table[i - 1][j] >= table[i][j - 1]:
            changes.append(_change(i, ChangeKind.REMOVE, old[i - 1]))
            i -= 1
        else:
            changes.append(_change(j, ChangeKind.ADD, new[j - 1]))
            j -= 1

    while i > 0:
        changes.append(_change(i, ChangeKind.REMOVE, old[i - 1]))
        i -= 1
    while j > 0:
        changes.append(_change(j, ChangeKind.ADD, new[j - 1]))
        j -= 1

    changes.reverse()
    return changes


def combine_modifications(changes: Sequence[DiffChange]) -> list[DiffChange]:
    """
    Fold an ADD immediately followed by a REMOVE on the same line into a MODIFY.

    The MODIFY text reads '<removed> -> <added>'. Never returns more entries
    than it was given, and running it on its own output changes nothing.
    """
    combined: list[DiffChange] = []
    i = 0
    while i < len(changes):
        current = changes[i]
        following = changes[i + 1] if i + 1 < len(changes) else None
        if (
            following is not None
            and current.kind is ChangeKind.ADD
            and following.kind is ChangeKind.REMOVE
            and current.line_number == following.line_number
        ):
            combined.append(
                DiffChange(
                    line_number=current.line_number,
                    kind=ChangeKind.MODIFY,
                    text=f"{following.text} -> {current.text}",
                    source=current.source,
                )
            )
            i += 2
        else:
            combined.append(current)
            i += 1
    return combined


def apply_changes(old: Sequence[str], changes: Sequence[DiffChange]) -> list[str]:
    """
    Replay ADD/REMOVE changes from diff_lines onto `old`.

    Raises:
        ValueError: If a MODIFY change is given; those cannot be replayed
    """
    removed: set[int] = set()
    added: list[DiffChange] = []
    for change in changes:
        if change.kind is ChangeKind.REMOVE:
            removed.add(change.line_number)
        elif change.kind is ChangeKind.ADD:
            added.append(change)
        else:
            raise ValueError(f"cannot replay {change.kind.value} change at line {change.line_number}")

    result = [line for number, line in enumerate(old, start=1) if number not in removed]
    for change in sorted(added, key=lambda c: c.line_number):
        result.insert(change.line_number - 1, change.source)
    return result
