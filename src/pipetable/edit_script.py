"""Line-level edit scripts.

``shortest_edit_script`` finds the fewest single-line insertions, deletions
and replacements turning one list of lines into another, so a host editor
only touches the lines that actually changed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Union

if TYPE_CHECKING:
    from pipetable.text_editor import TextEditor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
#
# ``row`` is relative to the start of the edited block and refers to the
# block as it stands when the command runs, i.e. after all earlier commands.


@dataclass(frozen=True)
class Insert:
    row: int
    line: str


@dataclass(frozen=True)
class Delete:
    row: int


@dataclass(frozen=True)
class Replace:
    """Replace ``len(lines)`` consecutive lines starting at ``row``."""

    row: int
    lines: tuple[str, ...]


EditCommand = Union[Insert, Delete, Replace]


def script_distance(script: Sequence[EditCommand]) -> int:
    """Number of single-line operations in *script*."""
    return sum(len(cmd.lines) if isinstance(cmd, Replace) else 1 for cmd in script)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

_INF = float("inf")


def shortest_edit_script(
    old: Sequence[str],
    new: Sequence[str],
    max_distance: int = -1,
) -> list[EditCommand] | None:
    """Compute a minimal edit script from *old* to *new*.

    Returns None if more than *max_distance* single-line operations are
    needed; a negative *max_distance* means no bound. Among scripts of equal
    length the one with the most replacements is chosen, and adjacent
    replacements are merged into one ``Replace``.
    """
    n = len(old)
    m = len(new)
    limit = n + m if max_distance < 0 else min(max_distance, n + m)
    if abs(n - m) > limit:
        return None

    # dist[i][j]: cost of turning old[:i] into new[:j], restricted to the
    # band |i - j| <= limit; cells outside the band stay infinite.
    dist: list[list[float]] = [[_INF] * (m + 1) for _ in range(n + 1)]
    for i in range(n + 1):
        lo = max(0, i - limit)
        hi = min(m, i + limit)
        row = dist[i]
        row_min = _INF
        for j in range(lo, hi + 1):
            if i == 0:
                cost: float = j
            elif j == 0:
                cost = i
            else:
                prev = dist[i - 1]
                if old[i - 1] == new[j - 1]:
                    cost = prev[j - 1]
                else:
                    cost = prev[j - 1] + 1
                cost = min(cost, prev[j] + 1, row[j - 1] + 1)
            row[j] = cost
            row_min = min(row_min, cost)
        if row_min > limit:
            return None

    if dist[n][m] > limit:
        return None

    return _backtrack(old, new, dist)


def _backtrack(
    old: Sequence[str],
    new: Sequence[str],
    dist: list[list[float]],
) -> list[EditCommand]:
    # walk back from the end, collecting ("match" | "replace" | "delete" |
    # "insert", i, j) steps, then replay them forwards
    steps: list[tuple[str, int, int]] = []
    i = len(old)
    j = len(new)
    while i > 0 or j > 0:
        here = dist[i][j]
        if i > 0 and j > 0 and old[i - 1] == new[j - 1] and dist[i - 1][j - 1] == here:
            steps.append(("match", i - 1, j - 1))
            i -= 1
            j -= 1
        elif i > 0 and j > 0 and dist[i - 1][j - 1] + 1 == here:
            steps.append(("replace", i - 1, j - 1))
            i -= 1
            j -= 1
        elif i > 0 and dist[i - 1][j] + 1 == here:
            steps.append(("delete", i - 1, j))
            i -= 1
        else:
            steps.append(("insert", i, j - 1))
            j -= 1
    steps.reverse()

    # Once old[:i] has become new[:j], old line i sits at row j.
    script: list[EditCommand] = []
    for kind, _, j in steps:
        if kind == "match":
            continue
        if kind == "replace":
            last = script[-1] if script else None
            if isinstance(last, Replace) and last.row + len(last.lines) == j:
                script[-1] = Replace(last.row, last.lines + (new[j],))
            else:
                script.append(Replace(j, (new[j],)))
        elif kind == "delete":
            script.append(Delete(j))
        else:
            script.append(Insert(j, new[j]))
    return script


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def apply_edit_script(
    text_editor: TextEditor,
    script: Sequence[EditCommand],
    base_row: int,
) -> None:
    """Replay *script* on the editor rows starting at *base_row*.

    The caller is expected to run this inside ``text_editor.transact``.
    """
    for command in script:
        if isinstance(command, Insert):
            text_editor.insert_line(base_row + command.row, command.line)
        elif isinstance(command, Delete):
            text_editor.delete_line(base_row + command.row)
        elif isinstance(command, Replace):
            start = base_row + command.row
            text_editor.replace_lines(start, start + len(command.lines), list(command.lines))
        else:
            raise ValueError(f"Unknown edit command: {command!r}")
    logger.debug("Applied %d edit command(s) at row %d", len(script), base_row)
