"""Reads table rows from raw text lines."""

from __future__ import annotations

import re
from typing import Iterable

from pipetable.options import Options
from pipetable.table import Table, TableCell, TableRow

# Characters never treated as margin: pipes, escapes and code spans
_RESERVED_MARGIN_CHARS = frozenset("|\\`")

_BLANK_RE = re.compile(r"^\s*$")


def margin_regex_src(left_margin_chars: Iterable[str]) -> str:
    """Build a regex source matching a left margin of whitespace and *left_margin_chars*."""
    chars = "".join(
        re.escape(ch) for ch in sorted(left_margin_chars) if ch not in _RESERVED_MARGIN_CHARS
    )
    return rf"[\s{chars}]*"


def _margin_regex(left_margin_chars: Iterable[str]) -> re.Pattern[str]:
    return re.compile(rf"^{margin_regex_src(left_margin_chars)}$")


def table_row_regex(left_margin_chars: Iterable[str]) -> re.Pattern[str]:
    """Regex matching the start of a line that looks like a table row."""
    return re.compile(rf"^{margin_regex_src(left_margin_chars)}\|")


def is_table_row(line: str, options: Options) -> bool:
    return table_row_regex(options.left_margin_chars).match(line) is not None


def _run_length(text: str, start: int, ch: str) -> int:
    end = start
    while end < len(text) and text[end] == ch:
        end += 1
    return end - start


def split_cells(text: str) -> list[str]:
    """Split *text* on column delimiters.

    A backslash escapes the following character and a closed code span
    (N backticks ... N backticks) may contain pipes; both are kept verbatim
    in the returned parts.
    """
    cells: list[str] = []
    buf: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "`":
            fence = _run_length(text, i, "`")
            j = i + fence
            closed = False
            while j < n:
                if text[j] == "`":
                    run = _run_length(text, j, "`")
                    j += run
                    if run == fence:
                        closed = True
                        break
                else:
                    j += 1
            if closed:
                buf.append(text[i:j])
                i = j
            else:
                buf.append("`")
                i += 1
        elif ch == "\\":
            buf.append(text[i : i + 2])
            i += 2
        elif ch == "|":
            cells.append("".join(buf))
            buf = []
            i += 1
        else:
            buf.append(ch)
            i += 1
    cells.append("".join(buf))
    return cells


def read_row(text: str, left_margin_re: re.Pattern[str]) -> TableRow:
    """Read one row; never fails, a line without pipes yields a single cell."""
    parts = split_cells(text)
    margin_left = ""
    if parts and left_margin_re.match(parts[0]):
        margin_left = parts[0]
        parts = parts[1:]
    margin_right = ""
    if len(parts) > 1 and _BLANK_RE.match(parts[-1]):
        margin_right = parts[-1]
        parts = parts[:-1]
    return TableRow([TableCell(part) for part in parts], margin_left, margin_right)


def read_table(lines: Iterable[str], options: Options) -> Table:
    """Read a table from *lines*.

    Alignment is not interpreted here; it is read back from the delimiter
    row by the table model and the formatter.
    """
    left_margin_re = _margin_regex(options.left_margin_chars)
    return Table(read_row(line, left_margin_re) for line in lines)
