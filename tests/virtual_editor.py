"""Virtual editor for testing -- implements the TextEditor protocol in-memory.

``VirtualEditor`` keeps the document as a list of lines and records every
line modification so tests can assert on the edits a command made.
"""

from __future__ import annotations

from typing import Callable, Iterable

from pipetable.point import Point, Range


class VirtualEditor:
    """In-memory document satisfying ``pipetable.text_editor.TextEditor``.

    Parameters
    ----------
    lines:
        Initial document lines.
    cursor:
        Initial cursor position.
    rejected_rows:
        Rows for which ``accepts_table_edit`` returns False.
    """

    def __init__(
        self,
        lines: Iterable[str],
        cursor: Point = Point(0, 0),
        rejected_rows: Iterable[int] = (),
    ) -> None:
        self.lines: list[str] = list(lines)
        self.cursor = cursor
        self.selection: Range | None = None
        self.rejected_rows = set(rejected_rows)
        self.calls: list[tuple] = []
        self.transactions = 0

    # -- cursor and selection -----------------------------------------------

    def get_cursor_position(self) -> Point:
        return self.cursor

    def set_cursor_position(self, pos: Point) -> None:
        self.cursor = pos
        self.selection = None

    def set_selection_range(self, range: Range) -> None:
        self.selection = range
        self.cursor = range.end

    # -- line access --------------------------------------------------------

    def get_last_row(self) -> int:
        return len(self.lines) - 1

    def accepts_table_edit(self, row: int) -> bool:
        return row not in self.rejected_rows

    def get_line(self, row: int) -> str:
        return self.lines[row]

    # -- line modification --------------------------------------------------

    def insert_line(self, row: int, line: str) -> None:
        self.calls.append(("insert", row, line))
        self.lines.insert(row, line)

    def delete_line(self, row: int) -> None:
        self.calls.append(("delete", row))
        del self.lines[row]

    def replace_lines(self, start_row: int, end_row: int, lines: list[str]) -> None:
        self.calls.append(("replace", start_row, end_row, list(lines)))
        self.lines[start_row:end_row] = lines

    # -- transactions -------------------------------------------------------

    def transact(self, func: Callable[[], None]) -> None:
        snapshot = (list(self.lines), self.cursor, self.selection, list(self.calls))
        self.transactions += 1
        try:
            func()
        except Exception:
            self.lines, self.cursor, self.selection, self.calls = snapshot
            raise
