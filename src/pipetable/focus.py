"""Logical cursor position inside a table."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Focus:
    """A (row, column, offset) position independent of screen coordinates.

    ``row == -1`` is above the table and ``column == -1`` is the left margin.
    ``offset`` counts characters into the focused cell's raw content (or
    into the line, when the focus is in the left margin).
    """

    row: int
    column: int
    offset: int = 0

    def pos_equals(self, other: Focus) -> bool:
        """Compare row and column, ignoring the offset."""
        return self.row == other.row and self.column == other.column

    def set_row(self, row: int) -> Focus:
        return replace(self, row=row)

    def set_column(self, column: int) -> Focus:
        return replace(self, column=column)

    def set_offset(self, offset: int) -> Focus:
        return replace(self, offset=offset)
