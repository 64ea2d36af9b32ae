"""Text editor protocol."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from pipetable.point import Point, Range


@runtime_checkable
class TextEditor(Protocol):
    """Interface a host editor implements to be driven by ``TableEditor``.

    Rows and columns are zero-based. Every command's reads and writes run
    inside one ``transact`` call.
    """

    # Cursor and selection

    def get_cursor_position(self) -> Point:
        """Get the current cursor position."""
        ...

    def set_cursor_position(self, pos: Point) -> None:
        """Move the cursor, clearing any selection."""
        ...

    def set_selection_range(self, range: Range) -> None:
        """Select the text in *range*."""
        ...

    # Line access

    def get_last_row(self) -> int:
        """Get the index of the last row in the document."""
        ...

    def accepts_table_edit(self, row: int) -> bool:
        """Whether the table editor may edit *row* (False e.g. in code blocks)."""
        ...

    def get_line(self, row: int) -> str:
        """Get the line at *row*, without its line terminator."""
        ...

    # Line modification

    def insert_line(self, row: int, line: str) -> None:
        """Insert *line* before *row*; *row* may be one past the last row."""
        ...

    def delete_line(self, row: int) -> None:
        """Delete the line at *row*."""
        ...

    def replace_lines(self, start_row: int, end_row: int, lines: list[str]) -> None:
        """Replace rows ``start_row`` up to ``end_row`` (exclusive) with *lines*."""
        ...

    # Transactions

    def transact(self, func: Callable[[], None]) -> None:
        """Run *func* as one undoable edit.

        Changes made by *func* must be committed or rolled back as a whole,
        including when it raises.
        """
        ...
