"""Immutable table model: cells, rows, tables and coordinate queries.

A ``Table`` is a tuple of ``TableRow`` values, each a tuple of
``TableCell`` values plus the text around the outer pipes. Every transform
builds new values; untouched rows and cells are shared between tables.
"""

from __future__ import annotations

import re
from typing import Iterable

from pipetable.focus import Focus
from pipetable.options import Alignment
from pipetable.point import Point, Range

_DELIMITER_CELL_RE = re.compile(r"^\s*:?-+:?\s*$")
_ESCAPED_PIPE_RE = re.compile(r"\\\|")


# ---------------------------------------------------------------------------
# TableCell
# ---------------------------------------------------------------------------


class TableCell:
    """Text between two column delimiters.

    ``raw_content`` is kept verbatim (escapes included) so rendered lines
    map one-to-one onto screen columns; ``content`` is the stripped text.
    """

    __slots__ = ("_raw_content", "_content", "_padding_left", "_padding_right")

    def __init__(self, raw_content: str) -> None:
        self._raw_content = raw_content
        self._content = raw_content.strip()
        if self._content == "":
            self._padding_left = 0 if raw_content == "" else 1
        else:
            self._padding_left = len(raw_content) - len(raw_content.lstrip())
        self._padding_right = len(raw_content) - len(self._content) - self._padding_left

    @classmethod
    def from_value(cls, value: str) -> TableCell:
        """Build a cell holding *value*, escaping column delimiters."""
        return cls(value.replace("|", "\\|"))

    @property
    def raw_content(self) -> str:
        return self._raw_content

    @property
    def content(self) -> str:
        return self._content

    @property
    def value(self) -> str:
        """Stripped content with escaped delimiters unescaped."""
        return _ESCAPED_PIPE_RE.sub("|", self._content)

    @property
    def padding_left(self) -> int:
        return self._padding_left

    @property
    def padding_right(self) -> int:
        return self._padding_right

    def to_text(self) -> str:
        return self._raw_content

    def is_delimiter(self) -> bool:
        """Check whether the cell is written in delimiter syntax (``:---:``)."""
        return _DELIMITER_CELL_RE.match(self._raw_content) is not None

    @property
    def alignment(self) -> Alignment | None:
        """Alignment encoded by a delimiter cell, or None for other cells."""
        if not self.is_delimiter():
            return None
        left = self._content.startswith(":")
        right = self._content.endswith(":")
        if left and right:
            return "center"
        if left:
            return "left"
        if right:
            return "right"
        return "none"

    def compute_content_offset(self, raw_offset: int) -> int:
        """Convert an offset into the raw content to one into the content."""
        if self._content == "":
            return 0
        if raw_offset < self._padding_left:
            return 0
        if raw_offset < self._padding_left + len(self._content):
            return raw_offset - self._padding_left
        return len(self._content)

    def compute_raw_offset(self, content_offset: int) -> int:
        """Convert an offset into the content to one into the raw content."""
        return content_offset + self._padding_left

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableCell):
            return NotImplemented
        return self._raw_content == other._raw_content

    def __hash__(self) -> int:
        return hash(self._raw_content)

    def __repr__(self) -> str:
        return f"TableCell({self._raw_content!r})"


# ---------------------------------------------------------------------------
# TableRow
# ---------------------------------------------------------------------------


class TableRow:
    """A row of cells plus the text outside its first and last pipes."""

    __slots__ = ("_cells", "_margin_left", "_margin_right")

    def __init__(
        self,
        cells: Iterable[TableCell],
        margin_left: str = "",
        margin_right: str = "",
    ) -> None:
        self._cells: tuple[TableCell, ...] = tuple(cells)
        self._margin_left = margin_left
        self._margin_right = margin_right

    @classmethod
    def empty(cls, width: int) -> TableRow:
        """Build a row of *width* empty cells."""
        return cls([TableCell("")] * width)

    @property
    def cells(self) -> tuple[TableCell, ...]:
        return self._cells

    @property
    def margin_left(self) -> str:
        return self._margin_left

    @property
    def margin_right(self) -> str:
        return self._margin_right

    @property
    def width(self) -> int:
        return len(self._cells)

    def get_cell_at(self, index: int) -> TableCell | None:
        if 0 <= index < len(self._cells):
            return self._cells[index]
        return None

    def set_cell_at(self, index: int, cell: TableCell) -> TableRow:
        cells = list(self._cells)
        cells[index] = cell
        return TableRow(cells, self._margin_left, self._margin_right)

    def to_text(self) -> str:
        if not self._cells:
            return self._margin_left
        cells_text = "|".join(cell.to_text() for cell in self._cells)
        return f"{self._margin_left}|{cells_text}|{self._margin_right}"

    def is_delimiter(self) -> bool:
        return bool(self._cells) and all(cell.is_delimiter() for cell in self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableRow):
            return NotImplemented
        return (
            self._cells == other._cells
            and self._margin_left == other._margin_left
            and self._margin_right == other._margin_right
        )

    def __hash__(self) -> int:
        return hash((self._cells, self._margin_left, self._margin_right))

    def __repr__(self) -> str:
        return f"TableRow({self.to_text()!r})"


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------


class Table:
    """An immutable sequence of rows.

    Row 0 is the header; row 1 is the delimiter row when it is written in
    delimiter syntax.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: Iterable[TableRow]) -> None:
        self._rows: tuple[TableRow, ...] = tuple(rows)

    @property
    def rows(self) -> tuple[TableRow, ...]:
        return self._rows

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def header_width(self) -> int:
        return self._rows[0].width if self._rows else 0

    @property
    def header_row(self) -> TableRow | None:
        return self._rows[0] if self._rows else None

    @property
    def delimiter_row(self) -> TableRow | None:
        if len(self._rows) < 2:
            return None
        row = self._rows[1]
        return row if row.is_delimiter() else None

    @property
    def alignments(self) -> tuple[Alignment, ...]:
        """Per-column alignments, one per header column."""
        width = self.header_width
        delimiter_row = self.delimiter_row
        if delimiter_row is None:
            return ("none",) * width
        found: list[Alignment] = [cell.alignment or "none" for cell in delimiter_row.cells]
        found.extend(["none"] * (width - len(found)))
        return tuple(found[:width])

    def get_row_at(self, index: int) -> TableRow | None:
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def get_cell_at(self, row_index: int, column_index: int) -> TableCell | None:
        row = self.get_row_at(row_index)
        if row is None:
            return None
        return row.get_cell_at(column_index)

    def get_focused_cell(self, focus: Focus) -> TableCell | None:
        return self.get_cell_at(focus.row, focus.column)

    def to_lines(self) -> list[str]:
        return [row.to_text() for row in self._rows]

    # -- coordinate queries ---------------------------------------------------

    def focus_of_position(self, pos: Point, row_offset: int) -> Focus | None:
        """Compute the focus under screen position *pos*.

        *row_offset* is the editor row where the table starts. Returns None
        when *pos* is not on a row of the table.
        """
        row_index = pos.row - row_offset
        row = self.get_row_at(row_index)
        if row is None:
            return None
        column_pos = len(row.margin_left) + 1  # left margin + a pipe
        if pos.column < column_pos:
            return Focus(row_index, -1, pos.column)
        column_index = 0
        for cell in row.cells:
            cell_width = len(cell.raw_content)
            if column_pos + cell_width + 1 > pos.column:
                break
            column_pos += cell_width + 1
            column_index += 1
        return Focus(row_index, column_index, pos.column - column_pos)

    def _column_start(self, row: TableRow, column: int) -> int:
        column_pos = len(row.margin_left) + 1
        for cell in row.cells[: min(column, row.width)]:
            column_pos += len(cell.raw_content) + 1
        return column_pos

    def position_of_focus(self, focus: Focus, row_offset: int) -> Point | None:
        """Compute the screen position of *focus*, or None if off the table."""
        row = self.get_row_at(focus.row)
        if row is None:
            return None
        row_pos = focus.row + row_offset
        if focus.column < 0:
            return Point(row_pos, focus.offset)
        return Point(row_pos, self._column_start(row, focus.column) + focus.offset)

    def selection_range_of_focus(self, focus: Focus, row_offset: int) -> Range | None:
        """Compute the screen range of the focused cell's content.

        Returns None when there is no cell or it has no content to select.
        """
        row = self.get_row_at(focus.row)
        if row is None:
            return None
        cell = row.get_cell_at(focus.column)
        if cell is None or cell.content == "":
            return None
        row_pos = focus.row + row_offset
        start = self._column_start(row, focus.column) + cell.padding_left
        return Range(Point(row_pos, start), Point(row_pos, start + len(cell.content)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"Table({self.to_lines()!r})"
