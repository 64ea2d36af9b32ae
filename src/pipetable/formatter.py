"""Table completion, formatting and structural transforms.

Every function here is pure: it takes a ``Table`` and returns a new one.
Indices are expected to have been clamped by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from pipetable.options import Alignment, Options
from pipetable.table import Table, TableCell, TableRow
from pipetable.text_width import compute_text_width, pad_text

T = TypeVar("T")


@dataclass(frozen=True)
class CompletedTable:
    table: Table
    delimiter_inserted: bool


@dataclass(frozen=True)
class FormattedTable:
    table: Table
    # left margin given to every formatted row
    margin_left: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def delimiter_text(alignment: Alignment, width: int) -> str:
    """Render a delimiter cell with *width* dashes between its margins."""
    bar = "-" * width
    if alignment == "none":
        return f" {bar} "
    if alignment == "left":
        return f":{bar} "
    if alignment == "right":
        return f" {bar}:"
    if alignment == "center":
        return f":{bar}:"
    raise ValueError(f"Unknown alignment: {alignment}")


def _extend(items: Sequence[T], size: int, fill: Callable[[int], T]) -> list[T]:
    """Copy *items* and append ``fill(index)`` until it has *size* entries."""
    extended = list(items)
    for i in range(len(items), size):
        extended.append(fill(i))
    return extended


def _complete_row(row: TableRow, width: int, fill: Callable[[int], TableCell]) -> TableRow:
    return TableRow(
        _extend(row.cells, width, fill),
        row.margin_left,
        "" if row.width < width else row.margin_right,
    )


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


def complete_table(table: Table, options: Options) -> CompletedTable:
    """Insert a missing delimiter row and pad short rows to the header width.

    A short row's trailing margin becomes its first padding cell, so text
    after the last pipe is not lost.
    """
    if table.height == 0:
        raise ValueError("Empty table")
    width = table.header_width
    rows = table.rows
    new_rows: list[TableRow] = []

    header_row = rows[0]
    new_rows.append(
        _complete_row(
            header_row,
            width,
            lambda j: TableCell(header_row.margin_right if j == header_row.width else ""),
        )
    )

    delimiter_row = table.delimiter_row
    if delimiter_row is not None:
        new_rows.append(
            _complete_row(
                delimiter_row,
                width,
                lambda j: TableCell(
                    delimiter_text(
                        "none",
                        max(options.min_delimiter_width, len(delimiter_row.margin_right) - 2)
                        if j == delimiter_row.width
                        else options.min_delimiter_width,
                    )
                ),
            )
        )
    else:
        new_rows.append(
            TableRow(
                [TableCell(delimiter_text("none", options.min_delimiter_width))] * width
            )
        )

    for row in rows[2 if delimiter_row is not None else 1 :]:
        new_rows.append(
            _complete_row(
                row,
                width,
                lambda j, row=row: TableCell(row.margin_right if j == row.width else ""),
            )
        )

    return CompletedTable(Table(new_rows), delimiter_row is None)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def _column_alignments(table: Table, width: int) -> list[Alignment]:
    delimiter_row = table.delimiter_row
    if delimiter_row is None:
        return ["none"] * width
    return _extend(
        [cell.alignment or "none" for cell in delimiter_row.cells],
        width,
        lambda _: "none",
    )


def _format_normal(table: Table, options: Options) -> FormattedTable:
    tw_options = options.text_width_options
    margin_left = table.rows[0].margin_left
    delimiter_row = table.delimiter_row

    # body rows may be wider than the header; size every column seen
    table_width = max(row.width for row in table.rows)
    column_widths = [0] * table_width
    if delimiter_row is not None:
        for j in range(delimiter_row.width):
            column_widths[j] = options.min_delimiter_width
    for i, row in enumerate(table.rows):
        if delimiter_row is not None and i == 1:
            continue
        for j, cell in enumerate(row.cells):
            column_widths[j] = max(column_widths[j], compute_text_width(tw_options, cell.content))

    alignments = _column_alignments(table, table_width)

    def body_alignment(j: int) -> Alignment:
        return options.default_alignment if alignments[j] == "none" else alignments[j]

    def header_alignment(j: int) -> Alignment:
        if options.header_alignment == "follow":
            return body_alignment(j)
        return options.header_alignment

    rows: list[TableRow] = []
    header_row = table.rows[0]
    rows.append(
        TableRow(
            [
                TableCell(pad_text(header_alignment(j), tw_options, column_widths[j], cell.content))
                for j, cell in enumerate(header_row.cells)
            ],
            margin_left,
        )
    )
    if delimiter_row is not None:
        rows.append(
            TableRow(
                [
                    TableCell(delimiter_text(alignments[j], column_widths[j]))
                    for j in range(delimiter_row.width)
                ],
                margin_left,
            )
        )
    for row in table.rows[2 if delimiter_row is not None else 1 :]:
        rows.append(
            TableRow(
                [
                    TableCell(pad_text(body_alignment(j), tw_options, column_widths[j], cell.content))
                    for j, cell in enumerate(row.cells)
                ],
                margin_left,
            )
        )
    return FormattedTable(Table(rows), margin_left)


def _format_weak(table: Table, options: Options) -> FormattedTable:
    margin_left = table.rows[0].margin_left
    delimiter_row = table.delimiter_row
    rows: list[TableRow] = []
    for i, row in enumerate(table.rows):
        if delimiter_row is not None and i == 1:
            cells = [
                TableCell(delimiter_text(cell.alignment or "none", options.min_delimiter_width))
                for cell in row.cells
            ]
        else:
            cells = [TableCell(f" {cell.content} ") for cell in row.cells]
        rows.append(TableRow(cells, margin_left))
    return FormattedTable(Table(rows), margin_left)


def format_table(table: Table, options: Options) -> FormattedTable:
    """Render *table* to fixed-width cells.

    The returned table holds the padded cells; the input table keeps the
    original cell text for offset computations.
    """
    if table.height == 0:
        return FormattedTable(table, "")
    margin_left = table.rows[0].margin_left
    if table.header_width == 0:
        return FormattedTable(Table([TableRow([], margin_left)] * table.height), margin_left)
    if options.format_type == "normal":
        return _format_normal(table, options)
    if options.format_type == "weak":
        return _format_weak(table, options)
    raise ValueError(f"Unknown format type: {options.format_type}")


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------


def alter_alignment(table: Table, column: int, alignment: Alignment, options: Options) -> Table:
    """Set the alignment of *column*; a no-op for columns off the header."""
    if not 0 <= column < table.header_width or table.delimiter_row is None:
        return table
    delimiter_row = table.rows[1]
    cells = _extend(
        delimiter_row.cells,
        column + 1,
        lambda _: TableCell(delimiter_text("none", options.min_delimiter_width)),
    )
    cells[column] = TableCell(delimiter_text(alignment, options.min_delimiter_width))
    rows = list(table.rows)
    rows[1] = TableRow(cells, delimiter_row.margin_left, delimiter_row.margin_right)
    return Table(rows)


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------


def insert_row(table: Table, index: int, row: TableRow) -> Table:
    rows = list(table.rows)
    rows.insert(index, row)
    return Table(rows)


def delete_row(table: Table, index: int) -> Table:
    """Delete the row at *index*; the delimiter row is never deleted."""
    if index == 1:
        return table
    rows = list(table.rows)
    del rows[index]
    return Table(rows)


def move_row(table: Table, from_index: int, to_index: int) -> Table:
    """Move a row, shifting the rows in between; the delimiter row stays put."""
    if from_index == 1 or to_index == 1 or from_index == to_index:
        return table
    rows = list(table.rows)
    row = rows.pop(from_index)
    rows.insert(to_index, row)
    return Table(rows)


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


def insert_column(
    table: Table,
    index: int,
    column: Sequence[TableCell],
    options: Options,
) -> Table:
    """Insert *column* at *index*.

    *column* holds one cell per non-delimiter row, top to bottom; the
    delimiter row gets a ``"none"`` delimiter cell.
    """
    rows: list[TableRow] = []
    for i, row in enumerate(table.rows):
        cells = list(row.cells)
        if i == 1:
            cell = TableCell(delimiter_text("none", options.min_delimiter_width))
        else:
            cell = column[i - 1 if i > 1 else i]
        cells.insert(index, cell)
        rows.append(TableRow(cells, row.margin_left, row.margin_right))
    return Table(rows)


def delete_column(table: Table, index: int) -> Table:
    """Delete the column at *index*.

    A table must keep at least one column, so deleting from a one-column
    table returns it unchanged.
    """
    if table.header_width <= 1:
        return table
    rows: list[TableRow] = []
    for row in table.rows:
        cells = list(row.cells)
        if index < len(cells):
            del cells[index]
        rows.append(TableRow(cells, row.margin_left, row.margin_right))
    return Table(rows)


def move_column(table: Table, from_index: int, to_index: int) -> Table:
    """Move a column in every row, shifting the columns in between."""
    if from_index == to_index:
        return table
    rows: list[TableRow] = []
    for row in table.rows:
        if from_index >= row.width or to_index >= row.width:
            rows.append(row)
            continue
        cells = list(row.cells)
        cell = cells.pop(from_index)
        cells.insert(to_index, cell)
        rows.append(TableRow(cells, row.margin_left, row.margin_right))
    return Table(rows)
