"""Table editor: cursor commands on the table under the cursor.

Each command reads the run of table rows around the cursor, completes and
transforms the table, formats it, and writes the result back through the
``TextEditor`` as a minimal line edit inside one transaction.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pipetable.edit_script import apply_edit_script, shortest_edit_script
from pipetable.focus import Focus
from pipetable.formatter import (
    FormattedTable,
    alter_alignment,
    complete_table,
    delete_column,
    delete_row,
    format_table,
    insert_column,
    insert_row,
    move_column,
    move_row,
)
from pipetable.options import Alignment, Options
from pipetable.parser import margin_regex_src, read_table, table_row_regex
from pipetable.point import Point, Range
from pipetable.smart_cursor import SmartCursor
from pipetable.table import Table, TableCell, TableRow
from pipetable.text_editor import TextEditor

logger = logging.getLogger(__name__)

# A table edited by one command never needs more line operations than this;
# beyond it the whole table range is replaced.
MAX_EDIT_DISTANCE = 3


@dataclass(frozen=True)
class TableInfo:
    """The table under the cursor, read at the start of a command."""

    range: Range
    lines: list[str]
    table: Table
    focus: Focus


def compute_new_offset(
    focus: Focus,
    table: Table,
    formatted: FormattedTable,
    moved: bool,
) -> int:
    """Compute the focus offset inside the formatted table.

    *table* is the completed table before formatting. A moved focus lands
    at the start of the cell content; otherwise the cursor keeps its place
    within the content it was in.
    """
    formatted_cell = formatted.table.get_focused_cell(focus)
    if moved:
        if formatted_cell is not None:
            return formatted_cell.compute_raw_offset(0)
        return len(formatted.margin_left) if focus.column < 0 else 0
    cell = table.get_focused_cell(focus)
    if cell is not None and formatted_cell is not None:
        content_offset = min(cell.compute_content_offset(focus.offset), len(formatted_cell.content))
        return formatted_cell.compute_raw_offset(content_offset)
    return len(formatted.margin_left) if focus.column < 0 else 0


class TableEditor:
    """Runs table commands against a ``TextEditor``.

    One instance serves one editing session and owns its smart-cursor state.
    """

    def __init__(self, text_editor: TextEditor) -> None:
        self._text_editor = text_editor
        self._smart_cursor = SmartCursor()

    @property
    def smart_cursor(self) -> SmartCursor:
        return self._smart_cursor

    def reset_smart_cursor(self) -> None:
        """Reset the smart cursor; call this when the table editor is deactivated."""
        self._smart_cursor.reset()

    def cursor_is_in_table(self, options: Options) -> bool:
        """Check whether the cursor is on a table row."""
        row_re = table_row_regex(options.left_margin_chars)
        pos = self._text_editor.get_cursor_position()
        return self._text_editor.accepts_table_edit(pos.row) and bool(
            row_re.match(self._text_editor.get_line(pos.row))
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_table_row(self, row: int, row_re: re.Pattern[str]) -> bool:
        return self._text_editor.accepts_table_edit(row) and bool(
            row_re.match(self._text_editor.get_line(row))
        )

    def _find_table(self, options: Options) -> TableInfo | None:
        """Read the table under the cursor, or None if there is none."""
        editor = self._text_editor
        row_re = table_row_regex(options.left_margin_chars)
        pos = editor.get_cursor_position()
        if not self._is_table_row(pos.row, row_re):
            logger.debug("No table at row %d", pos.row)
            return None
        start_row = pos.row
        while start_row > 0 and self._is_table_row(start_row - 1, row_re):
            start_row -= 1
        end_row = pos.row
        last_row = editor.get_last_row()
        while end_row < last_row and self._is_table_row(end_row + 1, row_re):
            end_row += 1
        lines = [editor.get_line(row) for row in range(start_row, end_row + 1)]
        table_range = Range(Point(start_row, 0), Point(end_row, len(lines[-1])))
        table = read_table(lines, options)
        focus = table.focus_of_position(pos, start_row)
        if focus is None:
            return None
        return TableInfo(table_range, lines, table, focus)

    @staticmethod
    def _complete(info: TableInfo, options: Options) -> tuple[Table, Focus, bool]:
        """Complete the table, shifting the focus below an inserted delimiter row."""
        completed = complete_table(info.table, options)
        focus = info.focus
        if completed.delimiter_inserted and focus.row > 0:
            focus = focus.set_row(focus.row + 1)
        return completed.table, focus, completed.delimiter_inserted

    def _update_lines(
        self,
        start_row: int,
        end_row: int,
        new_lines: list[str],
        old_lines: list[str] | None = None,
    ) -> None:
        """Replace rows ``start_row`` to ``end_row`` (exclusive) with *new_lines*.

        Given *old_lines*, only the changed lines are touched when the edit
        is small enough.
        """
        if old_lines is not None:
            script = shortest_edit_script(old_lines, new_lines, MAX_EDIT_DISTANCE)
            if script is not None:
                apply_edit_script(self._text_editor, script, start_row)
                return
            logger.debug(
                "Edit distance above %d, replacing rows %d-%d",
                MAX_EDIT_DISTANCE,
                start_row,
                end_row,
            )
        self._text_editor.replace_lines(start_row, end_row, new_lines)

    def _move_to_focus(self, start_row: int, table: Table, focus: Focus) -> None:
        pos = table.position_of_focus(focus, start_row)
        if pos is not None:
            self._text_editor.set_cursor_position(pos)

    def _select_focus(self, start_row: int, table: Table, focus: Focus) -> None:
        """Select the focused cell content, or just move there if it is empty."""
        selection = table.selection_range_of_focus(focus, start_row)
        if selection is not None:
            self._text_editor.set_selection_range(selection)
        else:
            self._move_to_focus(start_row, table, focus)

    def _apply(
        self,
        info: TableInfo,
        formatted: FormattedTable,
        focus: Focus,
        *,
        select: bool,
    ) -> None:
        """Write the formatted table and place the cursor, in one transaction."""
        start_row = info.range.start.row
        new_lines = formatted.table.to_lines()

        def edit() -> None:
            self._update_lines(start_row, info.range.end.row + 1, new_lines, info.lines)
            if select:
                self._select_focus(start_row, formatted.table, focus)
            else:
                self._move_to_focus(start_row, formatted.table, focus)

        self._text_editor.transact(edit)

    # ------------------------------------------------------------------
    # Formatting commands
    # ------------------------------------------------------------------

    def format(self, options: Options) -> None:
        """Format the table under the cursor."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        formatted = format_table(table, options)
        focus = focus.set_offset(compute_new_offset(focus, table, formatted, False))
        self._apply(info, formatted, focus, select=False)
        self.reset_smart_cursor()

    def escape(self, options: Options) -> None:
        """Format the table and move the cursor to the line below it."""
        info = self._find_table(options)
        if info is None:
            return
        editor = self._text_editor
        table, _, delimiter_inserted = self._complete(info, options)
        formatted = format_table(table, options)
        new_row = info.range.end.row + (2 if delimiter_inserted else 1)
        margin_re = re.compile(rf"^{margin_regex_src(options.left_margin_chars)}")

        def edit() -> None:
            self._update_lines(
                info.range.start.row,
                info.range.end.row + 1,
                formatted.table.to_lines(),
                info.lines,
            )
            if new_row > editor.get_last_row():
                editor.insert_line(new_row, "")
                new_pos = Point(new_row, 0)
            else:
                match = margin_re.match(editor.get_line(new_row))
                new_pos = Point(new_row, match.end() if match else 0)
            editor.set_cursor_position(new_pos)

        editor.transact(edit)
        self.reset_smart_cursor()

    def align_column(self, alignment: Alignment, options: Options) -> None:
        """Set the alignment of the focused column."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        altered = table
        if 0 <= focus.column <= altered.header_width - 1:
            altered = alter_alignment(table, focus.column, alignment, options)
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, table, formatted, False))
        self._apply(info, formatted, focus, select=False)
        self.reset_smart_cursor()

    def select_cell(self, options: Options) -> None:
        """Format the table and select the focused cell content."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        formatted = format_table(table, options)
        focus = focus.set_offset(compute_new_offset(focus, table, formatted, False))
        self._apply(info, formatted, focus, select=True)
        self.reset_smart_cursor()

    # ------------------------------------------------------------------
    # Navigation commands
    # ------------------------------------------------------------------

    def move_focus(self, row_offset: int, column_offset: int, options: Options) -> None:
        """Move the focus by the given offsets, without wrapping or growing the table."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        start_focus = focus
        if row_offset != 0:
            height = table.height
            # step over the delimiter row
            if focus.row < 1 <= focus.row + row_offset:
                skip = 1
            elif focus.row > 1 >= focus.row + row_offset:
                skip = -1
            else:
                skip = 0
            max_row = 0 if height <= 2 else height - 1
            focus = focus.set_row(min(max(focus.row + row_offset + skip, 0), max_row))
            # a focus past the last header column lands on the last column
            focus = focus.set_column(min(focus.column, table.header_width - 1))
        if column_offset != 0:
            width = table.header_width
            if not (focus.column < 0 and column_offset < 0) and not (
                focus.column > width - 1 and column_offset > 0
            ):
                focus = focus.set_column(min(max(focus.column + column_offset, 0), width - 1))
        moved = not focus.pos_equals(start_focus)
        formatted = format_table(table, options)
        focus = focus.set_offset(compute_new_offset(focus, table, formatted, moved))
        self._apply(info, formatted, focus, select=moved)
        if moved:
            self.reset_smart_cursor()

    def next_cell(self, options: Options) -> None:
        """Move the focus to the next cell, growing a row or column when needed.

        From the delimiter row or the last header cell the focus goes to the
        first body row; past the last column of any other row a new empty
        column is added.
        """
        info = self._find_table(options)
        if info is None:
            return
        self._smart_cursor.check(info.range.start, info.focus)
        table, focus, _ = self._complete(info, options)
        start_focus = focus
        altered = table
        width = altered.header_width
        if focus.row == 1 or (focus.row == 0 and focus.column >= width - 1):
            if focus.row == 1 and options.smart_cursor and 0 <= focus.column <= width - 1:
                focus = Focus(2, focus.column, 0)
            else:
                focus = Focus(2, 0, 0)
            if focus.row > altered.height - 1:
                altered = insert_row(altered, altered.height, TableRow.empty(width))
        else:
            if focus.column + 1 > width - 1:
                column = [TableCell("")] * (altered.height - 1)
                altered = insert_column(altered, width, column, options)
            focus = focus.set_column(min(focus.column + 1, altered.header_width - 1))
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, altered, formatted, True))
        self._apply(info, formatted, focus, select=True)
        if options.smart_cursor:
            self._smart_cursor.record(
                info.range.start, start_focus, focus, formatted.table.header_width
            )

    def previous_cell(self, options: Options) -> None:
        """Move the focus to the previous cell, wrapping to the previous row."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        start_focus = focus
        last_column = table.header_width - 1
        if focus.row == 0:
            if focus.column > 0:
                focus = focus.set_column(min(focus.column - 1, last_column))
        elif focus.row == 1:
            focus = Focus(0, last_column, focus.offset)
        elif focus.column > 0:
            focus = focus.set_column(min(focus.column - 1, last_column))
        else:
            focus = Focus(0 if focus.row == 2 else focus.row - 1, last_column, focus.offset)
        moved = not focus.pos_equals(start_focus)
        formatted = format_table(table, options)
        focus = focus.set_offset(compute_new_offset(focus, table, formatted, moved))
        self._apply(info, formatted, focus, select=moved)
        if moved:
            self.reset_smart_cursor()

    def next_row(self, options: Options) -> None:
        """Move the focus to the next row, growing the table when at the bottom.

        With the smart cursor on, the focus keeps returning to the column
        where the current run of next-cell/next-row commands started.
        """
        info = self._find_table(options)
        if info is None:
            return
        self._smart_cursor.check(info.range.start, info.focus)
        table, focus, _ = self._complete(info, options)
        start_focus = focus
        altered = table
        width = altered.header_width
        focus = focus.set_row(2 if focus.row == 0 else focus.row + 1)
        start_column = self._smart_cursor.start_column
        if options.smart_cursor and start_column is not None:
            focus = focus.set_column(start_column)
        elif not options.smart_cursor or not 0 <= focus.column <= width - 1:
            focus = focus.set_column(0)
        if focus.row > altered.height - 1:
            altered = insert_row(altered, altered.height, TableRow.empty(width))
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, altered, formatted, True))
        self._apply(info, formatted, focus, select=True)
        if options.smart_cursor:
            self._smart_cursor.record(
                info.range.start, start_focus, focus, formatted.table.header_width
            )

    # ------------------------------------------------------------------
    # Row commands
    # ------------------------------------------------------------------

    def insert_row(self, options: Options) -> None:
        """Insert an empty row at the focused row (the first body row from the header)."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        if focus.row <= 1:
            focus = focus.set_row(2)
        focus = focus.set_column(0)
        altered = insert_row(table, focus.row, TableRow.empty(table.header_width))
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, altered, formatted, True))
        self._apply(info, formatted, focus, select=False)
        self.reset_smart_cursor()

    def delete_row(self, options: Options) -> None:
        """Delete the focused body row; header and delimiter rows are kept."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        altered = table
        moved = False
        if focus.row > 1:
            altered = delete_row(altered, focus.row)
            moved = True
            if focus.row > altered.height - 1:
                focus = focus.set_row(0 if focus.row == 2 else focus.row - 1)
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, altered, formatted, moved))
        self._apply(info, formatted, focus, select=moved)
        self.reset_smart_cursor()

    def move_row(self, offset: int, options: Options) -> None:
        """Move the focused body row by *offset*, staying within the body."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        altered = table
        if focus.row > 1:
            dest = min(max(focus.row + offset, 2), altered.height - 1)
            altered = move_row(altered, focus.row, dest)
            focus = focus.set_row(dest)
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, altered, formatted, False))
        self._apply(info, formatted, focus, select=False)
        self.reset_smart_cursor()

    # ------------------------------------------------------------------
    # Column commands
    # ------------------------------------------------------------------

    def insert_column(self, options: Options) -> None:
        """Insert an empty column at the focused column."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        if focus.row == 1:
            focus = focus.set_row(0)
        focus = focus.set_column(min(max(focus.column, 0), table.header_width))
        column = [TableCell("")] * (table.height - 1)
        altered = insert_column(table, focus.column, column, options)
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, altered, formatted, True))
        self._apply(info, formatted, focus, select=False)
        self.reset_smart_cursor()

    def delete_column(self, options: Options) -> None:
        """Delete the focused column; the last remaining column is kept."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        if focus.row == 1:
            focus = focus.set_row(0)
        altered = table
        moved = False
        if 0 <= focus.column <= table.header_width - 1:
            altered = delete_column(table, focus.column)
            moved = altered is not table
            if focus.column > altered.header_width - 1:
                focus = focus.set_column(altered.header_width - 1)
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, altered, formatted, moved))
        self._apply(info, formatted, focus, select=moved)
        self.reset_smart_cursor()

    def move_column(self, offset: int, options: Options) -> None:
        """Move the focused column by *offset*, staying within the header."""
        info = self._find_table(options)
        if info is None:
            return
        table, focus, _ = self._complete(info, options)
        altered = table
        if 0 <= focus.column <= altered.header_width - 1:
            dest = min(max(focus.column + offset, 0), altered.header_width - 1)
            altered = move_column(altered, focus.column, dest)
            focus = focus.set_column(dest)
        formatted = format_table(altered, options)
        focus = focus.set_offset(compute_new_offset(focus, altered, formatted, False))
        self._apply(info, formatted, focus, select=False)
        self.reset_smart_cursor()

    # ------------------------------------------------------------------
    # Whole document
    # ------------------------------------------------------------------

    def _format_block(
        self,
        start_row: int,
        lines: list[str],
        pos: Point,
        options: Options,
    ) -> tuple[int, Point]:
        """Format one table of *lines* at *start_row*.

        Returns the change in line count and the cursor position adjusted
        for it.
        """
        end_row = start_row + len(lines) - 1
        table = read_table(lines, options)
        focus = table.focus_of_position(pos, start_row)
        completed = complete_table(table, options)
        formatted = format_table(completed.table, options)
        new_lines = formatted.table.to_lines()
        self._update_lines(start_row, end_row + 1, new_lines, lines)
        diff = len(new_lines) - len(lines)
        if focus is not None:
            if completed.delimiter_inserted and focus.row > 0:
                focus = focus.set_row(focus.row + 1)
            focus = focus.set_offset(
                compute_new_offset(focus, completed.table, formatted, False)
            )
            new_pos = formatted.table.position_of_focus(focus, start_row)
            if new_pos is not None:
                pos = new_pos
        elif pos.row > end_row:
            pos = Point(pos.row + diff, pos.column)
        return diff, pos

    def format_all(self, options: Options) -> None:
        """Format every table in the document, keeping the cursor on its cell."""
        editor = self._text_editor
        row_re = table_row_regex(options.left_margin_chars)

        def edit() -> None:
            pos = editor.get_cursor_position()
            last_row = editor.get_last_row()
            lines: list[str] = []
            start_row: int | None = None
            row = 0
            # one step past the last row flushes a table that ends the document
            while row <= last_row + 1:
                if row <= last_row and self._is_table_row(row, row_re):
                    lines.append(editor.get_line(row))
                    if start_row is None:
                        start_row = row
                elif start_row is not None:
                    diff, pos = self._format_block(start_row, lines, pos, options)
                    lines = []
                    start_row = None
                    last_row += diff
                    row += diff
                row += 1
            editor.set_cursor_position(pos)

        editor.transact(edit)
        self.reset_smart_cursor()
