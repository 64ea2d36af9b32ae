"""Tests for pipetable.formatter -- completion, formatting and transforms."""

from __future__ import annotations

import pytest

from pipetable.formatter import (
    alter_alignment,
    complete_table,
    delete_column,
    delete_row,
    delimiter_text,
    format_table,
    insert_column,
    insert_row,
    move_column,
    move_row,
)
from pipetable.options import Options
from pipetable.parser import read_table
from pipetable.table import Table, TableCell, TableRow

DEFAULT = Options()


def make_table(*lines: str, options: Options = DEFAULT) -> Table:
    return read_table(lines, options)


def formatted_lines(*lines: str, options: Options = DEFAULT) -> list[str]:
    table = complete_table(make_table(*lines, options=options), options).table
    return format_table(table, options).table.to_lines()


class TestDelimiterText:
    def test_each_alignment(self) -> None:
        assert delimiter_text("none", 3) == " --- "
        assert delimiter_text("left", 3) == ":--- "
        assert delimiter_text("right", 3) == " ---:"
        assert delimiter_text("center", 3) == ":---:"

    def test_unknown_alignment(self) -> None:
        with pytest.raises(ValueError):
            delimiter_text("middle", 3)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# complete_table
# ---------------------------------------------------------------------------


class TestCompleteTable:
    def test_inserts_missing_delimiter_row(self) -> None:
        completed = complete_table(make_table("| a | b |", "| 1 | 2 |"), DEFAULT)
        assert completed.delimiter_inserted
        assert completed.table.to_lines() == ["| a | b |", "| --- | --- |", "| 1 | 2 |"]

    def test_keeps_existing_delimiter_row(self) -> None:
        completed = complete_table(make_table("| a |", "|:-|"), DEFAULT)
        assert not completed.delimiter_inserted
        assert completed.table.to_lines() == ["| a |", "|:-|"]

    def test_pads_short_rows(self) -> None:
        completed = complete_table(make_table("| a | b | c |", "| - |", "| 1 |"), DEFAULT)
        assert completed.table.to_lines() == [
            "| a | b | c |",
            "| - | --- | --- |",
            "| 1 |||",
        ]

    def test_trailing_text_becomes_the_first_padding_cell(self) -> None:
        completed = complete_table(make_table("| a | b |", "| - | - |", "| 1 |  "), DEFAULT)
        assert completed.table.rows[2].to_text() == "| 1 |  |"

    def test_long_rows_are_left_alone(self) -> None:
        completed = complete_table(make_table("| a |", "| - |", "| 1 | 2 |"), DEFAULT)
        assert completed.table.rows[2].width == 2

    def test_empty_table_is_an_error(self) -> None:
        with pytest.raises(ValueError, match="Empty table"):
            complete_table(Table([]), DEFAULT)


# ---------------------------------------------------------------------------
# format_table
# ---------------------------------------------------------------------------


class TestFormatNormal:
    def test_pads_columns_to_a_common_width(self) -> None:
        assert formatted_lines("| a | b |", "| 1 | 22 |") == [
            "| a   | b   |",
            "| --- | --- |",
            "| 1   | 22  |",
        ]

    def test_wide_content_widens_the_column(self) -> None:
        assert formatted_lines("|name|x|", "|-|-|", "|alexander|1|") == [
            "| name      | x   |",
            "| --------- | --- |",
            "| alexander | 1   |",
        ]

    def test_column_alignment(self) -> None:
        assert formatted_lines("| a | b | c |", "|:-:|--:|:--|", "| 1 | 2 | 3 |") == [
            "|  a  |   b | c   |",
            "|:---:| ---:|:--- |",
            "|  1  |   2 | 3   |",
        ]

    def test_default_alignment_for_unaligned_columns(self) -> None:
        options = Options(default_alignment="right")
        assert formatted_lines("| a | b |", "|---|---|", "| 1 | 22 |", options=options) == [
            "|   a |   b |",
            "| --- | --- |",
            "|   1 |  22 |",
        ]

    def test_explicit_header_alignment(self) -> None:
        options = Options(header_alignment="center")
        assert formatted_lines("| a | bbbbb |", "|---|---|", "| ccc | d |", options=options) == [
            "|  a  | bbbbb |",
            "| --- | ----- |",
            "| ccc | d     |",
        ]

    def test_min_delimiter_width(self) -> None:
        options = Options(min_delimiter_width=5)
        assert formatted_lines("| a |", "|-|", options=options) == ["| a     |", "| ----- |"]

    def test_header_margin_applies_to_every_row(self) -> None:
        assert formatted_lines("  | a |", "  |---|", "| b |") == [
            "  | a   |",
            "  | --- |",
            "  | b   |",
        ]

    def test_right_margin_is_dropped(self) -> None:
        assert formatted_lines("| a |   ", "|---|") == ["| a   |", "| --- |"]

    def test_east_asian_wide_text(self) -> None:
        assert formatted_lines("| 世界 | a |", "|---|---|") == [
            "| 世界 | a   |",
            "| ---- | --- |",
        ]

    def test_body_row_wider_than_header(self) -> None:
        assert formatted_lines("| a |", "|---|", "| 1 | 2 |") == [
            "| a   |",
            "| --- |",
            "| 1   | 2 |",
        ]

    def test_escaped_pipe_is_kept(self) -> None:
        assert formatted_lines("| a |", "|---|", "| x\\|y |") == [
            "| a    |",
            "| ---- |",
            "| x\\|y |",
        ]

    def test_formatted_table_records_margin(self) -> None:
        table = complete_table(make_table("  | a |"), DEFAULT).table
        assert format_table(table, DEFAULT).margin_left == "  "


class TestFormatWeak:
    options = Options(format_type="weak")

    def test_one_space_around_content(self) -> None:
        assert formatted_lines("|a|bb|", "|:-|-:|", "|ccc|d|", options=self.options) == [
            "| a | bb |",
            "|:--- | ---:|",
            "| ccc | d |",
        ]

    def test_inserted_delimiter_row(self) -> None:
        assert formatted_lines("|  a  |", options=self.options) == ["| a |", "| --- |"]


class TestFormatEdgeCases:
    def test_empty_table(self) -> None:
        formatted = format_table(Table([]), DEFAULT)
        assert formatted.table.height == 0
        assert formatted.margin_left == ""

    def test_table_without_cells(self) -> None:
        table = Table([TableRow([], "  "), TableRow([], " ")])
        formatted = format_table(table, DEFAULT)
        assert formatted.table.to_lines() == ["  ", "  "]

    def test_formatting_is_idempotent(self) -> None:
        once = formatted_lines("| a | b |", "|:-|-:|", "| 1 | 22 |")
        assert formatted_lines(*once) == once

    @pytest.mark.parametrize(
        "lines",
        [
            ["| a | b |", "| 1 |"],
            ["|x\\|y| `a|b` |", "|:-|-:|", "| 1 | 2 | 3 |"],
            ["  | 世 |", "| long cell | x |", "|"],
            ["| ``a|`b`` | c |", "| :-: |", "|  |  z  |"],
        ],
    )
    def test_round_trip_keeps_cell_contents(self, lines: list[str]) -> None:
        completed = complete_table(make_table(*lines), DEFAULT).table
        reread = make_table(*format_table(completed, DEFAULT).table.to_lines())

        def contents(table: Table) -> list[list[str]]:
            return [
                [cell.content for cell in row.cells]
                for i, row in enumerate(table.rows)
                if i != 1
            ]

        assert contents(reread) == contents(completed)
        assert reread.alignments == completed.alignments


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------


def three_row_table() -> Table:
    return make_table("| a | b |", "| --- | --- |", "| 1 | 2 |")


class TestAlterAlignment:
    def test_sets_the_delimiter_cell(self) -> None:
        altered = alter_alignment(three_row_table(), 1, "right", DEFAULT)
        assert altered.rows[1].to_text() == "| --- | ---:|"
        assert altered.alignments == ("none", "right")

    def test_column_off_the_header_is_a_noop(self) -> None:
        table = three_row_table()
        assert alter_alignment(table, 2, "left", DEFAULT) is table
        assert alter_alignment(table, -1, "left", DEFAULT) is table

    def test_table_without_delimiter_row_is_a_noop(self) -> None:
        table = make_table("| a |", "| 1 |")
        assert alter_alignment(table, 0, "left", DEFAULT) is table

    def test_short_delimiter_row_is_extended(self) -> None:
        table = make_table("| a | b |", "| --- |")
        altered = alter_alignment(table, 1, "center", DEFAULT)
        assert altered.rows[1].to_text() == "| --- |:---:|"


class TestRowTransforms:
    def test_insert_row(self) -> None:
        table = insert_row(three_row_table(), 2, TableRow.empty(2))
        assert table.to_lines() == ["| a | b |", "| --- | --- |", "|||", "| 1 | 2 |"]

    def test_delete_row(self) -> None:
        table = delete_row(three_row_table(), 2)
        assert table.to_lines() == ["| a | b |", "| --- | --- |"]

    def test_delimiter_row_is_never_deleted(self) -> None:
        table = three_row_table()
        assert delete_row(table, 1) is table

    def test_move_row(self) -> None:
        table = make_table("| h |", "| - |", "| 1 |", "| 2 |", "| 3 |")
        assert move_row(table, 2, 4).to_lines() == ["| h |", "| - |", "| 2 |", "| 3 |", "| 1 |"]
        assert move_row(table, 4, 2).to_lines() == ["| h |", "| - |", "| 3 |", "| 1 |", "| 2 |"]

    def test_move_row_noops(self) -> None:
        table = three_row_table()
        assert move_row(table, 2, 2) is table
        assert move_row(table, 1, 2) is table
        assert move_row(table, 2, 1) is table


class TestColumnTransforms:
    def test_insert_column(self) -> None:
        column = [TableCell(" x "), TableCell(" y ")]
        table = insert_column(three_row_table(), 1, column, DEFAULT)
        assert table.to_lines() == [
            "| a | x | b |",
            "| --- | --- | --- |",
            "| 1 | y | 2 |",
        ]

    def test_insert_column_at_the_end(self) -> None:
        column = [TableCell(""), TableCell("")]
        table = insert_column(three_row_table(), 2, column, DEFAULT)
        assert table.to_lines() == ["| a | b ||", "| --- | --- | --- |", "| 1 | 2 ||"]

    def test_delete_column(self) -> None:
        table = delete_column(three_row_table(), 0)
        assert table.to_lines() == ["| b |", "| --- |", "| 2 |"]

    def test_last_column_is_kept(self) -> None:
        table = make_table("| a |", "| - |", "| 1 |")
        assert delete_column(table, 0) is table

    def test_move_column(self) -> None:
        table = move_column(three_row_table(), 0, 1)
        assert table.to_lines() == ["| b | a |", "| --- | --- |", "| 2 | 1 |"]

    def test_move_column_skips_short_rows(self) -> None:
        table = make_table("| a | b |", "| --- | --- |", "| 1 |")
        assert move_column(table, 1, 0).to_lines() == [
            "| b | a |",
            "| --- | --- |",
            "| 1 |",
        ]

    def test_move_column_to_itself(self) -> None:
        table = three_row_table()
        assert move_column(table, 1, 1) is table
