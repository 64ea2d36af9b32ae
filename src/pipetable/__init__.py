"""pipetable: formatting and cursor navigation for pipe-delimited text tables."""

# Edit scripts
from pipetable.edit_script import (
    Delete,
    EditCommand,
    Insert,
    Replace,
    apply_edit_script,
    shortest_edit_script,
)

# Focus and screen coordinates
from pipetable.focus import Focus
from pipetable.point import Point, Range

# Formatting and table transforms
from pipetable.formatter import (
    CompletedTable,
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

# Configuration
from pipetable.options import (
    Alignment,
    DefaultAlignment,
    FormatType,
    HeaderAlignment,
    Options,
    TextWidthOptions,
)

# Parsing
from pipetable.parser import is_table_row, read_table

# Smart cursor
from pipetable.smart_cursor import (
    SmartCursor,
    SmartCursorActive,
    SmartCursorInactive,
    SmartCursorState,
)

# Table model
from pipetable.table import Table, TableCell, TableRow

# Commands
from pipetable.table_editor import TableEditor, TableInfo

# Text editor interface
from pipetable.text_editor import TextEditor

# Text width
from pipetable.text_width import compute_text_width, pad_text

__all__ = [
    # Edit scripts
    "Delete",
    "EditCommand",
    "Insert",
    "Replace",
    "apply_edit_script",
    "shortest_edit_script",
    # Focus and screen coordinates
    "Focus",
    "Point",
    "Range",
    # Formatting and table transforms
    "CompletedTable",
    "FormattedTable",
    "alter_alignment",
    "complete_table",
    "delete_column",
    "delete_row",
    "format_table",
    "insert_column",
    "insert_row",
    "move_column",
    "move_row",
    # Configuration
    "Alignment",
    "DefaultAlignment",
    "FormatType",
    "HeaderAlignment",
    "Options",
    "TextWidthOptions",
    # Parsing
    "is_table_row",
    "read_table",
    # Smart cursor
    "SmartCursor",
    "SmartCursorActive",
    "SmartCursorInactive",
    "SmartCursorState",
    # Table model
    "Table",
    "TableCell",
    "TableRow",
    # Commands
    "TableEditor",
    "TableInfo",
    # Text editor interface
    "TextEditor",
    # Text width
    "compute_text_width",
    "pad_text",
]
