"""Configuration consumed by the table engine.

All models use Pydantic for validation, with snake_case fields and
camelCase aliases so editor adapters can pass their settings through as-is.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enumerations ---

Alignment = Literal["none", "left", "right", "center"]

# Alignment used to render cells of a column whose alignment is "none".
DefaultAlignment = Literal["left", "right", "center"]

# "follow" renders header cells with their column's alignment.
HeaderAlignment = Literal["follow", "left", "right", "center"]

# "weak" only normalises cell padding; it does not align columns.
FormatType = Literal["normal", "weak"]


# --- Models ---


class TextWidthOptions(BaseModel):
    """Controls how the on-screen width of cell text is measured."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    normalize: bool = True
    wide_overrides: frozenset[str] = Field(default_factory=frozenset, alias="wideOverrides")
    narrow_overrides: frozenset[str] = Field(default_factory=frozenset, alias="narrowOverrides")
    treat_ambiguous_as_wide: bool = Field(default=False, alias="treatAmbiguousAsWide")


class Options(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    left_margin_chars: frozenset[str] = Field(default_factory=frozenset, alias="leftMarginChars")
    format_type: FormatType = Field(default="normal", alias="formatType")
    min_delimiter_width: int = Field(default=3, ge=1, alias="minDelimiterWidth")
    default_alignment: DefaultAlignment = Field(default="left", alias="defaultAlignment")
    header_alignment: HeaderAlignment = Field(default="follow", alias="headerAlignment")
    text_width_options: TextWidthOptions = Field(
        default_factory=TextWidthOptions, alias="textWidthOptions"
    )
    smart_cursor: bool = Field(default=False, alias="smartCursor")
