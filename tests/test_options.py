"""Tests for pipetable.options -- configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pipetable.options import Options, TextWidthOptions


def test_defaults():
    options = Options()
    assert options.left_margin_chars == frozenset()
    assert options.format_type == "normal"
    assert options.min_delimiter_width == 3
    assert options.default_alignment == "left"
    assert options.header_alignment == "follow"
    assert options.smart_cursor is False
    assert options.text_width_options == TextWidthOptions()


def test_camel_case_aliases():
    options = Options.model_validate(
        {
            "leftMarginChars": [">"],
            "formatType": "weak",
            "smartCursor": True,
            "textWidthOptions": {"treatAmbiguousAsWide": True, "wideOverrides": ["x"]},
        }
    )
    assert options.left_margin_chars == frozenset({">"})
    assert options.format_type == "weak"
    assert options.smart_cursor is True
    assert options.text_width_options.treat_ambiguous_as_wide is True
    assert options.text_width_options.wide_overrides == frozenset({"x"})


def test_snake_case_names_accepted():
    options = Options(min_delimiter_width=5, header_alignment="center")
    assert options.min_delimiter_width == 5
    assert options.header_alignment == "center"


def test_unknown_format_type_rejected():
    with pytest.raises(ValidationError):
        Options.model_validate({"formatType": "fancy"})


def test_default_alignment_cannot_be_none():
    with pytest.raises(ValidationError):
        Options(default_alignment="none")  # type: ignore[arg-type]


def test_min_delimiter_width_must_be_positive():
    with pytest.raises(ValidationError):
        Options(min_delimiter_width=0)


def test_options_are_frozen():
    options = Options()
    with pytest.raises(ValidationError):
        options.smart_cursor = True  # type: ignore[misc]
