"""Text width measurement and cell padding.

Widths are counted per code point (not per grapheme cluster) using the
Unicode East Asian Width property: wide and fullwidth characters take two
columns, ambiguous characters one or two depending on the options,
everything else one. Caller-supplied override sets take precedence.
"""

from __future__ import annotations

import unicodedata

from pipetable.options import Alignment, TextWidthOptions

# East Asian Width classes rendered in two columns
_WIDE_CLASSES = frozenset({"F", "W"})


def _char_width(options: TextWidthOptions, ch: str) -> int:
    if ch in options.wide_overrides:
        return 2
    if ch in options.narrow_overrides:
        return 1
    eaw = unicodedata.east_asian_width(ch)
    if eaw in _WIDE_CLASSES:
        return 2
    if eaw == "A":
        return 2 if options.treat_ambiguous_as_wide else 1
    return 1


def compute_text_width(options: TextWidthOptions, text: str) -> int:
    """Return the number of screen columns *text* occupies.

    * Applies NFC normalization first when ``options.normalize`` is set, so
      combining sequences measure as their composed form.
    * Uses a fast path for ASCII text when no wide overrides are given.
    * Combining and control characters count by their East Asian Width
      class like any other code point.
    """
    if not text:
        return 0

    if options.normalize:
        text = unicodedata.normalize("NFC", text)

    if text.isascii() and not options.wide_overrides:
        return len(text)

    return sum(_char_width(options, ch) for ch in text)


def pad_text(
    alignment: Alignment,
    options: TextWidthOptions,
    width: int,
    text: str,
) -> str:
    """Align *text* within *width* columns and add one space on each side.

    Text wider than *width* is returned without alignment padding (it is
    never truncated). A ``"none"`` alignment pads like ``"left"``.
    """
    space = width - compute_text_width(options, text)
    if space < 0:
        aligned = text
    elif alignment in ("left", "none"):
        aligned = text + " " * space
    elif alignment == "right":
        aligned = " " * space + text
    elif alignment == "center":
        left = space // 2
        aligned = " " * left + text + " " * (space - left)
    else:
        raise ValueError(f"Unknown alignment: {alignment}")
    return f" {aligned} "
