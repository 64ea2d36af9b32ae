"""Screen coordinates inside a text editor buffer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A zero-based (row, column) position in the text editor."""

    row: int
    column: int


@dataclass(frozen=True)
class Range:
    """A span between two points; ``end`` is exclusive."""

    start: Point
    end: Point
