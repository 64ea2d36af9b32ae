"""Smart cursor: remembers the starting column across next-cell/next-row moves."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from pipetable.focus import Focus
from pipetable.point import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmartCursorInactive:
    pass


@dataclass(frozen=True)
class SmartCursorActive:
    table_start: Point
    start_focus: Focus
    last_focus: Focus


SmartCursorState = Union[SmartCursorInactive, SmartCursorActive]

INACTIVE = SmartCursorInactive()


class SmartCursor:
    """Owns the smart-cursor session of one ``TableEditor``.

    A session starts with the first next-cell/next-row command and lasts
    while the user keeps issuing them from where the last one left off.
    """

    def __init__(self) -> None:
        self._state: SmartCursorState = INACTIVE

    @property
    def state(self) -> SmartCursorState:
        return self._state

    @property
    def is_active(self) -> bool:
        return isinstance(self._state, SmartCursorActive)

    @property
    def start_column(self) -> int | None:
        """Column the session started from, or None when inactive."""
        if isinstance(self._state, SmartCursorActive):
            return self._state.start_focus.column
        return None

    def reset(self) -> None:
        if self.is_active:
            logger.debug("Smart cursor reset")
        self._state = INACTIVE

    def check(self, table_start: Point, focus: Focus) -> None:
        """Reset the session if the table or cursor moved behind our back."""
        state = self._state
        if not isinstance(state, SmartCursorActive):
            return
        if state.table_start != table_start or not focus.pos_equals(state.last_focus):
            self.reset()

    def record(
        self,
        table_start: Point,
        start_focus: Focus,
        new_focus: Focus,
        header_width: int,
    ) -> None:
        """Record a forward move from *start_focus* to *new_focus*.

        The first move starts a session; a start focus off the header columns
        is remembered as column 0 of its row.
        """
        state = self._state
        if isinstance(state, SmartCursorActive):
            self._state = SmartCursorActive(state.table_start, state.start_focus, new_focus)
            return
        if start_focus.column < 0 or start_focus.column > header_width - 1:
            start_focus = Focus(start_focus.row, 0, 0)
        self._state = SmartCursorActive(table_start, start_focus, new_focus)
