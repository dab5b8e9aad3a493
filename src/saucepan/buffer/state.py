"""Cursor, selection, and mode state tied to a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


class EditorMode(str, Enum):
    """Primary editing modes; the command line is an overlay on top."""

    NORMAL = "normal"
    INSERT = "insert"


class VisualMode(str, Enum):
    """How the selection anchor reacts to cursor movement.

    ``PER_MOVE`` snaps the anchor onto the cursor after every move, so no
    selection survives. ``ALL_MOVE`` keeps the anchor fixed while the cursor
    extends a character-wise selection. ``LINE`` and ``BLOCK`` also keep the
    anchor fixed and change how the selection is drawn.
    """

    PER_MOVE = "per_move"
    ALL_MOVE = "all_move"
    LINE = "line"
    BLOCK = "block"


@dataclass(slots=True)
class BufferState:
    cursor: Cursor = (0, 0)
    anchor: Cursor = (0, 0)
    mode: EditorMode = EditorMode.NORMAL
    visual_mode: VisualMode = VisualMode.PER_MOVE
    command_mode: bool = False
    # Mode restored when the command line closes.
    command_return_mode: EditorMode = EditorMode.NORMAL

    def collapse_selection(self) -> None:
        self.anchor = self.cursor

    def ordered(self) -> tuple[Cursor, Cursor]:
        """Return ``(first, last)`` ordered by ``(row, col)``."""

        if self.cursor < self.anchor:
            return self.cursor, self.anchor
        return self.anchor, self.cursor
