"""Snapshot types handed to hosts, and buffer error types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .state import Cursor, EditorMode, VisualMode


@dataclass(frozen=True, slots=True)
class BufferView:
    """Consistent read-only copy of a buffer taken between key events."""

    version: int
    lines: Sequence[str]
    cursor: Cursor
    anchor: Cursor
    mode: EditorMode
    visual_mode: VisualMode
    command_mode: bool
    command_text: str
    command_cursor: int
    file_name: Optional[str] = None

    @property
    def selection(self) -> tuple[Cursor, Cursor]:
        if self.cursor < self.anchor:
            return self.cursor, self.anchor
        return self.anchor, self.cursor

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Flattened snapshot for hosts that only render plain text."""

    text: str
    cursor: Cursor
    selection: Optional[tuple[Cursor, Cursor]]
    mode: str
    command_text: Optional[str] = None


class BufferValidationError(RuntimeError):
    """Raised when a host places the cursor or anchor out of bounds."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


class BufferLoadError(RuntimeError):
    """Raised when the initial file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to launch Saucepan from path: {path} ({reason})")
        self.path = path
        self.reason = reason
