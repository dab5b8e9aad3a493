"""Editing commands a key binding can trigger.

Each command is a small frozen dataclass; ``saucepan.actions.core`` applies
them with a single ``match`` over the variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from saucepan.buffer.state import EditorMode, VisualMode


@dataclass(frozen=True, slots=True)
class InsertText:
    text: str


@dataclass(frozen=True, slots=True)
class Backspace:
    pass


@dataclass(frozen=True, slots=True)
class DeleteForward:
    pass


@dataclass(frozen=True, slots=True)
class DeleteSelection:
    pass


@dataclass(frozen=True, slots=True)
class VerticalMove:
    delta: int


@dataclass(frozen=True, slots=True)
class HorizontalMove:
    delta: int


@dataclass(frozen=True, slots=True)
class SwitchMode:
    mode: EditorMode


@dataclass(frozen=True, slots=True)
class EnterCommandLine:
    pass


@dataclass(frozen=True, slots=True)
class ToggleVisual:
    visual: VisualMode


@dataclass(frozen=True, slots=True)
class CancelVisual:
    pass


EditorCommand = Union[
    InsertText,
    Backspace,
    DeleteForward,
    DeleteSelection,
    VerticalMove,
    HorizontalMove,
    SwitchMode,
    EnterCommandLine,
    ToggleVisual,
    CancelVisual,
]

# Commands that edit text and therefore require Insert mode.
TEXT_EDITS = (InsertText, Backspace)


__all__ = [
    "EditorCommand",
    "InsertText",
    "Backspace",
    "DeleteForward",
    "DeleteSelection",
    "VerticalMove",
    "HorizontalMove",
    "SwitchMode",
    "EnterCommandLine",
    "ToggleVisual",
    "CancelVisual",
    "TEXT_EDITS",
]
