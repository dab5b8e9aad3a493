"""Editing commands and the code that applies them."""

from .commands import (
    Backspace,
    CancelVisual,
    DeleteForward,
    DeleteSelection,
    EditorCommand,
    EnterCommandLine,
    HorizontalMove,
    InsertText,
    SwitchMode,
    ToggleVisual,
    VerticalMove,
)
from .core import apply_command

__all__ = [
    "Backspace",
    "CancelVisual",
    "DeleteForward",
    "DeleteSelection",
    "EditorCommand",
    "EnterCommandLine",
    "HorizontalMove",
    "InsertText",
    "SwitchMode",
    "ToggleVisual",
    "VerticalMove",
    "apply_command",
]
