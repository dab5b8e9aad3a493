"""Apply editor commands to a buffer and its mode machine."""

from __future__ import annotations

from saucepan.buffer import VisualMode
from saucepan.modes.base_mode import ModeContext, ModeResult

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


def apply_command(context: ModeContext, command: EditorCommand) -> ModeResult:
    """Run ``command`` against ``context.buffer``.

    Commands the current mode forbids leave the buffer untouched and come
    back as an unconsumed ``illegal`` result.
    """

    modes = context.modes
    if not modes.allows(command):
        return ModeResult(
            consumed=False, status="illegal", message=type(command).__name__
        )

    buffer = context.buffer
    match command:
        case InsertText(text=text):
            was_command = buffer.command_mode
            buffer.insert(text)
            if was_command and not buffer.command_mode:
                return ModeResult(
                    consumed=True,
                    switch_to=buffer.mode,
                    status="command_submit",
                )
            return ModeResult(consumed=True, status="edit")
        case Backspace():
            buffer.backspace()
            return ModeResult(consumed=True, status="edit")
        case DeleteForward():
            buffer.delete()
            return ModeResult(consumed=True, status="edit")
        case DeleteSelection():
            if (
                buffer.visual_mode is VisualMode.PER_MOVE
                or buffer.cursor == buffer.selection_anchor
            ):
                return ModeResult(consumed=True, status="noop")
            buffer.delete_selection()
            modes.cancel_visual()
            return ModeResult(consumed=True, status="delete_selection")
        case VerticalMove(delta=delta):
            buffer.vmove_cursor(delta)
            return ModeResult(consumed=True, status="move")
        case HorizontalMove(delta=delta):
            buffer.hmove_cursor(delta)
            return ModeResult(consumed=True, status="move")
        case SwitchMode(mode=mode):
            return modes.switch_mode(mode)
        case EnterCommandLine():
            return modes.enter_command_mode()
        case ToggleVisual(visual=visual):
            return modes.toggle_visual(visual)
        case CancelVisual():
            return modes.cancel_visual()
    raise TypeError(f"Unsupported editor command: {command!r}")


__all__ = ["apply_command"]
