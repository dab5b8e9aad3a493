"""Mode state machine: Normal/Insert, the command-line overlay, Visual kinds."""

from __future__ import annotations

from saucepan.actions.commands import TEXT_EDITS, EditorCommand
from saucepan.buffer import Buffer, EditorMode, VisualMode
from saucepan.runtime import telemetry

from .base_mode import ModeBus, ModeResult


class ModeManager:
    """Owns every mode transition of one buffer.

    Transitions are requested by bound commands; nothing here reacts to keys
    directly. The command-line overlay is orthogonal to the primary mode:
    opening it forces Insert so ordinary typing lands on the command line.
    """

    def __init__(self, buffer: Buffer, *, bus: ModeBus | None = None) -> None:
        self.buffer = buffer
        self.bus = bus or ModeBus()
        self.logger = telemetry.get_logger("saucepan.modes")

    @property
    def mode(self) -> EditorMode:
        return self.buffer.state.mode

    @property
    def command_mode(self) -> bool:
        return self.buffer.state.command_mode

    def allows(self, command: EditorCommand) -> bool:
        if isinstance(command, TEXT_EDITS):
            return self.mode is EditorMode.INSERT
        return True

    def switch_mode(self, mode: EditorMode) -> ModeResult:
        state = self.buffer.state
        if state.command_mode and mode is EditorMode.NORMAL:
            self.buffer.close_command_line()
            state.mode = EditorMode.NORMAL
            self._record("command.cancel", mode)
            self.bus.emit("command.cancel", None)
            return ModeResult(
                consumed=True, switch_to=mode, message="command_cancel"
            )

        if state.mode is mode:
            return ModeResult(consumed=True, status="noop")

        state.mode = mode
        self._record("mode.switch", mode)
        self.bus.emit("mode.switch", mode)
        return ModeResult(consumed=True, switch_to=mode, message=f"enter_{mode.value}")

    def enter_command_mode(self) -> ModeResult:
        self.buffer.open_command_line()
        self._record("mode.switch", EditorMode.INSERT, command_mode=True)
        self.bus.emit("command.start", None)
        return ModeResult(
            consumed=True, switch_to=EditorMode.INSERT, message="enter_command"
        )

    def toggle_visual(self, visual: VisualMode) -> ModeResult:
        state = self.buffer.state
        if state.visual_mode is visual:
            return self.cancel_visual()
        if state.visual_mode is VisualMode.PER_MOVE:
            state.collapse_selection()
        state.visual_mode = visual
        self._record("visual.switch", state.mode, visual=visual.value)
        self.bus.emit(
            "visual.selection", {"anchor": state.anchor, "cursor": state.cursor}
        )
        return ModeResult(consumed=True, status="visual", message=visual.value)

    def cancel_visual(self) -> ModeResult:
        state = self.buffer.state
        if state.visual_mode is VisualMode.PER_MOVE and state.anchor == state.cursor:
            return ModeResult(consumed=True, status="noop")
        state.visual_mode = VisualMode.PER_MOVE
        state.collapse_selection()
        self._record("visual.switch", state.mode, visual=VisualMode.PER_MOVE.value)
        return ModeResult(consumed=True, status="visual", message="visual_cancel")

    def _record(self, event: str, mode: EditorMode, **extra: object) -> None:
        telemetry.record_event(
            event,
            data={"buffer": self.buffer.name, "mode": mode.value, **extra},
        )
