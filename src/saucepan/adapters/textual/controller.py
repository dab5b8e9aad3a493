"""Adapter that wires the editor controller into Textual UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from saucepan.buffer import BufferView
from saucepan.editor import EditorController
from saucepan.modes import ModeResult
from saucepan.runtime import telemetry

from .keys import textual_key_to_event


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferView], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[Optional[str]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds Textual key events to the controller and refreshes the UI."""

    EVENTS = (
        "mode.switch",
        "visual.selection",
        "command.start",
        "command.cancel",
        "command.submit",
    )

    def __init__(self, controller: EditorController, hooks: TextualUIHooks) -> None:
        self.controller = controller
        self.hooks = hooks
        self.logger = telemetry.get_logger("saucepan.adapters.textual")
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[ModeResult]:
        event = textual_key_to_event(key, character)
        self._log_state("key ->", key=key, character=character, event=event)
        if event is None:
            return None
        code, modifiers = event
        result = self.controller.handle_key_event(code, modifiers)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        # The command-line dispatcher writes its own status during exec.
        if result.consumed and result.status != "command_submit":
            self.hooks.update_status(self._status_line(result))
        self.refresh()
        return result

    def refresh(self) -> None:
        view = self.controller.snapshot()
        self.hooks.update_buffer(view)
        self.hooks.show_command(view.command_text if view.command_mode else None)

    def _status_line(self, result: ModeResult) -> str:
        view = self.controller.snapshot()
        label = "COMMAND" if view.command_mode else view.mode.value.upper()
        row, col = view.cursor
        return f"{label}  {row + 1}:{col + 1}  {result.message or result.status}"

    def _subscribe_events(self) -> None:
        bus = self.controller.bus
        for event in self.EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        line = " ".join([prefix] + [f"{key}={value!r}" for key, value in snapshot.items()])
        self.logger.debug(line)
        self.hooks.log(line)

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.controller.buffer
        return {
            "mode": buffer.mode.value,
            "cursor": buffer.cursor,
            "anchor": buffer.selection_anchor,
            "command": buffer.command_buffer,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
