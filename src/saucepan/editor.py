"""Editor controller: key event in, buffer mutation out."""

from __future__ import annotations

from typing import Optional

from saucepan.actions import apply_command
from saucepan.buffer import Buffer, BufferView
from saucepan.config import KeyBindings, load_config
from saucepan.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    Modifiers,
    build_binding_table,
    translate_key,
)
from saucepan.modes import ModeBus, ModeContext, ModeManager, ModeResult
from saucepan.runtime import telemetry


class EditorController:
    """Dispatches canonical keys through the binding table onto one buffer.

    Keys are handled one at a time and each call finishes every mutation
    before returning, so ``snapshot()`` taken between calls is always
    consistent.
    """

    def __init__(
        self,
        buffer: Buffer,
        registry: KeymapRegistry,
        *,
        bus: Optional[ModeBus] = None,
    ) -> None:
        self.buffer = buffer
        self.bus = bus or ModeBus()
        self.registry = registry
        self.resolver = KeymapResolver(registry, logger_name="saucepan.keymaps")
        self.modes = ModeManager(buffer, bus=self.bus)
        self.context = ModeContext(buffer=buffer, modes=self.modes, bus=self.bus)
        if buffer.command_sink is None:
            buffer.command_sink = self._dispatch_command

    @classmethod
    def create(
        cls,
        buffer: Optional[Buffer] = None,
        *,
        bindings: Optional[KeyBindings] = None,
        bus: Optional[ModeBus] = None,
    ) -> "EditorController":
        keys = bindings or load_config().bindings
        return cls(buffer or Buffer(), build_binding_table(keys), bus=bus)

    def handle_key_event(
        self, code: str, modifiers: Modifiers = Modifiers.NONE
    ) -> ModeResult:
        key = translate_key(code, modifiers)
        if not key:
            return ModeResult(consumed=False, status="miss", message="untranslated")
        return self.handle_key(key)

    def handle_key(self, key: str) -> ModeResult:
        mode = self.buffer.mode
        with telemetry.span(
            "editor::handle_key",
            component="editor",
            metadata={"key": key, "mode": mode.value},
        ) as handle:
            result = self.resolver.resolve(mode, key)
            if result.status != "match" or result.match is None:
                handle.add_metadata("status", "miss")
                return ModeResult(consumed=False, status="miss")
            outcome = apply_command(self.context, result.match.action.command)
            handle.add_metadata("status", outcome.status)
            return outcome

    def snapshot(self) -> BufferView:
        return self.buffer.snapshot()

    def _dispatch_command(self, command: str) -> None:
        self.bus.emit("command.submit", command)


__all__ = ["EditorController"]
