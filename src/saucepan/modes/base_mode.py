"""Result, event bus, and context types shared by the mode machinery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional

from saucepan.buffer import Buffer, EditorMode

if TYPE_CHECKING:  # pragma: no cover
    from .mode_manager import ModeManager


@dataclass(slots=True)
class ModeResult:
    """Outcome of handling one key or applying one command."""

    consumed: bool
    switch_to: Optional[EditorMode] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting the engine notify hosts and collaborators."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Everything a command needs while it is being applied."""

    buffer: Buffer
    modes: "ModeManager"
    bus: ModeBus
