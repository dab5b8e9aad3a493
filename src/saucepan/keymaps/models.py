"""Dataclasses describing actions and the bindings that trigger them."""

from __future__ import annotations

from dataclasses import dataclass

from saucepan.actions.commands import EditorCommand
from saucepan.buffer.state import EditorMode


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editor command a binding can point at."""

    id: str
    command: EditorCommand
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a canonical key string in one mode with an action."""

    id: str
    mode: EditorMode
    key: str
    action_id: str
    description: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.key:
            raise ValueError(f"binding '{self.id}' key cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "mode", EditorMode(self.mode))

    @property
    def signature(self) -> tuple[EditorMode, str]:
        return (self.mode, self.key)


__all__ = [
    "ActionRef",
    "Binding",
]
