"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from saucepan.buffer.state import EditorMode
from saucepan.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding claims a (mode, key) pair that is already taken."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on {binding.mode.value} key {binding.key!r}"
        )
        self.binding = binding
        self.existing = existing


class KeymapFrozenError(RuntimeError):
    """Raised when a frozen registry is asked to change."""


class KeymapRegistry:
    """Owns action references and the (mode, key) binding index.

    A registry is filled once and then frozen; after ``freeze()`` every
    mutating call raises ``KeymapFrozenError``.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._index: Dict[tuple[EditorMode, str], str] = {}
        self._logger_name = logger_name
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "KeymapRegistry":
        self._frozen = True
        return self

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def lookup(self, mode: EditorMode, key: str) -> Optional[Binding]:
        binding_id = self._index.get((mode, key))
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def is_bound(self, mode: EditorMode, key: str) -> bool:
        return (mode, key) in self._index

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        self._ensure_mutable()
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        self._ensure_mutable()
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode.value},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing = self.lookup(binding.mode, binding.key)
            if existing is not None and existing.id != binding.id and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if existing is not None:
                self._drop(existing)
            previous = self._bindings.get(binding.id)
            if previous is not None:
                self._drop(previous)

            self._bindings[binding.id] = binding
            self._index[binding.signature] = binding.id
            return binding

    def iter_bindings(self, mode: Optional[EditorMode] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode is mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({mode.value for mode, _ in self._index})),
        )

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        if self._index.get(binding.signature) == binding.id:
            del self._index[binding.signature]

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise KeymapFrozenError("Keymap registry is frozen")


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapFrozenError",
    "RegistryStats",
]
