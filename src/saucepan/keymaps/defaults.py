"""Build the binding table from configured key names."""

from __future__ import annotations

from typing import Iterable

from saucepan.actions.commands import (
    Backspace,
    CancelVisual,
    DeleteForward,
    DeleteSelection,
    EnterCommandLine,
    HorizontalMove,
    InsertText,
    SwitchMode,
    ToggleVisual,
    VerticalMove,
)
from saucepan.buffer.state import EditorMode, VisualMode
from saucepan.config import KeyBindings

from .models import ActionRef, Binding
from .notation import escape_literal
from .registry import KeymapRegistry

NORMAL = EditorMode.NORMAL
INSERT = EditorMode.INSERT

PRINTABLE_ASCII = range(32, 127)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="cursor.up", command=VerticalMove(-1), description="Move up"),
    ActionRef(id="cursor.down", command=VerticalMove(1), description="Move down"),
    ActionRef(id="cursor.left", command=HorizontalMove(-1), description="Move left"),
    ActionRef(id="cursor.right", command=HorizontalMove(1), description="Move right"),
    ActionRef(
        id="mode.insert",
        command=SwitchMode(EditorMode.INSERT),
        description="Enter insert mode",
    ),
    ActionRef(
        id="mode.normal",
        command=SwitchMode(EditorMode.NORMAL),
        description="Return to normal mode",
    ),
    ActionRef(
        id="mode.command",
        command=EnterCommandLine(),
        description="Open the command line",
    ),
    ActionRef(
        id="visual.char",
        command=ToggleVisual(VisualMode.ALL_MOVE),
        description="Toggle character-wise selection",
    ),
    ActionRef(
        id="visual.line",
        command=ToggleVisual(VisualMode.LINE),
        description="Toggle line-wise selection",
    ),
    ActionRef(
        id="visual.block",
        command=ToggleVisual(VisualMode.BLOCK),
        description="Toggle block selection",
    ),
    ActionRef(id="visual.cancel", command=CancelVisual(), description="Drop selection"),
    ActionRef(
        id="edit.delete_selection",
        command=DeleteSelection(),
        description="Delete the selection",
    ),
    ActionRef(id="edit.backspace", command=Backspace(), description="Delete backwards"),
    ActionRef(id="edit.delete", command=DeleteForward(), description="Delete forwards"),
    ActionRef(id="edit.newline", command=InsertText("\n"), description="Split line"),
    ActionRef(id="edit.tab", command=InsertText("\t"), description="Insert a tab"),
)

ARROW_ACTIONS = {
    "{UARR}": "cursor.up",
    "{DARR}": "cursor.down",
    "{LARR}": "cursor.left",
    "{RARR}": "cursor.right",
}


def configured_bindings(keys: KeyBindings) -> tuple[Binding, ...]:
    """Bindings whose keys come from configuration."""

    return (
        _binding(NORMAL, "up", keys.up, "cursor.up"),
        _binding(NORMAL, "down", keys.down, "cursor.down"),
        _binding(NORMAL, "left", keys.left, "cursor.left"),
        _binding(NORMAL, "right", keys.right, "cursor.right"),
        _binding(NORMAL, "insert", keys.insert, "mode.insert"),
        _binding(NORMAL, "command", keys.command, "mode.command"),
        _binding(NORMAL, "visual", keys.visual, "visual.char"),
        _binding(NORMAL, "visual_line", keys.visual_line, "visual.line"),
        _binding(NORMAL, "visual_block", keys.visual_block, "visual.block"),
        _binding(NORMAL, "delete_selection", keys.delete_selection, "edit.delete_selection"),
        _binding(NORMAL, "delete", keys.delete, "edit.delete"),
        _binding(INSERT, "normal", keys.normal, "mode.normal"),
    )


def builtin_bindings() -> tuple[Binding, ...]:
    """Fixed bindings for named keys in both modes."""

    bindings = [
        Binding(
            id=f"{mode.value}.{key.strip('{}').lower()}",
            mode=mode,
            key=key,
            action_id=action_id,
            source="builtin",
        )
        for mode in (NORMAL, INSERT)
        for key, action_id in ARROW_ACTIONS.items()
    ]
    bindings.extend(
        Binding(id=f"insert.{name}", mode=INSERT, key=key, action_id=action_id, source="builtin")
        for name, key, action_id in (
            ("back", "{BACK}", "edit.backspace"),
            ("del", "{DEL}", "edit.delete"),
            ("enter", "{ENTER}", "edit.newline"),
            ("tab", "{TAB}", "edit.tab"),
        )
    )
    bindings.append(
        Binding(
            id="normal.esc",
            mode=NORMAL,
            key="{ESC}",
            action_id="visual.cancel",
            source="builtin",
        )
    )
    return tuple(bindings)


def printable_actions() -> tuple[ActionRef, ...]:
    return tuple(
        ActionRef(
            id=f"insert.char.{code}",
            command=InsertText(chr(code)),
            description=f"Insert {chr(code)!r}",
        )
        for code in PRINTABLE_ASCII
    )


def printable_bindings() -> tuple[Binding, ...]:
    """One Insert-mode binding per printable ASCII character."""

    return tuple(
        Binding(
            id=f"insert.char.{code}",
            mode=INSERT,
            key=escape_literal(chr(code)),
            action_id=f"insert.char.{code}",
            source="printable",
        )
        for code in PRINTABLE_ASCII
    )


def load_default_keymaps(
    registry: KeymapRegistry,
    keys: KeyBindings,
    *,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register every action and binding the editor ships with.

    Configured keys are registered first and win: a built-in or printable
    binding whose key is already taken in that mode is skipped.
    """

    for action in DEFAULT_ACTIONS + printable_actions():
        registry.register_action(action)

    for binding in configured_bindings(keys):
        registry.register_binding(binding)

    for binding in builtin_bindings() + printable_bindings():
        if registry.is_bound(binding.mode, binding.key):
            continue
        registry.register_binding(binding)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


def build_binding_table(
    keys: KeyBindings, *, extra_bindings: Iterable[Binding] | None = None
) -> KeymapRegistry:
    """Return a frozen registry holding the complete binding table."""

    registry = KeymapRegistry(logger_name="saucepan.keymaps")
    load_default_keymaps(registry, keys, extra_bindings=extra_bindings)
    return registry.freeze()


def _binding(mode: EditorMode, name: str, key: str, action_id: str) -> Binding:
    return Binding(
        id=f"{mode.value}.{name}",
        mode=mode,
        key=key,
        action_id=action_id,
        source="config",
    )


__all__ = [
    "DEFAULT_ACTIONS",
    "build_binding_table",
    "builtin_bindings",
    "configured_bindings",
    "load_default_keymaps",
    "printable_bindings",
]
