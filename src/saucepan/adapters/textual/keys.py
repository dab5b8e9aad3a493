"""Map Textual key events back onto physical key codes.

Textual reports logical key names (``"ctrl+v"``, ``"up"``) and the typed
character rather than hardware codes, so the adapter reconstructs the
``(code, modifiers)`` pair the notation translator expects.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from saucepan.keymaps.notation import Modifiers, code_for_character

KeyEvent = Tuple[str, Modifiers]

TEXTUAL_NAMED_CODES: Dict[str, str] = {
    "escape": "Escape",
    "enter": "Enter",
    "return": "Enter",
    "tab": "Tab",
    "backspace": "Backspace",
    "delete": "Delete",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "pageup": "PageUp",
    "pagedown": "PageDown",
    "home": "Home",
    "end": "End",
    "insert": "Insert",
    "space": "Space",
}
TEXTUAL_NAMED_CODES.update({f"f{n}": f"F{n}" for n in range(1, 25)})

TEXTUAL_MODIFIERS: Dict[str, Modifiers] = {
    "ctrl": Modifiers.CTRL,
    "alt": Modifiers.ALT,
    "meta": Modifiers.ALT,
    "shift": Modifiers.SHIFT,
}


def textual_key_to_event(key: str, character: Optional[str] = None) -> Optional[KeyEvent]:
    """Return ``(code, modifiers)`` for a Textual key, or ``None`` if unknown."""

    *modifier_names, base = key.split("+") if key != "+" else ["+"]
    modifiers = Modifiers.NONE
    for name in modifier_names:
        flag = TEXTUAL_MODIFIERS.get(name.lower())
        if flag is None:
            return None
        modifiers |= flag

    chorded = bool(modifiers & (Modifiers.CTRL | Modifiers.ALT))
    if not chorded and character and len(character) == 1 and character.isprintable():
        return code_for_character(character)

    code = TEXTUAL_NAMED_CODES.get(base.lower())
    if code is not None:
        return code, modifiers

    if len(base) == 1:
        located = code_for_character(base)
        if located is None:
            return None
        code, shift = located
        return code, modifiers | shift

    return None


__all__ = ["KeyEvent", "textual_key_to_event"]
