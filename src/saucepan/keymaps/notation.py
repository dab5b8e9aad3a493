"""Translate physical key events into canonical key strings.

Canonical strings are what the binding table is keyed by: a plain character
(``"a"``, ``"A"``, ``":"``), a bracketed token for named keys (``"{ENTER}"``,
``"{UARR}"``, ``"{F5}"``), optionally prefixed by ``^`` (control) and ``~``
(alt). Because ``^ { } ~`` carry that meaning, typing one of them literally
yields the backslash-escaped form (``"\\^"``).

Physical codes follow the W3C ``KeyboardEvent.code`` names (``"KeyA"``,
``"Digit6"``, ``"Numpad0"``, ``"ArrowUp"``).
"""

from __future__ import annotations

from enum import IntFlag
from typing import Dict, Optional, Tuple

METACHARACTERS = frozenset("^{}~")


class Modifiers(IntFlag):
    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    CAPS_LOCK = 8
    NUM_LOCK = 16
    FN = 32
    FN_LOCK = 64


NAMED_KEYS: Dict[str, str] = {
    "Escape": "{ESC}",
    "Enter": "{ENTER}",
    "NumpadEnter": "{ENTER}",
    "Tab": "{TAB}",
    "ArrowUp": "{UARR}",
    "ArrowDown": "{DARR}",
    "ArrowLeft": "{LARR}",
    "ArrowRight": "{RARR}",
    "PageUp": "{PGUP}",
    "PageDown": "{PGDN}",
    "Backspace": "{BACK}",
    "Delete": "{DEL}",
    "Home": "{HOME}",
    "End": "{END}",
    "Insert": "{INS}",
    "Space": " ",
}
NAMED_KEYS.update({f"F{n}": f"{{F{n}}}" for n in range(1, 25)})

# code -> (unshifted, shifted), US layout.
SHIFTABLE_KEYS: Dict[str, Tuple[str, str]] = {
    "Digit0": ("0", ")"),
    "Digit1": ("1", "!"),
    "Digit2": ("2", "@"),
    "Digit3": ("3", "#"),
    "Digit4": ("4", "$"),
    "Digit5": ("5", "%"),
    "Digit6": ("6", "^"),
    "Digit7": ("7", "&"),
    "Digit8": ("8", "*"),
    "Digit9": ("9", "("),
    "Backquote": ("`", "~"),
    "Equal": ("=", "+"),
    "Minus": ("-", "_"),
    "BracketLeft": ("[", "{"),
    "BracketRight": ("]", "}"),
    "Backslash": ("\\", "|"),
    "Semicolon": (";", ":"),
    "Quote": ("'", '"'),
    "Comma": (",", "<"),
    "Period": (".", ">"),
    "Slash": ("/", "?"),
}

# Numpad digits without num lock act as navigation keys.
NUMPAD_ALIASES: Dict[str, str] = {
    "Numpad0": "{INS}",
    "Numpad1": "{END}",
    "Numpad2": "{DARR}",
    "Numpad3": "{PGDN}",
    "Numpad4": "{LARR}",
    "Numpad5": "",
    "Numpad6": "{RARR}",
    "Numpad7": "{HOME}",
    "Numpad8": "{UARR}",
    "Numpad9": "{PGUP}",
}

NUMPAD_SYMBOLS: Dict[str, str] = {
    "NumpadAdd": "+",
    "NumpadSubtract": "-",
    "NumpadMultiply": "*",
    "NumpadDivide": "/",
    "NumpadDecimal": ".",
    "NumpadComma": ",",
    "NumpadParenLeft": "(",
    "NumpadParenRight": ")",
}


def escape_literal(char: str) -> str:
    if char in METACHARACTERS:
        return f"\\{char}"
    return char


def translate_key(code: str, modifiers: Modifiers = Modifiers.NONE) -> str:
    """Return the canonical key string for ``code`` under ``modifiers``.

    Unknown codes map to ``""``, which no binding uses; modifier prefixes are
    never attached to an empty key.
    """

    base = _base_key(code, Modifiers(modifiers))
    if not base:
        return ""
    prefix = ""
    if modifiers & Modifiers.CTRL:
        prefix += "^"
    if modifiers & Modifiers.ALT:
        prefix += "~"
    return prefix + base


def _base_key(code: str, modifiers: Modifiers) -> str:
    shift = bool(modifiers & Modifiers.SHIFT)

    if len(code) == 4 and code.startswith("Key") and code[3].isalpha():
        upper = shift != bool(modifiers & Modifiers.CAPS_LOCK)
        return code[3].upper() if upper else code[3].lower()

    if code in NAMED_KEYS:
        return NAMED_KEYS[code]

    if code in SHIFTABLE_KEYS:
        unshifted, shifted = SHIFTABLE_KEYS[code]
        return escape_literal(shifted if shift else unshifted)

    if code in NUMPAD_ALIASES:
        fn_active = bool(modifiers & Modifiers.FN) != bool(
            modifiers & Modifiers.FN_LOCK
        )
        if modifiers & Modifiers.NUM_LOCK or fn_active:
            return code[-1]
        return NUMPAD_ALIASES[code]

    return NUMPAD_SYMBOLS.get(code, "")


def code_for_character(char: str) -> Optional[Tuple[str, Modifiers]]:
    """Reverse lookup: the physical key (and shift state) that types ``char``."""

    if len(char) != 1:
        return None
    if char == " ":
        return "Space", Modifiers.NONE
    if char.isascii() and char.isalpha():
        shift = Modifiers.SHIFT if char.isupper() else Modifiers.NONE
        return f"Key{char.upper()}", shift
    return _CHARACTER_CODES.get(char)


_CHARACTER_CODES: Dict[str, Tuple[str, Modifiers]] = {}
for _code, (_plain, _shifted) in SHIFTABLE_KEYS.items():
    _CHARACTER_CODES[_plain] = (_code, Modifiers.NONE)
    _CHARACTER_CODES[_shifted] = (_code, Modifiers.SHIFT)


__all__ = [
    "Modifiers",
    "METACHARACTERS",
    "NAMED_KEYS",
    "code_for_character",
    "escape_literal",
    "translate_key",
]
