"""Key notation, the binding table, and binding resolution."""

from .models import ActionRef, Binding
from .notation import Modifiers, code_for_character, escape_literal, translate_key
from .registry import (
    KeymapConflictError,
    KeymapFrozenError,
    KeymapRegistry,
    RegistryStats,
)
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import build_binding_table, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeymapConflictError",
    "KeymapFrozenError",
    "KeymapRegistry",
    "KeymapResolver",
    "Modifiers",
    "RegistryStats",
    "ResolutionMatch",
    "ResolutionResult",
    "build_binding_table",
    "code_for_character",
    "escape_literal",
    "load_default_keymaps",
    "translate_key",
]
