"""Mode state machine and the result/context types dispatch relies on."""

from .base_mode import ModeBus, ModeContext, ModeResult
from .mode_manager import ModeManager

__all__ = [
    "ModeBus",
    "ModeContext",
    "ModeManager",
    "ModeResult",
]
