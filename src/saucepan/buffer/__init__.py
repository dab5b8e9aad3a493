"""Buffer data model: document lines, cursor/selection state, command line."""

from .buffer import Buffer, CommandSink
from .command_line import CommandLine
from .document import BufferDocument
from .state import BufferState, Cursor, EditorMode, VisualMode
from .sync import BufferLoadError, BufferMirror, BufferValidationError, BufferView

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferLoadError",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "BufferView",
    "CommandLine",
    "CommandSink",
    "Cursor",
    "EditorMode",
    "VisualMode",
]
