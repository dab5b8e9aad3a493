"""Modal text editor widget: buffer engine, keymaps, and a Textual host."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "editor",
    "keymaps",
    "modes",
    "render",
    "runtime",
]

__version__ = "0.1.0"
