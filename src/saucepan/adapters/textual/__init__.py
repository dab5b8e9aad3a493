"""Textual host for the editor engine."""

from .controller import TextualEditorAdapter, TextualUIHooks
from .keys import textual_key_to_event

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "textual_key_to_event"]
