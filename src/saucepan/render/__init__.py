"""Render geometry derived from buffer snapshots."""

from .layout import (
    CellMeasurer,
    Point,
    Rect,
    RenderFrame,
    SelectionSpan,
    TextMeasurer,
    TextRun,
    build_frame,
    cursor_box,
    selection_spans,
    span_contains,
)

__all__ = [
    "CellMeasurer",
    "Point",
    "Rect",
    "RenderFrame",
    "SelectionSpan",
    "TextMeasurer",
    "TextRun",
    "build_frame",
    "cursor_box",
    "selection_spans",
    "span_contains",
]
