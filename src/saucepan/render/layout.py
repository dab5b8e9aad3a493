"""Geometry inputs for painting a buffer: text runs, cursor box, selection.

Nothing here measures glyphs itself. A ``TextMeasurer`` supplied by the host
turns a column into an x offset; terminals can use ``CellMeasurer``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence

from saucepan.buffer import BufferView, Cursor, VisualMode


class TextMeasurer(Protocol):
    line_height: float

    def x_for(self, text: str, col: int) -> float:
        """Return the x offset of the glyph boundary before ``text[col]``."""
        ...


@dataclass(frozen=True, slots=True)
class CellMeasurer:
    """Fixed-width cells, as in a terminal."""

    cell_width: float = 1.0
    line_height: float = 1.0

    def x_for(self, text: str, col: int) -> float:
        return min(col, len(text)) * self.cell_width


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0


@dataclass(frozen=True, slots=True)
class TextRun:
    row: int
    text: str
    origin: Point
    is_cursor_line: bool


@dataclass(frozen=True, slots=True)
class SelectionSpan:
    """Selected columns ``[start, end)`` of one row."""

    row: int
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class RenderFrame:
    runs: Sequence[TextRun]
    cursor_box: Rect
    selection: Sequence[SelectionSpan]
    selection_rects: Sequence[Rect]


def selection_spans(view: BufferView) -> List[SelectionSpan]:
    """Spans covered by the selection, one per spanned row.

    Character-wise selections are column-accurate on their first and last
    row and cover whole interior rows; an empty one spans nothing. ``LINE``
    covers whole rows, ``BLOCK`` the column rectangle between the endpoints.
    """

    first, last = view.selection
    lines = view.lines

    if view.visual_mode is VisualMode.LINE:
        return [SelectionSpan(row, 0, len(lines[row])) for row in range(first[0], last[0] + 1)]

    if view.visual_mode is VisualMode.BLOCK:
        left = min(view.cursor[1], view.anchor[1])
        right = max(view.cursor[1], view.anchor[1])
        return [
            SelectionSpan(row, min(left, len(lines[row])), min(right, len(lines[row])))
            for row in range(first[0], last[0] + 1)
        ]

    if first == last:
        return []
    if first[0] == last[0]:
        return [SelectionSpan(first[0], first[1], last[1])]

    spans = [SelectionSpan(first[0], first[1], len(lines[first[0]]))]
    spans.extend(
        SelectionSpan(row, 0, len(lines[row])) for row in range(first[0] + 1, last[0])
    )
    spans.append(SelectionSpan(last[0], 0, last[1]))
    return spans


def cursor_box(view: BufferView, measurer: TextMeasurer) -> Rect:
    row, col = view.cursor
    # Measure against a trailing space so end-of-line and empty lines still
    # get a glyph-sized box.
    padded = view.lines[row] + " "
    top = row * measurer.line_height
    return Rect(
        measurer.x_for(padded, col),
        top,
        measurer.x_for(padded, col + 1),
        top + measurer.line_height,
    )


def build_frame(view: BufferView, measurer: TextMeasurer) -> RenderFrame:
    height = measurer.line_height
    runs = [
        TextRun(
            row=row,
            text=line,
            origin=Point(0.0, row * height),
            is_cursor_line=row == view.cursor[0],
        )
        for row, line in enumerate(view.lines)
    ]
    spans = selection_spans(view)
    rects = [_span_rect(view.lines[span.row], span, measurer) for span in spans]
    return RenderFrame(
        runs=runs,
        cursor_box=cursor_box(view, measurer),
        selection=spans,
        selection_rects=rects,
    )


def _span_rect(line: str, span: SelectionSpan, measurer: TextMeasurer) -> Rect:
    top = span.row * measurer.line_height
    return Rect(
        measurer.x_for(line, span.start),
        top,
        measurer.x_for(line, span.end),
        top + measurer.line_height,
    )


def span_contains(spans: Sequence[SelectionSpan], position: Cursor) -> bool:
    row, col = position
    return any(span.row == row and span.start <= col < span.end for span in spans)


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
