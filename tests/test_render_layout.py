from __future__ import annotations

from dataclasses import dataclass

from saucepan.buffer import Buffer, BufferView, VisualMode
from saucepan.render import (
    CellMeasurer,
    Rect,
    SelectionSpan,
    build_frame,
    cursor_box,
    selection_spans,
    span_contains,
)


@dataclass
class WideMeasurer:
    """Every glyph is two units wide and lines are ten units tall."""

    line_height: float = 10.0

    def x_for(self, text: str, col: int) -> float:
        return 2.0 * min(col, len(text))


def make_view(
    text: str,
    *,
    cursor: tuple[int, int],
    anchor: tuple[int, int] | None = None,
    visual: VisualMode = VisualMode.ALL_MOVE,
) -> BufferView:
    buffer = Buffer.from_text(text)
    buffer.set_cursor(*cursor)
    buffer.state.visual_mode = visual
    if anchor is not None:
        buffer.set_selection_anchor(*anchor)
    return buffer.snapshot()


def test_no_selection_produces_no_rects() -> None:
    frame = build_frame(make_view("abc", cursor=(0, 1)), CellMeasurer())

    assert frame.selection == []
    assert frame.selection_rects == []


def test_single_row_selection_is_column_accurate() -> None:
    view = make_view("abcdef", cursor=(0, 4), anchor=(0, 1))

    assert selection_spans(view) == [SelectionSpan(0, 1, 4)]


def test_multi_row_selection_covers_interior_rows_fully() -> None:
    view = make_view("hello\nbig\nworld", cursor=(0, 2), anchor=(2, 3))

    assert selection_spans(view) == [
        SelectionSpan(0, 2, 5),
        SelectionSpan(1, 0, 3),
        SelectionSpan(2, 0, 3),
    ]


def test_line_selection_covers_whole_rows() -> None:
    view = make_view("ab\ncdef", cursor=(1, 1), anchor=(0, 1), visual=VisualMode.LINE)

    assert selection_spans(view) == [SelectionSpan(0, 0, 2), SelectionSpan(1, 0, 4)]


def test_block_selection_clips_short_rows() -> None:
    view = make_view(
        "abcdef\nx\nabcdef", cursor=(2, 4), anchor=(0, 1), visual=VisualMode.BLOCK
    )

    assert selection_spans(view) == [
        SelectionSpan(0, 1, 4),
        SelectionSpan(1, 1, 1),
        SelectionSpan(2, 1, 4),
    ]


def test_frame_geometry_uses_measurer() -> None:
    view = make_view("ab\ncd", cursor=(1, 1), anchor=(0, 1))

    frame = build_frame(view, WideMeasurer())

    assert [run.origin.y for run in frame.runs] == [0.0, 10.0]
    assert [run.is_cursor_line for run in frame.runs] == [False, True]
    assert frame.cursor_box == Rect(2.0, 10.0, 4.0, 20.0)
    assert frame.selection_rects == [
        Rect(2.0, 0.0, 4.0, 10.0),
        Rect(0.0, 10.0, 2.0, 20.0),
    ]


def test_cursor_box_at_end_of_line_keeps_a_cell_width() -> None:
    view = make_view("ab\n", cursor=(1, 0))

    box = cursor_box(view, CellMeasurer())

    assert box == Rect(0.0, 1.0, 1.0, 2.0)
    assert box.width == 1.0


def test_span_contains_is_half_open() -> None:
    spans = [SelectionSpan(0, 1, 3)]

    assert span_contains(spans, (0, 1))
    assert span_contains(spans, (0, 2))
    assert not span_contains(spans, (0, 3))
    assert not span_contains(spans, (1, 1))
