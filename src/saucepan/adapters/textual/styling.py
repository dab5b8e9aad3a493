"""Paint a buffer snapshot as a rich ``Text`` using the configured colors."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

from saucepan.buffer import BufferView
from saucepan.config import EditorColors, normalize_hex
from saucepan.render import CellMeasurer, build_frame


def styled_buffer(view: BufferView, colors: EditorColors) -> Text:
    """Return the whole buffer as one ``Text``, one line per row.

    Terminal cells make ``CellMeasurer`` exact, so frame rectangles map
    straight back onto character offsets.
    """

    plain = Style(
        color=normalize_hex(colors.text.unselected),
        bgcolor=normalize_hex(colors.window.background),
    )
    selected = Style(
        color=normalize_hex(colors.text.selected),
        bgcolor=normalize_hex(colors.window.highlight),
    )
    cursor = Style(bgcolor=normalize_hex(colors.window.cursor))

    frame = build_frame(view, CellMeasurer())
    cursor_row = int(frame.cursor_box.y0)
    cursor_col = int(frame.cursor_box.x0)

    text = Text(style=plain, no_wrap=True)
    for run in frame.runs:
        line = Text(run.text)
        for span in frame.selection:
            if span.row == run.row:
                line.stylize(selected, span.start, span.end)
        if run.row == cursor_row:
            if cursor_col >= len(run.text):
                line.append(" ")
            line.stylize(cursor, cursor_col, cursor_col + 1)
        if run.row:
            text.append("\n")
        text.append_text(line)
    return text


__all__ = ["styled_buffer"]
