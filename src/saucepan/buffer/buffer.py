"""The editable buffer: document lines, cursor, selection, and command line."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence

from saucepan.runtime import telemetry

from .command_line import CommandLine
from .document import BufferDocument
from .state import BufferState, Cursor, EditorMode, VisualMode
from .sync import BufferLoadError, BufferMirror, BufferValidationError, BufferView

CommandSink = Callable[[str], object]


class Buffer:
    """Owns the document and every position that refers into it.

    All edits are expressed relative to the cursor. The methods keep the
    invariants ``0 <= row < line_count`` and ``0 <= col <= len(line)`` for
    both cursor and anchor by construction; only the host-facing placement
    methods (``set_cursor``, ``set_selection_anchor``) validate arguments.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        file_name: Optional[str] = None,
        command_sink: Optional[CommandSink] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.command_line = CommandLine()
        self.file_name = file_name
        self.command_sink = command_sink

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @classmethod
    def from_file(cls, path: str) -> "Buffer":
        try:
            with open(path, encoding="utf-8") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            telemetry.record_event(
                "buffer.load_failed",
                level="error",
                data={"path": path, "reason": str(exc)},
            )
            raise BufferLoadError(path, str(exc)) from exc
        telemetry.record_event(
            "buffer.loaded", data={"path": path, "chars": len(text)}
        )
        return cls(
            name=path, document=BufferDocument.from_text(text), file_name=path
        )

    # -- read access -----------------------------------------------------

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def selection_anchor(self) -> Cursor:
        return self.state.anchor

    @property
    def mode(self) -> EditorMode:
        return self.state.mode

    @property
    def visual_mode(self) -> VisualMode:
        return self.state.visual_mode

    @property
    def command_mode(self) -> bool:
        return self.state.command_mode

    @property
    def command_buffer(self) -> str:
        return self.command_line.text

    @property
    def command_cursor(self) -> int:
        return self.command_line.cursor

    def selection_range(self) -> tuple[Cursor, Cursor]:
        return self.state.ordered()

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            lines=self.document.snapshot(),
            cursor=self.state.cursor,
            anchor=self.state.anchor,
            mode=self.state.mode,
            visual_mode=self.state.visual_mode,
            command_mode=self.state.command_mode,
            command_text=self.command_line.text,
            command_cursor=self.command_line.cursor,
            file_name=self.file_name,
        )

    def mirror(self) -> BufferMirror:
        selection = None
        if self.state.anchor != self.state.cursor:
            selection = self.state.ordered()
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.cursor,
            selection=selection,
            mode=self.state.mode.value,
            command_text=self.command_line.text if self.state.command_mode else None,
        )

    # -- host placement --------------------------------------------------

    def set_cursor(self, row: int, col: int) -> None:
        self.state.cursor = self._ensure_cursor((row, col))
        if self.state.visual_mode is VisualMode.PER_MOVE:
            self.state.collapse_selection()

    def set_selection_anchor(self, row: int, col: int) -> None:
        self.state.anchor = self._ensure_cursor((row, col))

    def _ensure_cursor(self, cursor: Cursor) -> Cursor:
        row, col = cursor
        if row < 0 or row >= self.document.line_count:
            raise BufferValidationError("Row out of range", cursor=cursor)
        if col < 0 or col > len(self.document.get_line(row)):
            raise BufferValidationError("Column out of range", cursor=cursor)
        return cursor

    # -- mutations -------------------------------------------------------

    def insert(self, text: str) -> None:
        if self.state.command_mode:
            command_text, newline, _ = text.partition("\n")
            self.command_line.insert(command_text)
            if newline:
                self.exec_command()
            return

        with self._span("insert", chars=len(text)):
            self.state.anchor = self.state.cursor
            if "\n" not in text:
                self._insert_inline(text)
                return

            fragments = text.split("\n")
            row, col = self.state.cursor
            line = self.document.get_line(row)
            head, tail = line[:col], line[col:]
            self.document.set_line(row, head)
            self._insert_inline(fragments[0])
            # Interior fragments go between the first line and the tail; the
            # fragment after the last newline is not inserted.
            self.document.insert_lines(row + 1, fragments[1:-1] + [tail])
            target = row + len(fragments) - 1
            if target == self.document.line_count:
                self.document.append_line()
            self.state.cursor = (target, 0)

    def _insert_inline(self, text: str) -> None:
        row, col = self.state.cursor
        line = self.document.get_line(row)
        self.document.set_line(row, line[:col] + text + line[col:])
        self.state.cursor = (row, col + len(text))

    def delete_selection(self) -> None:
        first, last = self.state.ordered()
        with self._span("delete_selection", first=first, last=last):
            if first[0] == last[0]:
                line = self.document.get_line(first[0])
                self.document.set_line(first[0], line[: first[1]] + line[last[1] :])
            else:
                head = self.document.get_line(first[0])[: first[1]]
                rest = self.document.get_line(last[0])[last[1] :]
                self.document.set_line(first[0], head + rest)
                self.document.delete_lines(first[0] + 1, last[0] + 1)
            self.state.cursor = first
            self.state.anchor = first

    def backspace(self) -> None:
        if self.state.command_mode:
            self.command_line.backspace()
            return

        row, col = self.state.cursor
        if row == 0 and col == 0:
            return

        with self._span("backspace"):
            if col > 0:
                line = self.document.get_line(row)
                self.document.set_line(row, line[: col - 1] + line[col:])
                self.state.cursor = (row, col - 1)
                anchor_row, anchor_col = self.state.anchor
                if anchor_row == row and anchor_col >= col:
                    self.state.anchor = (anchor_row, anchor_col - 1)
                return

            previous = self.document.get_line(row - 1)
            self.document.set_line(row - 1, previous + self.document.get_line(row))
            self.document.delete_lines(row, row + 1)
            self.state.cursor = (row - 1, len(previous))
            self._shift_anchor_after_join(row, len(previous))

    def delete(self) -> None:
        """Remove the character under the cursor, joining lines at end of line."""

        if self.state.command_mode:
            self.command_line.delete()
            return

        row, col = self.state.cursor
        line = self.document.get_line(row)
        if col < len(line):
            with self._span("delete"):
                self.document.set_line(row, line[:col] + line[col + 1 :])
                anchor_row, anchor_col = self.state.anchor
                if anchor_row == row and anchor_col > col:
                    self.state.anchor = (anchor_row, anchor_col - 1)
            return

        if row + 1 >= self.document.line_count:
            return

        with self._span("delete"):
            self.document.set_line(row, line + self.document.get_line(row + 1))
            self.document.delete_lines(row + 1, row + 2)
            self._shift_anchor_after_join(row + 1, len(line))

    def _shift_anchor_after_join(self, removed_row: int, joined_len: int) -> None:
        anchor_row, anchor_col = self.state.anchor
        if anchor_row == removed_row:
            self.state.anchor = (removed_row - 1, anchor_col + joined_len)
        elif anchor_row > removed_row:
            self.state.anchor = (anchor_row - 1, anchor_col)

    def vmove_cursor(self, delta: int) -> None:
        if self.state.command_mode:
            return
        row, col = self.state.cursor
        row = max(0, min(row + delta, self.document.line_count - 1))
        col = min(col, len(self.document.get_line(row)))
        self.state.cursor = (row, col)
        if self.state.visual_mode is VisualMode.PER_MOVE:
            self.state.collapse_selection()

    def hmove_cursor(self, delta: int) -> None:
        if self.state.command_mode:
            self.command_line.move(delta)
            return
        row, col = self.state.cursor
        col = max(0, min(col + delta, len(self.document.get_line(row))))
        self.state.cursor = (row, col)
        if self.state.visual_mode is VisualMode.PER_MOVE:
            self.state.collapse_selection()

    # -- command line ----------------------------------------------------

    def open_command_line(self) -> None:
        if not self.state.command_mode:
            self.state.command_return_mode = self.state.mode
        self.command_line.reset()
        self.state.mode = EditorMode.INSERT
        self.state.command_mode = True

    def close_command_line(self) -> None:
        if self.state.command_mode:
            self.state.mode = self.state.command_return_mode
        self.command_line.reset()
        self.state.command_mode = False

    def exec_command(self) -> Optional[str]:
        """Hand the command text to ``command_sink`` once, then reset the overlay.

        The reset runs even when the sink raises. Returns the dispatched text,
        or ``None`` for an empty command.
        """

        command = self.command_line.text
        try:
            if not command:
                return None
            with self._span("exec_command", command=command):
                if self.command_sink is not None:
                    self.command_sink(command)
            return command
        finally:
            self.close_command_line()

    @contextmanager
    def _span(self, label: str, **metadata: object) -> Iterator[None]:
        with telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name, **metadata},
        ):
            yield
