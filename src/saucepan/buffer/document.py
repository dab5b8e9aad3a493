"""List-of-lines text storage for buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Ordered lines of a document; always holds at least one line.

    Every mutation bumps ``version`` and sets ``dirty``.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        # Split on "\n" only: a trailing newline leaves a final empty line.
        return cls(_lines=text.split("\n"))

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text
        self._touch()

    def insert_lines(self, index: int, lines: Iterable[str]) -> None:
        self._lines[index:index] = list(lines)
        self._touch()

    def append_line(self, text: str = "") -> None:
        self._lines.append(text)
        self._touch()

    def delete_lines(self, start: int, end: int) -> None:
        """Remove rows ``[start, end)``; the last remaining line is never removed."""

        del self._lines[start:end]
        if not self._lines:
            self._lines.append("")
        self._touch()

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
