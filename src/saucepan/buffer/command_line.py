"""Text and cursor of the ex-style command-line overlay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CommandLine:
    text: str = ""
    cursor: int = 0

    def insert(self, text: str) -> None:
        self.text = self.text[: self.cursor] + text + self.text[self.cursor :]
        self.cursor += len(text)

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        return True

    def move(self, delta: int) -> None:
        self.cursor = max(0, min(self.cursor + delta, len(self.text)))

    def reset(self) -> None:
        self.text = ""
        self.cursor = 0
