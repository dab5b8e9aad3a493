"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use saucepan.adapters.textual.app"
    ) from exc

from saucepan.buffer import Buffer, BufferLoadError, BufferView
from saucepan.config import Config, ConfigError, load_config
from saucepan.editor import EditorController
from saucepan.keymaps import KeymapConflictError, build_binding_table
from saucepan.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks
from .styling import styled_buffer

QUIT_COMMANDS = frozenset({"q", "quit", "q!", "quit!"})


def create_editor(path: Optional[str], config: Config) -> EditorController:
    """Load ``path`` (or start empty) and bind it to the configured keys."""

    buffer = Buffer.from_file(path) if path else Buffer()
    return EditorController(buffer, build_binding_table(config.bindings))


@dataclass
class UIState:
    status_text: str = ""
    command_text: str = ""


class SaucepanApp(App[None]):
    """Single-buffer modal editor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, controller: EditorController, config: Config) -> None:
        super().__init__()
        self.controller = controller
        self.config = config
        self.adapter: TextualEditorAdapter | None = None
        self._state = UIState()
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.controller.buffer.file_name or "saucepan"
        if self._buffer_widget:
            self._buffer_widget.styles.background = (
                self.config.colors.editor.window.background
            )
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            handle_event=self._handle_event,
            log=self.log.debug,
        )
        self.adapter = TextualEditorAdapter(self.controller, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        result = self.adapter.handle_textual_key(event.key, character=event.character)
        if result is not None and result.consumed:
            event.stop()

    def _update_buffer(self, view: BufferView) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(styled_buffer(view, self.config.colors.editor))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: Optional[str]) -> None:
        self._state.command_text = command or ""
        if self._command_widget:
            self._command_widget.update("" if command is None else f":{command}")

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name != "command.submit" or not isinstance(payload, str):
            return
        if payload.strip() in QUIT_COMMANDS:
            self.exit()
        else:
            self._update_status(f"Not an editor command: {payload}")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="saucepan", description="A small modal text editor."
    )
    parser.add_argument("path", nargs="?", help="file to open")
    parser.add_argument(
        "--config",
        default=None,
        help="TOML file merged over the packaged defaults (also $SAUCEPAN_CONFIG)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="quiet")
    try:
        config = load_config(args.config)
        controller = create_editor(args.path, config)
    except ConfigError as exc:
        raise SystemExit(f"saucepan: {exc}") from exc
    except BufferLoadError as exc:
        raise SystemExit(f"Failed to launch Saucepan from path: {exc.path}") from exc
    except KeymapConflictError as exc:
        raise SystemExit(f"saucepan: {exc}") from exc
    SaucepanApp(controller, config).run()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
