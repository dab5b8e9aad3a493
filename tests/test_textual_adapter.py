from __future__ import annotations

from typing import List, Optional

from rich.style import Style

from saucepan.adapters.textual import TextualEditorAdapter, TextualUIHooks
from saucepan.adapters.textual.styling import styled_buffer
from saucepan.buffer import Buffer, BufferView
from saucepan.config import KeyBindings, load_config
from saucepan.editor import EditorController
from saucepan.keymaps import build_binding_table


def make_controller(text: str = "") -> EditorController:
    keys = KeyBindings(
        up="k",
        down="j",
        left="h",
        right="l",
        insert="i",
        normal="{ESC}",
        command=":",
    )
    return EditorController(Buffer.from_text(text), build_binding_table(keys))


def test_adapter_updates_buffer_and_status() -> None:
    views: List[BufferView] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(update_buffer=views.append, update_status=statuses.append)
    adapter = TextualEditorAdapter(make_controller(), hooks)

    adapter.handle_textual_key("i", character="i")
    adapter.handle_textual_key("H", character="H")
    adapter.handle_textual_key("escape", character="\x1b")

    assert views[0].text == ""
    assert views[-1].text == "H"
    assert statuses[0] == "INSERT  1:1  enter_insert"
    assert statuses[-1].startswith("NORMAL")


def test_adapter_relays_command_events() -> None:
    command_lines: List[Optional[str]] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda view: None,
        show_command=command_lines.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualEditorAdapter(make_controller("keep"), hooks)

    adapter.handle_textual_key("colon", character=":")
    adapter.handle_textual_key("q", character="q")
    adapter.handle_textual_key("enter", character="\r")

    assert ("command.start", None) in events
    assert ("command.submit", "q") in events
    assert command_lines == [None, "", "q", None]


def test_unbound_and_unknown_keys_leave_buffer_alone() -> None:
    views: List[BufferView] = []
    logged: List[str] = []
    hooks = TextualUIHooks(update_buffer=views.append, log=logged.append)
    adapter = TextualEditorAdapter(make_controller("abc"), hooks)

    assert adapter.handle_textual_key("browser_back") is None
    result = adapter.handle_textual_key("z", character="z")

    assert result is not None and not result.consumed
    assert views[-1].text == "abc"
    assert any(line.startswith("key ->") for line in logged)


def test_styled_buffer_paints_cursor_and_selection() -> None:
    colors = load_config().colors.editor
    controller = make_controller("abc\nde")
    controller.handle_key("v")
    controller.handle_key("j")
    controller.handle_key("l")
    controller.handle_key("l")

    text = styled_buffer(controller.snapshot(), colors)

    assert text.plain == "abc\nde "
    cursor = Style(bgcolor=colors.window.cursor)
    cursor_spans = [span for span in text.spans if span.style == cursor]
    assert [(span.start, span.end) for span in cursor_spans] == [(6, 7)]
    selected = Style(color=colors.text.selected, bgcolor=colors.window.highlight)
    selected_spans = [span for span in text.spans if span.style == selected]
    assert [(span.start, span.end) for span in selected_spans] == [(0, 3), (4, 6)]


def test_command_handler_owns_status_after_submit() -> None:
    statuses: List[str] = []

    def on_event(name: str, payload: object | None) -> None:
        if name == "command.submit":
            statuses.append(f"Not an editor command: {payload}")

    hooks = TextualUIHooks(
        update_buffer=lambda view: None,
        update_status=statuses.append,
        handle_event=on_event,
    )
    adapter = TextualEditorAdapter(make_controller(), hooks)

    adapter.handle_textual_key("colon", character=":")
    adapter.handle_textual_key("w", character="w")
    result = adapter.handle_textual_key("enter", character="\r")

    assert result is not None and result.status == "command_submit"
    assert statuses[-1] == "Not an editor command: w"
