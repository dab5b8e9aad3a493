from __future__ import annotations

from typing import List

from saucepan.buffer import Buffer, EditorMode, VisualMode
from saucepan.config import KeyBindings
from saucepan.editor import EditorController
from saucepan.keymaps import Binding, Modifiers, build_binding_table
from saucepan.modes import ModeBus


def make_keys() -> KeyBindings:
    return KeyBindings(
        up="k",
        down="j",
        left="h",
        right="l",
        insert="i",
        normal="{ESC}",
        command=":",
    )


def make_controller(
    text: str = "", *, bus: ModeBus | None = None, extra: list[Binding] | None = None
) -> EditorController:
    registry = build_binding_table(make_keys(), extra_bindings=extra)
    return EditorController(Buffer.from_text(text), registry, bus=bus)


def press(controller: EditorController, *keys: str) -> None:
    for key in keys:
        controller.handle_key(key)


def test_normal_mode_ignores_unbound_keys() -> None:
    controller = make_controller("abc")

    result = controller.handle_key("a")

    assert not result.consumed
    assert result.status == "miss"
    assert list(controller.buffer.lines) == ["abc"]


def test_insert_mode_round_trip() -> None:
    controller = make_controller()

    entered = controller.handle_key("i")
    assert entered.switch_to is EditorMode.INSERT
    assert entered.message == "enter_insert"

    press(controller, "h", "i", "{ENTER}", "j", "k")
    assert list(controller.buffer.lines) == ["hi", "jk"]
    assert controller.buffer.cursor == (1, 2)

    left = controller.handle_key("{ESC}")
    assert left.switch_to is EditorMode.NORMAL
    assert controller.buffer.mode is EditorMode.NORMAL


def test_normal_mode_movement_keys() -> None:
    controller = make_controller("abc\ndef")

    press(controller, "l", "l", "j")
    assert controller.buffer.cursor == (1, 2)
    press(controller, "k", "h")
    assert controller.buffer.cursor == (0, 1)
    press(controller, "{DARR}", "{RARR}")
    assert controller.buffer.cursor == (1, 2)


def test_key_events_are_translated_before_lookup() -> None:
    controller = make_controller()

    controller.handle_key_event("KeyI")
    controller.handle_key_event("KeyH", Modifiers.SHIFT)
    controller.handle_key_event("Digit6", Modifiers.SHIFT)
    controller.handle_key_event("Space")
    controller.handle_key_event("Semicolon", Modifiers.SHIFT)

    assert list(controller.buffer.lines) == ["H^ :"]


def test_untranslatable_key_is_a_miss() -> None:
    controller = make_controller()

    result = controller.handle_key_event("Numpad5")

    assert not result.consumed
    assert result.message == "untranslated"


def test_backspace_and_delete_in_insert_mode() -> None:
    controller = make_controller("abc\nd")
    controller.buffer.set_cursor(1, 0)

    press(controller, "i", "{BACK}")
    assert list(controller.buffer.lines) == ["abcd"]
    press(controller, "{LARR}", "{DEL}")
    assert list(controller.buffer.lines) == ["abd"]


def test_text_edit_bound_in_normal_mode_is_illegal() -> None:
    extra = [
        Binding(
            id="normal.bs",
            mode=EditorMode.NORMAL,
            key="{BACK}",
            action_id="edit.backspace",
        )
    ]
    controller = make_controller("abc", extra=extra)
    controller.buffer.set_cursor(0, 2)

    result = controller.handle_key("{BACK}")

    assert not result.consumed
    assert result.status == "illegal"
    assert list(controller.buffer.lines) == ["abc"]


def test_command_line_submits_once_and_restores_mode() -> None:
    bus = ModeBus()
    events: List[object] = []
    bus.subscribe("command.start", lambda payload: events.append("start"))
    bus.subscribe("command.submit", events.append)
    controller = make_controller("text", bus=bus)

    entered = controller.handle_key(":")
    assert entered.message == "enter_command"
    assert controller.buffer.command_mode
    assert controller.buffer.mode is EditorMode.INSERT

    press(controller, "w", "q")
    assert controller.buffer.command_buffer == "wq"
    assert list(controller.buffer.lines) == ["text"]

    result = controller.handle_key("{ENTER}")

    assert result.status == "command_submit"
    assert result.switch_to is EditorMode.NORMAL
    assert events == ["start", "wq"]
    assert not controller.buffer.command_mode
    assert controller.buffer.command_buffer == ""
    assert controller.buffer.mode is EditorMode.NORMAL


def test_escape_cancels_command_line() -> None:
    bus = ModeBus()
    cancelled: List[object] = []
    submitted: List[object] = []
    bus.subscribe("command.cancel", cancelled.append)
    bus.subscribe("command.submit", submitted.append)
    controller = make_controller(bus=bus)

    press(controller, ":", "w")
    result = controller.handle_key("{ESC}")

    assert result.message == "command_cancel"
    assert cancelled == [None]
    assert submitted == []
    assert not controller.buffer.command_mode
    assert controller.buffer.mode is EditorMode.NORMAL


def test_command_line_opened_from_insert_returns_to_insert() -> None:
    controller = make_controller()
    controller.buffer.state.mode = EditorMode.INSERT
    controller.modes.enter_command_mode()

    press(controller, "q", "{ENTER}")

    assert controller.buffer.mode is EditorMode.INSERT
    assert list(controller.buffer.lines) == [""]


def test_colon_is_text_in_insert_mode() -> None:
    controller = make_controller()

    press(controller, "i", ":")

    assert list(controller.buffer.lines) == [":"]
    assert not controller.buffer.command_mode


def test_visual_selection_then_delete() -> None:
    bus = ModeBus()
    selections: List[object] = []
    bus.subscribe("visual.selection", selections.append)
    controller = make_controller("abcdef", bus=bus)
    controller.buffer.set_cursor(0, 1)

    toggled = controller.handle_key("v")
    assert toggled.status == "visual"
    assert controller.buffer.visual_mode is VisualMode.ALL_MOVE
    press(controller, "l", "l")
    assert controller.buffer.selection_range() == ((0, 1), (0, 3))

    result = controller.handle_key("d")

    assert result.status == "delete_selection"
    assert list(controller.buffer.lines) == ["adef"]
    assert controller.buffer.cursor == (0, 1)
    assert controller.buffer.visual_mode is VisualMode.PER_MOVE
    assert selections == [{"anchor": (0, 1), "cursor": (0, 1)}]


def test_delete_without_selection_is_noop() -> None:
    controller = make_controller("abc")

    result = controller.handle_key("d")

    assert result.status == "noop"
    assert list(controller.buffer.lines) == ["abc"]


def test_line_and_block_visual_kinds_toggle() -> None:
    controller = make_controller("abc\ndef")

    controller.handle_key_event("KeyV", Modifiers.SHIFT)
    assert controller.buffer.visual_mode is VisualMode.LINE
    controller.handle_key_event("KeyV", Modifiers.CTRL)
    assert controller.buffer.visual_mode is VisualMode.BLOCK
    press(controller, "j", "l")
    assert controller.buffer.selection_anchor == (0, 0)

    cancelled = controller.handle_key_event("KeyV", Modifiers.CTRL)

    assert cancelled.message == "visual_cancel"
    assert controller.buffer.visual_mode is VisualMode.PER_MOVE
    assert controller.buffer.selection_anchor == controller.buffer.cursor


def test_escape_in_normal_mode_drops_selection() -> None:
    controller = make_controller("abc")
    press(controller, "v", "l")

    result = controller.handle_key("{ESC}")

    assert result.message == "visual_cancel"
    assert controller.buffer.selection_anchor == controller.buffer.cursor
    assert controller.handle_key("{ESC}").status == "noop"


def test_normal_mode_x_deletes_under_cursor() -> None:
    controller = make_controller("abc")

    press(controller, "x")

    assert list(controller.buffer.lines) == ["bc"]


def test_switching_to_current_mode_is_noop() -> None:
    controller = make_controller()
    controller.modes.switch_mode(EditorMode.NORMAL)

    assert controller.modes.switch_mode(EditorMode.NORMAL).status == "noop"


def test_snapshot_reflects_last_key() -> None:
    controller = make_controller()

    press(controller, "i", "o", "k")
    view = controller.snapshot()

    assert view.text == "ok"
    assert view.mode is EditorMode.INSERT
    assert view.cursor == (0, 2)


def test_delete_outside_visual_mode_keeps_typed_text() -> None:
    controller = make_controller()

    press(controller, "i", "h", "e", "y", "{ESC}")
    assert controller.buffer.selection_anchor != controller.buffer.cursor

    result = controller.handle_key("d")

    assert result.status == "noop"
    assert list(controller.buffer.lines) == ["hey"]
