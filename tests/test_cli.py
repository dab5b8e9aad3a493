from __future__ import annotations

import pytest

from saucepan.adapters.textual.app import QUIT_COMMANDS, create_editor, main
from saucepan.config import ENV_CONFIG, load_config


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_CONFIG, raising=False)


def test_create_editor_loads_file(tmp_path) -> None:
    path = tmp_path / "draft.txt"
    path.write_text("first\nsecond\n", encoding="utf-8")

    controller = create_editor(str(path), load_config())

    assert list(controller.buffer.lines) == ["first", "second", ""]
    assert controller.buffer.file_name == str(path)
    assert controller.registry.frozen


def test_create_editor_without_path_starts_empty() -> None:
    controller = create_editor(None, load_config())

    assert list(controller.buffer.lines) == [""]


def test_unreadable_path_is_fatal(tmp_path) -> None:
    missing = tmp_path / "nope.txt"

    with pytest.raises(SystemExit) as excinfo:
        main([str(missing)])

    assert str(excinfo.value) == f"Failed to launch Saucepan from path: {missing}"


def test_bad_config_is_fatal(tmp_path) -> None:
    config = tmp_path / "bad.toml"
    config.write_text('[bindings]\nup = ""\n', encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config)])

    assert "binding 'up' cannot be empty" in str(excinfo.value)


def test_conflicting_bindings_are_fatal(tmp_path) -> None:
    config = tmp_path / "clash.toml"
    config.write_text('[bindings]\ndown = "k"\n', encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config)])

    assert "conflicts" in str(excinfo.value)


def test_quit_commands() -> None:
    assert {"q", "quit"} <= QUIT_COMMANDS
    assert "w" not in QUIT_COMMANDS
