"""Key binding and color configuration loaded from TOML."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, fields
from importlib import resources
from typing import Any, Dict, Mapping, MutableMapping, Optional

import toml

from saucepan.runtime import telemetry

ENV_CONFIG = "SAUCEPAN_CONFIG"
HEX_COLOR = re.compile(r"^#?(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class ConfigError(ValueError):
    """Raised when a configuration file is unreadable or malformed."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source


@dataclass(frozen=True, slots=True)
class KeyBindings:
    """Canonical key string per logical binding name."""

    up: str
    down: str
    left: str
    right: str
    insert: str
    normal: str
    command: str
    visual: str = "v"
    visual_line: str = "V"
    visual_block: str = "^v"
    delete_selection: str = "d"
    delete: str = "x"


@dataclass(frozen=True, slots=True)
class WindowColors:
    background: str
    cursor: str
    highlight: str


@dataclass(frozen=True, slots=True)
class TextColors:
    unselected: str
    selected: str


@dataclass(frozen=True, slots=True)
class EditorColors:
    window: WindowColors
    text: TextColors


@dataclass(frozen=True, slots=True)
class Colors:
    editor: EditorColors


@dataclass(frozen=True, slots=True)
class Config:
    bindings: KeyBindings
    colors: Colors


def load_config(path: Optional[str] = None) -> Config:
    """Load the packaged defaults, merged with ``path`` or ``$SAUCEPAN_CONFIG``."""

    data = _load_defaults()
    user_path = path or os.environ.get(ENV_CONFIG)
    if user_path:
        data = merge_config(data, _read_file(user_path))
        telemetry.record_event("config.loaded", data={"path": user_path})
    return parse_config(data, source=user_path)


def parse_config(data: Mapping[str, Any], *, source: str | None = None) -> Config:
    bindings = _build(KeyBindings, _section(data, "bindings", source), "bindings", source)
    for name, value in _field_values(bindings).items():
        if not value:
            raise ConfigError(f"binding '{name}' cannot be empty", source=source)

    colors = _section(data, "colors", source)
    editor = _section(colors, "editor", source, prefix="colors")
    window = _build(
        WindowColors,
        _section(editor, "window", source, prefix="colors.editor"),
        "colors.editor.window",
        source,
    )
    text = _build(
        TextColors,
        _section(editor, "text", source, prefix="colors.editor"),
        "colors.editor.text",
        source,
    )
    for section, group in (("window", window), ("text", text)):
        for name, value in _field_values(group).items():
            if not HEX_COLOR.match(value):
                raise ConfigError(
                    f"colors.editor.{section}.{name} is not a hex color: {value!r}",
                    source=source,
                )

    return Config(
        bindings=bindings,
        colors=Colors(editor=EditorColors(window=window, text=text)),
    )


def merge_config(
    base: Mapping[str, Any], override: Mapping[str, Any]
) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""

    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config(current, value)
        else:
            merged[key] = value
    return merged


def normalize_hex(color: str) -> str:
    """Return ``#rrggbb`` for any accepted hex notation, dropping alpha."""

    digits = color.lstrip("#")
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits[:3])
    return f"#{digits[:6].lower()}"


def _load_defaults() -> Dict[str, Any]:
    text = resources.files("saucepan").joinpath("assets/config.toml").read_text(
        encoding="utf-8"
    )
    return toml.loads(text)


def _read_file(path: str) -> MutableMapping[str, Any]:
    try:
        return toml.load(path)
    except OSError as exc:
        raise ConfigError(f"cannot read config ({exc})", source=path) from exc
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"invalid TOML ({exc})", source=path) from exc


def _section(
    data: Mapping[str, Any], name: str, source: str | None, *, prefix: str = ""
) -> Mapping[str, Any]:
    label = f"{prefix}.{name}" if prefix else name
    value = data.get(name)
    if not isinstance(value, Mapping):
        raise ConfigError(f"missing table [{label}]", source=source)
    return value


def _build(cls: type, section: Mapping[str, Any], label: str, source: str | None):
    known = {item.name for item in fields(cls)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"unknown keys in [{label}]: {', '.join(unknown)}", source=source)
    for name, value in section.items():
        if not isinstance(value, str):
            raise ConfigError(f"{label}.{name} must be a string", source=source)
    try:
        return cls(**section)
    except TypeError as exc:
        raise ConfigError(f"incomplete [{label}] ({exc})", source=source) from exc


def _field_values(instance: object) -> Dict[str, str]:
    return {item.name: getattr(instance, item.name) for item in fields(instance)}


__all__ = [
    "Colors",
    "Config",
    "ConfigError",
    "EditorColors",
    "KeyBindings",
    "TextColors",
    "WindowColors",
    "load_config",
    "merge_config",
    "normalize_hex",
    "parse_config",
]
