"""Structured logging and timing spans for the editor, backed by telelog.

``telelog.get_logger`` installs the handlers on the package logger
(``saucepan``); every other logger handed out here is a child of it and
propagates. Settings come from ``SAUCEPAN_*`` environment variables unless a
preset is chosen with ``configure(preset=...)``.

``get_logger(name)`` -- child logger of the package logger
``record_event(name, ...)`` -- one ``event::<name> key=value`` line
``span(name, ...)`` -- time a block and log it, failures included
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

import telelog

ENV_PREFIX = "SAUCEPAN_"
ROOT_LOGGER = "saucepan"
PRESETS = ("quiet",)

_configured: Optional[str] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


def configure(*, preset: Optional[str] = None) -> None:
    """(Re)install handlers on the package logger.

    Without a preset the level, log file and console switch come from
    ``SAUCEPAN_LOG_LEVEL``, ``SAUCEPAN_LOG_FILE`` and
    ``SAUCEPAN_DISABLE_CONSOLE``. The ``quiet`` preset logs warnings and
    above, never to the console; Textual owns the terminal.
    """

    global _configured
    if preset is not None and preset.lower() not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'.")

    quiet = preset is not None
    level = "WARNING" if quiet else (_env("LOG_LEVEL") or "INFO")
    terminal = False if quiet else not _env_flag("DISABLE_CONSOLE", False)
    log_path = _env("LOG_FILE")

    root = telelog.get_logger(
        logging.getLogger(ROOT_LOGGER),
        name=ROOT_LOGGER,
        level=level,
        log_path=log_path,
        terminal=terminal,
    )
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    root.propagate = False
    _configured = preset or "env"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if _configured is None:
        configure()
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def _level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return value


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    get_logger(logger_name).log(
        _level(level), "event::%s %s", name, _format_pairs(data or {})
    )


@dataclass
class SpanHandle:
    """Yielded by ``span`` so the block can attach metadata or flag failure."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fields(self, **extra: Any) -> str:
        payload: Dict[str, Any] = dict(self.metadata)
        if self.component_name:
            payload["component"] = self.component_name
        payload.update(extra)
        return _format_pairs(payload)

    def fail(self, reason: str) -> None:
        self.logger.error("span::fail %s %s", self.span_name, self.fields(reason=reason))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a block under ``name`` and log it at debug level on exit.

    ``component=True`` tags the line with the span name as component; a
    string picks a different component name. Exceptions are logged through
    ``SpanHandle.fail`` and re-raised.
    """

    component_name = name if component is True else component or None
    handle = SpanHandle(
        logger=get_logger(logger_name),
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        elapsed = (time.perf_counter() - started) * 1000
        if handle.logger.isEnabledFor(logging.DEBUG):
            handle.logger.debug(
                "span::%s %s", name, handle.fields(elapsed_ms=f"{elapsed:.3f}")
            )


__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
