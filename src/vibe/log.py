"""Leveled terminal logging for vibe commands.

Messages at ``warning`` and above go to stderr; everything else goes to
stdout. The active level comes from ``VIBE_LOG_LEVEL`` unless the CLI sets
one explicitly with ``--log-level``.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LOG_LEVEL_NAMES = tuple(level.name.lower() for level in LogLevel)

_ALIASES = {"warn": LogLevel.WARNING}
_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
_DEFAULT_LEVEL = LogLevel.INFO

_active_level: LogLevel | None = None
_force_no_color = False


def parse_level(value: str | None) -> LogLevel:
    """Map a level name to a ``LogLevel``; unknown names fall back to info.

    Example:
        >>> parse_level(" Debug ")
        <LogLevel.DEBUG: 20>
        >>> parse_level("loud")
        <LogLevel.INFO: 30>
    """
    name = (value or "").strip().lower()
    if not name:
        return _DEFAULT_LEVEL
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return LogLevel[name.upper()]
    except KeyError:
        return _DEFAULT_LEVEL


def active_level() -> LogLevel:
    global _active_level
    if _active_level is None:
        _active_level = parse_level(os.environ.get("VIBE_LOG_LEVEL"))
    return _active_level


def set_level(value: str | None) -> None:
    """Set the active log level."""
    global _active_level
    _active_level = parse_level(value)


def set_no_color(value: bool) -> None:
    """Disable colour output for the rest of the process when ``value``."""
    global _force_no_color
    _force_no_color = bool(value)


def is_enabled(level: LogLevel) -> bool:
    return level >= active_level()


def _color_disabled() -> bool:
    if _force_no_color:
        return True
    return bool(os.environ.get("NO_COLOR") or os.environ.get("VIBE_NO_COLOR"))


def _console(*, stderr: bool) -> Console:
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=_color_disabled(),
    )


def emit(level: LogLevel, message: str, *, style: str | None = None) -> None:
    if not is_enabled(level):
        return
    text = Text(message, style=style or _STYLES.get(level, ""))
    _console(stderr=level >= LogLevel.WARNING).print(text)


def trace(message: str) -> None:
    emit(LogLevel.TRACE, message)


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def info(message: str) -> None:
    emit(LogLevel.INFO, message)


def success(message: str) -> None:
    emit(LogLevel.SUCCESS, message)
