"""Status line formatting for the agent's prompt footer."""

from __future__ import annotations

import math


def replace_tilde(path: str | None, home: str) -> str:
    """Abbreviate ``home`` to ``~`` at the start of ``path``.

    Example:
        >>> replace_tilde("/home/me/src", "/home/me")
        '~/src'
        >>> replace_tilde(None, "/home/me")
        ''
    """
    if not path:
        return ""
    if home and path.startswith(home):
        return "~" + path[len(home) :]
    return path


def format_status(
    model: str | None, cwd: str, branch: str, used_percentage: float | None
) -> str:
    """Join the status parts; branch and context usage are optional.

    Example:
        >>> format_status("Opus", "~/src", "main", 42.4)
        '🤖 Opus | 📁 ~/src | 🌿 main | 💭 42%'
    """
    parts = [f"🤖 {model or ''}", f"📁 {cwd}"]
    if branch:
        parts.append(f"🌿 {branch}")
    if used_percentage is not None:
        parts.append(f"💭 {math.floor(used_percentage + 0.5)}%")
    return " | ".join(parts)
