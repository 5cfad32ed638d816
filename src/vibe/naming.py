"""Task name canonicalization."""

from __future__ import annotations

import re

DEFAULT_BRANCH_PREFIX = "feature/"

_UNSAFE_RUN = re.compile(r"[^A-Za-z0-9_-]+")


def sanitize_task_name(raw: str) -> str:
    """Turn arbitrary user text into a filesystem- and branch-safe task name.

    Every run of characters outside ``[A-Za-z0-9_-]`` collapses to a single
    ``-`` and leading/trailing dashes are dropped. The result may be empty;
    callers must reject that before touching the filesystem.

    Example:
        >>> sanitize_task_name("Fix Bug #42")
        'Fix-Bug-42'
        >>> sanitize_task_name("   ")
        ''
    """
    collapsed = _UNSAFE_RUN.sub("-", raw.strip())
    return collapsed.strip("-")


def task_branch(task_name: str, prefix: str = DEFAULT_BRANCH_PREFIX) -> str:
    """Return the branch bound to ``task_name``.

    Example:
        >>> task_branch("Fix-Bug-42")
        'feature/Fix-Bug-42'
    """
    return f"{prefix}{task_name}"
