"""Implementation for the ``vibe statusline`` command."""

from __future__ import annotations

import sys
from pathlib import Path

from pydantic import ValidationError

from .. import git
from ..io import die, say
from ..models import StatusInput
from ..statusline import format_status, replace_tilde


def print_statusline(args: object) -> None:
    """Read the agent's JSON status payload on stdin and print one line."""
    del args
    raw = sys.stdin.read()
    if not raw.strip():
        return
    try:
        data = StatusInput.model_validate_json(raw)
    except ValidationError:
        die("failed to parse JSON input")

    current_dir = data.workspace.current_dir
    branch = git.git_current_branch(Path(current_dir) if current_dir else None)
    say(
        format_status(
            data.model.display_name,
            replace_tilde(current_dir, str(Path.home())),
            branch,
            data.context_window.used_percentage,
        )
    )
