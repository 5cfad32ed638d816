"""Implementation for the ``vibe diff`` command."""

from __future__ import annotations

import os
import shlex

from .. import exec as exec_util
from ..agent import BASE_BRANCH_ENV
from ..io import die


def diff_command_line(base_branch: str) -> str:
    """Return the shell pipeline that reviews the task's changes.

    Example:
        >>> diff_command_line("main")
        'git diff main...HEAD | npx -y difit --include-untracked'
    """
    return f"git diff {shlex.quote(base_branch)}...HEAD | npx -y difit --include-untracked"


def show_diff(args: object) -> None:
    """Review changes since the task's base branch.

    Requires ``VIBE_BASE_BRANCH``, which ``vibe new`` sets for the agent
    session it launches.
    """
    del args
    base_branch = os.environ.get(BASE_BRANCH_ENV, "").strip()
    if not base_branch:
        die(f"{BASE_BRANCH_ENV} is not set. Run this command from a vibe worktree.")
    returncode = exec_util.run_shell(diff_command_line(base_branch))
    if returncode is None or returncode != 0:
        die("diff command failed")
