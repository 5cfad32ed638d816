"""Implementation for the ``vibe repos`` command."""

from __future__ import annotations

from pathlib import Path

from .. import git, paths, workspace
from ..io import die, say


def list_task_repos(args: object) -> None:
    """Print every worktree sharing the current branch, one per line.

    Output lines are ``<repo>\\t<path>``.

    Example:
        $ vibe repos
        api	/home/me/.vibe-workspaces/api/fix-login
        web	/home/me/.vibe-workspaces/web/fix-login
    """
    del args
    branch = git.git_current_branch(Path.cwd())
    if not branch:
        die("not on a git branch")

    home = paths.workspaces_home()
    if not home.is_dir():
        say("No workspaces found")
        return

    matches = workspace.find_branch_worktrees(branch, home)
    if not matches:
        say(f"No repositories found for branch: {branch}")
        return
    for match in matches:
        say(f"{match.repo}\t{match.path}")
