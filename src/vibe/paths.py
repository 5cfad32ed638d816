"""Path helpers for locating task workspaces on disk.

Layout::

    ~/.vibe-workspaces/
        <repo-name>/          # workspace root, one per repository
            <task-name>/      # one git worktree per task
"""

from __future__ import annotations

from pathlib import Path

WORKSPACES_DIRNAME = ".vibe-workspaces"


def workspaces_home() -> Path:
    """Return the directory holding every repository's workspace root.

    Example:
        >>> workspaces_home().name == WORKSPACES_DIRNAME
        True
    """
    return Path.home() / WORKSPACES_DIRNAME


def workspace_root(repo_name: str) -> Path:
    """Return the workspace root for a repository.

    The directory is not created here; ``git worktree add`` creates it the
    first time a task is added.

    Example:
        >>> workspace_root("demo") == workspaces_home() / "demo"
        True
    """
    return workspaces_home() / repo_name


def task_path(repo_name: str, task_name: str) -> Path:
    """Return the worktree path for a task.

    Example:
        >>> task_path("demo", "fix-it").parts[-2:]
        ('demo', 'fix-it')
    """
    return workspace_root(repo_name) / task_name


def current_task(cwd: Path | str, root: Path | str) -> str | None:
    """Return the task containing ``cwd``, if any.

    Standing at ``root`` itself is not inside a task.

    Example:
        >>> current_task("/home/u/.ws/repo/task1/src", "/home/u/.ws/repo")
        'task1'
        >>> current_task("/home/u/.ws/repo", "/home/u/.ws/repo") is None
        True
    """
    cwd_path = Path(cwd)
    root_path = Path(root)
    try:
        relative = cwd_path.relative_to(root_path)
    except ValueError:
        return None
    if not relative.parts:
        return None
    return relative.parts[0]


def list_tasks(root: Path) -> list[str]:
    """Return the task directory names under a workspace root.

    Non-directory entries are ignored and a missing root yields an empty
    list.
    """
    if not root.is_dir():
        return []
    return sorted(entry.name for entry in root.iterdir() if entry.is_dir())
