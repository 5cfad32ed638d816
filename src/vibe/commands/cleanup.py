"""Implementation for the ``vibe cleanup`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .. import git, log, paths, workspace
from ..io import confirm, say, select_many, warn


def available_tasks(tasks: Sequence[str], current: str | None) -> list[str]:
    """Return the tasks eligible for deletion.

    Example:
        >>> available_tasks(["a", "b", "c"], "b")
        ['a', 'c']
    """
    return [task for task in tasks if task != current]


def detect_current_task(cwd: Path, root: Path) -> str | None:
    current = paths.current_task(cwd, root)
    if current is None and root.exists():
        current = paths.current_task(cwd, root.resolve())
    return current


def confirm_deletion(tasks: Sequence[workspace.TaskInfo]) -> bool:
    """Show the whole batch and ask once whether to delete it.

    Example:
        The following tasks will be deleted:
          - fix-login (branch: feature/fix-login)
        Are you sure? [y/N]:
    """
    say("The following tasks will be deleted:")
    for task in tasks:
        say(f"  - {task.name} (branch: {task.branch or '-'})")
    return confirm("Are you sure?", default=False)


def delete_tasks(repo_root: Path, tasks: Sequence[workspace.TaskInfo]) -> list[str]:
    """Remove each task's worktree and branch, continuing past failures.

    Returns:
        Names of tasks where some step failed.
    """
    failed: list[str] = []
    for task in tasks:
        say(f"Removing {task.name}...")
        ok = True
        if not git.remove_worktree(repo_root, task.path):
            warn(f"failed to remove worktree {task.path}")
            ok = False
        if task.branch and not git.delete_branch(repo_root, task.branch):
            warn(f"failed to delete branch {task.branch}")
            ok = False
        if ok:
            log.success(f"Removed {task.name}")
        else:
            failed.append(task.name)
    git.prune_worktrees(repo_root)
    return failed


def cleanup_tasks(args: object) -> None:
    """Interactively delete finished task worktrees for the current repo.

    Args:
        args: CLI argument object; the command takes no options.

    Example:
        $ vibe cleanup
    """
    del args
    cwd = Path.cwd()
    repo_root = git.resolve_repo_root(cwd)
    root = paths.workspace_root(git.repo_name(repo_root))

    all_tasks = paths.list_tasks(root)
    if not all_tasks:
        say("No tasks found")
        return

    current = detect_current_task(cwd, root)
    if current:
        log.debug(f"excluding current task {current}")
    candidates = available_tasks(all_tasks, current)
    if not candidates:
        say("No tasks available for cleanup (only current task exists)")
        return

    picked = select_many("Select tasks to delete", candidates)
    selected = [name for name in picked if name in candidates]
    if not selected:
        say("No tasks selected")
        return

    tasks = workspace.resolve_task_branches(root, selected)
    if not confirm_deletion(tasks):
        say("Aborted")
        return

    failed = delete_tasks(repo_root, tasks)
    if failed:
        warn(f"cleanup incomplete for: {', '.join(failed)}")
    say("Done")
