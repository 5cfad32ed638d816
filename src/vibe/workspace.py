"""Task workspace queries shared by the vibe commands."""

from __future__ import annotations

import concurrent.futures
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence, TypeVar

from . import git, paths

FILES_TO_COPY = (".envrc", ".claude/settings.local.json")
MAX_LOOKUP_WORKERS = 8

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class TaskInfo:
    name: str
    path: Path
    branch: str


@dataclass(frozen=True)
class WorktreeMatch:
    repo: str
    path: Path


def _map_concurrently(
    func: Callable[[ItemT], ResultT], items: Sequence[ItemT]
) -> list[ResultT]:
    max_workers = min(MAX_LOOKUP_WORKERS, len(items))
    if max_workers <= 1:
        return [func(item) for item in items]
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(func, items))


def _branch_or_empty(path: Path) -> str:
    try:
        return git.git_current_branch(path)
    except (OSError, ValueError):
        return ""


def _expand_patterns(source_root: Path, patterns: Sequence[str]) -> list[Path]:
    expanded: list[Path] = []
    for pattern in patterns:
        if Path(pattern).is_absolute() or ".." in Path(pattern).parts:
            continue
        if any(char in pattern for char in "*?["):
            matches = sorted(source_root.glob(pattern))
        else:
            matches = [source_root / pattern]
        for match in matches:
            relative = match.relative_to(source_root)
            if relative not in expanded:
                expanded.append(relative)
    return expanded


def copy_aux_files(
    source_root: Path, workspace_path: Path, files: Sequence[str] = FILES_TO_COPY
) -> list[Path]:
    """Copy optional convenience files from the source checkout.

    Entries may be glob patterns relative to ``source_root``. Files absent at
    the source are skipped.

    Returns:
        Destination paths that were written.
    """
    copied: list[Path] = []
    for relative in _expand_patterns(source_root, files):
        source = source_root / relative
        if not source.is_file():
            continue
        destination = workspace_path / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        copied.append(destination)
    return copied


def resolve_task_branches(root: Path, names: Sequence[str]) -> list[TaskInfo]:
    """Look up each task's current branch; order follows ``names``."""

    def build(name: str) -> TaskInfo:
        path = root / name
        return TaskInfo(name=name, path=path, branch=_branch_or_empty(path))

    return _map_concurrently(build, list(names))


def collect_worktrees(home: Path | None = None) -> list[WorktreeMatch]:
    """Return every ``<repo>/<task>`` directory under the workspaces home."""
    base = home if home is not None else paths.workspaces_home()
    entries: list[WorktreeMatch] = []
    for repo in paths.list_tasks(base):
        repo_dir = base / repo
        try:
            tasks = paths.list_tasks(repo_dir)
        except OSError:
            continue
        entries.extend(WorktreeMatch(repo=repo, path=repo_dir / task) for task in tasks)
    return entries


def find_branch_worktrees(branch: str, home: Path | None = None) -> list[WorktreeMatch]:
    """Return worktrees across all repositories checked out on ``branch``.

    Sibling worktrees of a multi-repository task share a branch name; this
    scan is how they are found from any one of them.
    """
    if not branch:
        return []
    candidates = collect_worktrees(home)
    branches = _map_concurrently(lambda item: _branch_or_empty(item.path), candidates)
    return [item for item, found in zip(candidates, branches) if found == branch]
