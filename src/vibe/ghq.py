"""Helpers for the ``ghq`` repository index.

``ghq`` keeps every cloned repository under one root as
``<root>/<host>/<owner>/<name>``; vibe uses it as the catalogue of
repositories that can join a multi-repository task.
"""

from __future__ import annotations

import concurrent.futures
from pathlib import Path

from . import exec as exec_util
from . import git, log
from .io import select, select_many
from .project import repo_short_name

REMOTE_PREFIX = "origin/"


def ghq_root() -> Path | None:
    """Return ``ghq root``, or ``None`` when ghq is unavailable."""
    result = exec_util.try_run_command(["ghq", "root"])
    if result is None or not result.ok:
        return None
    raw = result.stdout.strip()
    return Path(raw) if raw else None


def list_repos() -> list[str]:
    """Return every repository identifier ``ghq list`` knows about."""
    result = exec_util.try_run_command(["ghq", "list"])
    if result is None or not result.ok:
        return []
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def repo_path(repo: str, root: Path | None = None) -> Path | None:
    """Resolve a ``ghq`` identifier to its checkout path."""
    base = root if root is not None else ghq_root()
    if base is None:
        return None
    return base / repo


def exclude_current_repo(repos: list[str], current_repo: str | None) -> list[str]:
    """Drop the repository the caller is already working in.

    Example:
        >>> exclude_current_repo(["github.com/o/api", "github.com/o/web"], "api")
        ['github.com/o/web']
    """
    if not current_repo:
        return list(repos)
    return [repo for repo in repos if repo_short_name(repo) != current_repo]


def select_repos(
    repos: list[str],
    current_repo: str | None = None,
    label: str = "Select additional repos",
) -> list[str]:
    """Let the user pick repositories, never offering ``current_repo``."""
    candidates = exclude_current_repo(repos, current_repo)
    if not candidates:
        return []
    return select_many(label, candidates)


def strip_remote_prefix(branch: str) -> str:
    """Return a branch name usable as a worktree base.

    Example:
        >>> strip_remote_prefix("origin/develop")
        'develop'
    """
    if branch.startswith(REMOTE_PREFIX):
        return branch[len(REMOTE_PREFIX) :]
    return branch


def select_branch(path: Path) -> str | None:
    """Let the user pick a base branch for the repository at ``path``.

    Returns ``main`` when the repository lists no branches and ``None``
    when the prompt is cancelled.
    """
    branches = git.list_branches(path)
    if not branches:
        return git.FALLBACK_DEFAULT_BRANCH
    selected = select(f"Select branch for {path.name}", branches)
    if not selected:
        return None
    return strip_remote_prefix(selected.strip())


def update_repos(repos: list[str]) -> None:
    """Run ``ghq get --update`` for each repository; outcomes are ignored."""
    if not repos:
        return
    log.info("Updating repositories...")

    def update(repo: str) -> None:
        result = exec_util.try_run_command(["ghq", "get", "--update", repo])
        if result is None or not result.ok:
            log.debug(f"ghq update failed for {repo}")

    with concurrent.futures.ThreadPoolExecutor(max_workers=min(8, len(repos))) as executor:
        list(executor.map(update, repos))
