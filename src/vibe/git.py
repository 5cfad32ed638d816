"""Git helper functions used by the vibe CLI."""

from __future__ import annotations

import re
from pathlib import Path

from . import exec as exec_util
from . import log
from .io import die

FALLBACK_DEFAULT_BRANCH = "main"
_ORIGIN_HEAD_PREFIX = "refs/remotes/origin/"


def _run_git_capture(args: list[str]) -> exec_util.CommandResult | None:
    return exec_util.try_run_command(["git", *args])


def _run_git_or_die(args: list[str]) -> exec_util.CommandResult:
    result = _run_git_capture(args)
    if result is None:
        die("missing required command: git")
    return result


def git_repo_root(start: Path) -> Path | None:
    """Return the git repository root for a starting path.

    Args:
        start: Directory to search from.

    Returns:
        Repo root path or ``None`` if not inside a git repository.
    """
    result = _run_git_or_die(["-C", str(start), "rev-parse", "--show-toplevel"])
    if not result.ok:
        return None
    resolved = result.stdout.strip()
    if not resolved:
        return None
    return Path(resolved)


def resolve_repo_root(start: Path) -> Path:
    """Return the repository root containing ``start`` or exit."""
    root = git_repo_root(start)
    if root is None:
        die("not a git repository")
    return root


def git_common_dir(repo_dir: Path) -> Path | None:
    """Return the absolute shared ``.git`` directory for a repository.

    Linked worktrees report the main checkout's ``.git`` here, which is what
    makes the repository name stable across worktrees.
    """
    result = _run_git_capture(["-C", str(repo_dir), "rev-parse", "--git-common-dir"])
    if result is None or not result.ok:
        return None
    raw = result.stdout.strip()
    if not raw:
        return None
    common_dir = Path(raw)
    if not common_dir.is_absolute():
        common_dir = repo_dir / common_dir
    return common_dir


def git_origin_url(repo_dir: Path) -> str | None:
    """Return the ``origin`` remote URL, or ``None`` if missing."""
    result = _run_git_capture(["-C", str(repo_dir), "remote", "get-url", "origin"])
    if result is None or not result.ok:
        return None
    return result.stdout.strip() or None


def repo_name_from_url(url: str) -> str | None:
    """Return the repository name at the end of a remote URL.

    Example:
        >>> repo_name_from_url("git@github.com:org/widgets.git")
        'widgets'
        >>> repo_name_from_url("https://example.com/org/tools")
        'tools'
    """
    match = re.search(r"[/:]([^/:]+?)(?:\.git)?/?$", url.strip())
    if not match:
        return None
    return match.group(1) or None


def repo_name(repo_root: Path) -> str:
    """Return the stable name used for a repository's workspace root.

    Resolution order: parent folder of the shared git directory, then the
    ``origin`` URL, then the last segment of ``repo_root``.
    """
    common_dir = git_common_dir(repo_root)
    if common_dir is not None:
        name = common_dir.resolve().parent.name
        if name:
            return name
    origin = git_origin_url(repo_root)
    if origin:
        name = repo_name_from_url(origin)
        if name:
            return name
    return repo_root.name or "unknown"


def git_ref_exists(repo_dir: Path, ref: str) -> bool:
    """Return whether ``ref`` resolves to a commit in ``repo_dir``."""
    result = _run_git_capture(
        ["-C", str(repo_dir), "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"]
    )
    return result is not None and result.ok


def git_default_branch(repo_dir: Path) -> str:
    """Return the branch ``origin/HEAD`` points at, else ``main``."""
    result = _run_git_capture(
        ["-C", str(repo_dir), "symbolic-ref", "refs/remotes/origin/HEAD"]
    )
    if result is not None and result.ok:
        ref = result.stdout.strip()
        if ref.startswith(_ORIGIN_HEAD_PREFIX):
            branch = ref[len(_ORIGIN_HEAD_PREFIX) :].strip()
            if branch:
                return branch
    return FALLBACK_DEFAULT_BRANCH


def git_current_branch(repo_dir: Path | None) -> str:
    """Return the checked-out branch name, or ``""`` when there is none.

    Undefined paths, non-repositories, detached heads and a missing ``git``
    all yield ``""``.
    """
    if repo_dir is None or not Path(repo_dir).is_dir():
        return ""
    result = _run_git_capture(["-C", str(repo_dir), "branch", "--show-current"])
    if result is None or not result.ok:
        return ""
    return result.stdout.strip()


def git_is_repo(repo_dir: Path) -> bool:
    """Return whether ``repo_dir`` is inside a git work tree."""
    if not repo_dir.is_dir():
        return False
    result = _run_git_capture(
        ["-C", str(repo_dir), "rev-parse", "--is-inside-work-tree"]
    )
    return result is not None and result.ok and result.stdout.strip() == "true"


def list_branches(repo_dir: Path) -> list[str]:
    """Return local and remote-tracking branch names, excluding ``HEAD``."""
    result = _run_git_capture(
        ["-C", str(repo_dir), "branch", "-a", "--format=%(refname:short)"]
    )
    if result is None or not result.ok:
        return []
    return [
        line.strip()
        for line in result.stdout.splitlines()
        if line.strip() and "HEAD" not in line
    ]


def create_worktree(repo_root: Path, path: Path, branch: str, base: str) -> None:
    """Create a worktree at ``path`` on a new ``branch`` forked from ``base``.

    Exits when the path or branch already exist, the base does not resolve,
    or git itself fails. Nothing else runs for the task after that.
    """
    if path.exists():
        die(f"worktree path already exists: {path}")
    if git_ref_exists(repo_root, f"refs/heads/{branch}"):
        die(f"branch already exists: {branch}")
    if not git_ref_exists(repo_root, base):
        die(f"base branch not found: {base}")
    log.debug(f"git worktree add -b {branch} {path} {base}")
    request = exec_util.CommandRequest(
        argv=(
            "git",
            "-C",
            str(repo_root),
            "worktree",
            "add",
            "-b",
            branch,
            str(path),
            base,
        )
    )
    try:
        exec_util.run_checked(request)
    except exec_util.CommandExecutionError as exc:
        die(f"failed to create worktree: {exc}")


def remove_worktree(repo_root: Path, path: Path) -> bool:
    """Force-remove a worktree; uncommitted changes do not block removal."""
    result = _run_git_capture(
        ["-C", str(repo_root), "worktree", "remove", "--force", str(path)]
    )
    return result is not None and result.ok


def delete_branch(repo_root: Path, branch: str) -> bool:
    """Force-delete a local branch."""
    result = _run_git_capture(["-C", str(repo_root), "branch", "-D", branch])
    return result is not None and result.ok


def prune_worktrees(repo_root: Path) -> bool:
    """Drop bookkeeping for worktrees whose directories are gone."""
    result = _run_git_capture(["-C", str(repo_root), "worktree", "prune"])
    return result is not None and result.ok
