"""Trust registration for new task workspaces.

The agent keeps a per-user JSON registry (``~/.claude.json``) of trusted
project paths. vibe only ever adds missing entries to it. The file is read
fresh on every call so concurrent edits by the agent are not overwritten
with stale data.
"""

from __future__ import annotations

import json
from pathlib import Path

from . import exec as exec_util
from . import log
from .io import warn

REGISTRY_FILENAME = ".claude.json"
TRUSTED_ENTRY = {"hasTrustDialogAccepted": True}


def registry_path() -> Path:
    return Path.home() / REGISTRY_FILENAME


def _read_registry(path: Path) -> dict | None:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def register_workspace(workspace_path: Path, path: Path | None = None) -> bool:
    """Mark ``workspace_path`` as trusted in the registry.

    Adds ``projects[<path>]`` when absent and appends to an existing
    ``workspaces`` list when the path is not in it yet. A missing or
    malformed registry is left alone.

    Returns:
        ``True`` when the registry file was rewritten.
    """
    target = path or registry_path()
    payload = _read_registry(target)
    if payload is None:
        log.debug(f"trust registry unavailable at {target}; skipping")
        return False

    key = str(workspace_path)
    changed = False
    projects = payload.get("projects")
    if projects is None:
        projects = {}
        payload["projects"] = projects
    if isinstance(projects, dict) and key not in projects:
        projects[key] = dict(TRUSTED_ENTRY)
        changed = True
    workspaces = payload.get("workspaces")
    if isinstance(workspaces, list) and key not in workspaces:
        workspaces.append(key)
        changed = True

    if not changed:
        return False
    try:
        target.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        warn(f"failed to update {target}: {exc}")
        return False
    return True


def allow_direnv(workspace_path: Path) -> None:
    """Authorize the workspace's ``.envrc``; the outcome is ignored."""
    result = exec_util.try_run_command(["direnv", "allow", str(workspace_path)])
    if result is None:
        log.debug("direnv not installed; skipping direnv allow")
