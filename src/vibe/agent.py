"""Interactive agent session launch."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from . import exec as exec_util
from . import log
from .io import warn

AGENT_COMMAND = ("claude",)
ADD_DIR_FLAG = "--add-dir"
BASE_BRANCH_ENV = "VIBE_BASE_BRANCH"
ADDITIONAL_REPOS_ENV = "VIBE_ADDITIONAL_REPOS"


@dataclass(frozen=True)
class SiblingWorkspace:
    """A worktree created for the same task in another repository."""

    repo: str
    path: Path
    base_branch: str


def build_agent_command(
    task_name: str, additional_dirs: Sequence[Path] = ()
) -> list[str]:
    """Return the agent argv for a task session.

    Example:
        >>> build_agent_command("fix-it", [Path("/ws/api/fix-it")])
        ['claude', '--add-dir', '/ws/api/fix-it', '/rename fix-it']
    """
    cmd = list(AGENT_COMMAND)
    for directory in additional_dirs:
        cmd.extend([ADD_DIR_FLAG, str(directory)])
    cmd.append(f"/rename {task_name}")
    return cmd


def build_agent_env(
    base_branch: str,
    siblings: Sequence[SiblingWorkspace] = (),
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return the child environment carrying task context."""
    env = dict(os.environ if environ is None else environ)
    env[BASE_BRANCH_ENV] = base_branch
    if siblings:
        manifest = [
            {"repo": item.repo, "path": str(item.path), "baseBranch": item.base_branch}
            for item in siblings
        ]
        env[ADDITIONAL_REPOS_ENV] = json.dumps(manifest)
    else:
        env.pop(ADDITIONAL_REPOS_ENV, None)
    return env


def launch_agent(
    workspace_path: Path,
    task_name: str,
    base_branch: str,
    siblings: Sequence[SiblingWorkspace] = (),
) -> None:
    """Run the agent in the foreground inside ``workspace_path``.

    The exit status is not interpreted; a missing executable is a warning.
    """
    cmd = build_agent_command(task_name, [item.path for item in siblings])
    env = build_agent_env(base_branch, siblings)
    log.debug(f"launching agent: {' '.join(cmd)}")
    returncode = exec_util.run_interactive(cmd, cwd=workspace_path, env=env)
    if returncode is None:
        warn(f"{AGENT_COMMAND[0]} not installed; skipping agent session")
