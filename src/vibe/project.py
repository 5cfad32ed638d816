"""Project configuration file helpers.

A project is a plain directory holding a ``.vibe-project.json`` that lists
the repositories taking part in multi-repository tasks.

Example:
    >>> from pathlib import Path
    >>> project_config_path(Path("/work/app")).name
    '.vibe-project.json'
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from .io import die
from .models import ProjectConfig

PROJECT_CONFIG_FILENAME = ".vibe-project.json"
GITIGNORE_FILENAME = ".gitignore"


def project_config_path(project_dir: Path) -> Path:
    return project_dir / PROJECT_CONFIG_FILENAME


def load_project_config(project_dir: Path) -> ProjectConfig | None:
    """Load ``.vibe-project.json`` from ``project_dir``.

    Returns:
        The parsed config, or ``None`` when the file does not exist. An
        unreadable or invalid file exits with an error.
    """
    path = project_config_path(project_dir)
    if not path.exists():
        return None
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        die(f"failed to read {path}: {exc}")
    try:
        return ProjectConfig.model_validate(payload)
    except ValidationError as exc:
        die(f"invalid project config at {path}: {exc}")


def write_project_config(project_dir: Path, config: ProjectConfig) -> Path:
    """Write ``config`` as ``.vibe-project.json`` and return its path."""
    path = project_config_path(project_dir)
    payload = config.model_dump(
        by_alias=True, exclude_none=True, exclude_defaults=True
    )
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path


def repo_short_name(repo: str) -> str:
    """Return the last segment of a ``ghq`` repository identifier.

    Example:
        >>> repo_short_name("github.com/org/api")
        'api'
    """
    return repo.rstrip("/").rsplit("/", 1)[-1] or repo


def update_gitignore(gitignore_path: Path, repo_names: list[str]) -> list[str]:
    """Append ``/<name>`` ignore lines for repos not already listed.

    Returns:
        The lines that were added.
    """
    existing = gitignore_path.read_text(encoding="utf-8") if gitignore_path.exists() else ""
    present = set(existing.split("\n"))
    added: list[str] = []
    for name in repo_names:
        line = f"/{name}"
        if line in present or line in added:
            continue
        added.append(line)
    if not added:
        return []
    separator = "\n" if existing and not existing.endswith("\n") else ""
    gitignore_path.write_text(
        existing + separator + "\n".join(added) + "\n", encoding="utf-8"
    )
    return added
