"""Implementation for the ``vibe create-project`` command."""

from __future__ import annotations

from pathlib import Path

from .. import ghq
from ..io import die, say
from ..models import ProjectConfig, ProjectRepoConfig
from ..project import (
    GITIGNORE_FILENAME,
    PROJECT_CONFIG_FILENAME,
    repo_short_name,
    update_gitignore,
    write_project_config,
)


def create_project_config(args: object) -> None:
    """Write a ``.vibe-project.json`` for repositories picked from ghq.

    Args:
        args: CLI argument object; the command takes no options.

    Example:
        $ vibe create-project
    """
    del args
    ghq_root = ghq.ghq_root()
    if ghq_root is None:
        die("ghq is not installed")

    selected = ghq.select_repos(ghq.list_repos(), label="Select repos for project")
    if not selected:
        say("No repositories selected.")
        return

    repos: dict[str, ProjectRepoConfig] = {}
    for repo in selected:
        say(f"\nConfiguring {repo_short_name(repo)}...")
        branch = ghq.select_branch(ghq_root / repo)
        repos[repo] = ProjectRepoConfig(default_target=branch)

    project_dir = Path.cwd()
    write_project_config(project_dir, ProjectConfig(repos=repos))
    update_gitignore(
        project_dir / GITIGNORE_FILENAME, [repo_short_name(repo) for repo in selected]
    )

    say(f"\nCreated {PROJECT_CONFIG_FILENAME} with {len(selected)} repositories.")
    say("Edit the file to configure setupCommand for each repo.")
