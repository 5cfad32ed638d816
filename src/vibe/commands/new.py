"""Implementation for the ``vibe new`` command.

``vibe new`` turns a task description into a git worktree on a fresh
branch, optionally alongside matching worktrees in other repositories, and
then starts an agent session inside it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .. import agent, ghq, git, log, naming, paths, registry, workspace
from .. import exec as exec_util
from ..io import die, say, warn
from ..models import ProjectConfig, ProjectRepoConfig
from ..project import PROJECT_CONFIG_FILENAME, load_project_config, repo_short_name


@dataclass(frozen=True)
class RepoTarget:
    """A repository that will receive a worktree for the task."""

    repo: str
    root: Path
    name: str
    base: str
    setup_command: str | None = None
    copy_files: tuple[str, ...] = ()


@dataclass(frozen=True)
class CreatedWorkspace:
    target: RepoTarget
    path: Path
    branch: str


def find_project_dir(cwd: Path, repo_root: Path) -> Path | None:
    """Return the first directory holding ``.vibe-project.json``.

    Checks the current directory, the repository root and the directory
    containing the repository, in that order.
    """
    seen: set[Path] = set()
    for candidate in (cwd, repo_root, repo_root.parent):
        if candidate in seen:
            continue
        seen.add(candidate)
        if (candidate / PROJECT_CONFIG_FILENAME).is_file():
            return candidate
    return None


def _resolve_repo_path(repo: str, ghq_root: Path | None) -> Path | None:
    candidate = Path(repo).expanduser()
    if candidate.is_absolute():
        return candidate
    return ghq.repo_path(repo, ghq_root) if ghq_root is not None else None


def _additional_base(
    repo_path: Path, configured: str | None, *, interactive: bool
) -> str:
    if configured:
        return configured
    if interactive:
        chosen = ghq.select_branch(repo_path)
        if chosen:
            return chosen
    return git.git_default_branch(repo_path)


def _build_targets(
    repos: list[str],
    config: ProjectConfig | None,
    *,
    interactive: bool,
) -> list[RepoTarget]:
    ghq_root = ghq.ghq_root()
    targets: list[RepoTarget] = []
    for repo in repos:
        repo_path = _resolve_repo_path(repo, ghq_root)
        if repo_path is None or not git.git_is_repo(repo_path):
            warn(f"skipping {repo}: not a git repository")
            continue
        repo_config = config.repos.get(repo) if config else None
        base = _additional_base(
            repo_path,
            repo_config.default_target if repo_config else None,
            interactive=interactive,
        )
        targets.append(
            RepoTarget(
                repo=repo,
                root=repo_path,
                name=git.repo_name(repo_path),
                base=base,
                setup_command=repo_config.setup_command if repo_config else None,
                copy_files=tuple(repo_config.copy_files) if repo_config else (),
            )
        )
    return targets


def resolve_additional_repos(
    config: ProjectConfig | None, primary_name: str
) -> list[RepoTarget]:
    """Decide which other repositories join the task and their bases.

    A project config is used as-is; without one the user picks from the
    ``ghq`` index. The primary repository is never offered or included.
    """
    if config is not None:
        repos = ghq.exclude_current_repo(list(config.repos), primary_name)
        log.debug(f"additional repos from project config: {', '.join(repos) or '-'}")
        return _build_targets(repos, config, interactive=False)

    if ghq.ghq_root() is None:
        die("ghq is not installed; it is required for --multi without a project config")
    all_repos = ghq.list_repos()
    selected = ghq.select_repos(all_repos, primary_name)
    if not selected:
        warn("no additional repositories selected")
        return []
    ghq.update_repos(selected)
    return _build_targets(selected, None, interactive=True)


def _primary_repo_config(
    config: ProjectConfig | None, primary_name: str
) -> ProjectRepoConfig | None:
    if config is None:
        return None
    for repo, repo_config in config.repos.items():
        if repo_short_name(repo) == primary_name:
            return repo_config
    return None


def create_task_workspace(
    target: RepoTarget, task_name: str, prefix: str
) -> CreatedWorkspace:
    """Create the worktree for ``target`` and copy auxiliary files into it."""
    path = paths.task_path(target.name, task_name)
    branch = naming.task_branch(task_name, prefix)
    say(f"Creating worktree at {path}...")
    git.create_worktree(target.root, path, branch, target.base)
    files = (*workspace.FILES_TO_COPY, *target.copy_files)
    for copied in workspace.copy_aux_files(target.root, path, files):
        log.debug(f"copied {copied}")
    return CreatedWorkspace(target=target, path=path, branch=branch)


def run_setup_command(created: CreatedWorkspace) -> None:
    """Run the repository's configured setup command inside the worktree."""
    command = created.target.setup_command
    if not command:
        return
    say(f"Running setup for {created.target.name}: {command}")
    returncode = exec_util.run_shell(command, cwd=created.path)
    if returncode is None:
        warn(f"setup command could not be started for {created.target.name}")
    elif returncode != 0:
        warn(
            f"setup command for {created.target.name} exited with status {returncode}"
        )


def finalize_workspace(created: CreatedWorkspace) -> None:
    run_setup_command(created)
    registry.register_workspace(created.path)
    registry.allow_direnv(created.path)


def new_task(args: object) -> None:
    """Create task worktrees and start an agent session.

    Args:
        args: CLI argument object with ``task``, ``base``, ``prefix`` and
            ``multi`` fields.

    Example:
        $ vibe new "Fix Bug #42"
    """
    raw_task = str(getattr(args, "task", "") or "")
    task_name = naming.sanitize_task_name(raw_task)
    if not task_name:
        die(f"invalid task name: {raw_task!r}")
    prefix = getattr(args, "prefix", None)
    if prefix is None:
        prefix = naming.DEFAULT_BRANCH_PREFIX
    base_override = (getattr(args, "base", None) or "").strip() or None

    cwd = Path.cwd()
    repo_root = git.resolve_repo_root(cwd)
    primary_name = git.repo_name(repo_root)
    log.debug(f"primary repo {primary_name} at {repo_root}")

    config: ProjectConfig | None = None
    project_dir = find_project_dir(cwd, repo_root)
    if project_dir is not None:
        config = load_project_config(project_dir)
    additional: list[RepoTarget] = []
    if getattr(args, "multi", False):
        additional = resolve_additional_repos(config, primary_name)

    primary_config = _primary_repo_config(config, primary_name)
    primary = RepoTarget(
        repo=primary_name,
        root=repo_root,
        name=primary_name,
        base=base_override or git.git_default_branch(repo_root),
        setup_command=primary_config.setup_command if primary_config else None,
        copy_files=tuple(primary_config.copy_files) if primary_config else (),
    )
    primary_workspace = create_task_workspace(primary, task_name, prefix)

    siblings: list[CreatedWorkspace] = []
    for target in additional:
        siblings.append(create_task_workspace(target, task_name, prefix))

    for created in (primary_workspace, *siblings):
        finalize_workspace(created)

    say(f"Worktree created at {primary_workspace.path}")
    say(f"Branch: {primary_workspace.branch}")
    for created in siblings:
        say(f"Created worktree: {created.path} (base: {created.target.base})")

    agent.launch_agent(
        primary_workspace.path,
        task_name,
        primary.base,
        [
            agent.SiblingWorkspace(
                repo=created.target.name,
                path=created.path,
                base_branch=created.target.base,
            )
            for created in siblings
        ],
    )
