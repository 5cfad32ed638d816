"""Typer entry point for the ``vibe`` command."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

import typer

from . import __version__
from . import log as vibe_log
from .commands import cleanup as cleanup_cmd
from .commands import create_project as create_project_cmd
from .commands import diff as diff_cmd
from .commands import new as new_cmd
from .commands import repos as repos_cmd
from .commands import statusline as statusline_cmd

app = typer.Typer(
    help="Isolated git worktrees per task, across one or more repositories.",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vibe version {__version__}")
        raise typer.Exit()


def _validate_log_level(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in vibe_log.LOG_LEVEL_NAMES:
        raise typer.BadParameter(
            f"expected one of: {', '.join(vibe_log.LOG_LEVEL_NAMES)}"
        )
    return normalized


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="log verbosity (trace|debug|info|success|warning|error)",
        callback=_validate_log_level,
    ),
    no_color: bool = typer.Option(False, "--no-color", help="disable colored output"),
    version: bool = typer.Option(
        False,
        "--version",
        help="show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Manage per-task git worktrees."""
    del version
    if log_level is not None:
        vibe_log.set_level(log_level)
    if no_color:
        vibe_log.set_no_color(True)


@app.command("new")
def new(
    task: str = typer.Argument(..., help="task name; sanitized into the branch name"),
    base: Optional[str] = typer.Option(
        None, "-b", "--base", help="branch to fork from (default: origin HEAD or main)"
    ),
    prefix: Optional[str] = typer.Option(
        None, "-p", "--prefix", help="branch prefix (default: feature/)"
    ),
    multi: bool = typer.Option(
        False, "-m", "--multi", help="also create worktrees in additional repositories"
    ),
) -> None:
    """Create task worktrees and start an agent session."""
    new_cmd.new_task(SimpleNamespace(task=task, base=base, prefix=prefix, multi=multi))


@app.command("cleanup")
def cleanup() -> None:
    """Select and delete task worktrees for the current repository."""
    cleanup_cmd.cleanup_tasks(SimpleNamespace())


@app.command("repos")
def repos() -> None:
    """List worktrees of every repository on the current branch."""
    repos_cmd.list_task_repos(SimpleNamespace())


@app.command("create-project")
def create_project() -> None:
    """Create .vibe-project.json interactively."""
    create_project_cmd.create_project_config(SimpleNamespace())


@app.command("statusline")
def statusline() -> None:
    """Print a status line from the agent's JSON input."""
    statusline_cmd.print_statusline(SimpleNamespace())


@app.command("diff")
def diff() -> None:
    """Review changes since the task's base branch."""
    diff_cmd.show_diff(SimpleNamespace())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
