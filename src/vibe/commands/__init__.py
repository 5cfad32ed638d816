"""Command implementations exposed by the vibe CLI."""

from .cleanup import cleanup_tasks
from .create_project import create_project_config
from .diff import show_diff
from .new import new_task
from .repos import list_task_repos
from .statusline import print_statusline

__all__ = [
    "cleanup_tasks",
    "create_project_config",
    "list_task_repos",
    "new_task",
    "print_statusline",
    "show_diff",
]
