import re
from unittest.mock import patch

from typer.testing import CliRunner

import vibe.cli as cli
from vibe import __version__

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def _strip_ansi(output: str) -> str:
    return ANSI_ESCAPE_RE.sub("", output)


def test_new_passes_options() -> None:
    runner = CliRunner()
    with patch("vibe.commands.new.new_task") as new_task:
        result = runner.invoke(
            cli.app, ["new", "Fix Bug #42", "-b", "develop", "-p", "me/", "--multi"]
        )

    assert result.exit_code == 0
    args = new_task.call_args.args[0]
    assert args.task == "Fix Bug #42"
    assert args.base == "develop"
    assert args.prefix == "me/"
    assert args.multi is True


def test_new_defaults() -> None:
    runner = CliRunner()
    with patch("vibe.commands.new.new_task") as new_task:
        result = runner.invoke(cli.app, ["new", "task"])

    assert result.exit_code == 0
    args = new_task.call_args.args[0]
    assert (args.base, args.prefix, args.multi) == (None, None, False)


def test_new_requires_task() -> None:
    runner = CliRunner()
    with patch("vibe.commands.new.new_task") as new_task:
        result = runner.invoke(cli.app, ["new"])

    assert result.exit_code != 0
    new_task.assert_not_called()


def test_subcommands_dispatch() -> None:
    runner = CliRunner()
    targets = {
        "cleanup": "vibe.commands.cleanup.cleanup_tasks",
        "repos": "vibe.commands.repos.list_task_repos",
        "create-project": "vibe.commands.create_project.create_project_config",
        "statusline": "vibe.commands.statusline.print_statusline",
        "diff": "vibe.commands.diff.show_diff",
    }
    for command, target in targets.items():
        with patch(target) as handler:
            result = runner.invoke(cli.app, [command])
        assert result.exit_code == 0, command
        handler.assert_called_once()


def test_global_log_level_flag_sets_runtime_level() -> None:
    runner = CliRunner()
    with (
        patch("vibe.commands.cleanup.cleanup_tasks"),
        patch("vibe.cli.vibe_log.set_level") as mock_set_level,
    ):
        result = runner.invoke(cli.app, ["--log-level", "DEBUG", "cleanup"])

    assert result.exit_code == 0
    mock_set_level.assert_called_once_with("debug")


def test_global_log_level_rejects_unknown_values() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--log-level", "loud", "cleanup"], color=False)
    clean_output = _strip_ansi(result.output)

    assert result.exit_code != 0
    assert "--log-level" in clean_output
    assert "expected one of" in clean_output.lower()


def test_no_color_flag_disables_colorized_output() -> None:
    runner = CliRunner()
    with (
        patch("vibe.commands.repos.list_task_repos"),
        patch("vibe.cli.vibe_log.set_no_color") as mock_set_no_color,
    ):
        result = runner.invoke(cli.app, ["--no-color", "repos"])

    assert result.exit_code == 0
    mock_set_no_color.assert_called_once_with(True)


def test_version_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == f"vibe version {__version__}"
