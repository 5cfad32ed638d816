from pathlib import Path
from unittest.mock import patch

import pytest

import vibe.git as git
import vibe.paths as paths
from vibe.commands import cleanup as cleanup_cmd
from vibe.workspace import TaskInfo
from tests.vibe.helpers import init_local_repo, local_branches


@pytest.fixture
def repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    repo = init_local_repo(tmp_path / "src")
    monkeypatch.chdir(repo)
    return repo


def _add_tasks(repo: Path, *names: str) -> dict[str, Path]:
    created = {}
    for name in names:
        path = paths.task_path("widgets", name)
        git.create_worktree(repo, path, f"feature/{name}", "main")
        created[name] = path
    return created


def test_no_tasks(repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cleanup_cmd.cleanup_tasks(None)
    assert capsys.readouterr().out == "No tasks found\n"


def test_only_current_task(
    repo: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    tasks = _add_tasks(repo, "solo")
    monkeypatch.chdir(tasks["solo"])

    with patch("vibe.commands.cleanup.select_many") as pick:
        cleanup_cmd.cleanup_tasks(None)

    pick.assert_not_called()
    assert (
        capsys.readouterr().out
        == "No tasks available for cleanup (only current task exists)\n"
    )


def test_current_task_is_never_offered(
    repo: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    tasks = _add_tasks(repo, "a", "b", "c")
    monkeypatch.chdir(tasks["b"])

    with patch("vibe.commands.cleanup.select_many", return_value=[]) as pick:
        cleanup_cmd.cleanup_tasks(None)

    pick.assert_called_once_with("Select tasks to delete", ["a", "c"])


def test_empty_selection(repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _add_tasks(repo, "a")
    with patch("vibe.commands.cleanup.select_many", return_value=[]):
        cleanup_cmd.cleanup_tasks(None)

    assert capsys.readouterr().out.endswith("No tasks selected\n")


def test_declining_leaves_everything(
    repo: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    tasks = _add_tasks(repo, "a", "b")
    with (
        patch("vibe.commands.cleanup.select_many", return_value=["a", "b"]),
        patch("vibe.commands.cleanup.confirm", return_value=False),
    ):
        cleanup_cmd.cleanup_tasks(None)

    assert all(path.is_dir() for path in tasks.values())
    assert local_branches(repo) == ["feature/a", "feature/b", "main"]
    out = capsys.readouterr().out
    assert "The following tasks will be deleted:" in out
    assert "  - a (branch: feature/a)" in out
    assert out.endswith("Aborted\n")


def test_confirmed_cleanup_removes_worktrees_and_branches(
    repo: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    tasks = _add_tasks(repo, "a", "b", "c")
    (tasks["a"] / "dirty.txt").write_text("uncommitted\n", encoding="utf-8")

    with (
        patch("vibe.commands.cleanup.select_many", return_value=["a", "c"]),
        patch("vibe.commands.cleanup.confirm", return_value=True),
    ):
        cleanup_cmd.cleanup_tasks(None)

    assert not tasks["a"].exists()
    assert not tasks["c"].exists()
    assert tasks["b"].is_dir()
    assert local_branches(repo) == ["feature/b", "main"]
    out = capsys.readouterr().out
    assert "Removing a..." in out
    assert "Removed c" in out
    assert out.endswith("Done\n")


def test_unknown_selection_is_ignored(repo: Path) -> None:
    _add_tasks(repo, "a")
    with (
        patch("vibe.commands.cleanup.select_many", return_value=["zzz"]),
        patch("vibe.commands.cleanup.confirm") as ask,
    ):
        cleanup_cmd.cleanup_tasks(None)

    ask.assert_not_called()


def test_current_task_survives_even_when_selected(
    repo: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    tasks = _add_tasks(repo, "a", "b")
    monkeypatch.chdir(tasks["b"])

    with (
        patch("vibe.commands.cleanup.select_many", return_value=["a", "b"]),
        patch("vibe.commands.cleanup.confirm", return_value=True),
    ):
        cleanup_cmd.cleanup_tasks(None)

    assert not tasks["a"].exists()
    assert tasks["b"].is_dir()
    assert local_branches(repo) == ["feature/b", "main"]
    out = capsys.readouterr().out
    assert "  - b (branch: feature/b)" not in out
    assert "Removing b..." not in out


def test_one_failure_does_not_stop_others(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    tasks = [
        TaskInfo(name="a", path=tmp_path / "a", branch="feature/a"),
        TaskInfo(name="b", path=tmp_path / "b", branch="feature/b"),
        TaskInfo(name="c", path=tmp_path / "c", branch=""),
    ]
    with (
        patch(
            "vibe.commands.cleanup.git.remove_worktree",
            side_effect=lambda root, path: path.name != "a",
        ) as remove,
        patch("vibe.commands.cleanup.git.delete_branch", return_value=True) as delete,
        patch("vibe.commands.cleanup.git.prune_worktrees") as prune,
    ):
        failed = cleanup_cmd.delete_tasks(tmp_path, tasks)

    assert failed == ["a"]
    assert remove.call_count == 3
    assert [call.args[1] for call in delete.call_args_list] == ["feature/a", "feature/b"]
    prune.assert_called_once_with(tmp_path)
    assert "failed to remove worktree" in capsys.readouterr().err
