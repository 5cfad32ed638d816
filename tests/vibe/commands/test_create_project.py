import json
from pathlib import Path

import pytest

import vibe.ghq as ghq
from vibe.commands import create_project as create_project_cmd


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    monkeypatch.setattr(ghq, "ghq_root", lambda: tmp_path / "ghq")
    monkeypatch.setattr(
        ghq, "list_repos", lambda: ["github.com/org/api", "github.com/org/web"]
    )
    return project


def test_writes_config_and_gitignore(
    project_dir: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (project_dir / ".gitignore").write_text("/api\n", encoding="utf-8")
    asked: list[Path] = []

    def pick_branch(path: Path) -> str:
        asked.append(path)
        return "develop" if path.name == "api" else "main"

    monkeypatch.setattr(
        ghq, "select_repos", lambda repos, label: ["github.com/org/api", "github.com/org/web"]
    )
    monkeypatch.setattr(ghq, "select_branch", pick_branch)

    create_project_cmd.create_project_config(None)

    assert asked == [
        tmp_path / "ghq" / "github.com/org/api",
        tmp_path / "ghq" / "github.com/org/web",
    ]
    payload = json.loads((project_dir / ".vibe-project.json").read_text(encoding="utf-8"))
    assert payload == {
        "repos": {
            "github.com/org/api": {"defaultTarget": "develop"},
            "github.com/org/web": {"defaultTarget": "main"},
        }
    }
    assert (project_dir / ".gitignore").read_text(encoding="utf-8") == "/api\n/web\n"
    out = capsys.readouterr().out
    assert "Created .vibe-project.json with 2 repositories." in out
    assert "Edit the file to configure setupCommand for each repo." in out


def test_cancelled_branch_prompt_leaves_target_unset(
    project_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(ghq, "select_repos", lambda repos, label: ["github.com/org/api"])
    monkeypatch.setattr(ghq, "select_branch", lambda path: None)

    create_project_cmd.create_project_config(None)

    payload = json.loads((project_dir / ".vibe-project.json").read_text(encoding="utf-8"))
    assert payload == {"repos": {"github.com/org/api": {}}}


def test_no_selection_writes_nothing(
    project_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(ghq, "select_repos", lambda repos, label: [])

    create_project_cmd.create_project_config(None)

    assert capsys.readouterr().out == "No repositories selected.\n"
    assert not (project_dir / ".vibe-project.json").exists()
    assert not (project_dir / ".gitignore").exists()


def test_requires_ghq(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ghq, "ghq_root", lambda: None)
    with pytest.raises(SystemExit):
        create_project_cmd.create_project_config(None)
