# ruff: noqa: E402

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import vibe.exec as exec_util


def git(repo: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", "-C", str(repo), *args],
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout.strip()


def init_local_repo(root: Path, name: str = "widgets") -> Path:
    repo = root / name
    repo.mkdir(parents=True)
    subprocess.run(["git", "-C", str(repo), "init", "-q"], check=True)
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "user.name", "Test User")
    (repo / "README.md").write_text("base\n", encoding="utf-8")
    git(repo, "add", "README.md")
    git(repo, "commit", "-q", "-m", "chore: initial")
    git(repo, "branch", "-M", "main")
    return repo


def add_branch(repo: Path, branch: str) -> None:
    git(repo, "branch", branch)


def local_branches(repo: Path) -> list[str]:
    output = git(repo, "branch", "--format=%(refname:short)")
    return [line.strip() for line in output.splitlines() if line.strip()]


def make_new_args(task: str, **overrides: object) -> SimpleNamespace:
    data: dict[str, object] = {
        "task": task,
        "base": None,
        "prefix": None,
        "multi": False,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def result(
    returncode: int = 0, stdout: str = "", stderr: str = ""
) -> exec_util.CommandResult:
    return exec_util.CommandResult(
        argv=(), returncode=returncode, stdout=stdout, stderr=stderr
    )


class RecordingRunner:
    """Command runner that records requests and replays canned results."""

    def __init__(
        self, results: dict[tuple[str, ...], exec_util.CommandResult | None]
    ) -> None:
        self.results = results
        self.requests: list[exec_util.CommandRequest] = []

    def __call__(
        self, request: exec_util.CommandRequest
    ) -> exec_util.CommandResult | None:
        self.requests.append(request)
        if request.argv in self.results:
            return self.results[request.argv]
        return result()
