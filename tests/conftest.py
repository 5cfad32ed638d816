# ruff: noqa: E402

import builtins
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import vibe.io as io
import vibe.log as vibe_log


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("VIBE_BASE_BRANCH", raising=False)
    monkeypatch.delenv("VIBE_LOG_LEVEL", raising=False)
    monkeypatch.setattr(vibe_log, "_active_level", None)
    monkeypatch.setattr(vibe_log, "_force_no_color", False)
    return home


@pytest.fixture(autouse=True)
def _no_interactive_prompts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(io, "_use_questionary", lambda: False)

    def fail_input(prompt: str = "") -> str:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(builtins, "input", fail_input)
