"""Subprocess helpers for the external tools vibe drives.

``git``, ``ghq``, ``direnv``, ``claude`` and per-repository setup commands
all run through :func:`execute`. A missing executable comes back as
``None`` instead of an exception so each caller decides whether that is
fatal, a warning, or expected.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional

from . import log


@dataclass(frozen=True)
class CommandRequest:
    """One invocation of an external program."""

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = True
    shell: bool = False

    def describe(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Return stderr, falling back to stdout, stripped."""
        return (self.stderr or self.stdout).strip()


CommandRunner = Callable[[CommandRequest], Optional[CommandResult]]


class CommandExecutionError(RuntimeError):
    """A required command was missing or exited non-zero."""

    def __init__(self, request: CommandRequest, result: CommandResult | None = None):
        self.request = request
        self.result = result
        if result is None:
            program = request.argv[0] if request.argv else ""
            message = f"missing required command: {program}".strip()
        else:
            message = f"command failed: {request.describe()}"
            if result.output:
                message = f"{message}\n{result.output}"
        super().__init__(message)


def run_subprocess(request: CommandRequest) -> CommandResult | None:
    """Run ``request`` with :func:`subprocess.run`.

    Output is captured only when ``request.capture_output`` is set; otherwise
    the child shares the terminal.
    """
    command: str | list[str]
    command = request.describe() if request.shell else list(request.argv)
    try:
        completed = subprocess.run(
            command,
            cwd=request.cwd,
            env=None if request.env is None else dict(request.env),
            shell=request.shell,
            capture_output=request.capture_output,
            text=True,
            errors="replace",
            check=False,
        )
    except FileNotFoundError:
        return None
    return CommandResult(
        argv=request.argv,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


_default_runner: CommandRunner = run_subprocess


def execute(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    log.trace(f"$ {request.describe()}")
    return (runner or _default_runner)(request)


def run_checked(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult:
    """Execute ``request`` and raise ``CommandExecutionError`` unless it succeeds."""
    result = execute(request, runner=runner)
    if result is None or not result.ok:
        raise CommandExecutionError(request, result)
    return result


def try_run_command(
    cmd: list[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult | None:
    """Run ``cmd`` capturing its output.

    Returns:
        The result, or ``None`` when the executable does not exist.
    """
    return execute(CommandRequest(argv=tuple(cmd), cwd=cwd, env=env))


def _exit_code(result: CommandResult | None) -> int | None:
    return None if result is None else result.returncode


def run_interactive(
    cmd: list[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> int | None:
    """Run a foreground program on the user's terminal; ``None`` if missing."""
    request = CommandRequest(argv=tuple(cmd), cwd=cwd, env=env, capture_output=False)
    return _exit_code(execute(request))


def run_shell(
    command: str,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> int | None:
    request = CommandRequest(
        argv=(command,), cwd=cwd, env=env, capture_output=False, shell=True
    )
    return _exit_code(execute(request))
