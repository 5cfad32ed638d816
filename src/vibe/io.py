"""Terminal output and prompts.

Prompts use questionary when both stdin and stdout are terminals and fall
back to plain numbered ``input()`` prompts otherwise, so piped and scripted
runs still work.
"""

from __future__ import annotations

import sys
from typing import NoReturn, Sequence

import questionary


def _use_questionary() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def say(message: str) -> None:
    """Print a progress or result line on stdout.

    Example:
        >>> say("Branch: feature/fix-login")
        Branch: feature/fix-login
    """
    print(message)


def warn(message: str) -> None:
    """Report a soft failure on stderr; the caller carries on."""
    print(f"warning: {message}", file=sys.stderr)


def die(message: str, code: int = 1) -> NoReturn:
    """Report a fatal error on stderr and exit with ``code``.

    Nothing already done is rolled back.
    """
    print(f"error: {message}", file=sys.stderr)
    sys.exit(code)


def confirm(text: str, default: bool = False) -> bool:
    """Ask a yes/no question; end of input counts as no."""
    if _use_questionary():
        response = questionary.confirm(text, default=default).ask()
        return bool(response)
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        response = input(f"{text} {suffix}: ").strip().lower()
    except EOFError:
        return False
    if response == "":
        return default
    return response in {"y", "yes"}


def _print_choices(text: str, choices: Sequence[str]) -> None:
    print(text)
    for index, choice in enumerate(choices, start=1):
        print(f"  {index}) {choice}")


def _parse_indices(raw: str, count: int) -> list[int] | None:
    indices: list[int] = []
    for token in raw.replace(",", " ").split():
        if not token.isdigit():
            return None
        index = int(token)
        if index < 1 or index > count:
            return None
        if index - 1 not in indices:
            indices.append(index - 1)
    return indices


def select(text: str, choices: Sequence[str]) -> str | None:
    """Prompt the user to pick at most one entry from ``choices``.

    Args:
        text: Prompt label shown to the user.
        choices: Ordered candidate values.

    Returns:
        The chosen value, or ``None`` when nothing was chosen or the
        prompt was cancelled.
    """
    if not choices:
        return None
    if _use_questionary():
        return questionary.select(text, choices=list(choices)).ask()
    _print_choices(text, choices)
    while True:
        try:
            raw = input("Choice (empty to cancel): ").strip()
        except EOFError:
            return None
        if not raw:
            return None
        indices = _parse_indices(raw, len(choices))
        if indices is not None and len(indices) == 1:
            return choices[indices[0]]


def select_many(text: str, choices: Sequence[str]) -> list[str]:
    """Prompt the user to pick any subset of ``choices``.

    Args:
        text: Prompt label shown to the user.
        choices: Ordered candidate values.

    Returns:
        Chosen values in the order the user picked them. Empty when the
        prompt was cancelled or nothing was picked.
    """
    if not choices:
        return []
    if _use_questionary():
        picked = questionary.checkbox(text, choices=list(choices)).ask()
        return list(picked or [])
    _print_choices(text, choices)
    while True:
        try:
            raw = input("Choices, comma separated (empty to cancel): ").strip()
        except EOFError:
            return []
        if not raw:
            return []
        indices = _parse_indices(raw, len(choices))
        if indices is not None:
            return [choices[index] for index in indices]
