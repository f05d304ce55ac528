"""Operator prompts used during a release.

``TyperInteraction`` asks on the terminal; ``ScriptedInteraction`` replays
canned answers and records what was asked, for tests.
"""

from __future__ import annotations

import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

import typer

__all__ = [
    "InteractionProtocol",
    "ScriptedInteraction",
    "TyperInteraction",
]


class InteractionProtocol(Protocol):
    def ask(self, message: str, default: str | None = None) -> str | None:
        """Ask for a line of text; None when nobody can answer."""
        ...

    def confirm(self, message: str) -> bool: ...


class TyperInteraction:
    def ask(self, message: str, default: str | None = None) -> str | None:
        if not sys.stdin.isatty():
            return None
        if default is None:
            answer: str = typer.prompt(message)
        else:
            answer = typer.prompt(message, default=default)
        return answer.strip()

    def confirm(self, message: str) -> bool:
        if not sys.stdin.isatty():
            return False
        return typer.confirm(message, default=False)


def _answers() -> deque[str | None]:
    return deque()


def _confirmations() -> deque[bool]:
    return deque()


@dataclass
class ScriptedInteraction:
    """Replays queued answers; an empty answer queue falls back to the default.

    Attributes:
        answers: Replies to ``ask``, in order.
        confirmations: Replies to ``confirm``, in order (``True`` when exhausted).
        asked: ``(message, default)`` for every ``ask`` call.
        confirmed: Message of every ``confirm`` call.
    """

    answers: deque[str | None] = field(default_factory=_answers)
    confirmations: deque[bool] = field(default_factory=_confirmations)
    asked: list[tuple[str, str | None]] = field(default_factory=list)
    confirmed: list[str] = field(default_factory=list)

    def ask(self, message: str, default: str | None = None) -> str | None:
        self.asked.append((message, default))
        if self.answers:
            return self.answers.popleft()
        return default

    def confirm(self, message: str) -> bool:
        self.confirmed.append(message)
        if self.confirmations:
            return self.confirmations.popleft()
        return True
