from __future__ import annotations

import sys
from typing import Callable, Protocol, TextIO, runtime_checkable


@runtime_checkable
class Prompter(Protocol):
    """Blocking notice shown to the user, e.g. a failed required-field check."""

    def alert(self, text: str) -> None: ...


@runtime_checkable
class Confirmer(Protocol):
    """Blocking yes/no question gating an irreversible action."""

    def confirm(self, prompt: str) -> bool: ...


class ConsolePrompter:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stderr

    def alert(self, text: str) -> None:
        print(f"⚠️  {text}", file=self._stream, flush=True)


class ConsoleConfirmer:
    def __init__(self, reader: Callable[[str], str] = input) -> None:
        self._reader = reader

    def confirm(self, prompt: str) -> bool:
        try:
            answer = self._reader(f"{prompt} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}


class AutoConfirmer:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer

    def confirm(self, prompt: str) -> bool:
        return self.answer
