"""Platform adapter interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass(frozen=True)
class InputSourceSnapshot:
    """The active keyboard input source as last reported by the OS."""

    language: str = ""
    display_name: str = ""


class InputSourceProvider(Protocol):
    """Queries the OS for the active keyboard input source."""

    def current_input_source(self) -> InputSourceSnapshot | None:
        """Return the active input source, or None when it cannot be read."""


class InputSourceNotifier(Protocol):
    """OS notification source for keyboard input source changes."""

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Start delivering change notifications to callback."""

    def unsubscribe(self) -> None:
        """Stop delivering change notifications."""


Dispatcher = Callable[[Callable[[], None]], None]
"""Runs a zero-argument callable on the serialized main/UI context."""
