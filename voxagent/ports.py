"""
Interfaces of the collaborators the assistant controller drives.

The controller only relies on these methods, so tests can substitute
recording fakes for the real speech engines and the browser.
"""
from __future__ import annotations

from typing import Callable, Optional, Protocol

from .commands.normalizer import RecognitionEvent

ResultCallback = Callable[[RecognitionEvent], None]
ErrorCallback = Callable[[str], None]


class SpeechOutput(Protocol):
    def speak(self, text: str, *, rate: float = 1.0, pitch: float = 1.0, volume: float = 1.0) -> None:
        """Start speaking ``text`` without waiting for playback to finish."""

    def cancel(self) -> None:
        """Interrupt the current utterance, if any."""


class SpeechInput(Protocol):
    on_result: Optional[ResultCallback]
    on_error: Optional[ErrorCallback]

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...


class Navigator(Protocol):
    def open(self, url: str) -> None:
        """Open ``url`` in a new browsing context without waiting for it."""
