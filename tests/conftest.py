"""Shared fixtures for voxagent tests."""

from datetime import datetime
from typing import List, Optional, Tuple

import pytest

from voxagent.assistant_controller import AssistantController
from voxagent.commands import build_default_router
from voxagent.ports import ErrorCallback, ResultCallback

# A Monday afternoon.
FIXED_NOW = datetime(2026, 10, 19, 15, 4, 5)


class RecordingSpeech:
    """Speech output that remembers what it was asked to do."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, float, float, float]] = []
        self.cancels = 0

    def speak(self, text: str, *, rate: float = 1.0, pitch: float = 1.0, volume: float = 1.0) -> None:
        self.calls.append((text, rate, pitch, volume))

    def cancel(self) -> None:
        self.cancels += 1

    @property
    def spoken(self) -> List[str]:
        return [call[0] for call in self.calls]


class RecordingNavigator:
    def __init__(self) -> None:
        self.opened: List[str] = []

    def open(self, url: str) -> None:
        self.opened.append(url)


class FakeRecognizer:
    def __init__(self) -> None:
        self.on_result: Optional[ResultCallback] = None
        self.on_error: Optional[ErrorCallback] = None
        self.starts = 0
        self.stops = 0

    def start(self) -> None:
        self.starts += 1

    def stop(self) -> None:
        self.stops += 1


@pytest.fixture
def speech() -> RecordingSpeech:
    return RecordingSpeech()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer()


@pytest.fixture
def router():
    return build_default_router()


@pytest.fixture
def controller(speech, navigator, recognizer) -> AssistantController:
    """Controller wired to recording fakes and a frozen clock."""
    return AssistantController(speech, navigator, recognizer, clock=lambda: FIXED_NOW)
