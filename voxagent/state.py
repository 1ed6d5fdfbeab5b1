"""
Assistant state shared with the presentation layer.

:class:`AgentState` owns the listening and mute flags, the last transcript
and action label, and the bounded :class:`CommandHistory`.  It is mutated
only by the assistant controller, one turn at a time.
"""
from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Deque, Dict, Iterator, List, Optional

from .commands.intents import format_time
from .config import HISTORY_CAPACITY


class ListeningState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"


class CommandStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class CommandRecord:
    """One history entry."""

    timestamp: str
    text: str
    action: str
    status: CommandStatus = CommandStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


class CommandHistory:
    """Newest-first log of the most recent commands, capped at ``capacity`` entries."""

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._records: Deque[CommandRecord] = deque(maxlen=capacity)

    def record(self, entry: CommandRecord) -> None:
        # appendleft on a full deque drops the oldest entry from the right
        self._records.appendleft(entry)

    def clear(self) -> None:
        self._records.clear()

    @property
    def entries(self) -> List[CommandRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CommandRecord]:
        return iter(list(self._records))


@dataclass
class AgentState:
    """Mutable UI-facing state of the assistant."""

    listening: ListeningState = ListeningState.IDLE
    muted: bool = False
    transcript: str = ""
    interim_transcript: str = ""
    current_action: str = ""
    history: CommandHistory = field(default_factory=CommandHistory)

    @property
    def is_listening(self) -> bool:
        return self.listening is ListeningState.LISTENING

    def toggle_listening(self) -> ListeningState:
        self.listening = ListeningState.IDLE if self.is_listening else ListeningState.LISTENING
        return self.listening

    def stop_listening(self) -> None:
        self.listening = ListeningState.IDLE

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def record(self, text: str, action: str, status: CommandStatus, now: Optional[datetime] = None) -> CommandRecord:
        """Create a history entry stamped with ``now`` and prepend it."""
        entry = CommandRecord(
            timestamp=format_time(now or datetime.now()),
            text=text,
            action=action,
            status=status,
        )
        self.history.record(entry)
        return entry

    def clear(self) -> None:
        """Forget the history and the last transcript/action."""
        self.history.clear()
        self.transcript = ""
        self.interim_transcript = ""
        self.current_action = ""

    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly view for the presentation layer."""
        return {
            "listening": self.is_listening,
            "muted": self.muted,
            "transcript": self.transcript,
            "interim_transcript": self.interim_transcript,
            "current_action": self.current_action,
            "history": [entry.to_dict() for entry in self.history],
        }
