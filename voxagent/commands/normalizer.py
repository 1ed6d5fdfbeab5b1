"""
Transcript handling ahead of classification.

Recognition events may carry several results, some of them still interim.
Only the final ones form the transcript that gets classified; the interim
text is kept for live feedback only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(frozen=True)
class RecognitionResult:
    """One recognition result: ranked alternatives plus the finality flag."""

    alternatives: Sequence[str]
    is_final: bool = False

    @property
    def transcript(self) -> str:
        return self.alternatives[0] if self.alternatives else ""


@dataclass(frozen=True)
class RecognitionEvent:
    """A batch of results delivered by the speech input collaborator."""

    results: List[RecognitionResult] = field(default_factory=list)
    result_index: int = 0


def final_transcript(event: RecognitionEvent) -> str:
    """Concatenate the top alternative of every final result from ``result_index`` on."""
    return "".join(
        result.transcript for result in event.results[event.result_index:] if result.is_final
    )


def interim_transcript(event: RecognitionEvent) -> str:
    return "".join(
        result.transcript for result in event.results[event.result_index:] if not result.is_final
    )


def normalize_transcript(text: str) -> str:
    """Lower-case and trim ``text``."""
    return text.lower().strip()
